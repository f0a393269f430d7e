"""
Tests for the checkpoint catalog.
"""

import pytest

from venueaudit.domain.catalog import DEFAULT_CHECKPOINTS, CheckpointCatalog
from venueaudit.domain.errors import CheckpointLookupError
from venueaudit.domain.models import Checkpoint


class TestCheckpointCatalog:
    """Test cases for CheckpointCatalog."""

    def test_default_catalog_shape(self):
        catalog = CheckpointCatalog()
        assert len(catalog) == 17
        assert catalog.categories == [
            "System Compliance",
            "Food Safety & Hygiene",
            "Food Quality",
            "Health & Safety",
            "Council / Regulatory",
            "KPIs",
            "Guest / Staff Feedback",
            "Maintenance",
        ]

    def test_photo_mandatory_entries(self):
        mandatory = [cp.text for cp in DEFAULT_CHECKPOINTS if cp.photo_mandatory]
        assert mandatory == [
            "Fridge ≤ 5 °C / Freezer ≤ −15 °C",
            "Tasting panel (2 dishes)",
            "Presentation matches photos",
        ]

    def test_lookup(self):
        catalog = CheckpointCatalog()
        checkpoint = catalog.lookup("Staff training hours")
        assert checkpoint.owner == "Head Chef"
        assert checkpoint.default_due_offset_days == 14
        assert "Staff training hours" in catalog
        assert "Nope" not in catalog

    def test_lookup_missing_raises(self):
        with pytest.raises(CheckpointLookupError) as exc_info:
            CheckpointCatalog().lookup("Nope")
        assert exc_info.value.checkpoint_text == "Nope"
        # Also usable as a plain LookupError
        assert isinstance(exc_info.value, LookupError)

    def test_order_is_preserved(self):
        catalog = CheckpointCatalog()
        assert catalog.texts[0] == "Prep lists fully ticked?"
        assert catalog.texts[-1] == "Critical equipment serviced"
        assert [cp.text for cp in catalog] == list(catalog.texts)

    def test_duplicate_text_rejected(self):
        cp = Checkpoint("A", "Same", "", "Head Chef", 1, "Fix.")
        with pytest.raises(ValueError, match="Duplicate"):
            CheckpointCatalog([cp, cp])

    def test_negative_offset_rejected(self):
        cp = Checkpoint("A", "Late", "", "Head Chef", -1, "Fix.")
        with pytest.raises(ValueError, match="Negative"):
            CheckpointCatalog([cp])
