"""
Tests for settings and the configuration repository.
"""

import json
import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from venueaudit.domain.config import AppSettings, CheckpointSpec
from venueaudit.infrastructure.config.repository import ConfigRepository


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.venues == ["Suzie Q", "Windsor Wine Room"]
        assert settings.default_due_offset_days == 3
        assert settings.catalog_file is None
        assert settings.log_level_value == logging.WARNING

    def test_log_level_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            AppSettings(log_level="chatty")

    def test_venues_required(self):
        with pytest.raises(PydanticValidationError):
            AppSettings(venues=["  "])

    def test_offset_bounds(self):
        with pytest.raises(PydanticValidationError):
            AppSettings(default_due_offset_days=-1)


class TestCheckpointSpec:
    def test_fallbacks(self):
        checkpoint = CheckpointSpec(category="Bar", text="Glass washer temp").to_checkpoint(3)
        assert checkpoint.owner == "Head Chef"
        assert checkpoint.default_due_offset_days == 3
        assert checkpoint.suggested_remediation == "Correct and retrain."
        assert not checkpoint.photo_mandatory

    def test_explicit_offset_wins(self):
        spec = CheckpointSpec(category="Bar", text="Ice machine clean", default_due_offset_days=0)
        assert spec.to_checkpoint(3).default_due_offset_days == 0

    def test_blank_text_rejected(self):
        with pytest.raises(PydanticValidationError):
            CheckpointSpec(category="Bar", text="   ")


class TestConfigRepository:
    """Test cases for ConfigRepository."""

    def test_missing_settings_file_gives_defaults(self, tmp_path):
        assert ConfigRepository(tmp_path).load_settings() == AppSettings()

    def test_load_settings(self, tmp_path):
        (tmp_path / "venueaudit.json").write_text(
            json.dumps({"venues": ["Suzie Q"], "data_dir": "db", "unknown": 1}), encoding="utf-8"
        )
        settings = ConfigRepository(tmp_path).load_settings()
        assert settings.venues == ["Suzie Q"]
        assert settings.data_dir == "db"

    def test_invalid_settings_raise_value_error(self, tmp_path):
        (tmp_path / "venueaudit.json").write_text(json.dumps({"venues": []}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid settings"):
            ConfigRepository(tmp_path).load_settings()

    def test_malformed_json(self, tmp_path):
        (tmp_path / "venueaudit.json").write_text("{", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            ConfigRepository(tmp_path).load_settings()

    def test_save_and_load_json(self, tmp_path):
        repo = ConfigRepository(tmp_path / "cfg")
        path = repo.save_json_file("extra", {"a": 1})
        assert path.name == "extra.json"
        assert repo.load_json_file("extra.json") == {"a": 1}

    def test_default_catalog(self, tmp_path):
        assert len(ConfigRepository(tmp_path).load_catalog(AppSettings())) == 17

    def test_catalog_override(self, tmp_path):
        repo = ConfigRepository(tmp_path)
        repo.save_json_file(
            "bar_catalog",
            [
                {"category": "Bar", "text": "Ice machine clean", "photo_mandatory": True},
                {"category": "Bar", "text": "Glass washer temp", "owner": "Bar Manager", "default_due_offset_days": 1},
            ],
        )
        settings = AppSettings(catalog_file="bar_catalog.json", default_due_offset_days=5)

        catalog = repo.load_catalog(settings)

        assert catalog.texts == ("Ice machine clean", "Glass washer temp")
        assert catalog.lookup("Ice machine clean").default_due_offset_days == 5
        assert catalog.lookup("Ice machine clean").photo_mandatory
        assert catalog.lookup("Glass washer temp").owner == "Bar Manager"

    def test_catalog_override_must_be_array(self, tmp_path):
        repo = ConfigRepository(tmp_path)
        repo.save_json_file("bad", {"category": "Bar"})
        with pytest.raises(ValueError, match="non-empty JSON array"):
            repo.load_catalog(AppSettings(catalog_file="bad"))

    def test_catalog_duplicate_text(self, tmp_path):
        repo = ConfigRepository(tmp_path)
        repo.save_json_file("dup", [{"category": "A", "text": "Same"}, {"category": "B", "text": "Same"}])
        with pytest.raises(ValueError, match="Duplicate"):
            repo.load_catalog(AppSettings(catalog_file="dup"))
