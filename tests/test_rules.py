"""
Unit tests for the audit rules.

Covers the evidence policy, the completion gate, scoring, score bands
and remediation deadlines.
"""

import unittest
from datetime import date, timedelta

from venueaudit.domain.catalog import CheckpointCatalog
from venueaudit.domain.errors import CheckpointLookupError
from venueaudit.domain.models import AuditDraft, AuditRow, Checkpoint, Rating, ScoreBand
from venueaudit.domain.rules import (
    compute_score,
    first_unsatisfied,
    is_complete,
    needs_remediation,
    remediation_description,
    remediation_due_date,
    requires_evidence,
    score_band,
    score_progression,
    section_progress,
)


TODAY = date(2025, 6, 10)


def _row(text, rating=Rating.PASS, evidence=None, category="Test"):
    return AuditRow(category=category, checkpoint_text=text, rating=rating, evidence=evidence)


def _checkpoint(offset, remediation="Fix it."):
    return Checkpoint("Test", "Check", "", "Head Chef", offset, remediation)


class TestRequiresEvidence(unittest.TestCase):
    """Photo rule: mandatory checkpoints always, everything else when failing."""

    def setUp(self):
        self.catalog = CheckpointCatalog()

    def test_pass_on_optional_checkpoint(self):
        self.assertFalse(requires_evidence(self.catalog, "Knife & PPE checks", Rating.PASS))

    def test_not_applicable_on_optional_checkpoint(self):
        self.assertFalse(requires_evidence(self.catalog, "Knife & PPE checks", Rating.NOT_APPLICABLE))

    def test_failing_ratings_need_photo(self):
        for rating in (Rating.MINOR, Rating.MAJOR, Rating.CRITICAL):
            with self.subTest(rating=rating):
                self.assertTrue(requires_evidence(self.catalog, "Knife & PPE checks", rating))

    def test_mandatory_checkpoint_needs_photo_even_on_pass(self):
        self.assertTrue(requires_evidence(self.catalog, "Tasting panel (2 dishes)", Rating.PASS))
        self.assertTrue(requires_evidence(self.catalog, "Tasting panel (2 dishes)", Rating.NOT_APPLICABLE))

    def test_unknown_checkpoint_raises(self):
        with self.assertRaises(CheckpointLookupError):
            requires_evidence(self.catalog, "Bogus", Rating.PASS)


class TestCompletionGate(unittest.TestCase):
    """Gate is recomputed from the rows it is given."""

    def setUp(self):
        self.catalog = CheckpointCatalog()
        self.rows = AuditDraft.seeded(self.catalog.all(), "Suzie Q", "2025-06").rows

    def test_fresh_draft_blocked_by_first_mandatory_row(self):
        index, row = first_unsatisfied(self.catalog, self.rows)
        self.assertEqual(index, 3)
        self.assertEqual(row.checkpoint_text, "Fridge ≤ 5 °C / Freezer ≤ −15 °C")
        self.assertFalse(is_complete(self.catalog, self.rows))

    def test_complete_once_mandatory_rows_have_photos(self):
        for index in (3, 5, 6):
            self.rows[index] = self.rows[index].with_changes(evidence="data:x")
        self.assertIsNone(first_unsatisfied(self.catalog, self.rows))
        self.assertTrue(is_complete(self.catalog, self.rows))

    def test_earlier_failing_row_reported_first(self):
        self.rows[0] = self.rows[0].with_changes(rating=Rating.MINOR)
        index, row = first_unsatisfied(self.catalog, self.rows)
        self.assertEqual(index, 0)
        self.assertEqual(row.checkpoint_text, "Prep lists fully ticked?")

    def test_section_progress_counts(self):
        progress = {p.category: p for p in section_progress(self.catalog, self.rows)}
        self.assertEqual(list(progress), self.catalog.categories)
        food_quality = progress["Food Quality"]
        self.assertEqual((food_quality.satisfied, food_quality.total), (0, 2))
        self.assertFalse(food_quality.complete)
        self.assertTrue(progress["KPIs"].complete)


class TestScoring(unittest.TestCase):
    """Score starts at 100 and loses weight * 5 per row, floored at zero."""

    def test_all_pass_scores_100(self):
        rows = [_row(f"c{i}") for i in range(17)]
        self.assertEqual(compute_score(rows), 100)

    def test_empty_rows_score_100(self):
        self.assertEqual(compute_score([]), 100)
        self.assertEqual(score_progression([]), [])

    def test_weights(self):
        rows = [
            _row("a", Rating.MINOR),
            _row("b", Rating.MAJOR),
            _row("c", Rating.NOT_APPLICABLE),
            _row("d", Rating.CRITICAL),
        ]
        self.assertEqual(score_progression(rows), [95, 80, 80, 55])
        self.assertEqual(compute_score(rows), 55)

    def test_five_criticals_floor_at_zero(self):
        rows = [_row(f"c{i}", Rating.CRITICAL) for i in range(5)]
        self.assertEqual(compute_score(rows), 0)

    def test_floor_is_applied_per_row(self):
        rows = [_row(f"c{i}", Rating.CRITICAL) for i in range(6)]
        self.assertEqual(score_progression(rows)[-2:], [0, 0])

    def test_bands(self):
        self.assertEqual(score_band(100), ScoreBand.GREEN)
        self.assertEqual(score_band(90), ScoreBand.GREEN)
        self.assertEqual(score_band(89), ScoreBand.AMBER)
        self.assertEqual(score_band(75), ScoreBand.AMBER)
        self.assertEqual(score_band(74), ScoreBand.RED)
        self.assertEqual(score_band(0), ScoreBand.RED)


class TestRemediation(unittest.TestCase):
    """Deadlines and descriptions for generated actions."""

    def test_only_failing_ratings_need_remediation(self):
        self.assertFalse(needs_remediation(Rating.PASS))
        self.assertFalse(needs_remediation(Rating.NOT_APPLICABLE))
        self.assertTrue(needs_remediation(Rating.MINOR))

    def test_minor_uses_default_offset(self):
        due = remediation_due_date(_checkpoint(3), Rating.MINOR, TODAY)
        self.assertEqual(due, TODAY + timedelta(days=3))

    def test_major_and_critical_escalate_two_days(self):
        for rating in (Rating.MAJOR, Rating.CRITICAL):
            with self.subTest(rating=rating):
                self.assertEqual(remediation_due_date(_checkpoint(7), rating, TODAY), TODAY + timedelta(days=5))

    def test_escalation_never_goes_before_today(self):
        self.assertEqual(remediation_due_date(_checkpoint(0), Rating.CRITICAL, TODAY), TODAY)
        self.assertEqual(remediation_due_date(_checkpoint(1), Rating.MAJOR, TODAY), TODAY)

    def test_description_with_notes(self):
        self.assertEqual(
            remediation_description(_checkpoint(0), "door left open"),
            "Fix it. Notes: door left open",
        )

    def test_description_without_notes(self):
        self.assertEqual(remediation_description(_checkpoint(0), ""), "Fix it.")


if __name__ == "__main__":
    unittest.main()
