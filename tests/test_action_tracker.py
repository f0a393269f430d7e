"""
Tests for the remediation action tracker.
"""

from datetime import date, timedelta

import pytest

from venueaudit.application.action_service import ActionTracker
from venueaudit.domain.errors import InputError
from venueaudit.domain.models import ActionItem, ActionStatus, Rating

from conftest import TODAY, fixed_clock


def _action(action_id, venue="Suzie Q", due=TODAY, status=ActionStatus.OPEN):
    return ActionItem(
        id=action_id,
        venue=venue,
        period="2025-06",
        category="Maintenance",
        checkpoint_text="Critical equipment serviced",
        rating=Rating.MAJOR,
        owner="Venue Manager",
        due_date=due,
        status=status,
    )


@pytest.fixture
def tracker(action_log):
    action_log.prepend(
        [
            _action("a1"),
            _action("a2", venue="Windsor Wine Room", due=TODAY - timedelta(days=1)),
            _action("a3", status=ActionStatus.DONE, due=date(2025, 1, 1)),
        ]
    )
    return ActionTracker(action_log, clock=fixed_clock)


class TestActionTracker:
    def test_list_filters(self, tracker):
        assert [a.id for a in tracker.list_actions()] == ["a1", "a2", "a3"]
        assert [a.id for a in tracker.list_actions(open_only=True)] == ["a1", "a2"]
        assert [a.id for a in tracker.list_actions(venue="Suzie Q")] == ["a1", "a3"]

    def test_is_late(self, tracker):
        late = {a.id for a in tracker.list_actions() if tracker.is_late(a)}
        assert late == {"a2"}

    def test_status_moves(self, tracker):
        assert tracker.start("a1").status is ActionStatus.IN_PROGRESS
        assert tracker.close("a1").status is ActionStatus.DONE
        assert tracker.reopen("a1").status is ActionStatus.OPEN
        # Any state may follow any other
        assert tracker.close("a2").status is ActionStatus.DONE

    def test_status_persisted(self, tracker, action_log):
        tracker.start("a2")
        assert {a.id: a.status for a in action_log.load()}["a2"] is ActionStatus.IN_PROGRESS

    def test_unknown_action(self, tracker):
        with pytest.raises(InputError):
            tracker.close("zzz")
