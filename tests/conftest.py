"""
Shared fixtures for VenueAudit tests.

Everything runs against MemorySlotBackend and a fixed clock unless a test
asks for the SQLite file explicitly.
"""

from datetime import date

import pytest

from venueaudit.domain.catalog import CheckpointCatalog
from venueaudit.infrastructure.slots import MemorySlotBackend
from venueaudit.infrastructure.stores import ActionLog, DraftStore, HistoryLog, TaskStore
from venueaudit.application.draft_service import DraftSession
from venueaudit.application.finalize_service import FinalizeService


TODAY = date(2025, 6, 10)
PHOTO = "data:image/jpeg;base64,/9j/4AAQ"

FRIDGE = "Fridge ≤ 5 °C / Freezer ≤ −15 °C"
FRIDGE_INDEX = 3
# Rows whose checkpoint needs a photo whatever the rating
MANDATORY_INDEXES = (3, 5, 6)


def fixed_clock():
    return TODAY


def counting_ids(prefix="id"):
    counter = iter(range(1, 10_000))
    return lambda: f"{prefix}-{next(counter)}"


def attach_mandatory(session):
    for index in MANDATORY_INDEXES:
        session.set_evidence(index, PHOTO)


@pytest.fixture
def catalog():
    return CheckpointCatalog()


@pytest.fixture
def backend():
    return MemorySlotBackend()


@pytest.fixture
def session(catalog, backend):
    return DraftSession(catalog, DraftStore(backend))


@pytest.fixture
def history(backend):
    return HistoryLog(backend)


@pytest.fixture
def action_log(backend):
    return ActionLog(backend)


@pytest.fixture
def task_store(backend):
    return TaskStore(backend)


@pytest.fixture
def finalizer(session, history, action_log):
    return FinalizeService(
        session=session,
        history=history,
        actions=action_log,
        clock=fixed_clock,
        id_factory=counting_ids(),
    )
