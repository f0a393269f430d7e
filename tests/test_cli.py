"""
End-to-end tests for the typer CLI.

Each invocation gets the same Container (memory backend, fixed clock)
through ``obj=``, mirroring one process per command against one store.
"""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from venueaudit.application.container import Container
from venueaudit.domain.config import AppSettings
from venueaudit.domain.models import ActionStatus, Rating
from venueaudit.infrastructure.slots import DRAFT_SLOT, HISTORY_SLOT, MemorySlotBackend
from venueaudit.interface.cli.orchestrator import app

from conftest import FRIDGE_INDEX, MANDATORY_INDEXES, fixed_clock

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("venueaudit.interface.cli.orchestrator.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def backend():
    return MemorySlotBackend()


@pytest.fixture
def container(backend, tmp_path):
    return Container(config_dir=tmp_path, settings=AppSettings(), backend=backend, clock=fixed_clock)


@pytest.fixture
def photo(tmp_path):
    image = tmp_path / "photo.jpg"
    image.write_bytes(b"jpeg-bytes")
    return image


def invoke(container, *args):
    return runner.invoke(app, list(args), obj=container)


def start_ready_audit(container, photo):
    assert invoke(container, "audit", "start").exit_code == 0
    for index in MANDATORY_INDEXES:
        result = invoke(container, "audit", "evidence", str(index), str(photo))
        assert result.exit_code == 0, result.output


class TestAuditCommands:
    def test_start_defaults_venue_and_period(self, container, backend):
        result = invoke(container, "audit", "start")
        assert result.exit_code == 0, result.output
        assert "Started audit for Suzie Q • 2025-06" in result.output
        assert json.loads(backend.read(DRAFT_SLOT))["period"] == "2025-06"

    def test_start_unknown_venue(self, container):
        result = invoke(container, "audit", "start", "--venue", "Nowhere")
        assert result.exit_code == 1
        assert "Unknown venue" in result.output

    def test_start_resumes_saved_draft(self, container):
        invoke(container, "audit", "start", "--venue", "Windsor Wine Room")
        result = invoke(container, "audit", "start")
        assert "Resuming saved draft for Windsor Wine Room" in result.output

    def test_start_fresh_replaces_draft(self, container):
        invoke(container, "audit", "start", "--venue", "Windsor Wine Room")
        result = invoke(container, "audit", "start", "--fresh")
        assert "Started audit for Suzie Q" in result.output

    def test_show_without_draft(self, container):
        result = invoke(container, "audit", "show")
        assert result.exit_code == 1
        assert "No audit in progress" in result.output

    def test_rate_and_note(self, container):
        invoke(container, "audit", "start")
        assert invoke(container, "audit", "rate", "7", "major").exit_code == 0
        assert invoke(container, "audit", "note", "7", "gloves torn").exit_code == 0
        row = container.draft_session.draft.rows[7]
        assert (row.rating, row.notes) == (Rating.MAJOR, "gloves torn")

    def test_rate_rejects_unknown_rating(self, container):
        invoke(container, "audit", "start")
        result = invoke(container, "audit", "rate", "0", "terrible")
        assert result.exit_code == 1
        assert "Unknown rating" in result.output

    def test_finalize_blocked_without_photo(self, container, backend):
        invoke(container, "audit", "start")
        result = invoke(container, "audit", "finalize")
        assert result.exit_code == 1
        assert "Photo required for" in result.output
        assert backend.read(HISTORY_SLOT) is None

    def test_finalize_fridge_scenario(self, container, backend, photo):
        start_ready_audit(container, photo)
        invoke(container, "audit", "rate", str(FRIDGE_INDEX), "Critical")
        invoke(container, "audit", "note", str(FRIDGE_INDEX), "door left open")

        result = invoke(container, "audit", "finalize")

        assert result.exit_code == 0, result.output
        assert "75%" in result.output
        assert len(json.loads(backend.read(HISTORY_SLOT))) == 1
        assert backend.read(DRAFT_SLOT) is None
        actions = container.action_tracker.list_actions()
        assert [a.description.endswith("Notes: door left open") for a in actions] == [True]

    def test_discard(self, container, backend):
        invoke(container, "audit", "start")
        result = invoke(container, "audit", "discard", "--yes")
        assert result.exit_code == 0
        assert backend.read(DRAFT_SLOT) is None


class TestHistoryCommands:
    def test_export_and_import(self, container, photo, tmp_path):
        start_ready_audit(container, photo)
        invoke(container, "audit", "finalize")
        target = tmp_path / "auditHistory.json"

        result = invoke(container, "history", "export", str(target))
        assert result.exit_code == 0, result.output
        assert len(json.loads(target.read_text(encoding="utf-8"))) == 1

        result = invoke(container, "history", "import", str(target), "--yes")
        assert result.exit_code == 0, result.output
        assert "Imported 1 audit(s)" in result.output

    def test_list_empty(self, container):
        result = invoke(container, "history", "list")
        assert result.exit_code == 0
        assert "No history yet" in result.output


class TestActionCommands:
    def test_close_by_prefix(self, container, photo):
        start_ready_audit(container, photo)
        invoke(container, "audit", "rate", "16", "Minor")
        invoke(container, "audit", "evidence", "16", str(photo))
        invoke(container, "audit", "finalize")
        action_id = container.action_tracker.list_actions()[0].id

        result = invoke(container, "actions", "close", action_id[:8])

        assert result.exit_code == 0, result.output
        assert container.action_tracker.list_actions()[0].status is ActionStatus.DONE

    def test_unknown_action(self, container):
        result = invoke(container, "actions", "start", "nope")
        assert result.exit_code == 1
        assert "No action with id nope" in result.output


class TestCleanCommands:
    def test_add_toggle_remove(self, container):
        result = invoke(container, "clean", "add", "Deep clean grill & hood", "--due", "2025-06-01")
        assert result.exit_code == 0, result.output
        task = container.deep_clean.tasks()[0]
        assert task.due_date.isoformat() == "2025-06-01"
        assert container.deep_clean.is_overdue(task)

        assert invoke(container, "clean", "toggle", task.id[:6]).exit_code == 0
        assert container.deep_clean.tasks()[0].done

        assert invoke(container, "clean", "remove", task.id).exit_code == 0
        assert container.deep_clean.tasks() == []

    def test_bad_due_date(self, container):
        result = invoke(container, "clean", "add", "Hood", "--due", "next week")
        assert result.exit_code == 1
        assert "YYYY-MM-DD" in result.output


class TestConfigErrors:
    """Broken configuration ends the command cleanly with exit code 1."""

    @pytest.mark.parametrize("command", [["audit", "show"], ["audit", "start"], ["catalog", "list"]])
    def test_missing_catalog_file(self, backend, tmp_path, command):
        container = Container(
            config_dir=tmp_path,
            settings=AppSettings(catalog_file="nope.json"),
            backend=backend,
            clock=fixed_clock,
        )
        result = invoke(container, *command)
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_duplicate_catalog_text(self, backend, tmp_path):
        (tmp_path / "dup.json").write_text(
            json.dumps([{"category": "A", "text": "Same"}, {"category": "B", "text": "Same"}]),
            encoding="utf-8",
        )
        container = Container(
            config_dir=tmp_path,
            settings=AppSettings(catalog_file="dup.json"),
            backend=backend,
            clock=fixed_clock,
        )
        result = invoke(container, "audit", "show")
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_invalid_settings_file(self, tmp_path):
        (tmp_path / "venueaudit.json").write_text('{"venues": []}', encoding="utf-8")
        result = runner.invoke(app, ["--config-dir", str(tmp_path), "catalog", "list"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)


def test_catalog_list(container):
    result = invoke(container, "catalog", "list")
    assert result.exit_code == 0
    assert "Checkpoint Catalog" in result.output
