"""
Dependency injection container for the application.

This module provides a centralized way to create and manage application dependencies.
Tests pass a MemorySlotBackend and a fixed clock instead of the SQLite file.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from ..domain.catalog import CheckpointCatalog
from ..domain.config import AppSettings
from ..infrastructure.config.repository import ConfigRepository
from ..infrastructure.slots import SlotBackend
from ..infrastructure.sqlite.store import SqliteSlotBackend
from ..infrastructure.stores import ActionLog, DraftStore, HistoryLog, TaskStore
from .action_service import ActionTracker
from .deep_clean_service import DeepCleanScheduler
from .draft_service import DraftSession
from .evidence_capture import EvidenceCapture
from .finalize_service import FinalizeService
from .history_service import HistoryService

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Manages the creation and lifecycle of application services and infrastructure components.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        settings: Optional[AppSettings] = None,
        backend: Optional[SlotBackend] = None,
        catalog: Optional[CheckpointCatalog] = None,
        clock: Callable[[], date] = date.today,
    ):
        """
        Initialize the container.

        Args:
            config_dir: Base directory for configuration files
            settings: Settings override (skips reading the config file)
            backend: Slot backend override (skips the SQLite file)
            catalog: Catalog override (skips the catalog file)
            clock: Source of "today"
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd() / "config"
        self.clock = clock

        self._settings = settings
        self._backend = backend
        self._catalog = catalog
        self._config_repository: Optional[ConfigRepository] = None
        self._draft_session: Optional[DraftSession] = None
        self._finalize_service: Optional[FinalizeService] = None
        self._history_service: Optional[HistoryService] = None
        self._action_tracker: Optional[ActionTracker] = None
        self._deep_clean: Optional[DeepCleanScheduler] = None
        self._evidence_capture: Optional[EvidenceCapture] = None

    @property
    def config_repository(self) -> ConfigRepository:
        if self._config_repository is None:
            self._config_repository = ConfigRepository(self.config_dir)
        return self._config_repository

    @property
    def settings(self) -> AppSettings:
        if self._settings is None:
            self._settings = self.config_repository.load_settings()
        return self._settings

    @property
    def catalog(self) -> CheckpointCatalog:
        """Loaded once per container."""
        if self._catalog is None:
            self._catalog = self.config_repository.load_catalog(self.settings)
        return self._catalog

    @property
    def db_path(self) -> Path:
        data_dir = Path(self.settings.data_dir)
        if not data_dir.is_absolute():
            data_dir = self.config_dir.parent / data_dir
        return data_dir / self.settings.database_name

    @property
    def backend(self) -> SlotBackend:
        if self._backend is None:
            self._backend = SqliteSlotBackend(self.db_path)
        return self._backend

    @property
    def draft_session(self) -> DraftSession:
        if self._draft_session is None:
            self._draft_session = DraftSession(self.catalog, DraftStore(self.backend))
        return self._draft_session

    @property
    def finalize_service(self) -> FinalizeService:
        if self._finalize_service is None:
            self._finalize_service = FinalizeService(
                session=self.draft_session,
                history=HistoryLog(self.backend),
                actions=ActionLog(self.backend),
                clock=self.clock,
            )
        return self._finalize_service

    @property
    def history_service(self) -> HistoryService:
        if self._history_service is None:
            self._history_service = HistoryService(HistoryLog(self.backend))
        return self._history_service

    @property
    def action_tracker(self) -> ActionTracker:
        if self._action_tracker is None:
            self._action_tracker = ActionTracker(ActionLog(self.backend), clock=self.clock)
        return self._action_tracker

    @property
    def deep_clean(self) -> DeepCleanScheduler:
        if self._deep_clean is None:
            self._deep_clean = DeepCleanScheduler(TaskStore(self.backend), clock=self.clock)
        return self._deep_clean

    @property
    def evidence_capture(self) -> EvidenceCapture:
        if self._evidence_capture is None:
            self._evidence_capture = EvidenceCapture(self.draft_session)
        return self._evidence_capture

    def reset(self) -> None:
        """Reset all cached services. Overrides passed to __init__ are kept."""
        self._draft_session = None
        self._finalize_service = None
        self._history_service = None
        self._action_tracker = None
        self._deep_clean = None
        self._evidence_capture = None

        logger.debug("Container reset - services cleared")
