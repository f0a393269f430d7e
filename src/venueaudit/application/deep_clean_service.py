"""
Deep-clean scheduler.

CRUD over the deep-clean task list with overdue detection. The task list
in memory is authoritative; a failed save is logged and kept on
``last_warning`` until the next successful write.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from venueaudit.domain.errors import InputError, PersistenceWarning, StoreError
from venueaudit.domain.models import DeepCleanTask, new_id
from venueaudit.infrastructure.stores import TaskStore

logger = logging.getLogger(__name__)


class DeepCleanScheduler:
    """Service for the deep-clean schedule."""

    def __init__(
        self,
        store: TaskStore,
        clock: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.store = store
        self.clock = clock
        self.id_factory = id_factory
        self._tasks: list[DeepCleanTask] = store.load()
        self.last_warning: PersistenceWarning | None = None

    def tasks(self) -> list[DeepCleanTask]:
        return list(self._tasks)

    def add(self, title: str, due_date: date) -> DeepCleanTask:
        title = title.strip()
        if not title:
            raise InputError("Task title cannot be empty")
        task = DeepCleanTask(id=self.id_factory(), title=title, due_date=due_date)
        self._tasks.append(task)
        logger.info("Scheduled deep clean '%s' for %s", title, due_date.isoformat())
        self._persist()
        return task

    def toggle(self, task_id: str) -> DeepCleanTask:
        task = self._find(task_id)
        task.done = not task.done
        self._persist()
        return task

    def remove(self, task_id: str) -> DeepCleanTask:
        task = self._find(task_id)
        self._tasks.remove(task)
        self._persist()
        return task

    def is_overdue(self, task: DeepCleanTask) -> bool:
        return task.is_overdue(self.clock())

    def overdue(self) -> list[DeepCleanTask]:
        today = self.clock()
        return [task for task in self._tasks if task.is_overdue(today)]

    def _find(self, task_id: str) -> DeepCleanTask:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise InputError(f"No deep-clean task with id {task_id}")

    def _persist(self) -> None:
        try:
            self.store.save(self._tasks)
            self.last_warning = None
        except StoreError as e:
            logger.warning("Deep-clean schedule not saved: %s", e)
            self.last_warning = PersistenceWarning.from_error(e)
