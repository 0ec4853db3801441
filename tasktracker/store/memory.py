"""In-memory task storage, the default backend."""

from __future__ import annotations

import logging
from typing import Dict, List

from ..errors import NotFoundError
from ..schemas.task import Task, TaskUpdate
from .base import TaskStore, clean_description, get_update_data
from .locking import ReadWriteLock

logger = logging.getLogger(__name__)


class MemoryTaskStore(TaskStore):
    """Tasks kept in a dict; the dict and the id counter share one lock."""

    def __init__(self) -> None:
        self._tasks: Dict[int, Task] = {}
        self._last_id = 0
        self._lock = ReadWriteLock()

    def list(self) -> List[Task]:
        with self._lock.read():
            return [task.model_copy() for task in self._tasks.values()]

    def create(self, description: str) -> Task:
        with self._lock.write():
            description = clean_description(description)
            self._last_id += 1
            task = Task(id=self._last_id, description=description, completed=False)
            self._tasks[task.id] = task
            logger.debug("Created task %d", task.id)
            return task.model_copy()

    def update(self, task_id: int, changes: TaskUpdate) -> Task:
        with self._lock.write():
            task = self._tasks.get(task_id)
            if task is None:
                logger.info("Update of unknown task %s", task_id)
                raise NotFoundError(task_id)

            update_data = get_update_data(changes)
            if update_data:
                task = task.model_copy(update=update_data)
                self._tasks[task_id] = task
                logger.debug("Updated task %d: %s", task_id, sorted(update_data))
            return task.model_copy()

    def delete(self, task_id: int) -> None:
        with self._lock.write():
            if self._tasks.pop(task_id, None) is None:
                logger.info("Delete of unknown task %s", task_id)
                raise NotFoundError(task_id)
            logger.debug("Deleted task %d", task_id)
