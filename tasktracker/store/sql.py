"""Task storage backed by a SQL database through SQLModel."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from sqlmodel import select

from ..database import create_db_engine, create_tables, make_session_factory, session_scope
from ..errors import NotFoundError
from ..models import TaskRecord
from ..schemas.task import Task, TaskUpdate
from .base import TaskStore, clean_description, get_update_data

logger = logging.getLogger(__name__)

# Largest value a SQLite INTEGER primary key can hold.
MAX_ROW_ID = 2**63 - 1


class SqlTaskStore(TaskStore):
    """
    Same contract as MemoryTaskStore, with rows in a ``tasks`` table.

    Each call runs in its own transaction, and calls from this process
    are serialized with one lock: a shared SQLite connection must not be
    used by two threads at once.
    """

    def __init__(self, database_url: str) -> None:
        self._engine = create_db_engine(database_url)
        create_tables(self._engine)
        self._sessions = make_session_factory(self._engine)
        self._lock = threading.Lock()

    @staticmethod
    def _get_record(session, task_id: int) -> Optional[TaskRecord]:
        if task_id > MAX_ROW_ID:
            return None
        return session.get(TaskRecord, task_id)

    @staticmethod
    def _to_task(record: TaskRecord) -> Task:
        return Task.model_validate(record)

    def list(self) -> List[Task]:
        with self._lock, session_scope(self._sessions) as session:
            records = session.exec(select(TaskRecord)).all()
            return [self._to_task(record) for record in records]

    def create(self, description: str) -> Task:
        description = clean_description(description)
        with self._lock, session_scope(self._sessions) as session:
            record = TaskRecord(description=description, completed=False)
            session.add(record)
            session.flush()
            session.refresh(record)
            logger.debug("Created task %d", record.id)
            return self._to_task(record)

    def update(self, task_id: int, changes: TaskUpdate) -> Task:
        with self._lock, session_scope(self._sessions) as session:
            record = self._get_record(session, task_id)
            if record is None:
                logger.info("Update of unknown task %s", task_id)
                raise NotFoundError(task_id)

            update_data = get_update_data(changes)
            for field, value in update_data.items():
                setattr(record, field, value)
            if update_data:
                session.add(record)
                session.flush()
                logger.debug("Updated task %d: %s", task_id, sorted(update_data))
            return self._to_task(record)

    def delete(self, task_id: int) -> None:
        with self._lock, session_scope(self._sessions) as session:
            record = self._get_record(session, task_id)
            if record is None:
                logger.info("Delete of unknown task %s", task_id)
                raise NotFoundError(task_id)
            session.delete(record)
            logger.debug("Deleted task %d", task_id)

    def close(self) -> None:
        self._engine.dispose()
