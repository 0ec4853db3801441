from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..errors import ValidationError
from ..schemas.task import Task, TaskUpdate


def get_update_data(changes: TaskUpdate) -> dict:
    """Return only the fields the caller explicitly supplied."""
    return changes.model_dump(exclude_unset=True)


class TaskStore(ABC):
    """
    Contract every task backend must honour.

    - each call is atomic with respect to every other call
    - ids are unique, increasing and never reused after deletion
    - create raises ValidationError for a blank description
    - update/delete raise NotFoundError for an unknown id
    - returned tasks are detached copies; mutating them changes nothing
    """

    @abstractmethod
    def list(self) -> List[Task]:
        """Snapshot of every current task, in no particular order."""

    @abstractmethod
    def create(self, description: str) -> Task:
        """Store a new, not yet completed task and return it."""

    @abstractmethod
    def update(self, task_id: int, changes: TaskUpdate) -> Task:
        """Apply the supplied fields of ``changes`` and return the result."""

    @abstractmethod
    def delete(self, task_id: int) -> None:
        """Remove the task for good."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""


def clean_description(description) -> str:
    """Trim ``description`` or raise ValidationError when nothing is left."""
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("description must not be empty")
    return description.strip()
