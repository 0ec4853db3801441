class TaskStoreError(Exception):
    """Base class for failures reported by a task store."""


class ValidationError(TaskStoreError):
    """Caller input failed a precondition; nothing was changed."""


class NotFoundError(TaskStoreError):
    """The referenced task does not exist (never created or already deleted)."""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
