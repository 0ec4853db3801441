from ..config import Settings
from .base import TaskStore
from .memory import MemoryTaskStore
from .sql import SqlTaskStore


def build_store(settings: Settings) -> TaskStore:
    """Construct the backend named by ``settings.task_store_backend``."""
    if settings.task_store_backend == "memory":
        return MemoryTaskStore()
    if settings.task_store_backend == "sql":
        return SqlTaskStore(settings.database_url)
    raise ValueError(f"Unknown task store backend: {settings.task_store_backend!r}")


__all__ = ["TaskStore", "MemoryTaskStore", "SqlTaskStore", "build_store"]
