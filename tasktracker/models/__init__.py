from .task import TaskRecord

# Export all models for easy importing
__all__ = ["TaskRecord"]
