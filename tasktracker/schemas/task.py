from typing import Optional

from pydantic import BaseModel, StrictBool, StrictStr, field_validator


def _non_empty(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("description must not be empty")
    return value


class TaskBase(BaseModel):
    """Fields shared by every task representation."""
    description: str
    completed: bool = False


class TaskCreate(BaseModel):
    """Schema for creating new tasks."""
    description: StrictStr

    @field_validator("description")
    @classmethod
    def check_description(cls, value):
        return _non_empty(value)

    class Config:
        extra = "forbid"


class TaskUpdate(BaseModel):
    """Schema for partially updating a task.

    Only the fields present in the request body are applied; an omitted
    field is left untouched. Explicit nulls are rejected.
    """
    description: Optional[StrictStr] = None
    completed: Optional[StrictBool] = None

    @field_validator("description")
    @classmethod
    def check_description(cls, value):
        if value is None:
            raise ValueError("description must be a string")
        return _non_empty(value)

    @field_validator("completed")
    @classmethod
    def check_completed(cls, value):
        if value is None:
            raise ValueError("completed must be a boolean")
        return value

    class Config:
        extra = "forbid"


class Task(TaskBase):
    """Complete task schema with all fields."""
    id: int

    class Config:
        from_attributes = True
