from sqlmodel import SQLModel, Field
from typing import Optional


class TaskRecord(SQLModel, table=True):
    """Row backing one task in the SQL task store."""
    __tablename__ = "tasks"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    description: str
    completed: bool = Field(default=False)
