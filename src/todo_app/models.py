"""
Todo data models and table declaration.

``TODO_TABLE`` is built once at import time and shared read-only by every
query and insert against the ``todo`` relation.
"""

from datetime import datetime
from typing import Any, List, NamedTuple, Optional, Sequence

from pydantic import BaseModel, Field as ModelField, field_validator

from typed_query import DEFAULT, Field, Table, Value


class TodoRecord(BaseModel):
    """One row of the todo table."""

    id: int = ModelField(..., description="Todo identifier")
    name: str = ModelField(..., description="What needs doing")
    created_time: datetime = ModelField(..., description="When the todo was added")
    completed: bool = ModelField(default=False, description="Whether the todo is done")
    completed_time: Optional[datetime] = ModelField(None, description="When the todo was completed")

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> 'TodoRecord':
        """Decode a physical row in table column order."""
        return cls(
            id=row[0],
            name=row[1],
            created_time=row[2],
            completed=row[3],
            completed_time=row[4],
        )


class TodoCreate(BaseModel):
    """Values for a new todo; unset columns use their table defaults."""

    name: str = ModelField(..., description="What needs doing")
    created_time: Optional[datetime] = ModelField(None, description="Override the creation time")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Reject blank names."""
        if not v or not v.strip():
            raise ValueError('Todo name must not be empty')
        return v

    def to_sql_params(self) -> List[Any]:
        return [
            DEFAULT,
            Value(self.name),
            Value(self.created_time) if self.created_time is not None else DEFAULT,
            DEFAULT,
            DEFAULT,
        ]


class TodoColumns(NamedTuple):
    id: Field[int]
    name: Field[str]
    created_time: Field[datetime]
    completed: Field[bool]
    completed_time: Field[Optional[datetime]]


TODO_TABLE: Table[TodoColumns, TodoRecord] = Table(
    name="todo",
    columns=TodoColumns(
        id=Field("id"),
        name=Field("name"),
        created_time=Field("created_time"),
        completed=Field("completed"),
        completed_time=Field("completed_time"),
    ),
    row_type=TodoRecord,
)
