"""
Todo repository.

Reads and inserts go through the typed query layer; schema creation and the
completion update are plain statements run on the same connection.
"""

from datetime import datetime
from typing import Dict, List, Optional
import logging

from typed_query import Connection, Constant, asc, from_, insert_into
from typed_query.connection import param_style_of

from .models import TODO_TABLE, TodoCreate, TodoRecord

logger = logging.getLogger(__name__)

# Table creation statements per database dialect, run in order
SCHEMA_DDL: Dict[str, List[str]] = {
    'postgresql': [
        """
        create table if not exists todo (
            id serial primary key,
            name text not null,
            created_time timestamp with time zone not null default now(),
            completed boolean not null default false,
            completed_time timestamp with time zone null
        )
        """,
    ],
    'duckdb': [
        "create sequence if not exists todo_id_seq",
        """
        create table if not exists todo (
            id integer primary key default nextval('todo_id_seq'),
            name text not null,
            created_time timestamp not null default current_timestamp,
            completed boolean not null default false,
            completed_time timestamp null
        )
        """,
    ],
}


class TodoRepository:
    """Data access for the todo table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    @property
    def dialect(self) -> str:
        return getattr(self.connection, 'dialect', 'postgresql')

    def create_tables(self) -> None:
        """Create the todo table if it does not exist."""
        if self.dialect not in SCHEMA_DDL:
            raise ValueError(f"No todo schema for database dialect: {self.dialect}")

        for statement in SCHEMA_DDL[self.dialect]:
            self.connection.execute_script(statement)
        logger.debug(f"Ensured todo schema on {self.dialect}")

    def add(self, name: str, created_time: Optional[datetime] = None) -> int:
        """
        Insert a new, open todo

        Args:
            name: What needs doing
            created_time: Creation time; the column default when omitted

        Returns:
            Number of inserted rows
        """
        todo = TodoCreate(name=name, created_time=created_time)
        inserted = insert_into(TODO_TABLE).values(todo).execute(self.connection)
        logger.info(f"Added todo: {name}")
        return inserted

    def list_open(self) -> List[TodoRecord]:
        """Open todos, oldest first."""
        return (
            from_(TODO_TABLE)
            .where_(lambda c: c.completed.eq(Constant(False)))
            .order_by(lambda c: asc(c.created_time))
            .query(self.connection)
        )

    def complete(self, todo_id: int, completed_time: Optional[datetime] = None) -> int:
        """
        Mark a todo as completed

        Args:
            todo_id: Identifier of the todo
            completed_time: Completion time; now when omitted

        Returns:
            Number of updated rows (0 when no todo has this id)
        """
        style = param_style_of(self.connection)
        columns = TODO_TABLE.columns
        sql = (
            f"update {TODO_TABLE.name} set {columns.completed.name} = true, "
            f"{columns.completed_time.name} = {style.marker(1)} "
            f"where {columns.id.name} = {style.marker(2)}"
        )
        updated = self.connection.execute_statement(sql, [completed_time or datetime.now(), todo_id])

        if updated:
            logger.info(f"Completed todo {todo_id}")
        else:
            logger.warning(f"No todo with id {todo_id}")
        return updated
