"""
Shared fixtures for the typed query tests
"""

from dataclasses import dataclass
from typing import Any, List, NamedTuple, Sequence

import pytest

from typed_query import DuckDBConnection, Field, ParamStyle, Table


@dataclass
class Item:
    id: int
    label: str
    qty: int

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> 'Item':
        return cls(id=row[0], label=row[1], qty=row[2])


class ItemColumns(NamedTuple):
    id: Field[int]
    label: Field[str]
    qty: Field[int]


ITEM_TABLE = Table(
    name="item",
    columns=ItemColumns(id=Field("id"), label=Field("label"), qty=Field("qty")),
    row_type=Item,
)


class RecordingConnection:
    """Connection double that records every call and returns canned rows"""

    def __init__(self, rows: List[Sequence[Any]] = None,
                 param_style: ParamStyle = ParamStyle.NUMERIC_DOLLAR,
                 affected: int = 1):
        self.rows = rows or []
        self.param_style = param_style
        self.dialect = "postgresql"
        self.affected = affected
        self.queries: List[str] = []
        self.statements: List[tuple] = []
        self.scripts: List[str] = []

    def execute_query(self, sql: str) -> List[Sequence[Any]]:
        self.queries.append(sql)
        return list(self.rows)

    def execute_statement(self, sql: str, params: Sequence[Any]) -> int:
        self.statements.append((sql, list(params)))
        return self.affected

    def execute_script(self, sql: str) -> None:
        self.scripts.append(sql)


@pytest.fixture
def item_table():
    return ITEM_TABLE


@pytest.fixture
def recording_connection():
    return RecordingConnection()


@pytest.fixture
def duckdb_connection():
    """In-memory DuckDB connection, closed after the test"""
    with DuckDBConnection(':memory:') as connection:
        yield connection
