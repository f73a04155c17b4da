"""
Tests for the DuckDB and SQLAlchemy connections
"""

import pytest
from sqlalchemy import create_engine

from typed_query import (
    DEFAULT, Constant, ParamStyle, SQLAlchemyConnection,
    Value, asc, desc, from_, insert_into,
)

from conftest import ITEM_TABLE, Item

ITEM_DDL_DUCKDB = [
    "create sequence if not exists item_id_seq",
    """
    create table item (
        id integer primary key default nextval('item_id_seq'),
        label text not null,
        qty integer not null default 1
    )
    """,
]

ITEM_DDL_SQLITE = """
    create table item (
        id integer primary key,
        label text not null,
        qty integer not null default 1
    )
"""


class TestDuckDBConnection:
    """Test DuckDB execution"""

    @pytest.fixture
    def connection(self, duckdb_connection):
        for statement in ITEM_DDL_DUCKDB:
            duckdb_connection.execute_script(statement)
        return duckdb_connection

    def test_declares_numeric_style(self, connection):
        """DuckDB takes $n markers"""
        assert connection.param_style is ParamStyle.NUMERIC_DOLLAR
        assert connection.dialect == "duckdb"

    def test_insert_with_defaults(self, connection):
        """Default slots fall back to the column defaults"""
        inserted = (
            insert_into(ITEM_TABLE)
            .values([DEFAULT, Value("bolt"), DEFAULT])
            .values([DEFAULT, Value("nut"), Value(7)])
            .execute(connection)
        )

        assert inserted == 2
        items = from_(ITEM_TABLE).order_by(lambda c: asc(c.id)).query(connection)
        assert items == [Item(1, "bolt", 1), Item(2, "nut", 7)]

    def test_where_and_order(self, connection):
        """Filters and sorts run as nested derived tables"""
        insert = insert_into(ITEM_TABLE)
        for label, qty in [("a", 3), ("b", 1), ("c", 3), ("d", 2)]:
            insert = insert.values([DEFAULT, Value(label), Value(qty)])
        insert.execute(connection)

        items = (
            from_(ITEM_TABLE)
            .where_(lambda c: c.qty.eq(Constant(3)))
            .order_by(lambda c: desc(c.label))
            .query(connection)
        )
        assert [item.label for item in items] == ["c", "a"]

    def test_outermost_order_wins(self, connection):
        """With two sorts, the later order_by decides the final order"""
        insert = insert_into(ITEM_TABLE)
        for label, qty in [("a", 2), ("b", 3), ("c", 1)]:
            insert = insert.values([DEFAULT, Value(label), Value(qty)])
        insert.execute(connection)

        items = (
            from_(ITEM_TABLE)
            .order_by(lambda c: asc(c.label))
            .order_by(lambda c: asc(c.qty))
            .query(connection)
        )
        assert [item.qty for item in items] == [1, 2, 3]

    def test_backend_error_propagates(self, connection):
        """Driver exceptions are not wrapped"""
        with pytest.raises(Exception) as exc_info:
            connection.execute_query("select * from missing_table")
        assert "missing_table" in str(exc_info.value)

    def test_stats(self, connection):
        """Executed statements are counted"""
        connection.execute_query("select 1")
        assert connection.get_stats()['query_count'] >= 3


class TestSQLAlchemyConnection:
    """Test SQLAlchemy execution against in-memory SQLite"""

    @pytest.fixture
    def connection(self):
        connection = SQLAlchemyConnection(create_engine("sqlite:///:memory:"))
        connection.execute_script(ITEM_DDL_SQLITE)
        yield connection
        connection.close()

    def test_declares_named_style(self, connection):
        """text() statements take :name markers"""
        assert connection.param_style is ParamStyle.NAMED
        assert connection.dialect == "sqlite"

    def test_bind_params(self):
        """Positional values map to p1, p2, ..."""
        assert SQLAlchemyConnection.bind_params(["a", 2]) == {"p1": "a", "p2": 2}

    def test_insert_and_query(self, connection):
        """Explicit values round trip through named binds"""
        inserted = (
            insert_into(ITEM_TABLE)
            .values([Value(1), Value("bolt"), Value(4)])
            .values([Value(2), Value("nut"), Value(9)])
            .execute(connection)
        )

        assert inserted == 2
        items = (
            from_(ITEM_TABLE)
            .where_(lambda c: c.qty.eq(Constant(9)))
            .query(connection)
        )
        assert items == [Item(2, "nut", 9)]
