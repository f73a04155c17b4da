"""
Select statement trees.

A query starts as a full table scan built by ``from_`` and grows by wrapping:
``where_`` adds a filter node and ``order_by`` adds a sort node around the
previous query. Nodes are immutable; every call returns a new tree that
references the old one, so partially built queries can be shared and reused.

Callbacks passed to ``where_`` and ``order_by`` receive the column record of
the innermost table, whatever the nesting depth:

    open_todos = (
        from_(TODO_TABLE)
        .where_(lambda c: c.completed.eq(Constant(False)))
        .order_by(lambda c: asc(c.created_time))
    )
    rows = open_todos.query(connection)

Each ``order_by`` call renders as its own subquery, so only the outermost
sort key is guaranteed to order the final result.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, List, TypeVar
import logging
import time

from .compiler import to_sql
from .connection import Connection
from .expressions import Eq, Order
from .schema import Table

logger = logging.getLogger(__name__)

C = TypeVar('C')
R = TypeVar('R')


class Query(ABC, Generic[C, R]):
    """Base class of the select statement tree"""

    @abstractmethod
    def table(self) -> Table[C, R]:
        """Table scanned by the innermost node"""

    def columns(self) -> C:
        """Column record of the innermost table"""
        return self.table().columns

    def where_(self, condition: Callable[[C], Eq]) -> 'WhereQuery[C, R]':
        """
        Wrap this query in a filter

        Args:
            condition: Builds the predicate from the column record

        Returns:
            New query filtered by the predicate
        """
        return WhereQuery(self, condition(self.columns()))

    def order_by(self, make_order: Callable[[C], Order]) -> 'OrderQuery[C, R]':
        """
        Wrap this query in a sort

        Args:
            make_order: Builds the sort key from the column record

        Returns:
            New query sorted by the key
        """
        return OrderQuery(self, make_order(self.columns()))

    def to_sql(self) -> str:
        return to_sql(self)

    def query(self, connection: Connection) -> List[R]:
        """
        Execute the query and decode every returned row

        Args:
            connection: Connection that runs the rendered statement

        Returns:
            Rows decoded by the table's row type, in result order
        """
        sql = self.to_sql()
        row_type = self.table().row_type
        start_time = time.time()

        rows = connection.execute_query(sql)
        records = [row_type.from_row(row) for row in rows]

        logger.debug(f"Fetched {len(records)} {row_type.__name__} rows "
                     f"in {time.time() - start_time:.3f}s")
        return records


@dataclass(frozen=True)
class TableQuery(Query[C, R]):
    """Full scan of a table"""

    __visit_name__ = "table_query"

    source: Table[C, R]

    def table(self) -> Table[C, R]:
        return self.source


@dataclass(frozen=True)
class WhereQuery(Query[C, R]):
    """Inner query filtered by a predicate"""

    __visit_name__ = "where_query"

    inner: Query[C, R]
    predicate: Eq

    def table(self) -> Table[C, R]:
        return self.inner.table()


@dataclass(frozen=True)
class OrderQuery(Query[C, R]):
    """Inner query sorted by one key"""

    __visit_name__ = "order_query"

    inner: Query[C, R]
    order: Order

    def table(self) -> Table[C, R]:
        return self.inner.table()


def from_(table: Table[C, R]) -> TableQuery[C, R]:
    """Start a query scanning ``table``"""
    return TableQuery(table)
