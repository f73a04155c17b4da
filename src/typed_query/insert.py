"""
Insert statement builder.

Rows are added one ``values`` call at a time; each call returns a new
``Insert`` holding every earlier row plus the new one. A row is converted to
one ``Param`` per column, in table column order. ``DEFAULT`` (or any
``Default``) defers a slot to the column's declared default: the slot is
rendered as the keyword ``default`` and contributes no bound value.

    statement = (
        insert_into(TODO_TABLE)
        .values([DEFAULT, Value("buy milk"), DEFAULT, DEFAULT, DEFAULT])
    )
    statement.to_sql()
    # insert into todo values (default, $1, default, default, default)

Placeholder numbering and the bound value list come from the same traversal
(``InsertParams.numbered_rows``), rows first, then columns.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, Optional, Protocol, Sequence, Tuple, TypeVar, Union
import logging
import time

from .compiler import ParamStyle, to_sql
from .connection import Connection, param_style_of
from .exceptions import DefaultParameterError
from .schema import Table

logger = logging.getLogger(__name__)

T = TypeVar('T')
C = TypeVar('C')
R = TypeVar('R')


@dataclass(frozen=True)
class Value(Generic[T]):
    """Explicit value for a column that also accepts its default"""

    value: T


@dataclass(frozen=True)
class Default:
    """Use the column's declared default"""

    def __repr__(self) -> str:
        return "DEFAULT"


DEFAULT = Default()

# Only this type resolves to "default"; bare values and None never do
WithDefault = Union[Value[T], Default]


@dataclass(frozen=True)
class Param:
    """One insert slot: a bindable value, or a marker for the column default"""

    value: Any = None
    is_default: bool = False

    @classmethod
    def of(cls, value: Any) -> 'Param':
        """
        Convert a row value to a parameter

        Args:
            value: Param, Value, Default or a plain driver-encodable value

        Returns:
            Parameter for one insert slot
        """
        if isinstance(value, Param):
            return value
        if isinstance(value, Default):
            return cls(is_default=True)
        if isinstance(value, Value):
            return cls(value.value)
        return cls(value)

    def sql_value(self) -> Any:
        """Value to bind; default slots never reach the driver"""
        if self.is_default:
            raise DefaultParameterError()
        return self.value


class ToSqlParams(Protocol):
    """Row capability: one value per column, in table column order"""

    def to_sql_params(self) -> Sequence[Any]:
        ...


@dataclass(frozen=True)
class InsertParams:
    """Ordered rows of insert parameters"""

    __visit_name__ = "insert_params"

    rows: Tuple[Tuple[Param, ...], ...] = ()

    def append(self, row: Sequence[Any]) -> 'InsertParams':
        """New params with ``row`` added after the existing rows"""
        return InsertParams(self.rows + (tuple(Param.of(v) for v in row),))

    def numbered_rows(self) -> Iterator[List[Tuple[Param, Optional[int]]]]:
        """
        Pair every slot with its 1-based bound parameter position

        Default slots get ``None`` and do not advance the counter. The same
        traversal feeds both placeholder rendering and ``bound_values``.
        """
        position = 0
        for row in self.rows:
            numbered = []
            for param in row:
                if param.is_default:
                    numbered.append((param, None))
                else:
                    position += 1
                    numbered.append((param, position))
            yield numbered

    def bound_values(self) -> List[Any]:
        """Non-default values, flattened in placeholder order"""
        return [
            param.sql_value()
            for row in self.numbered_rows()
            for param, position in row
            if position is not None
        ]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class Insert(Generic[C, R]):
    """Pending multi-row insert into a table"""

    __visit_name__ = "insert"

    table: Table[C, R]
    params: InsertParams = field(default_factory=InsertParams)

    def values(self, row: Union[ToSqlParams, Sequence[Any]]) -> 'Insert[C, R]':
        """
        Add one row

        Args:
            row: Object providing ``to_sql_params()``, or a sequence with one
                value per column

        Returns:
            New insert holding all previous rows plus this one
        """
        to_sql_params = getattr(row, 'to_sql_params', None)
        values = to_sql_params() if to_sql_params is not None else row
        return Insert(self.table, self.params.append(values))

    def to_sql(self, param_style: ParamStyle = ParamStyle.NUMERIC_DOLLAR) -> str:
        return to_sql(self, param_style)

    def bound_params(self) -> List[Any]:
        """Values sent to the driver, in placeholder order"""
        return self.params.bound_values()

    def execute(self, connection: Connection) -> int:
        """
        Run the insert

        Args:
            connection: Connection that runs the statement

        Returns:
            Affected row count reported by the connection
        """
        sql = self.to_sql(param_style_of(connection))
        params = self.bound_params()
        start_time = time.time()

        affected = connection.execute_statement(sql, params)

        logger.debug(f"Inserted {len(self.params)} rows into {self.table.name} "
                     f"with {len(params)} bound values in {time.time() - start_time:.3f}s")
        return affected


def insert_into(table: Table[C, R]) -> Insert[C, R]:
    """Start an insert into ``table`` with no rows"""
    return Insert(table)
