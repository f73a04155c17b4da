"""
Table declarations.

A ``Table`` bundles a relation name, a record of typed ``Field`` handles
(one per column, in table-definition order) and the row type produced when
the table is read. Declarations are built once by the caller and never
checked against the live database schema.
"""

from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Generic, List, Protocol, Sequence, Type, TypeVar

from .expressions import Field

C = TypeVar('C')
R = TypeVar('R')


class FromRow(Protocol):
    """Row type capability: decode one physical row, positionally, in column order"""

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> Any:
        ...


@dataclass(frozen=True)
class Table(Generic[C, R]):
    """Named relation with its typed column record and row type"""

    __visit_name__ = "table"

    name: str
    columns: C
    row_type: Type[R]


def column_names(columns: Any) -> List[str]:
    """
    List the column names of a column record in declaration order

    Args:
        columns: NamedTuple, dataclass or plain sequence of Field handles

    Returns:
        Column names in the order the record declares them
    """
    if is_dataclass(columns):
        values = [getattr(columns, f.name) for f in fields(columns)]
    else:
        values = list(columns)
    return [value.name for value in values if isinstance(value, Field)]
