"""
Field, predicate and ordering expressions.

Fields are typed handles to table columns. The value type ``T`` only exists
for static type checkers; at runtime a Field is just its column name.
Operands of predicates and orderings form a closed union (``FieldLike``):
a named column (``Field``) or a literal (``Constant``).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from .exceptions import UnsupportedOperandError

T = TypeVar('T')


@dataclass(frozen=True)
class Field(Generic[T]):
    """Typed handle to one column"""

    __visit_name__ = "field"

    name: str

    def eq(self, other: 'FieldLike[T]') -> 'Eq':
        """
        Build an equality predicate between this column and another operand

        Args:
            other: Field or Constant holding the same value type

        Returns:
            Eq predicate comparing both operands
        """
        return Eq(self, ensure_field_like(other))


@dataclass(frozen=True)
class Constant(Generic[T]):
    """Literal value usable wherever a Field is usable in an expression"""

    __visit_name__ = "constant"

    value: T


FieldLike = Union[Field[T], Constant[T]]


def ensure_field_like(operand: Any) -> Any:
    """Reject operands outside the Field | Constant union"""
    if not isinstance(operand, (Field, Constant)):
        raise UnsupportedOperandError(operand)
    return operand


@dataclass(frozen=True)
class Eq:
    """Equality between two field-like operands"""

    __visit_name__ = "eq"

    field1: Any
    field2: Any


# Equality is the only predicate kind
Predicate = Eq


class Direction(str, Enum):
    """Sort direction"""
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class Order:
    """Single sort key"""

    __visit_name__ = "order"

    by: Any
    direction: Direction


def asc(field: 'FieldLike[T]') -> Order:
    """Ascending order on a copy of ``field``"""
    return Order(replace(ensure_field_like(field)), Direction.ASCENDING)


def desc(field: 'FieldLike[T]') -> Order:
    """Descending order on a copy of ``field``"""
    return Order(replace(ensure_field_like(field)), Direction.DESCENDING)
