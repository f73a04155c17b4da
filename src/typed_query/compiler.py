"""
SQL rendering for queries, inserts and expressions.

Every renderable node carries a ``__visit_name__``; ``SQLCompiler.process``
dispatches to the matching ``visit_<name>`` method. Rendering is a pure
function of the node: the same tree always produces the same text.

Select statements never carry bound parameters. Each wrapping node nests the
inner statement as a derived table aliased ``t``:

    select * from (select * from todo) t where completed = false

Constants are interpolated as text without escaping, so they must never
carry untrusted input.
"""

from enum import Enum
from typing import Any

from .exceptions import UnsupportedOperandError
from .expressions import Constant, Field

# Alias given to every derived table; nested levels reuse it
DERIVED_TABLE_ALIAS = "t"


class ParamStyle(str, Enum):
    """Bound parameter marker format"""
    NUMERIC_DOLLAR = "numeric_dollar"  # $1, $2, ...
    NAMED = "named"                    # :p1, :p2, ...

    def marker(self, position: int) -> str:
        """Marker text for the 1-based parameter ``position``"""
        if self is ParamStyle.NAMED:
            return f":{self.param_name(position)}"
        return f"${position}"

    @staticmethod
    def param_name(position: int) -> str:
        """Bind name used by the NAMED style"""
        return f"p{position}"


class SQLCompiler:
    """Renders query trees, insert statements and expressions to SQL text"""

    def __init__(self, param_style: ParamStyle = ParamStyle.NUMERIC_DOLLAR):
        self.param_style = ParamStyle(param_style)

    def process(self, node: Any) -> str:
        visit_name = getattr(node, '__visit_name__', None)
        if visit_name is None:
            raise TypeError(f"Cannot render {type(node).__name__} as SQL")
        return getattr(self, f"visit_{visit_name}")(node)

    # Schema

    def visit_table(self, table) -> str:
        return table.name

    # Expressions

    def visit_operand(self, operand: Any) -> str:
        if isinstance(operand, Field):
            return self.visit_field(operand)
        if isinstance(operand, Constant):
            return self.visit_constant(operand)
        raise UnsupportedOperandError(operand)

    def visit_field(self, field: Field) -> str:
        return field.name

    def visit_constant(self, constant: Constant) -> str:
        return render_literal(constant.value)

    def visit_eq(self, predicate) -> str:
        return f"{self.visit_operand(predicate.field1)} = {self.visit_operand(predicate.field2)}"

    def visit_order(self, order) -> str:
        return f"{self.visit_operand(order.by)} {order.direction.value}"

    # Select

    def visit_table_query(self, query) -> str:
        return f"select * from {self.visit_table(query.source)}"

    def visit_where_query(self, query) -> str:
        return (
            f"select * from ({self.process(query.inner)}) {DERIVED_TABLE_ALIAS} "
            f"where {self.visit_eq(query.predicate)}"
        )

    def visit_order_query(self, query) -> str:
        return (
            f"select * from ({self.process(query.inner)}) {DERIVED_TABLE_ALIAS} "
            f"order by {self.visit_order(query.order)}"
        )

    # Insert

    def visit_insert(self, insert) -> str:
        return (
            f"insert into {self.visit_table(insert.table)} "
            f"values {self.visit_insert_params(insert.params)}"
        )

    def visit_insert_params(self, params) -> str:
        rows = []
        for row in params.numbered_rows():
            slots = [
                "default" if position is None else self.param_style.marker(position)
                for _, position in row
            ]
            rows.append(f"({', '.join(slots)})")
        return ", ".join(rows)


def render_literal(value: Any) -> str:
    """Text form of a constant; booleans and None use SQL keywords"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def to_sql(node: Any, param_style: ParamStyle = ParamStyle.NUMERIC_DOLLAR) -> str:
    """
    Render any query, insert or expression node to SQL text

    Args:
        node: Query tree, Insert, Table, Field, Constant, Eq or Order
        param_style: Marker format for insert parameters

    Returns:
        SQL text
    """
    return SQLCompiler(param_style).process(node)
