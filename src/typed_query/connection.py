"""
Connection boundary.

The query layer never opens, pools or commits connections itself. It renders
statements and hands them to an object satisfying ``Connection``; whatever
that object raises reaches the caller unchanged.
"""

from typing import Any, List, Protocol, Sequence

from .compiler import ParamStyle


class Connection(Protocol):
    """Executes rendered statements against a live database"""

    # Marker format the connection's driver expects for bound parameters
    param_style: ParamStyle

    # Database dialect name, e.g. "duckdb", "postgresql", "sqlite"
    dialect: str

    def execute_query(self, sql: str) -> List[Sequence[Any]]:
        """Run a select statement and return its physical rows"""
        ...

    def execute_statement(self, sql: str, params: Sequence[Any]) -> int:
        """Run a statement with positional bound values and return the affected row count"""
        ...

    def execute_script(self, sql: str) -> None:
        """Run DDL or other statements that produce no rows"""
        ...


def param_style_of(connection: Any) -> ParamStyle:
    """Marker format declared by ``connection``, ``$n`` when it declares none"""
    return ParamStyle(getattr(connection, 'param_style', ParamStyle.NUMERIC_DOLLAR))
