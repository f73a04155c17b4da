"""
Typed query construction for relational databases.

Builds ``select`` and ``insert`` statements from typed table declarations
instead of hand-written SQL strings, and runs them through an injected
connection.

Key components:
- Table declarations with typed column handles
- Equality predicates and single-key ordering
- Immutable select trees and multi-row inserts with column defaults
- SQL rendering
- DuckDB and SQLAlchemy connections
"""

from .schema import Table, FromRow, column_names
from .expressions import Field, Constant, FieldLike, Eq, Predicate, Direction, Order, asc, desc
from .query import Query, TableQuery, WhereQuery, OrderQuery, from_
from .insert import Value, Default, DEFAULT, WithDefault, Param, InsertParams, ToSqlParams, Insert, insert_into
from .compiler import SQLCompiler, ParamStyle, to_sql
from .connection import Connection
from .backends import DuckDBConnection, SQLAlchemyConnection
from .config import Config, DatabaseConfig
from .logging_config import setup_logging, QueryLoggerAdapter
from .exceptions import TypedQueryError, DefaultParameterError, UnsupportedOperandError

__version__ = "0.1.0"
__all__ = [
    # Schema
    "Table",
    "FromRow",
    "column_names",

    # Expressions
    "Field",
    "Constant",
    "FieldLike",
    "Eq",
    "Predicate",
    "Direction",
    "Order",
    "asc",
    "desc",

    # Statements
    "Query",
    "TableQuery",
    "WhereQuery",
    "OrderQuery",
    "from_",
    "Value",
    "Default",
    "DEFAULT",
    "WithDefault",
    "Param",
    "InsertParams",
    "ToSqlParams",
    "Insert",
    "insert_into",

    # Rendering
    "SQLCompiler",
    "ParamStyle",
    "to_sql",

    # Execution
    "Connection",
    "DuckDBConnection",
    "SQLAlchemyConnection",

    # Configuration
    "Config",
    "DatabaseConfig",
    "setup_logging",
    "QueryLoggerAdapter",

    # Exceptions
    "TypedQueryError",
    "DefaultParameterError",
    "UnsupportedOperandError",
]
