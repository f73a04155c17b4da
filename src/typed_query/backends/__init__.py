"""
Database-specific connections
"""

from .duckdb_connection import DuckDBConnection
from .sqlalchemy_connection import SQLAlchemyConnection

__all__ = [
    'DuckDBConnection',
    'SQLAlchemyConnection'
]
