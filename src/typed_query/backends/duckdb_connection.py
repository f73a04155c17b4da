"""
DuckDB connection.

DuckDB accepts ``$1``-style positional parameters natively, so rendered
statements are sent as-is.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import logging
import time

import duckdb

from ..compiler import ParamStyle
from ..logging_config import QueryLoggerAdapter


class DuckDBConnection:
    """Manages a single DuckDB connection."""

    param_style = ParamStyle.NUMERIC_DOLLAR
    dialect = "duckdb"

    def __init__(self, database: Union[str, Path] = ':memory:',
                 settings: Optional[Dict[str, Any]] = None):
        """Initialize database connection.

        Args:
            database: Path to database file, or ':memory:'
            settings: DuckDB settings ('max_memory', 'threads')
        """
        self.database = str(database)
        self.settings = settings or {}
        self.connection = None
        self.logger = QueryLoggerAdapter(
            logging.getLogger(__name__),
            {'database': Path(self.database).stem or self.database}
        )
        self._query_count = 0
        self._total_query_time = 0.0

    def connect(self) -> 'duckdb.DuckDBPyConnection':
        """Establish database connection."""
        if self.connection is None:
            self.connection = duckdb.connect(self.database)

            if 'max_memory' in self.settings:
                self.connection.execute(f"SET memory_limit = '{self.settings['max_memory']}'")
            if 'threads' in self.settings:
                self.connection.execute(f"SET threads = {int(self.settings['threads'])}")

        return self.connection

    def close(self) -> None:
        """Close database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def _execute(self, sql: str, params: Optional[Sequence[Any]] = None):
        conn = self.connect()
        start_time = time.time()

        try:
            if params:
                cursor = conn.execute(sql, list(params))
            else:
                cursor = conn.execute(sql)
        except Exception as e:
            self.logger.error(f"Statement failed: {e}")
            raise

        duration = time.time() - start_time
        self._query_count += 1
        self._total_query_time += duration
        self.logger.query(sql, params, duration)
        return cursor

    def execute_query(self, sql: str) -> List[Sequence[Any]]:
        return self._execute(sql).fetchall()

    def execute_statement(self, sql: str, params: Sequence[Any]) -> int:
        # DuckDB reports the affected row count as a single result row
        row = self._execute(sql, params).fetchone()
        return int(row[0]) if row else 0

    def execute_script(self, sql: str) -> None:
        self._execute(sql)

    def get_stats(self) -> Dict[str, Any]:
        """Get query statistics."""
        return {
            'query_count': self._query_count,
            'total_query_time': self._total_query_time,
            'avg_query_time': self._total_query_time / max(1, self._query_count)
        }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
