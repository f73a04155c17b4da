"""
SQLAlchemy Core connection.

Statements are wrapped in ``text()``, which expects named ``:name`` binds, so
this connection asks for the NAMED parameter style and maps the positional
values to ``p1``, ``p2``, ...
"""

from typing import Any, Dict, List, Sequence
import logging
import time

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ..compiler import ParamStyle
from ..logging_config import QueryLoggerAdapter


class SQLAlchemyConnection:
    """Runs rendered statements through a SQLAlchemy engine"""

    param_style = ParamStyle.NAMED

    def __init__(self, engine: Engine):
        """
        Initialize connection with SQLAlchemy engine

        Args:
            engine: SQLAlchemy Engine instance
        """
        self.engine = engine
        self.dialect = engine.dialect.name
        self.logger = QueryLoggerAdapter(
            logging.getLogger(__name__),
            {'database': engine.url.database or engine.dialect.name}
        )

    @staticmethod
    def bind_params(params: Sequence[Any]) -> Dict[str, Any]:
        """Map positional values to the names used by the NAMED style"""
        return {ParamStyle.param_name(i): value for i, value in enumerate(params, start=1)}

    def execute_query(self, sql: str) -> List[Sequence[Any]]:
        start_time = time.time()
        try:
            with self.engine.connect() as conn:
                rows = [tuple(row) for row in conn.execute(text(sql))]
        except Exception as e:
            self.logger.error(f"Query failed: {e}")
            raise

        self.logger.query(sql, None, time.time() - start_time)
        return rows

    def execute_statement(self, sql: str, params: Sequence[Any]) -> int:
        start_time = time.time()
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(sql), self.bind_params(params))
                affected = result.rowcount if result.rowcount is not None else 0
        except Exception as e:
            self.logger.error(f"Statement failed: {e}")
            raise

        self.logger.query(sql, params, time.time() - start_time)
        return affected

    def execute_script(self, sql: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(text(sql))

    def close(self) -> None:
        """Close database connections"""
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
