"""
Logging configuration.

The log level comes from the ``logging`` section of the YAML configuration.
Statement-level detail (full SQL, parameter counts, durations) is only
emitted at DEBUG; INFO carries one-line summaries.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Loggers owned by this distribution
PACKAGE_LOGGERS = ('typed_query', 'todo_app')


class SafeFormatter(logging.Formatter):
    """Formatter that fills in the database context when a record has none"""

    def format(self, record):
        if not hasattr(record, 'database_context'):
            record.database_context = 'db'
        return super().format(record)


def setup_logging(config: Dict[str, Any]) -> logging.Logger:
    """
    Configure the package loggers from a configuration dictionary

    Args:
        config: Configuration with an optional ``logging`` section holding
            ``level``, ``format`` and ``file``

    Returns:
        The ``typed_query`` logger
    """
    logging_config = config.get('logging', {}) or {}
    log_level = str(logging_config.get('level', 'INFO')).upper()
    log_format = logging_config.get('format', DEFAULT_FORMAT)
    log_file = logging_config.get('file')

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, log_level, logging.INFO))

        # Remove any existing handlers to avoid duplicates
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

        for handler in handlers:
            handler.setFormatter(SafeFormatter(log_format, datefmt='%Y-%m-%d %H:%M:%S'))
            logger.addHandler(handler)

        logger.propagate = False

    return logging.getLogger(PACKAGE_LOGGERS[0])


class QueryLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that tags records with the database they concern.

    ``query`` logs the rendered statement in full at DEBUG and only a timing
    summary at INFO.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg, kwargs):
        kwargs.setdefault('extra', {})
        kwargs['extra']['database_context'] = self.extra.get('database', 'unknown')
        return msg, kwargs

    def query(self, sql: str, params: Optional[Sequence[Any]] = None,
              duration: Optional[float] = None) -> None:
        """Log an executed statement"""
        if self.isEnabledFor(logging.DEBUG):
            message = f"Executed: {sql}"
            if params:
                message += f" [{len(params)} params]"
            if duration is not None:
                message += f" ({duration:.3f}s)"
            self.debug(message)
        elif duration is not None:
            self.info(f"Query executed in {duration:.3f}s")
