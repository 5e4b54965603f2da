"""
Logging for the service.

Everything logs under the ``health_records`` logger: feature modules take a
child logger from ``get_logger(__name__)`` so each line names the module it
came from. SQL statement logging (``DATABASE_ECHO``) is routed through the
same console handler instead of SQLAlchemy's own.
"""

import logging
import sys
from typing import Optional

from health_records.config import settings


ROOT_LOGGER_NAME = "health_records"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: Optional[str] = None, echo_sql: Optional[bool] = None) -> logging.Logger:
    """
    Configure and return the application logger.
    
    Args:
        level: Level name, defaults to ``LOG_LEVEL``
        echo_sql: Log every SQL statement, defaults to ``DATABASE_ECHO``
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    echo_sql = settings.DATABASE_ECHO if echo_sql is None else echo_sql
    
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    
    # Prevent duplicate handlers
    if not logger.handlers:
        logger.addHandler(_console_handler())
    
    sql_logger = logging.getLogger("sqlalchemy.engine")
    if echo_sql:
        sql_logger.setLevel(logging.INFO)
        if not sql_logger.handlers:
            sql_logger.addHandler(_console_handler())
    else:
        sql_logger.setLevel(logging.WARNING)
    
    logger.debug(f"Logging configured with level: {level_name}, SQL echo: {echo_sql}")
    
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the application logger, e.g. ``health_records.features.sharing.service``."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(ROOT_LOGGER_NAME).getChild(name)


logger = setup_logging()
