"""
Database dialect detection.

The dialect is read once, from the URL of a live connection, and decides
which SQL template family the store uses.  Only ``SQLSERVER`` changes the
generated SQL today; the other tags are informational.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from sqlalchemy.engine import Engine

from chat_memory.core.exceptions import ConfigError
from chat_memory.utils.logging import get_logger

logger = get_logger(__name__)


class Dialect(str, Enum):
    SQLSERVER = "sqlserver"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    ORACLE = "oracle"
    H2 = "h2"
    HSQLDB = "hsqldb"
    SQLITE = "sqlite"
    OTHER = "other"


# First URL segment -> dialect.  Covers SQLAlchemy backend names and the
# JDBC sub-protocols still found in shared configuration.
_SEGMENT_DIALECTS = {
    "mssql": Dialect.SQLSERVER,
    "sqlserver": Dialect.SQLSERVER,
    "jtds": Dialect.SQLSERVER,
    "postgresql": Dialect.POSTGRESQL,
    "postgres": Dialect.POSTGRESQL,
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MARIADB,
    "oracle": Dialect.ORACLE,
    "h2": Dialect.H2,
    "hsqldb": Dialect.HSQLDB,
    "sqlite": Dialect.SQLITE,
}


def _first_segment(url: str) -> str:
    """``mssql+pyodbc://h/db`` -> ``mssql``; ``jdbc:sqlserver://h`` -> ``sqlserver``."""
    url = url.strip().lower()
    if url.startswith("jdbc:"):
        url = url[len("jdbc:"):]
    return re.split(r"[:+]", url, maxsplit=1)[0]


def dialect_from_url(url: Optional[str]) -> Dialect:
    """Map a connection URL to a :class:`Dialect`; unknown URLs are ``OTHER``."""
    if not url:
        return Dialect.OTHER
    return _SEGMENT_DIALECTS.get(_first_segment(url), Dialect.OTHER)


def detect_dialect(engine: Optional[Engine]) -> Dialect:
    """
    Open a connection from *engine* and classify the database behind it.

    Raises
    ------
    ConfigError
        When *engine* is missing, no connection can be obtained or the
        connection URL cannot be read.
    """
    if engine is None:
        raise ConfigError("engine must not be None")

    try:
        with engine.connect() as conn:
            url = conn.engine.url
            rendered = url.render_as_string(hide_password=True)
    except Exception as exc:
        raise ConfigError(
            "Impossible to detect the database dialect",
            context={"error_type": type(exc).__name__},
            cause=exc,
        ) from exc

    dialect = dialect_from_url(rendered)
    logger.info("Detected %s dialect for %s", dialect.name, rendered)
    return dialect
