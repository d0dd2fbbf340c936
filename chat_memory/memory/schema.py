"""
DDL for the ``ai_chat_memory`` table.

Schema management normally belongs to the host application.  This module
exists for hosts that want the store to create its table on first use
(``initialize_schema: true``).  Every statement is idempotent.

Columns
-------
conversation_id : string, the grouping key
content         : text body
type            : kind name (USER, ASSISTANT, SYSTEM, TOOL)
timestamp       : ordering key assigned by the database

``timestamp`` is an identity/sequence value, not a clock reading: clock
defaults such as ``NOW()`` or ``CURRENT_TIMESTAMP`` return the statement or
transaction start time, so every row of one ``append`` batch would tie.
A sequence gives each inserted row a distinct, increasing key.  Under
concurrent writers a row with a smaller key may still commit after a row
with a larger one, so readers order rows by the moment they drew their key,
not by commit time.
"""
from __future__ import annotations

from typing import Dict, List

from sqlalchemy import text
from sqlalchemy.engine import Engine

from chat_memory.memory.dialect import Dialect
from chat_memory.memory.statements import TABLE_NAME
from chat_memory.utils.logging import get_logger

logger = get_logger(__name__)

_ANSI = [
    f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
        conversation_id VARCHAR(36) NOT NULL,
        content         TEXT        NOT NULL,
        type            VARCHAR(10) NOT NULL,
        "timestamp"     BIGINT      GENERATED ALWAYS AS IDENTITY
    )
    """,
    f"""
    CREATE INDEX IF NOT EXISTS {TABLE_NAME}_conversation_id_timestamp_idx
        ON {TABLE_NAME} (conversation_id, "timestamp" DESC)
    """,
]

_DDL: Dict[Dialect, List[str]] = {
    Dialect.POSTGRESQL: [
        f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            conversation_id VARCHAR(36) NOT NULL,
            content         TEXT        NOT NULL,
            type            VARCHAR(10) NOT NULL
                CHECK (type IN ('USER', 'ASSISTANT', 'SYSTEM', 'TOOL')),
            "timestamp"     BIGINT      GENERATED ALWAYS AS IDENTITY
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS {TABLE_NAME}_conversation_id_timestamp_idx
            ON {TABLE_NAME} (conversation_id, "timestamp" DESC)
        """,
    ],
    Dialect.MYSQL: [
        f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            conversation_id VARCHAR(36) NOT NULL,
            content         TEXT        NOT NULL,
            type            VARCHAR(10) NOT NULL,
            `timestamp`     BIGINT      NOT NULL AUTO_INCREMENT PRIMARY KEY,
            INDEX {TABLE_NAME}_conversation_id_timestamp_idx (conversation_id, `timestamp`)
        )
        """,
    ],
    Dialect.SQLSERVER: [
        f"""
        IF OBJECT_ID(N'{TABLE_NAME}', N'U') IS NULL
        CREATE TABLE {TABLE_NAME} (
            conversation_id VARCHAR(36)  NOT NULL,
            content         NVARCHAR(MAX) NOT NULL,
            type            VARCHAR(10)  NOT NULL,
            [timestamp]     BIGINT IDENTITY(1, 1) NOT NULL
        )
        """,
        f"""
        IF NOT EXISTS (SELECT 1 FROM sys.indexes
                       WHERE name = N'{TABLE_NAME}_conversation_id_timestamp_idx')
        CREATE INDEX {TABLE_NAME}_conversation_id_timestamp_idx
            ON {TABLE_NAME} (conversation_id, [timestamp] DESC)
        """,
    ],
    Dialect.HSQLDB: [
        f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            conversation_id VARCHAR(36)    NOT NULL,
            content         LONGVARCHAR    NOT NULL,
            type            VARCHAR(10)    NOT NULL,
            "timestamp"     BIGINT GENERATED BY DEFAULT AS IDENTITY (START WITH 1) NOT NULL
        )
        """,
    ],
    # INTEGER PRIMARY KEY is SQLite's rowid: assigned by the database and
    # strictly increasing, so rows written in one batch keep their order.
    Dialect.SQLITE: [
        f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            conversation_id TEXT    NOT NULL,
            content         TEXT    NOT NULL,
            type            TEXT    NOT NULL,
            "timestamp"     INTEGER PRIMARY KEY AUTOINCREMENT
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS {TABLE_NAME}_conversation_id_timestamp_idx
            ON {TABLE_NAME} (conversation_id, "timestamp")
        """,
    ],
}
_DDL[Dialect.MARIADB] = _DDL[Dialect.MYSQL]


def ddl_for(dialect: Dialect) -> List[str]:
    """DDL statements for *dialect*; ANSI SQL when the dialect has no entry."""
    return [stmt.strip() for stmt in _DDL.get(dialect, _ANSI)]


def initialize_schema(engine: Engine, dialect: Dialect) -> None:
    """Create ``ai_chat_memory`` and its index if they do not exist."""
    with engine.begin() as conn:
        for stmt in ddl_for(dialect):
            conn.execute(text(stmt))
    logger.info("Initialized %s schema for %s", TABLE_NAME, dialect.name)
