"""
SQL statements for the ``ai_chat_memory`` table, keyed by operation and
dialect.

Templates are written with positional ``?`` placeholders and carry the
name of each placeholder in order, so the binding order of every dialect
is visible next to its SQL.  :meth:`Statement.clause` turns a template
into a SQLAlchemy ``text()`` construct with named binds.

Known inconsistency
-------------------
With ``RecentOrder.DIALECT_DEFAULT`` the default recent-rows query returns
the N newest rows newest-first, while the SQL Server query returns the N
*oldest* rows oldest-first.  Existing deployments depend on both, so the
divergence is kept unless ``RecentOrder.NEWEST_FIRST`` is selected.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from chat_memory.memory.dialect import Dialect

TABLE_NAME = "ai_chat_memory"


class Operation(str, Enum):
    APPEND = "append"
    RECENT = "recent"
    FORGET = "forget"


class RecentOrder(str, Enum):
    """How ``recent`` orders and caps rows on SQL Server."""
    DIALECT_DEFAULT = "dialect_default"
    NEWEST_FIRST = "newest_first"


@dataclass(frozen=True)
class Statement:
    operation: Operation
    sql: str
    binds: Tuple[str, ...]

    def __post_init__(self) -> None:
        if self.sql.count("?") != len(self.binds):
            raise ValueError(
                f"{self.operation.value}: {self.sql.count('?')} placeholders "
                f"for {len(self.binds)} bind names"
            )

    def bind(self, **values: Any) -> Dict[str, Any]:
        """Return the parameter mapping for this statement, in bind order."""
        missing = [name for name in self.binds if name not in values]
        if missing:
            raise KeyError(f"missing bind values: {', '.join(missing)}")
        return {name: values[name] for name in self.binds}

    def clause(self) -> TextClause:
        """The SQL as a ``text()`` construct, ``?`` rewritten to ``:name``."""
        pieces = self.sql.split("?")
        rendered = pieces[0]
        for name, piece in zip(self.binds, pieces[1:]):
            rendered += f":{name}{piece}"
        return text(rendered)


APPEND = Statement(
    Operation.APPEND,
    f"INSERT INTO {TABLE_NAME} (conversation_id, content, type) VALUES (?, ?, ?)",
    ("conversation_id", "content", "type"),
)

RECENT = Statement(
    Operation.RECENT,
    f"SELECT content, type FROM {TABLE_NAME} "
    'WHERE conversation_id = ? ORDER BY "timestamp" DESC LIMIT ?',
    ("conversation_id", "limit"),
)

SQLSERVER_RECENT = Statement(
    Operation.RECENT,
    f"SELECT TOP (?) content, type FROM {TABLE_NAME} "
    "WHERE conversation_id = ? ORDER BY [timestamp] ASC",
    ("limit", "conversation_id"),
)

SQLSERVER_RECENT_NEWEST_FIRST = Statement(
    Operation.RECENT,
    f"SELECT TOP (?) content, type FROM {TABLE_NAME} "
    "WHERE conversation_id = ? ORDER BY [timestamp] DESC",
    ("limit", "conversation_id"),
)

FORGET = Statement(
    Operation.FORGET,
    f"DELETE FROM {TABLE_NAME} WHERE conversation_id = ?",
    ("conversation_id",),
)

_DEFAULTS = {
    Operation.APPEND: APPEND,
    Operation.RECENT: RECENT,
    Operation.FORGET: FORGET,
}

_OVERRIDES = {
    (Operation.RECENT, Dialect.SQLSERVER, RecentOrder.DIALECT_DEFAULT): SQLSERVER_RECENT,
    (Operation.RECENT, Dialect.SQLSERVER, RecentOrder.NEWEST_FIRST): SQLSERVER_RECENT_NEWEST_FIRST,
}


def statement_for(
    operation: Operation,
    dialect: Dialect,
    recent_order: RecentOrder = RecentOrder.DIALECT_DEFAULT,
) -> Statement:
    """Resolve the statement for *operation* on *dialect*."""
    return _OVERRIDES.get((operation, dialect, recent_order), _DEFAULTS[operation])
