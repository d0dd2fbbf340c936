"""Persistent conversation memory over a relational database."""
from .dialect import Dialect, detect_dialect, dialect_from_url
from .sql_chat_memory import SqlChatMemory
from .statements import Operation, RecentOrder, Statement, statement_for

__all__ = [
    "SqlChatMemory",
    "Dialect",
    "detect_dialect",
    "dialect_from_url",
    "Operation",
    "RecentOrder",
    "Statement",
    "statement_for",
]
