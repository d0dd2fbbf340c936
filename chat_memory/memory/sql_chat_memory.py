"""
Relational conversation memory backed by the ``ai_chat_memory`` table.

Each message is one row ``(conversation_id, content, type, timestamp)``;
the database assigns ``timestamp`` and only its order within a
conversation matters.  Rows are never updated: ``append`` inserts,
``forget`` deletes a whole conversation.

Usage
-----
    engine = create_engine("postgresql+psycopg://chat@localhost/chat")
    memory = SqlChatMemory(engine)
    memory.append("conv-1", [UserMessage("hi"), AssistantMessage("hello")])
    memory.recent("conv-1", 10)   # [AssistantMessage("hello"), UserMessage("hi")]
    memory.forget("conv-1")

There is no cache; every call is a database round trip.  The dialect is
probed once in the constructor and the store keeps no other state, so one
instance can be shared across threads.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from chat_memory.core.exceptions import ConfigError, InvalidArgumentError, StorageError
from chat_memory.core.memory import ChatMemory
from chat_memory.core.messages import Message
from chat_memory.memory.codec import decode_row, encode_message
from chat_memory.memory.dialect import Dialect, detect_dialect
from chat_memory.memory.schema import initialize_schema
from chat_memory.memory.statements import Operation, RecentOrder, Statement, statement_for
from chat_memory.utils.logging import get_logger

if TYPE_CHECKING:
    from chat_memory.config import ChatMemoryConfig

logger = get_logger(__name__)

# Largest LIMIT / TOP value every supported driver can bind (signed 64-bit).
_MAX_LIMIT = 2 ** 63 - 1


def _require_conversation_id(conversation_id: Any) -> str:
    if not isinstance(conversation_id, str) or not conversation_id:
        raise InvalidArgumentError(
            "conversation_id must be a non-empty string",
            context={"conversation_id": conversation_id},
        )
    return conversation_id


class SqlChatMemory(ChatMemory):
    """Chat memory over any SQLAlchemy engine."""

    def __init__(
        self,
        engine: Engine,
        *,
        recent_order: RecentOrder = RecentOrder.DIALECT_DEFAULT,
        skip_unreplayable: bool = False,
    ) -> None:
        self.engine = engine
        self.dialect: Dialect = detect_dialect(engine)
        self.recent_order = RecentOrder(recent_order)
        self.skip_unreplayable = skip_unreplayable

        self._append = statement_for(Operation.APPEND, self.dialect, self.recent_order)
        self._recent = statement_for(Operation.RECENT, self.dialect, self.recent_order)
        self._forget = statement_for(Operation.FORGET, self.dialect, self.recent_order)

        if self.dialect is Dialect.SQLSERVER and self.recent_order is RecentOrder.DIALECT_DEFAULT:
            logger.warning(
                "SQL Server recent() returns the OLDEST messages oldest-first; "
                "set recent_order=newest_first for newest-first results"
            )

    @classmethod
    def create(cls, config: "ChatMemoryConfig", engine: Optional[Engine] = None) -> "SqlChatMemory":
        """
        Build a store from *config*.

        *engine* wins over ``config.database_url``; with neither the probe
        fails with ``ConfigError``.
        """
        owned = engine is None and bool(config.database_url)
        if owned:
            try:
                engine = create_engine(config.database_url)
            except (ArgumentError, ImportError) as exc:
                raise ConfigError(
                    "Cannot create an engine from database_url",
                    context={"error_type": type(exc).__name__},
                    cause=exc,
                ) from exc
        try:
            memory = cls(
                engine,
                recent_order=config.recent_order,
                skip_unreplayable=config.skip_unreplayable,
            )
            if config.initialize_schema:
                initialize_schema(memory.engine, memory.dialect)
        except SQLAlchemyError as exc:
            if owned:
                engine.dispose()
            raise ConfigError(
                "Cannot initialize the ai_chat_memory schema",
                context={"error_type": type(exc).__name__},
                cause=exc,
            ) from exc
        except ConfigError:
            if owned:
                engine.dispose()
            raise
        return memory

    # ── public API ────────────────────────────────────────────────────────────

    def append(self, conversation_id: str, messages: Sequence[Message]) -> None:
        """
        Insert *messages* as one batch, in list order.

        The batch runs in a single transaction: either every row becomes
        visible or the call raises ``StorageError``.
        """
        _require_conversation_id(conversation_id)
        if messages is None:
            raise InvalidArgumentError("messages must not be None")
        messages = list(messages)
        for i, message in enumerate(messages):
            if not isinstance(message, Message):
                raise InvalidArgumentError(
                    "messages must not contain None or non-message elements",
                    context={"index": i},
                )
        if not messages:
            return

        params = [
            self._append.bind(**encode_message(conversation_id, message))
            for message in messages
        ]
        self._execute(self._append, conversation_id, params, write=True)
        logger.debug("Appended %d message(s) to %s", len(params), conversation_id)

    def recent(self, conversation_id: str, n: int) -> List[Optional[Message]]:
        """
        Return up to *n* messages of *conversation_id*.

        Default dialects: the *n* newest, newest-first.  SQL Server with
        ``RecentOrder.DIALECT_DEFAULT``: the *n* oldest, oldest-first.

        Rows of a kind that is not replayed come back as None in their
        position unless ``skip_unreplayable`` is set.
        """
        _require_conversation_id(conversation_id)
        if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n <= _MAX_LIMIT:
            raise InvalidArgumentError(
                "n must be an integer between 0 and 2**63 - 1", context={"n": n}
            )
        if n == 0:
            return []

        rows = self._execute(
            self._recent,
            conversation_id,
            self._recent.bind(conversation_id=conversation_id, limit=n),
        )
        messages = [decode_row(row) for row in rows]
        if self.skip_unreplayable:
            messages = [m for m in messages if m is not None]
        logger.debug("Read %d message(s) from %s", len(messages), conversation_id)
        return messages

    def forget(self, conversation_id: str) -> None:
        """Delete every message of *conversation_id*; unknown ids are a no-op."""
        _require_conversation_id(conversation_id)
        self._execute(
            self._forget,
            conversation_id,
            self._forget.bind(conversation_id=conversation_id),
            write=True,
        )
        logger.debug("Forgot conversation %s", conversation_id)

    # ── internal ──────────────────────────────────────────────────────────────

    def _execute(
        self,
        statement: Statement,
        conversation_id: str,
        params: Any,
        write: bool = False,
    ) -> List[Any]:
        """Run one statement; writes commit on success and roll back on error."""
        try:
            if write:
                with self.engine.begin() as conn:
                    conn.execute(statement.clause(), params)
                return []
            with self.engine.connect() as conn:
                return list(conn.execute(statement.clause(), params).all())
        except SQLAlchemyError as exc:
            logger.error(
                "%s failed for conversation %s: %s",
                statement.operation.value, conversation_id, exc,
            )
            raise StorageError(
                f"{statement.operation.value} failed for conversation {conversation_id!r}",
                context={"operation": statement.operation.value, "conversation_id": conversation_id},
                cause=exc,
            ) from exc
