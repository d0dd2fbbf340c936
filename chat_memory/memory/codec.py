"""Conversion between chat messages and ``ai_chat_memory`` rows."""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from chat_memory.core.exceptions import CorruptRowError
from chat_memory.core.messages import (
    AssistantMessage,
    Message,
    MessageType,
    SystemMessage,
    UserMessage,
)

# Kinds that are rebuilt from storage.  Anything else is persisted for
# audit only and decodes to None.
_REPLAYABLE = {
    MessageType.USER: UserMessage,
    MessageType.ASSISTANT: AssistantMessage,
    MessageType.SYSTEM: SystemMessage,
}


def encode_message(conversation_id: str, message: Message) -> Dict[str, Any]:
    """Column values for one row; ``type`` is the kind's name, e.g. ``USER``."""
    return {
        "conversation_id": conversation_id,
        "content": message.text,
        "type": message.message_type.name,
    }


def decode_row(row: Sequence[Any]) -> Optional[Message]:
    """
    Rebuild a message from a ``(content, type)`` row.

    Returns None for kinds that are not replayed (``TOOL``).

    Raises
    ------
    CorruptRowError
        When ``type`` is not a known kind name, or a replayable row has a
        NULL content.
    """
    content, type_name = row[0], row[1]

    try:
        message_type = MessageType[type_name]
    except (KeyError, TypeError) as exc:
        raise CorruptRowError(
            f"Unknown message type {type_name!r}",
            context={"type": type_name},
            cause=exc,
        ) from exc

    message_cls = _REPLAYABLE.get(message_type)
    if message_cls is None:
        return None
    if content is None:
        raise CorruptRowError(
            f"NULL content for {message_type.name} row",
            context={"type": type_name},
        )
    return message_cls(str(content))
