"""The memory contract consumed by the chat client."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .messages import Message


class ChatMemory(ABC):
    """
    Conversation memory keyed by an opaque conversation id.

    Implementations must be safe to share across threads.
    """

    @abstractmethod
    def append(self, conversation_id: str, messages: Sequence[Message]) -> None:
        """Persist *messages* for *conversation_id*, in list order."""

    @abstractmethod
    def recent(self, conversation_id: str, n: int) -> List[Optional[Message]]:
        """Return up to *n* messages of *conversation_id*."""

    @abstractmethod
    def forget(self, conversation_id: str) -> None:
        """Remove every message of *conversation_id*."""
