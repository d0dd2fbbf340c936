"""
Exceptions raised by the chat memory layer.

Every error carries a stable ``error_code`` so callers can branch on the
category without importing the concrete class:

- ``CONFIG_ERROR``      store cannot be initialised (no engine, probe failed)
- ``INVALID_ARGUMENT``  bad conversation id, message list or limit
- ``STORAGE_ERROR``     the database rejected or failed a statement
- ``CORRUPT_ROW``       a persisted ``type`` value is not a known kind
"""

from typing import Any, Dict, Optional


class ChatMemoryError(Exception):
    """Base exception for all chat memory errors."""

    error_code: str = "CHAT_MEMORY_ERROR"

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to a plain dict (for logs and API payloads)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class ConfigError(ChatMemoryError):
    """The store is misconfigured and refuses to initialise."""
    error_code = "CONFIG_ERROR"


class InvalidArgumentError(ChatMemoryError, ValueError):
    """An operation was called with an argument outside its contract."""
    error_code = "INVALID_ARGUMENT"


class StorageError(ChatMemoryError):
    """The data-access layer failed while executing a statement."""
    error_code = "STORAGE_ERROR"


class CorruptRowError(ChatMemoryError):
    """A stored row cannot be decoded."""
    error_code = "CORRUPT_ROW"
