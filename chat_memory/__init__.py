"""Relational chat memory for the chat client."""
from .config import ChatMemoryConfig, load_config
from .core import (
    AssistantMessage,
    ChatMemory,
    Message,
    MessageType,
    SystemMessage,
    ToolResponseMessage,
    UserMessage,
)
from .memory import Dialect, RecentOrder, SqlChatMemory

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatMemoryConfig",
    "load_config",
    "ChatMemory",
    "SqlChatMemory",
    "Dialect",
    "RecentOrder",
    "Message",
    "MessageType",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolResponseMessage",
]
