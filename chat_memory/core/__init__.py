"""Message model, memory contract and advisor chain"""

from .messages import (
    Message,
    MessageType,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolResponseMessage,
)
from .memory import ChatMemory
from .advisor import (
    AdvisedRequest,
    AdvisedResponse,
    CallAdvisorChain,
    CallAroundAdvisorChain,
    DefaultCallAdvisorChain,
)
from .exceptions import (
    ChatMemoryError,
    ConfigError,
    InvalidArgumentError,
    StorageError,
    CorruptRowError,
)

__all__ = [
    "Message",
    "MessageType",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolResponseMessage",
    "ChatMemory",
    # Advisor chain
    "AdvisedRequest",
    "AdvisedResponse",
    "CallAdvisorChain",
    "CallAroundAdvisorChain",
    "DefaultCallAdvisorChain",
    # Errors
    "ChatMemoryError",
    "ConfigError",
    "InvalidArgumentError",
    "StorageError",
    "CorruptRowError",
]
