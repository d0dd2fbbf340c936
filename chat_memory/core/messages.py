"""
Chat Message Model

Typed in-memory messages exchanged between the chat client and its
memory.  The persisted form of a message is only its kind and its text;
metadata lives in memory and is not stored.
"""

from typing import Any, ClassVar, Dict, Optional
from enum import Enum

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    """Kind of a chat message"""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class Message(BaseModel):
    """
    Base shape shared by every message kind.

    The text may be given positionally, ``UserMessage("hi")``, or by
    keyword, ``UserMessage(text="hi")``.
    """
    message_type: ClassVar[MessageType]

    text: str = Field(description="Textual body of the message (may be empty)")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="In-memory metadata, never persisted")

    def __init__(self, text: Optional[str] = None, **data: Any) -> None:
        if text is not None:
            data["text"] = text
        super().__init__(**data)

    class Config:
        json_schema_extra = {
            "example": {
                "text": "What did I ask you yesterday?",
                "metadata": {"source": "web"}
            }
        }


class UserMessage(Message):
    """A turn authored by the end user"""
    message_type: ClassVar[MessageType] = MessageType.USER


class AssistantMessage(Message):
    """A turn produced by the model"""
    message_type: ClassVar[MessageType] = MessageType.ASSISTANT


class SystemMessage(Message):
    """Instructions framing the conversation"""
    message_type: ClassVar[MessageType] = MessageType.SYSTEM


class ToolResponseMessage(Message):
    """
    Output of a tool call.  Persisted for audit but never replayed from
    storage.
    """
    message_type: ClassVar[MessageType] = MessageType.TOOL

    tool_name: Optional[str] = Field(None, description="Name of the tool that produced the response")
