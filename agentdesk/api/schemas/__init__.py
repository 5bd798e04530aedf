"""Pydantic schemas for the resource endpoints."""

from .agent import AgentCreate, AgentResponse, AgentUpdate
from .conversation import (
    ChatSend,
    ConversationCreate,
    ConversationResponse,
    MessageResponse,
)

__all__ = [
    "AgentCreate",
    "AgentUpdate",
    "AgentResponse",
    "ConversationCreate",
    "ConversationResponse",
    "ChatSend",
    "MessageResponse",
]
