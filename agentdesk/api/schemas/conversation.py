"""Conversation and message schemas."""

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field

ConversationStatus = Literal["open", "closed", "archived"]


class ConversationCreate(BaseModel):
    agent_id: str | None = None
    title: str | None = Field(default=None, max_length=200)
    status: ConversationStatus = "open"


class ConversationResponse(BaseModel):
    id: str
    owner_id: str
    agent_id: str | None = None
    agent_name: str | None = None
    title: str | None = None
    status: str
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Any) -> "ConversationResponse":
        return cls(
            id=row["id"],
            owner_id=row["owner_id"],
            agent_id=row["agent_id"],
            agent_name=row["agent_name"],
            title=row["title"],
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


class ChatSend(BaseModel):
    """Body of POST /chat/send. Accepts camelCase keys as well."""

    conversation_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("conversation_id", "conversationId"),
    )
    message: str = Field(..., min_length=1, max_length=10000)


class MessageResponse(BaseModel):
    id: str
    owner_id: str
    conversation_id: str
    sender: str
    content: str
    timestamp: str
    created_at: str

    @classmethod
    def from_row(cls, row: Any) -> "MessageResponse":
        return cls(
            id=row["id"],
            owner_id=row["owner_id"],
            conversation_id=row["conversation_id"],
            sender=row["sender"],
            content=row["content"],
            timestamp=row["timestamp"],
            created_at=row["created_at"],
        )
