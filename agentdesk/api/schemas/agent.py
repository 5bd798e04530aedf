"""Agent schemas."""

import json
from typing import Any, Literal

from pydantic import BaseModel, Field

AgentStatus = Literal["active", "inactive"]


class AgentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    instructions: str | None = Field(default=None, max_length=20000)
    model: str | None = Field(default=None, max_length=100)
    status: AgentStatus = "active"
    settings: dict[str, Any] = Field(default_factory=dict)


class AgentCreate(AgentBase):
    """Create request. Unknown fields (including any owner field) are ignored."""


class AgentUpdate(BaseModel):
    """Partial update. Only fields present in the body are written."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    instructions: str | None = Field(default=None, max_length=20000)
    model: str | None = Field(default=None, max_length=100)
    status: AgentStatus | None = None
    settings: dict[str, Any] | None = None


class AgentResponse(AgentBase):
    id: str
    owner_id: str
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Any) -> "AgentResponse":
        return cls(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            description=row["description"],
            instructions=row["instructions"],
            model=row["model"],
            status=row["status"],
            settings=json.loads(row["settings"] or "{}"),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
