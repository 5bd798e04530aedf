"""Conversation operations (owner-scoped)."""

import sqlite3
from typing import Any

from .owned import OwnedOperations
from ..exceptions import ResourceNotFound
from ..utils import isodatetime


class ConversationOperations(OwnedOperations):
    """Conversations belonging to a single owner.

    Rows are returned with the linked agent's name as ``agent_name``. The
    join is itself owner-scoped so a foreign agent's name can never leak.
    """

    table = "conversations"
    resource_name = "Conversation"
    writable_columns = frozenset({"agent_id", "title", "status"})
    filter_columns = frozenset({"status", "agent_id"})

    def _select_sql(self) -> str:
        return (
            "SELECT t.*, a.name AS agent_name FROM conversations t "
            "LEFT JOIN agents a ON a.id = t.agent_id AND a.owner_id = t.owner_id"
        )

    def _check_agent(self, owner_id: str, agent_id: str | None) -> None:
        if agent_id is None:
            return
        row = self._conn.execute(
            "SELECT 1 FROM agents WHERE id = ? AND owner_id = ?",
            (agent_id, owner_id)
        ).fetchone()
        if row is None:
            raise ResourceNotFound("Agent not found", {"id": agent_id})

    def create(self, owner_id: str, values: dict[str, Any]) -> sqlite3.Row:
        """Create a conversation, optionally linked to one of the owner's agents.

        Raises:
            ResourceNotFound: If agent_id is given but not owned by owner_id
        """
        self._require_owner(owner_id)
        self._check_agent(owner_id, values.get("agent_id"))
        return super().create(owner_id, values)

    def update(self, owner_id: str, resource_id: str, values: dict[str, Any]) -> sqlite3.Row:
        self._require_owner(owner_id)
        self._check_agent(owner_id, values.get("agent_id"))
        return super().update(owner_id, resource_id, values)

    def touch(self, owner_id: str, conversation_id: str) -> None:
        """Bump updated_at on an owned conversation."""
        self._conn.execute(
            "UPDATE conversations SET updated_at = ? WHERE id = ? AND owner_id = ?",
            (isodatetime.now(), conversation_id, owner_id)
        )
