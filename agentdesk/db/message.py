"""Message operations (owner-scoped).

A message is owned by the identity that sent it and always belongs to a
conversation that same identity owns.
"""

import sqlite3

from .owned import OwnedOperations
from ..exceptions import ResourceNotFound
from ..utils import isodatetime


class MessageOperations(OwnedOperations):
    """Messages belonging to a single owner."""

    table = "messages"
    resource_name = "Message"
    writable_columns = frozenset({"conversation_id", "sender", "content", "timestamp"})
    filter_columns = frozenset({"conversation_id", "sender"})
    has_updated_at = False

    def append(
        self,
        owner_id: str,
        conversation_id: str,
        content: str,
        sender: str = "user"
    ) -> sqlite3.Row:
        """Append a message to a conversation owned by owner_id.

        Raises:
            ResourceNotFound: If the conversation does not exist or is not owned by owner_id
        """
        self._require_owner(owner_id)
        row = self._conn.execute(
            "SELECT 1 FROM conversations WHERE id = ? AND owner_id = ?",
            (conversation_id, owner_id)
        ).fetchone()
        if row is None:
            raise ResourceNotFound("Conversation not found", {"id": conversation_id})

        return self.create(owner_id, {
            "conversation_id": conversation_id,
            "sender": sender,
            "content": content,
            "timestamp": isodatetime.now(),
        })

    def list_for_conversation(
        self,
        owner_id: str,
        conversation_id: str,
        limit: int = 100,
        offset: int = 0
    ) -> list[sqlite3.Row]:
        """List a conversation's messages, oldest first."""
        self._require_owner(owner_id)
        return self._conn.execute(
            """SELECT t.* FROM messages t
               WHERE t.owner_id = ? AND t.conversation_id = ?
               ORDER BY t.created_at ASC, t.rowid ASC
               LIMIT ? OFFSET ?""",
            (owner_id, conversation_id, limit, offset)
        ).fetchall()
