"""Database module for AgentDesk.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
per-table operations.

ARCHITECTURE:
- Database holds the path and is built once by create_app()
- Core owns its connection
- atomic=True: Core is a context manager that commits or rolls back on exit
- atomic=False: the connection autocommits every statement

OWNERSHIP:
Agent, conversation and message operations all derive from
OwnedOperations (see owned.py). Every one of their statements is scoped by
owner_id, so there is no unscoped way to reach an owned row through Core.

    with database.get_core(atomic=True) as core:
        agent = core.agent.create(owner_id, {"name": "Support bot"})
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ..exceptions import DatabaseError
from ..schema import load_schema

if TYPE_CHECKING:
    from .agent import AgentOperations
    from .conversation import ConversationOperations
    from .message import MessageOperations
    from .user import UserOperations

logger = logging.getLogger(__name__)

# Seconds a writer waits on a locked database before giving up
BUSY_TIMEOUT = 10.0


class Core:
    """
    Database Core with table operations.

    Maintains its own connection and transaction state.
    Provides access to table operations through properties.
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        if not atomic:
            self._conn.isolation_level = None
        self._user_ops = None
        self._agent_ops = None
        self._conversation_ops = None
        self._message_ops = None

    @property
    def user(self) -> "UserOperations":
        """Identity operations (not owner-scoped)."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def agent(self) -> "AgentOperations":
        if self._agent_ops is None:
            from .agent import AgentOperations
            self._agent_ops = AgentOperations(self._conn)
        return self._agent_ops

    @property
    def conversation(self) -> "ConversationOperations":
        if self._conversation_ops is None:
            from .conversation import ConversationOperations
            self._conversation_ops = ConversationOperations(self._conn)
        return self._conversation_ops

    @property
    def message(self) -> "MessageOperations":
        if self._message_ops is None:
            from .message import MessageOperations
            self._message_ops = MessageOperations(self._conn)
        return self._message_ops

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with database.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()


class Database:
    """Connection factory for one SQLite database file."""

    def __init__(self, path: str):
        self.path = path

    def create_connection(self) -> sqlite3.Connection:
        """Create a fresh database connection.

        Returns:
            SQLite connection with row_factory set to sqlite3.Row
            and foreign keys enabled.

        Raises:
            DatabaseError: If the database file cannot be opened
        """
        db_path = Path(self.path)
        db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(str(db_path), timeout=BUSY_TIMEOUT, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            raise DatabaseError("Could not open database", {"path": self.path}) from e
        return conn

    def get_core(self, atomic: bool = False) -> Core:
        """
        Get a database Core instance.

        Args:
            atomic: If True, returns a Core that MUST be used as context manager.
                    Use for multi-statement work that must commit together.
                    If False (default), every statement commits on its own.

        Examples:
            >>> core = database.get_core()
            >>> rows = core.agent.list(owner_id)
            >>> core.close()

            >>> with database.get_core(atomic=True) as core:
            ...     user = core.user.create(...)
        """
        return Core(self.create_connection(), atomic=atomic)

    def init_schema(self) -> None:
        """Apply schema.sql if the database has not been initialized yet.

        Raises:
            DatabaseError: If the file is not a usable SQLite database
        """
        conn = self.create_connection()
        try:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
            )
            if cursor.fetchone():
                return

            conn.executescript(load_schema())
            conn.commit()
            logger.info(f"Database schema applied at {self.path}")
        except sqlite3.Error as e:
            raise DatabaseError("Could not initialize database schema", {"path": self.path}) from e
        finally:
            conn.close()

    def schema_version(self) -> str:
        """Return the schema version recorded in _schema_metadata."""
        conn = self.create_connection()
        try:
            row = conn.execute(
                "SELECT value FROM _schema_metadata WHERE key = 'version'"
            ).fetchone()
            return row[0] if row else "unknown"
        finally:
            conn.close()


__all__ = ["Core", "Database"]
