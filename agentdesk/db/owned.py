"""Owner-scoped operations shared by every owned resource table.

OwnedOperations is the only path to agents, conversations and messages.
Each statement it issues carries ``owner_id = ?`` next to whatever the
caller asked for:

- create: owner_id is stamped from the authenticated identity. Any
  caller-supplied id / owner_id / user_id / timestamps are dropped.
- get / list: filtered by owner_id. A row owned by someone else is
  reported exactly like a missing row (ResourceNotFound, or absent from
  the list).
- update: ``WHERE id = ? AND owner_id = ?``. Zero matched rows is
  ResourceNotFound.
- delete: same predicate. Zero deleted rows is not an error.

Column names are interpolated into SQL, so only the whitelisted
``writable_columns`` and ``filter_columns`` ever reach a statement.
"""

import sqlite3
from typing import Any

from . import query
from ..exceptions import ResourceNotFound
from ..utils import isodatetime, uid

# Columns a caller can never set directly
PROTECTED_COLUMNS = frozenset({"id", "owner_id", "user_id", "created_at", "updated_at"})


class OwnedOperations:
    """Base class for owner-scoped table operations."""

    table: str = ""
    resource_name: str = "Resource"
    writable_columns: frozenset[str] = frozenset()
    filter_columns: frozenset[str] = frozenset()
    has_updated_at: bool = True
    order_by: str = "t.created_at DESC, t.rowid DESC"

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _select_sql(self) -> str:
        """SELECT ... FROM clause aliasing the table as ``t``."""
        return f"SELECT t.* FROM {self.table} t"

    def _to_db(self, values: dict[str, Any]) -> dict[str, Any]:
        """Convert Python values to column values. Override per table."""
        return values

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_owner(owner_id: str) -> None:
        if not owner_id:
            raise ValueError("owner_id is required for owned resource operations")

    def _scrub(self, values: dict[str, Any]) -> dict[str, Any]:
        """Keep only writable columns, never protected ones."""
        return {
            k: v for k, v in values.items()
            if k in self.writable_columns and k not in PROTECTED_COLUMNS
        }

    def _not_found(self, resource_id: str) -> ResourceNotFound:
        return ResourceNotFound(
            f"{self.resource_name} not found",
            {"id": resource_id}
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, owner_id: str, values: dict[str, Any]) -> sqlite3.Row:
        """Insert a row owned by owner_id and return it.

        Args:
            owner_id: Authenticated identity creating the row
            values: Column values; anything outside writable_columns is dropped

        Returns:
            The stored row
        """
        self._require_owner(owner_id)

        data = self._to_db(self._scrub(values))
        now = isodatetime.now()
        data["id"] = uid.generate_uuid()
        data["owner_id"] = owner_id
        data["created_at"] = now
        if self.has_updated_at:
            data["updated_at"] = now

        columns = ", ".join(data.keys())
        placeholders = ", ".join("?" for _ in data)
        self._conn.execute(
            f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
            list(data.values())
        )

        return self.get(owner_id, data["id"])

    def find(self, owner_id: str, resource_id: str) -> sqlite3.Row | None:
        """Return the row if owner_id owns it, else None."""
        self._require_owner(owner_id)
        return self._conn.execute(
            f"{self._select_sql()} WHERE t.id = ? AND t.owner_id = ?",
            (resource_id, owner_id)
        ).fetchone()

    def get(self, owner_id: str, resource_id: str) -> sqlite3.Row:
        """Return the row if owner_id owns it.

        Raises:
            ResourceNotFound: If the row does not exist or belongs to someone else
        """
        row = self.find(owner_id, resource_id)
        if row is None:
            raise self._not_found(resource_id)
        return row

    def list(
        self,
        owner_id: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0
    ) -> list[sqlite3.Row]:
        """List rows owned by owner_id, newest first.

        Args:
            owner_id: Authenticated identity
            filters: Equality filters on filter_columns; None values and
                unknown keys are ignored
            limit: Maximum number of rows
            offset: Number of rows to skip
        """
        self._require_owner(owner_id)

        conditions = {
            f"t.{k}": v for k, v in (filters or {}).items()
            if k in self.filter_columns
        }
        where_clause, params = query.build_where_clause(conditions)

        sql = f"""
            {self._select_sql()}
            WHERE t.owner_id = ? AND {where_clause}
            ORDER BY {self.order_by}
            LIMIT ? OFFSET ?
        """
        return self._conn.execute(sql, [owner_id, *params, limit, offset]).fetchall()

    def update(self, owner_id: str, resource_id: str, values: dict[str, Any]) -> sqlite3.Row:
        """Update a row owned by owner_id and return it.

        Raises:
            ResourceNotFound: If no row matches both id and owner_id
        """
        self._require_owner(owner_id)

        data = self._to_db(self._scrub(values))
        if self.has_updated_at:
            data["updated_at"] = isodatetime.now()

        update_clause, params = query.build_update_clause(data, exclude=set(PROTECTED_COLUMNS) - {"updated_at"})
        if not update_clause:
            return self.get(owner_id, resource_id)

        cursor = self._conn.execute(
            f"UPDATE {self.table} SET {update_clause} WHERE id = ? AND owner_id = ?",
            [*params, resource_id, owner_id]
        )
        if cursor.rowcount == 0:
            raise self._not_found(resource_id)

        return self.get(owner_id, resource_id)

    def delete(self, owner_id: str, resource_id: str) -> bool:
        """Delete a row owned by owner_id.

        Returns:
            True if a row was deleted, False if nothing matched
        """
        self._require_owner(owner_id)
        cursor = self._conn.execute(
            f"DELETE FROM {self.table} WHERE id = ? AND owner_id = ?",
            (resource_id, owner_id)
        )
        return cursor.rowcount > 0
