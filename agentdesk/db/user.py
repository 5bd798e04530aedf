"""Identity (user) operations.

Users are not owner-scoped: they ARE the owners. Lookups by email always
case-fold, and the UNIQUE constraint on users.email is what actually
guarantees one identity per email under concurrent registration.
"""

import sqlite3

from ..utils import isodatetime, uid


class UserOperations:
    """User table operations."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: str = "user",
        plan: str = "free",
        company: str | None = None,
        phone: str | None = None,
    ) -> sqlite3.Row:
        """Insert a new user and return the stored row.

        Raises:
            sqlite3.IntegrityError: If the email is already registered
        """
        user_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO users
               (id, name, email, password_hash, role, plan, company, phone,
                is_active, email_verified, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, 1, 1, ?)""",
            (user_id, name, email.lower(), password_hash, role, plan, company, phone, now)
        )

        return self.get_by_id(user_id)

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM users WHERE email = ?",
            (email.lower(),)
        ).fetchone()

    def touch_last_login(self, user_id: str) -> str:
        """Set last_login to now and return the timestamp written."""
        now = isodatetime.now()
        self._conn.execute(
            "UPDATE users SET last_login = ? WHERE id = ?",
            (now, user_id)
        )
        return now

    def set_active(self, user_id: str, is_active: bool) -> None:
        self._conn.execute(
            "UPDATE users SET is_active = ? WHERE id = ?",
            (1 if is_active else 0, user_id)
        )
