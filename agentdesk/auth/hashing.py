"""Password hashing with bcrypt.

Digests are salted and cost-adaptive. Verification goes through
bcrypt.checkpw, which compares in constant time. A malformed digest is a
failed verification, never an exception.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# Plaintext used to build the dummy digest for unknown-email logins
_DUMMY_PASSWORD = "agentdesk-dummy-password-0"


class CredentialHasher:
    """One-way password hashing at a fixed bcrypt work factor."""

    def __init__(self, work_factor: int = 12):
        self.work_factor = work_factor
        self._dummy_digest: str | None = None

    def hash(self, plaintext: str) -> str:
        """Hash a password.

        Returns:
            60 character bcrypt digest (``$2b$...``)
        """
        salt = bcrypt.gensalt(rounds=self.work_factor)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        """Check a password against a digest.

        Returns:
            True on match. False on mismatch, malformed digest or
            non-string input.
        """
        if not isinstance(plaintext, str) or not isinstance(digest, str):
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except ValueError as e:
            # Malformed digest or over-long password
            logger.warning(f"Password verification rejected input: {e}")
            return False

    def dummy_verify(self, plaintext: str) -> None:
        """Spend one verification's worth of work and discard the result.

        Called when a login names an unknown email so that it costs the
        same as a wrong password for a known one.
        """
        if self._dummy_digest is None:
            self._dummy_digest = self.hash(_DUMMY_PASSWORD)
        self.verify(plaintext, self._dummy_digest)
