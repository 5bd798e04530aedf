"""Custom exceptions for AgentDesk.

Every domain rejection is an AgentDeskError subclass carrying the HTTP status
it maps to. The Flask error handlers in main.py render them as:

    {"success": false, "error": {"type": ..., "message": ...}}

Several internal causes collapse onto one external error. InvalidToken and
InvalidCredentials keep the internal cause in ``reason`` for server-side
logging only; it is never rendered.
"""

from enum import Enum


class AgentDeskError(Exception):
    """Base exception for all AgentDesk errors."""

    status_code = 500
    error_type = "InternalError"
    # Whether ``details`` may be included in the rendered response
    expose_details = True

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AgentDeskError):
    """Raised at startup when required configuration is missing or invalid."""


class DatabaseError(AgentDeskError):
    """Raised when the persistence layer fails unexpectedly."""

    error_type = "DatabaseError"
    expose_details = False


class ValidationError(AgentDeskError):
    """Raised when request data fails validation."""

    status_code = 400
    error_type = "ValidationError"


class ResourceNotFound(AgentDeskError):
    """Raised when a resource does not exist or is not owned by the caller.

    The two cases are indistinguishable to the caller.
    """

    status_code = 404
    error_type = "NotFound"


class EmailInUse(AgentDeskError):
    """Raised when registering an email that already belongs to an identity."""

    status_code = 409
    error_type = "EmailInUse"
    expose_details = False

    def __init__(self, message: str = "Email already in use", details: dict | None = None):
        super().__init__(message, details)


# ============================================================================
# Authentication errors
# ============================================================================


class AuthenticationError(AgentDeskError):
    """Base class for 401 rejections. Details are never exposed."""

    status_code = 401
    error_type = "AuthenticationError"
    expose_details = False


class MissingToken(AuthenticationError):
    error_type = "MissingToken"

    def __init__(self, message: str = "Authentication required", details: dict | None = None):
        super().__init__(message, details)


class InvalidToken(AuthenticationError):
    """Any token failure: malformed, bad signature or expired."""

    error_type = "InvalidToken"

    def __init__(self, reason: str, message: str = "Invalid or expired token"):
        super().__init__(message)
        self.reason = reason


class CredentialFailure(str, Enum):
    UNKNOWN_EMAIL = "unknown_email"
    WRONG_PASSWORD = "wrong_password"


class InvalidCredentials(AuthenticationError):
    """Unknown email or wrong password, rendered identically."""

    error_type = "InvalidCredentials"

    def __init__(self, reason: CredentialFailure, message: str = "Invalid email or password"):
        super().__init__(message)
        self.reason = reason


class AccountDisabled(AuthenticationError):
    error_type = "AccountDisabled"

    def __init__(self, message: str = "Account is disabled", details: dict | None = None):
        super().__init__(message, details)


# ============================================================================
# Token service failures (internal only)
# ============================================================================


class TokenError(Exception):
    """Base class for token verification failures.

    Raised by TokenService and converted to InvalidToken by the auth gate.
    """

    reason = "invalid"


class MalformedToken(TokenError):
    reason = "malformed"


class InvalidSignature(TokenError):
    reason = "bad_signature"


class TokenExpired(TokenError):
    reason = "expired"
