"""Request authentication gate.

authenticate() is a pure function from the Authorization header to an
Identity. It either returns an Identity or raises:

- MissingToken: no Authorization header, or an empty bearer value
- InvalidToken: wrong scheme, malformed token, bad signature or expired

All InvalidToken causes render the same response. The cause is kept on
the exception for logging only.

@auth_required composes the gate explicitly in front of a view and binds
the result to ``flask.g.identity``. The view body never runs unless the
gate succeeded.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import wraps

from flask import g, request

from ..exceptions import InvalidToken, MissingToken, TokenError
from ..utils import isodatetime
from .token import TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class Identity:
    """An authenticated caller, valid for one request."""

    user_id: str
    expires_at: datetime


def authenticate(authorization: str | None, tokens: TokenService) -> Identity:
    """Resolve an Authorization header to an Identity.

    Args:
        authorization: Raw header value, or None when absent
        tokens: Token service used to verify the bearer token

    Raises:
        MissingToken: If no credential was presented
        InvalidToken: If the credential fails verification for any reason
    """
    if authorization is None or authorization.strip().lower() in ("", "bearer"):
        raise MissingToken()

    if authorization[:len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        raise InvalidToken(reason="bad_scheme")

    token_str = authorization[len(BEARER_PREFIX):].strip()

    try:
        payload = tokens.decode(token_str)
    except TokenError as e:
        raise InvalidToken(reason=e.reason) from e

    return Identity(user_id=payload.sub, expires_at=isodatetime.from_unix(payload.exp))


def auth_required(f):
    """
    Decorator to require a valid bearer token for endpoint access.

    Stores the authenticated identity in ``flask.g.identity``.

    Raises:
        MissingToken: If no token was presented
        InvalidToken: If the token is invalid or expired

    Example:
    ```python
    @agents_bp.get("")
    @auth_required
    def list_agents():
        owner_id = current_identity().user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        from ..extensions import get_services

        try:
            g.identity = authenticate(
                request.headers.get("Authorization"),
                get_services().tokens,
            )
        except InvalidToken as e:
            logger.warning(f"Rejected token on {request.path}: {e.reason}")
            raise
        except MissingToken:
            logger.warning(f"Unauthenticated request to {request.path}")
            raise

        return f(*args, **kwargs)

    return wrapper


def current_identity() -> Identity:
    """Return the identity bound by @auth_required.

    Raises:
        RuntimeError: If called from a view that is not behind @auth_required
    """
    identity = g.get("identity")
    if identity is None:
        raise RuntimeError("No authenticated identity bound to this request")
    return identity
