"""JWT session tokens.

Tokens are stateless HS256 JWTs with three claims:
- sub: identity (user) id
- iat: issue time, Unix seconds
- exp: iat + expiry window (7 days by default)

There is no revocation list. A validly signed, unexpired token is the
whole proof of authentication.
"""

from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import (
    ConfigurationError,
    InvalidSignature,
    MalformedToken,
    TokenExpired,
)
from ..utils import isodatetime
from .schemas import TokenPayload

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expiry_days: int = 7):
        if not secret_key or not secret_key.strip():
            raise ConfigurationError("JWT signing key is not configured")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expiry = timedelta(days=expiry_days)

    def issue(self, identity_id: str) -> str:
        """Issue a token for identity_id valid for the configured window."""
        iat = isodatetime.now_unix()
        payload = {
            "sub": identity_id,
            "iat": iat,
            "exp": iat + int(self.expiry.total_seconds()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """Validate a token and return its claims.

        Raises:
            InvalidSignature: Signature does not match the signing key
            TokenExpired: Current time is past exp
            MalformedToken: Anything else (not a JWT, missing claims, bad types)
        """
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        # InvalidSignatureError subclasses DecodeError, so it goes first
        except jwt.InvalidSignatureError as e:
            raise InvalidSignature(str(e)) from e
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise MalformedToken(str(e)) from e

        sub = claims.get("sub")
        if not isinstance(sub, str) or not sub:
            raise MalformedToken("Token subject is missing or not a string")

        try:
            return TokenPayload(sub=sub, iat=claims["iat"], exp=claims["exp"])
        except PydanticValidationError as e:
            raise MalformedToken("Token claims have invalid types") from e

    def verify(self, token: str) -> str:
        """Validate a token and return the identity id it was issued for."""
        return self.decode(token).sub
