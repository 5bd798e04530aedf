"""Authentication module for AgentDesk.

This module provides authentication and tenant identity:
- Password hashing and verification (hashing)
- JWT session token issuance and verification (token)
- The request authentication gate (gate)
- Registration, login and profile lookup (service, api)

Auth endpoints:
- POST /auth/register - Create an identity and return a token
- POST /auth/login - Authenticate and return a token
- POST /auth/logout - Stateless no-op
- GET /auth/me - Get current user info
"""

from . import schemas, token

__all__ = ["schemas", "token"]
