"""Authentication API endpoints for AgentDesk.

- POST /auth/register - Create an identity and return it with a token
- POST /auth/login    - Check credentials and return the identity with a token
- POST /auth/logout   - Stateless no-op; the client discards its token
- GET  /auth/me       - Return the caller's identity

Registration and login are the only endpoints (besides /health) that run
without a bearer token.
"""

import logging

from flask import Blueprint, jsonify

from ..api.validation import validate_request
from ..exceptions import InvalidCredentials
from ..extensions import get_core, get_services
from . import service
from .gate import auth_required, current_identity
from .schemas import AuthResponse, UserCreate, UserLogin

logger = logging.getLogger(__name__)


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.post("/register")
@validate_request
def register(data: UserCreate):
    """
    Register a new identity.

    Example request:
    ```json
    {
        "name": "Ana",
        "email": "a@x.com",
        "password": "secret123",
        "company": "Acme",
        "phone": "+55 11 99999-0000"
    }
    ```

    Returns:
        201: {"success": true, "message", "user", "token"}
        400: Validation error
        409: EmailInUse
    """
    services = get_services()

    with services.database.get_core(atomic=True) as core:
        user = service.register_user(core, data, services.hasher)

    token = services.tokens.issue(user.id)
    logger.info(f"User registered: {user.id}")

    return jsonify(
        AuthResponse(message="User created successfully", user=user, token=token).model_dump()
    ), 201


@auth_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Authenticate with email and password.

    Unknown email and wrong password produce byte-identical 401 responses.

    Returns:
        200: {"success": true, "message", "user", "token"}
        401: InvalidCredentials or AccountDisabled
    """
    services = get_services()
    core = get_core()

    try:
        user = service.authenticate_credentials(core, data.email, data.password, services.hasher)
    except InvalidCredentials as e:
        logger.warning(f"Failed login attempt: {e.reason.value}")
        raise

    user = service.record_login(core, user)
    token = services.tokens.issue(user.id)
    logger.info(f"Successful login: {user.id}")

    return jsonify(
        AuthResponse(message="Login successful", user=user, token=token).model_dump()
    ), 200


@auth_bp.post("/logout")
def logout():
    """
    Logout (no-op).

    Tokens are stateless and there is no revocation list. The client
    should simply discard its token.
    """
    return jsonify({"success": True, "message": "Logged out successfully"}), 200


@auth_bp.get("/me")
@auth_required
def me():
    """
    Return the authenticated caller's identity.

    Returns:
        200: {"success": true, "user": {...}}
        401: MissingToken, InvalidToken or AccountDisabled
        404: Identity no longer exists
    """
    user = service.get_active_user(get_core(), current_identity().user_id)
    return jsonify({"success": True, "user": user.model_dump()}), 200
