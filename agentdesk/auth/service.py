"""Authentication service: registration, credential checks and profile lookup.

Functions take a Core so callers decide the transaction boundary:

    with services.database.get_core(atomic=True) as core:
        user = service.register_user(core, data, services.hasher)
"""

import logging
import sqlite3

from ..db import Core
from ..exceptions import (
    AccountDisabled,
    CredentialFailure,
    EmailInUse,
    InvalidCredentials,
    ResourceNotFound,
)
from .hashing import CredentialHasher
from .schemas import UserCreate, UserResponse

logger = logging.getLogger(__name__)


def get_user_by_id(core: Core, user_id: str) -> UserResponse | None:
    row = core.user.get_by_id(user_id)
    return UserResponse.from_row(row) if row else None


def get_user_by_email(core: Core, email: str) -> UserResponse | None:
    row = core.user.get_by_email(email)
    return UserResponse.from_row(row) if row else None


def register_user(core: Core, data: UserCreate, hasher: CredentialHasher) -> UserResponse:
    """Create a new identity.

    The email lookup only short-circuits the common case. Two concurrent
    registrations can both pass it; the UNIQUE constraint on users.email
    then rejects the second insert, which is reported the same way.

    Raises:
        EmailInUse: If the case-folded email already belongs to an identity
    """
    if core.user.get_by_email(data.email) is not None:
        raise EmailInUse()

    password_hash = hasher.hash(data.password)

    try:
        row = core.user.create(
            name=data.name,
            email=data.email,
            password_hash=password_hash,
            role=data.role,
            company=data.company,
            phone=data.phone,
        )
    except sqlite3.IntegrityError as e:
        logger.info(f"Registration lost uniqueness race: {e}")
        raise EmailInUse() from e

    return UserResponse.from_row(row)


def authenticate_credentials(
    core: Core,
    email: str,
    password: str,
    hasher: CredentialHasher
) -> UserResponse:
    """Check an email/password pair.

    Unknown email and wrong password raise the same InvalidCredentials.
    An unknown email still pays for one bcrypt verification. The disabled
    check runs only after the password matched, so AccountDisabled is
    never shown to a caller who does not know the password.

    Raises:
        InvalidCredentials: Unknown email or wrong password
        AccountDisabled: Correct password for a deactivated identity
    """
    row = core.user.get_by_email(email)
    if row is None:
        hasher.dummy_verify(password)
        raise InvalidCredentials(CredentialFailure.UNKNOWN_EMAIL)

    if not hasher.verify(password, row["password_hash"]):
        raise InvalidCredentials(CredentialFailure.WRONG_PASSWORD)

    if not row["is_active"]:
        raise AccountDisabled()

    return UserResponse.from_row(row)


def record_login(core: Core, user: UserResponse) -> UserResponse:
    """Update last_login. Best effort: failures are logged, never raised."""
    try:
        last_login = core.user.touch_last_login(user.id)
    except sqlite3.Error as e:
        logger.warning(f"Could not record last login for user {user.id}: {e}")
        return user
    return user.model_copy(update={"last_login": last_login})


def get_active_user(core: Core, user_id: str) -> UserResponse:
    """Load the full identity behind an authenticated request.

    Raises:
        ResourceNotFound: If the identity no longer exists
        AccountDisabled: If the identity has been deactivated
    """
    user = get_user_by_id(core, user_id)
    if user is None:
        raise ResourceNotFound("User not found")
    if not user.is_active:
        raise AccountDisabled()
    return user
