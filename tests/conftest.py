"""Shared test fixtures for agentdesk."""

import base64

import jwt as pyjwt
import pytest

from agentdesk.auth.hashing import CredentialHasher
from agentdesk.auth.token import TokenService
from agentdesk.config import Settings
from agentdesk.db import Database
from agentdesk.main import create_app
from agentdesk.utils import isodatetime

TEST_SECRET = "test-secret-key-for-agentdesk-tests"
DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a fresh temp-file database.

    bcrypt work factor 4 keeps hashing fast in tests.
    """
    return Settings(
        _env_file=None,
        jwt_secret_key=TEST_SECRET,
        database_path=str(tmp_path / "agentdesk.db"),
        bcrypt_work_factor=4,
    )


@pytest.fixture
def database(settings):
    """Database with schema applied."""
    db = Database(settings.database_path)
    db.init_schema()
    return db


@pytest.fixture
def test_db(database):
    """Raw connection to the test database."""
    conn = database.create_connection()
    yield conn
    conn.close()


@pytest.fixture
def core(database):
    """Autocommit Core on the test database."""
    core = database.get_core()
    yield core
    core.close()


@pytest.fixture
def secret():
    """The signing key used by the test settings and token service."""
    return TEST_SECRET


@pytest.fixture
def hasher():
    return CredentialHasher(work_factor=4)


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def register(client):
    """Register a user through the API.

    Returns a function ``register(email, password=..., **fields)`` giving
    ``(user, token, headers)``.
    """
    def _register(email: str, password: str = DEFAULT_PASSWORD, **fields):
        body = {"name": fields.pop("name", "Test User"), "email": email, "password": password}
        body.update(fields)
        response = client.post("/auth/register", json=body)
        assert response.status_code == 201, response.get_json()
        data = response.get_json()
        return data["user"], data["token"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def alice(register):
    """(user, token, headers) for a first tenant."""
    return register("alice@example.com")


@pytest.fixture
def bob(register):
    """(user, token, headers) for a second tenant."""
    return register("bob@example.com")


@pytest.fixture
def flip_signature_bit():
    """Return a function that flips one bit in the signature segment of a JWT."""
    def _flip(token: str) -> str:
        header, payload, signature = token.split(".")
        raw = bytearray(base64.urlsafe_b64decode(signature + "=" * (-len(signature) % 4)))
        raw[0] ^= 0x01
        tampered = base64.urlsafe_b64encode(bytes(raw)).rstrip(b"=").decode()
        return f"{header}.{payload}.{tampered}"

    return _flip


@pytest.fixture
def expired_token(secret):
    """Return a function giving a correctly signed token that expired an hour ago."""
    def _expired(user_id: str) -> str:
        now = isodatetime.now_unix()
        return pyjwt.encode(
            {"sub": user_id, "iat": now - 7 * 24 * 3600 - 3600, "exp": now - 3600},
            secret,
            algorithm="HS256",
        )

    return _expired
