"""Tests for error handling and custom exceptions."""

import pytest

from agentdesk.exceptions import (
    AccountDisabled,
    AgentDeskError,
    AuthenticationError,
    CredentialFailure,
    DatabaseError,
    EmailInUse,
    InvalidCredentials,
    InvalidToken,
    MissingToken,
    ResourceNotFound,
    ValidationError,
)
from agentdesk.main import create_app


@pytest.fixture
def error_client(settings):
    """App with extra routes that raise each error kind."""
    app = create_app(settings)
    app.config["TESTING"] = True

    @app.route("/test/not-found")
    def raise_not_found():
        raise ResourceNotFound("Agent not found", details={"id": "123"})

    @app.route("/test/validation")
    def raise_validation():
        raise ValidationError("Invalid name", details={"field": "name"})

    @app.route("/test/database")
    def raise_database():
        raise DatabaseError("Connection failed", details={"dsn": "secret"})

    @app.route("/test/internal")
    def raise_internal():
        raise RuntimeError("Something went wrong at /var/lib/internal")

    @app.route("/test/invalid-token/<reason>")
    def raise_invalid_token(reason):
        raise InvalidToken(reason=reason)

    @app.route("/test/credentials/<reason>")
    def raise_credentials(reason):
        raise InvalidCredentials(CredentialFailure(reason))

    @app.route("/test/email-in-use")
    def raise_email_in_use():
        raise EmailInUse(details={"email": "a@x.com"})

    return app.test_client()


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_base_error_with_message(self):
        error = AgentDeskError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.details == {}

    def test_base_error_with_details(self):
        details = {"id": "123"}
        assert AgentDeskError("Not found", details=details).details == details

    @pytest.mark.parametrize("cls, status", [
        (MissingToken, 401),
        (AccountDisabled, 401),
        (EmailInUse, 409),
    ])
    def test_status_codes(self, cls, status):
        assert cls().status_code == status

    def test_auth_errors_share_base(self):
        assert issubclass(MissingToken, AuthenticationError)
        assert issubclass(InvalidToken, AuthenticationError)
        assert issubclass(InvalidCredentials, AuthenticationError)
        assert issubclass(AccountDisabled, AuthenticationError)

    def test_invalid_token_keeps_reason_internally(self):
        error = InvalidToken(reason="expired")
        assert error.reason == "expired"
        assert error.message == "Invalid or expired token"

    def test_not_found_status(self):
        assert ResourceNotFound("x").status_code == 404


class TestErrorHandlers:
    """Test Flask error handlers."""

    def test_not_found_response_format(self, error_client):
        response = error_client.get("/test/not-found")
        data = response.get_json()

        assert response.status_code == 404
        assert data["success"] is False
        assert data["error"]["type"] == "NotFound"
        assert data["error"]["message"] == "Agent not found"
        assert data["error"]["details"] == {"id": "123"}

    def test_validation_error_response_format(self, error_client):
        response = error_client.get("/test/validation")
        data = response.get_json()

        assert response.status_code == 400
        assert data["error"]["type"] == "ValidationError"
        assert data["error"]["details"] == {"field": "name"}

    def test_database_error_is_generic_500(self, error_client):
        response = error_client.get("/test/database")
        data = response.get_json()

        assert response.status_code == 500
        assert data["error"]["type"] == "InternalError"
        assert "details" not in data["error"]

    def test_unexpected_error_does_not_leak(self, error_client):
        response = error_client.get("/test/internal")
        data = response.get_json()

        assert response.status_code == 500
        assert data == {
            "success": False,
            "error": {"type": "InternalError", "message": "An internal error occurred"},
        }
        assert b"/var/lib/internal" not in response.data

    def test_invalid_token_reasons_render_identically(self, error_client):
        bodies = {
            error_client.get(f"/test/invalid-token/{reason}").data
            for reason in ("malformed", "bad_signature", "expired")
        }
        assert len(bodies) == 1

    def test_invalid_credentials_reasons_render_identically(self, error_client):
        unknown = error_client.get("/test/credentials/unknown_email")
        wrong = error_client.get("/test/credentials/wrong_password")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.data == wrong.data

    def test_email_in_use_hides_details(self, error_client):
        response = error_client.get("/test/email-in-use")
        data = response.get_json()

        assert response.status_code == 409
        assert data["error"]["type"] == "EmailInUse"
        assert "details" not in data["error"]

    def test_unknown_route_is_json_404(self, error_client):
        response = error_client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.get_json()["success"] is False

    def test_wrong_method_is_json_405(self, error_client):
        response = error_client.delete("/health")

        assert response.status_code == 405
        assert response.get_json()["success"] is False
