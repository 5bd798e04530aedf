"""Tests for Flask application initialization and configuration."""

import logging

import pytest
from flask import Flask
from pydantic import ValidationError

from agentdesk.exceptions import DatabaseError
from agentdesk.extensions import EXTENSION_KEY, Services
from agentdesk.main import create_app


class TestAppInitialization:
    """Test Flask application initialization."""

    def test_create_app_returns_flask_instance(self, app):
        assert isinstance(app, Flask)

    def test_services_attached_once(self, app, settings):
        services = app.extensions[EXTENSION_KEY]

        assert isinstance(services, Services)
        assert services.settings is settings
        assert services.database.path == settings.database_path
        assert services.hasher.work_factor == 4

    def test_schema_applied_on_startup(self, app, settings):
        services = app.extensions[EXTENSION_KEY]
        assert services.database.schema_version() != "unknown"

    def test_create_app_twice_on_same_database(self, settings):
        create_app(settings)
        create_app(settings)

    def test_unusable_database_is_startup_fatal(self, settings):
        with open(settings.database_path, "wb") as f:
            f.write(b"this is not an sqlite database" * 100)

        with pytest.raises(DatabaseError):
            create_app(settings)

    def test_missing_signing_key_is_startup_fatal(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
        monkeypatch.chdir("/")
        with pytest.raises(ValidationError):
            create_app()


class TestRoutes:
    def test_expected_routes_registered(self, app):
        rules = {rule.rule for rule in app.url_map.iter_rules()}

        for path in (
            "/health",
            "/auth/register",
            "/auth/login",
            "/auth/me",
            "/agents",
            "/agents/<agent_id>",
            "/conversations",
            "/chat/send",
        ):
            assert path in rules


class TestCORSConfiguration:
    """Test CORS middleware configuration."""

    def test_cors_headers_present_for_allowed_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"

    def test_cors_preflight_options_request(self, client):
        response = client.options(
            "/health",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET"
            }
        )
        assert response.status_code in (200, 204)


class TestLoggingConfiguration:
    def test_root_logger_has_handlers(self, app):
        assert len(logging.getLogger().handlers) > 0
