"""Process-wide services attached to the Flask app.

create_app() builds one Services instance from the startup Settings and
stores it on ``app.extensions``. Handlers reach it through
get_services(). Nothing here is mutated after startup.

A request-scoped autocommit Core is cached on ``flask.g`` and closed when
the app context tears down.
"""

from dataclasses import dataclass

from flask import Flask, current_app, g

from .auth.hashing import CredentialHasher
from .auth.token import TokenService
from .config import Settings
from .db import Core, Database

EXTENSION_KEY = "agentdesk"


@dataclass(frozen=True)
class Services:
    settings: Settings
    database: Database
    hasher: CredentialHasher
    tokens: TokenService

    @classmethod
    def from_settings(cls, settings: Settings) -> "Services":
        return cls(
            settings=settings,
            database=Database(settings.database_path),
            hasher=CredentialHasher(settings.bcrypt_work_factor),
            tokens=TokenService(
                settings.jwt_secret_key.get_secret_value(),
                algorithm=settings.jwt_algorithm,
                expiry_days=settings.jwt_expiry_days,
            ),
        )


def init_app(app: Flask, services: Services) -> None:
    app.extensions[EXTENSION_KEY] = services
    app.teardown_appcontext(close_core)


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]


def get_core() -> Core:
    """
    Get the autocommit Core for the current request.

    Created on first use and closed automatically at app context teardown.
    For multi-statement atomic work use
    ``get_services().database.get_core(atomic=True)`` instead.
    """
    if "core" not in g:
        g.core = get_services().database.get_core()
    return g.core


def close_core(e=None):
    core = g.pop("core", None)
    if core is not None:
        core.close()
