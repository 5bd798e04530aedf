"""Configuration management using pydantic-settings."""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at process start by create_app() and injected into the
    services that need it. Instances are immutable.
    """

    database_path: str = "./data/agentdesk.db"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # JWT Configuration
    # No default: a missing signing key must stop the process at startup
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    jwt_expiry_days: int = Field(default=7, gt=0)

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = Field(default=12, ge=4, le=31)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        frozen=True,
    )

    @field_validator("jwt_secret_key")
    @classmethod
    def secret_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("jwt_secret_key must not be blank")
        return v
