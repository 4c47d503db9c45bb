"""
Application configuration management using Pydantic Settings.
All settings can be overridden via environment variables.
"""

from pathlib import Path
from typing import Any, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Blog API"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Security
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    AUTH_COOKIE_NAME: str = "token"
    AUTH_COOKIE_SECURE: bool = False

    # Flat-file storage
    DATA_DIR: str = "./data"

    @property
    def data_path(self) -> Path:
        """Directory holding one JSON document per resource."""
        return Path(self.DATA_DIR)

    # CORS
    # str in the union lets a comma-separated env value reach the validator undecoded
    BACKEND_CORS_ORIGINS: List[str] | str = [
        "http://localhost:5173",
        "http://localhost:5174",
        "https://precious-daffodil-28b12f.netlify.app",
    ]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> List[str] | str:
        """Parse CORS origins from string or list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Artificial latency added to every response (useful for frontend loading states)
    RESPONSE_DELAY_MS: int = 0

    @field_validator("RESPONSE_DELAY_MS", mode="after")
    @classmethod
    def validate_delay(cls, v: int) -> int:
        """Negative delays make no sense."""
        if v < 0:
            raise ValueError("RESPONSE_DELAY_MS must be >= 0")
        return v

    # First admin (created on startup when the users file has no admin)
    DISABLE_BOOTSTRAP_USERS: bool = False
    FIRST_ADMIN_NAME: str = "Admin"
    FIRST_ADMIN_EMAIL: str = "admin@example.com"
    FIRST_ADMIN_PASSWORD: str = "changethis"


settings = Settings()  # type: ignore
