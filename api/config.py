"""
API configuration settings.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Book Review Catalog API"
    api_version: str = "1.0.0"
    api_description: str = "Book metadata and per-user reviews with session-based login"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False

    # Catalog Settings
    books_file: Optional[str] = None  # JSON seed overriding the bundled dataset

    # Security Settings
    # Placeholder secrets; override both through the environment.
    jwt_secret: str = "access"
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = 3600
    session_secret: str = "fingerprint"
    session_cookie: str = "session"

    # CORS Settings
    cors_origins: list = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator('access_token_ttl_seconds')
    @classmethod
    def validate_ttl(cls, v):
        """Tokens must live for a positive number of seconds."""
        if v <= 0:
            raise ValueError('access_token_ttl_seconds must be positive')
        return v


# Global config instance
config = APIConfig()
