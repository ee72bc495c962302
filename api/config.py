"""
API configuration settings.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Bookshop Review API"
    api_version: str = "1.0.0"
    api_description: str = (
        "Browse the book catalog and share reviews with other readers. "
        "Review changes require the token returned by `/customer/login`, sent as "
        "`Authorization: Bearer <token>`; tokens are valid for one hour."
    )

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False

    # Security Settings
    jwt_secret: Optional[str] = None  # Required for login and review routes
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 60
    bcrypt_rounds: int = 10

    # CORS Settings
    cors_origins: list = ["*"]  # Configure appropriately for production
    cors_allow_credentials: bool = True
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "extra": "ignore"  # Ignore extra fields from .env
    }

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        """bcrypt only accepts work factors between 4 and 31."""
        if v < 4 or v > 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @field_validator("token_expire_minutes")
    @classmethod
    def validate_token_expiry(cls, v):
        if v < 1:
            raise ValueError("token_expire_minutes must be positive")
        return v


# Global config instance
config = APIConfig()
