"""
Authentication for the FastAPI API: password hashing and bearer session tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import structlog
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt

from api.config import config
from api.errors import (
    ConfigurationError, InvalidInputError,
    InvalidOrExpiredTokenError, MissingAuthorizationError
)
from utilities.logger import AuditLogger

logger = structlog.get_logger(__name__)
audit = AuditLogger("api.auth")

# bcrypt ignores everything past this many bytes
BCRYPT_MAX_PASSWORD_BYTES = 72

# Security scheme; missing credentials are reported by get_current_username
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """
    Hash a password with a per-password salt.

    Args:
        password: Plain text password

    Returns:
        bcrypt hash as a string
    """
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise InvalidInputError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    hashed = bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=config.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain text password against a stored bcrypt hash."""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        logger.error("Stored password hash is malformed")
        return False


def _require_secret() -> str:
    if not config.jwt_secret:
        logger.error("JWT_SECRET is not defined in environment variables")
        raise ConfigurationError()
    return config.jwt_secret


def create_access_token(
    username: str,
    expires_delta: Optional[timedelta] = None,
    issued_at: Optional[datetime] = None
) -> str:
    """
    Issue a signed session token for a user.

    Args:
        username: Username embedded as the token subject
        expires_delta: Token lifetime (defaults to token_expire_minutes)
        issued_at: Issue time (defaults to now)

    Returns:
        Encoded JWT

    Raises:
        ConfigurationError: If no signing secret is configured
    """
    secret = _require_secret()
    issued_at = issued_at or datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(minutes=config.token_expire_minutes)

    iat = int(issued_at.timestamp())
    claims = {
        "sub": username,
        "iat": iat,
        "exp": iat + int(expires_delta.total_seconds()),
    }
    return jwt.encode(claims, secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """
    Verify a session token and return the username it was issued to.

    Raises:
        ConfigurationError: If no signing secret is configured
        InvalidOrExpiredTokenError: If the signature, expiry or subject is bad
    """
    secret = _require_secret()
    try:
        claims = jwt.decode(token, secret, algorithms=[config.jwt_algorithm])
    except ExpiredSignatureError:
        audit.log_token_rejected("expired")
        raise InvalidOrExpiredTokenError()
    except JWTError as e:
        audit.log_token_rejected(str(e))
        raise InvalidOrExpiredTokenError()

    username = claims.get("sub")
    if not username:
        audit.log_token_rejected("missing subject")
        raise InvalidOrExpiredTokenError()
    return username


async def get_current_username(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Resolve the caller's username from the bearer token.

    Args:
        credentials: HTTP authorization credentials, None if absent

    Returns:
        Username embedded in a valid token

    Raises:
        MissingAuthorizationError: If no bearer token was sent
        ConfigurationError: If no signing secret is configured
        InvalidOrExpiredTokenError: If the token does not verify
    """
    if credentials is None or not credentials.credentials:
        raise MissingAuthorizationError()

    return decode_access_token(credentials.credentials)
