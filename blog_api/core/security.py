"""
Security utilities for password hashing and JWT session tokens.

Default hashing uses ``pbkdf2_sha256`` for stable cross-platform behavior in
tests and local development. ``bcrypt`` verification is still supported so
hashes written by the earlier bcrypt-based deployment keep working.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from blog_api.core.config import settings
from blog_api.core.errors import CredentialError
from blog_api.core.logging import get_logger
from blog_api.schemas.token import TokenPayload

logger = get_logger(__name__)

# Prefer pbkdf2 for new hashes while still verifying legacy bcrypt hashes.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def create_access_token(
    subject: str | Any,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        subject: The user id to encode in the token
        role: Role claim checked by the access gate
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject), "role": role}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """
    Decode and validate a JWT access token.

    Returns:
        Token payload, or None if the token is invalid, expired, or incomplete
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        return None

    sub = payload.get("sub")
    role = payload.get("role")
    if sub is None or role is None:
        logger.warning("Token missing subject or role claim")
        return None
    try:
        return TokenPayload(sub=int(sub), role=role)
    except ValueError:
        logger.warning("Invalid user ID in token")
        return None


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a plain password against a hashed password.

    Users created without a password have no hash and can never log in.
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Hash not produced by any configured scheme
        logger.warning("Stored password hash has an unknown format")
        return False


def get_password_hash(password: Optional[str]) -> str:
    """
    Hash a password with a fresh random salt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string

    Raises:
        CredentialError: If the password is empty or missing
    """
    if not password:
        raise CredentialError("Password must not be empty")
    return pwd_context.hash(password)
