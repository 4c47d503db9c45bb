"""
API dependencies for FastAPI dependency injection.
Provides the access gate (authentication, then role) and the store.

The gate only decodes the session token; it never reads storage, so a
rejected request fails before any file is touched.
"""

import re
from typing import Annotated, Callable, Optional

from fastapi import Depends, Request, status

from blog_api.core.access import Identity, can_modify, is_allowed
from blog_api.core.config import settings
from blog_api.core.errors import AccessError, NotFoundError
from blog_api.core.logging import get_logger
from blog_api.core.security import decode_access_token
from blog_api.db.store import JsonFileStore, get_store
from blog_api.models.user import UserRole

logger = get_logger(__name__)

_INT_ID = re.compile(r"\s*[+-]?\d+\s*")


def as_int(raw: str) -> Optional[int]:
    """Integer value of a path or query id, None when it is not a whole number."""
    if not _INT_ID.fullmatch(raw):
        return None
    return int(raw)


def parse_id(raw: str, message: Optional[str] = None) -> int:
    """
    Lookup key for a path id.

    An id that is not an integer cannot match any record, so it is answered
    like any other unknown id.

    Raises:
        NotFoundError: 404, bare unless ``message`` is given
    """
    record_id = as_int(raw)
    if record_id is None:
        raise NotFoundError(message)
    return record_id


def get_token(request: Request) -> Optional[str]:
    """
    Session token from the auth cookie.

    Falls back to an ``Authorization: Bearer`` header for non-browser clients.
    """
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


def require_auth(token: Annotated[Optional[str], Depends(get_token)]) -> Identity:
    """
    Dependency resolving the caller's identity.

    Raises:
        AccessError: 401 if no valid session token is present
    """
    if not token:
        raise AccessError(status.HTTP_401_UNAUTHORIZED)

    payload = decode_access_token(token)
    identity = Identity(id=payload.sub, role=payload.role) if payload else None
    if not is_allowed(identity):
        raise AccessError(status.HTTP_401_UNAUTHORIZED)
    return identity  # type: ignore[return-value]


def require_role(role: str) -> Callable[[Identity], Identity]:
    """
    Build a dependency that additionally requires ``role``.

    Raises:
        AccessError: 403 if the identity's role does not match
    """

    def dependency(identity: Annotated[Identity, Depends(require_auth)]) -> Identity:
        if not is_allowed(identity, role):
            logger.warning(f"User {identity.id} with role '{identity.role}' denied '{role}' access")
            raise AccessError(status.HTTP_403_FORBIDDEN)
        return identity

    return dependency


def ensure_can_modify(identity: Identity, owner_id: int) -> None:
    """
    Raise unless the identity owns the resource or is an admin.

    Raises:
        AccessError: 403
    """
    if not can_modify(identity, owner_id):
        logger.warning(f"User {identity.id} denied modifying resource owned by {owner_id}")
        raise AccessError(status.HTTP_403_FORBIDDEN)


require_admin = require_role(UserRole.ADMIN.value)

CurrentIdentity = Annotated[Identity, Depends(require_auth)]
AdminIdentity = Annotated[Identity, Depends(require_admin)]
Store = Annotated[JsonFileStore, Depends(get_store)]
