"""
Access decisions, independent of HTTP.

The FastAPI dependencies in ``blog_api.api.deps`` resolve an identity from the
request and ask these functions whether to let it through.
"""

from dataclasses import dataclass
from typing import Optional

from blog_api.models.user import UserRole


@dataclass(frozen=True)
class Identity:
    """Who is making the request, as carried by the session token."""

    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def is_allowed(identity: Optional[Identity], required_role: Optional[str] = None) -> bool:
    """
    Decide whether an identity passes the gate.

    No identity never passes; with no role required any identity passes;
    otherwise the role must match exactly.
    """
    if identity is None:
        return False
    if required_role is None:
        return True
    return identity.role == required_role


def can_modify(identity: Identity, owner_id: int) -> bool:
    """Authors may change their own content; admins may change anything."""
    return identity.is_admin or identity.id == owner_id
