"""
User record with role-based access control.
Implements a simple admin/user role system.
"""

from enum import Enum
from typing import Optional

from blog_api.models.base import RecordModel


class UserRole(str, Enum):
    """Roles the application recognizes. Other strings are stored as-is."""

    ADMIN = "admin"
    USER = "user"


class User(RecordModel):
    """
    User record as stored in ``users.json``.

    Attributes:
        id: Unique integer id within the collection
        name: Display name
        email: Contact / login email (no uniqueness or format check)
        password: Salted hash, or None when created without a password
        role: Role string, "admin" grants access to user management
    """

    id: int
    name: str
    email: str
    password: Optional[str] = None
    role: str = UserRole.USER.value
