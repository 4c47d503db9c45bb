"""
User schemas for API request/response validation.

Request bodies declare every field optional: presence of ``name``/``email``
is checked by the service so a missing field yields a 400 with a message
rather than a framework validation error.
"""

from typing import Optional

from pydantic import BaseModel


class UserCreate(BaseModel):
    """Schema for creating a user (admin) or registering."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UserUpdate(BaseModel):
    """Partial update: a field left out (or null) keeps its stored value."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UserLogin(BaseModel):
    """Schema for login."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    """
    Schema for user data returned by the auth routes.
    Excludes the password hash.
    """

    id: int
    name: str
    email: str
    role: str

    model_config = {"from_attributes": True}
