"""
Token schemas for JWT cookie authentication.
"""

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Schema for decoded JWT payload."""

    sub: int
    role: str
