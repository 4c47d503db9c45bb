"""Pydantic schemas for request/response validation."""

from blog_api.schemas.pagination import Page, paginate, parse_positive_int
from blog_api.schemas.post import CommentCreate, PostCreate, PostUpdate
from blog_api.schemas.token import TokenPayload
from blog_api.schemas.user import UserCreate, UserLogin, UserPublic, UserUpdate

__all__ = [
    "CommentCreate",
    "Page",
    "PostCreate",
    "PostUpdate",
    "TokenPayload",
    "UserCreate",
    "UserLogin",
    "UserPublic",
    "UserUpdate",
    "paginate",
    "parse_positive_int",
]
