"""
Post and comment request schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PostCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class CommentCreate(BaseModel):
    """Accepts ``postId`` (or ``post_id``) and ``content``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    post_id: Optional[int] = None
    content: Optional[str] = None
