"""
Post and comment records.
"""

from pydantic import Field

from blog_api.models.base import RecordModel, utc_now_iso


class Post(RecordModel):
    """A blog post, stored in ``posts.json``."""

    id: int
    title: str
    content: str
    author_id: int
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)


class Comment(RecordModel):
    """A comment on a post, stored in ``comments.json``."""

    id: int
    post_id: int
    author_id: int
    content: str
    created_at: str = Field(default_factory=utc_now_iso)
