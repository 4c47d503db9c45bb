"""
Comment routes.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from blog_api.api.deps import CurrentIdentity, Store, as_int, ensure_can_modify, parse_id
from blog_api.core.errors import NotFoundError
from blog_api.models.post import Comment
from blog_api.schemas.post import CommentCreate
from blog_api.services.post_service import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=List[Comment])
def list_comments(
    current_user: CurrentIdentity,
    store: Store,
    post_id: Optional[str] = Query(default=None, alias="postId"),
) -> List[Comment]:
    """All comments, or only those of one post when ``postId`` is given."""
    if post_id is None:
        return CommentService.list_all(store)
    wanted = as_int(post_id)
    if wanted is None:
        # no post has a non-integer id
        return []
    return CommentService.list_all(store, post_id=wanted)


@router.post("", response_model=Comment, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment_in: CommentCreate,
    current_user: CurrentIdentity,
    store: Store,
) -> Comment:
    """
    Comment on a post as the caller.

    Raises:
        ValidationError: 400 if postId or content is missing
        NotFoundError: 404 if the post does not exist
    """
    return CommentService.create(store, comment_in, author_id=current_user.id)


@router.delete("/{comment_id}", response_model=Comment)
def delete_comment(comment_id: str, current_user: CurrentIdentity, store: Store) -> Comment:
    record_id = parse_id(comment_id, "Comment not found")
    existing = CommentService.get_by_id(store, record_id)
    if existing is None:
        raise NotFoundError("Comment not found")
    ensure_can_modify(current_user, existing.author_id)

    comment = CommentService.delete(store, record_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment
