"""
Post routes. Reading and writing need a session; changing or deleting a post
is limited to its author and admins.
"""

from typing import Optional

from fastapi import APIRouter, status

from blog_api.api.deps import CurrentIdentity, Store, ensure_can_modify, parse_id
from blog_api.core.errors import NotFoundError
from blog_api.models.post import Post
from blog_api.schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Page, parse_positive_int
from blog_api.schemas.post import PostCreate, PostUpdate
from blog_api.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=Page[Post])
def list_posts(
    current_user: CurrentIdentity,
    store: Store,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Page[Post]:
    """Paginated post listing, same envelope as the user listing."""
    return PostService.page(
        store,
        page=parse_positive_int(page, DEFAULT_PAGE),
        limit=parse_positive_int(limit, DEFAULT_LIMIT),
    )


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: str, current_user: CurrentIdentity, store: Store) -> Post:
    post = PostService.get_by_id(store, parse_id(post_id))
    if post is None:
        raise NotFoundError()
    return post


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
def create_post(post_in: PostCreate, current_user: CurrentIdentity, store: Store) -> Post:
    """Create a post authored by the caller."""
    return PostService.create(store, post_in, author_id=current_user.id)


@router.put("/{post_id}", response_model=Post)
def update_post(
    post_id: str,
    post_in: PostUpdate,
    current_user: CurrentIdentity,
    store: Store,
) -> Post:
    """
    Partially update a post.

    Raises:
        NotFoundError: 404 if the post does not exist
        AccessError: 403 if the caller is neither the author nor an admin
    """
    record_id = parse_id(post_id, "Post not found")
    existing = PostService.get_by_id(store, record_id)
    if existing is None:
        raise NotFoundError("Post not found")
    ensure_can_modify(current_user, existing.author_id)

    post = PostService.update(store, record_id, post_in)
    if post is None:
        raise NotFoundError("Post not found")
    return post


@router.delete("/{post_id}", response_model=Post)
def delete_post(post_id: str, current_user: CurrentIdentity, store: Store) -> Post:
    """Delete a post together with its comments."""
    record_id = parse_id(post_id, "Post not found")
    existing = PostService.get_by_id(store, record_id)
    if existing is None:
        raise NotFoundError("Post not found")
    ensure_can_modify(current_user, existing.author_id)

    post = PostService.delete(store, record_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post
