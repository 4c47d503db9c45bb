"""
Post and comment services over the flat-file store.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from blog_api.core.errors import NotFoundError, StorageError, ValidationError
from blog_api.core.logging import get_logger
from blog_api.db.store import JsonFileStore
from blog_api.models.base import utc_now_iso
from blog_api.models.post import Comment, Post
from blog_api.schemas.pagination import Page, paginate
from blog_api.schemas.post import CommentCreate, PostCreate, PostUpdate

logger = get_logger(__name__)

POSTS = "posts"
COMMENTS = "comments"


def _to_posts(records: List[Dict[str, Any]]) -> List[Post]:
    try:
        return [Post.model_validate(r) for r in records]
    except PydanticValidationError as e:
        raise StorageError(f"Malformed post record: {e}") from e


def _to_comments(records: List[Dict[str, Any]]) -> List[Comment]:
    try:
        return [Comment.model_validate(r) for r in records]
    except PydanticValidationError as e:
        raise StorageError(f"Malformed comment record: {e}") from e


class PostService:
    """Service class for posts."""

    @staticmethod
    def list_all(store: JsonFileStore) -> List[Post]:
        return _to_posts(store.load(POSTS))

    @staticmethod
    def page(store: JsonFileStore, page: int, limit: int) -> Page[Post]:
        return paginate(PostService.list_all(store), page, limit, Post)

    @staticmethod
    def get_by_id(store: JsonFileStore, post_id: int) -> Optional[Post]:
        for post in PostService.list_all(store):
            if post.id == post_id:
                return post
        return None

    @staticmethod
    def create(store: JsonFileStore, post_in: PostCreate, author_id: int) -> Post:
        """
        Create a post owned by ``author_id``.

        Raises:
            ValidationError: If title or content is missing or empty
        """
        if not post_in.title or not post_in.content:
            raise ValidationError("Title and content are required")

        with store.locked(POSTS):
            posts = PostService.list_all(store)
            post = Post(
                id=store.allocate_id(POSTS, [p.to_record() for p in posts]),
                title=post_in.title,
                content=post_in.content,
                author_id=author_id,
            )
            posts.append(post)
            store.save(POSTS, [p.to_record() for p in posts])

        logger.info(f"Post created: ID {post.id} by user {author_id}")
        return post

    @staticmethod
    def update(store: JsonFileStore, post_id: int, post_in: PostUpdate) -> Optional[Post]:
        """Partial update of title/content; None if the post does not exist."""
        with store.locked(POSTS):
            posts = PostService.list_all(store)
            for idx, current in enumerate(posts):
                if current.id == post_id:
                    break
            else:
                return None

            updated = current.model_copy(
                update={
                    "title": post_in.title if post_in.title is not None else current.title,
                    "content": post_in.content if post_in.content is not None else current.content,
                    "updated_at": utc_now_iso(),
                }
            )
            posts[idx] = updated
            store.save(POSTS, [p.to_record() for p in posts])

        logger.info(f"Post updated: ID {post_id}")
        return updated

    @staticmethod
    def delete(store: JsonFileStore, post_id: int) -> Optional[Post]:
        """
        Remove a post and then its comments.

        The two files are written separately; a failure between the writes
        leaves orphaned comments behind.
        """
        with store.locked(POSTS):
            posts = PostService.list_all(store)
            for idx, post in enumerate(posts):
                if post.id == post_id:
                    break
            else:
                return None
            deleted = posts.pop(idx)
            store.save(POSTS, [p.to_record() for p in posts])

        removed = CommentService.delete_for_post(store, post_id)
        logger.info(f"Post deleted: ID {post_id} ({removed} comment(s) removed)")
        return deleted


class CommentService:
    """Service class for comments."""

    @staticmethod
    def list_all(store: JsonFileStore, post_id: Optional[int] = None) -> List[Comment]:
        comments = _to_comments(store.load(COMMENTS))
        if post_id is None:
            return comments
        return [c for c in comments if c.post_id == post_id]

    @staticmethod
    def get_by_id(store: JsonFileStore, comment_id: int) -> Optional[Comment]:
        for comment in CommentService.list_all(store):
            if comment.id == comment_id:
                return comment
        return None

    @staticmethod
    def create(store: JsonFileStore, comment_in: CommentCreate, author_id: int) -> Comment:
        """
        Add a comment to an existing post.

        Raises:
            ValidationError: If postId or content is missing
            NotFoundError: If the post does not exist
        """
        if comment_in.post_id is None or not comment_in.content:
            raise ValidationError("postId and content are required")
        if PostService.get_by_id(store, comment_in.post_id) is None:
            raise NotFoundError("Post not found")

        with store.locked(COMMENTS):
            comments = CommentService.list_all(store)
            comment = Comment(
                id=store.allocate_id(COMMENTS, [c.to_record() for c in comments]),
                post_id=comment_in.post_id,
                author_id=author_id,
                content=comment_in.content,
            )
            comments.append(comment)
            store.save(COMMENTS, [c.to_record() for c in comments])

        logger.info(f"Comment created: ID {comment.id} on post {comment.post_id}")
        return comment

    @staticmethod
    def delete(store: JsonFileStore, comment_id: int) -> Optional[Comment]:
        with store.locked(COMMENTS):
            comments = CommentService.list_all(store)
            for idx, comment in enumerate(comments):
                if comment.id == comment_id:
                    break
            else:
                return None
            deleted = comments.pop(idx)
            store.save(COMMENTS, [c.to_record() for c in comments])

        logger.info(f"Comment deleted: ID {comment_id}")
        return deleted

    @staticmethod
    def delete_for_post(store: JsonFileStore, post_id: int) -> int:
        """Remove every comment attached to a post; returns how many went."""
        with store.locked(COMMENTS):
            comments = CommentService.list_all(store)
            kept = [c for c in comments if c.post_id != post_id]
            removed = len(comments) - len(kept)
            if removed:
                store.save(COMMENTS, [c.to_record() for c in kept])
        return removed
