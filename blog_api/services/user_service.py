"""
User service layer implementing business logic for user operations.
Separates business logic from API routes and file storage.

Every operation reloads the whole collection. Mutations run under the
resource lock and rewrite the whole file.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from blog_api.core.errors import StorageError, ValidationError
from blog_api.core.logging import get_logger
from blog_api.core.security import get_password_hash, verify_password
from blog_api.db.store import JsonFileStore
from blog_api.models.user import User, UserRole
from blog_api.schemas.pagination import Page, paginate
from blog_api.schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)

USERS = "users"


def _to_users(records: List[Dict[str, Any]]) -> List[User]:
    try:
        return [User.model_validate(r) for r in records]
    except PydanticValidationError as e:
        raise StorageError(f"Malformed user record: {e}") from e


def _index_of(users: List[User], user_id: int) -> Optional[int]:
    for idx, user in enumerate(users):
        if user.id == user_id:
            return idx
    return None


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def list_all(store: JsonFileStore) -> List[User]:
        """Return the entire collection, unfiltered."""
        return _to_users(store.load(USERS))

    @staticmethod
    def get_by_id(store: JsonFileStore, user_id: int) -> Optional[User]:
        """
        Retrieve a user by ID.

        Args:
            store: Flat-file store
            user_id: User ID to search for

        Returns:
            User if found, None otherwise
        """
        users = UserService.list_all(store)
        idx = _index_of(users, user_id)
        return users[idx] if idx is not None else None

    @staticmethod
    def get_by_email(store: JsonFileStore, email: str) -> Optional[User]:
        """First user whose email matches exactly, or None."""
        for user in UserService.list_all(store):
            if user.email == email:
                return user
        return None

    @staticmethod
    def page(store: JsonFileStore, page: int, limit: int) -> Page[User]:
        """One page of the collection with totals."""
        return paginate(UserService.list_all(store), page, limit, User)

    @staticmethod
    def create(store: JsonFileStore, user_in: UserCreate) -> User:
        """
        Create a new user with hashed password.

        Args:
            store: Flat-file store
            user_in: User creation data; ``password`` and ``role`` are optional

        Returns:
            Created user

        Raises:
            ValidationError: If name or email is missing or empty
        """
        if not user_in.name or not user_in.email:
            raise ValidationError("Name and email are required")

        # Hash outside the lock; it is the slow part
        hashed = get_password_hash(user_in.password) if user_in.password else None

        with store.locked(USERS):
            users = UserService.list_all(store)
            user = User(
                id=store.allocate_id(USERS, [u.to_record() for u in users]),
                name=user_in.name,
                email=user_in.email,
                password=hashed,
                role=user_in.role or UserRole.USER.value,
            )
            users.append(user)
            store.save(USERS, [u.to_record() for u in users])

        logger.info(f"User created: {user.email} (ID: {user.id}, role: {user.role})")
        return user

    @staticmethod
    def update(store: JsonFileStore, user_id: int, user_in: UserUpdate) -> Optional[User]:
        """
        Apply a partial update.

        Fields that are absent or null keep their stored value. A non-empty
        password is re-hashed; otherwise the stored hash is kept.

        Returns:
            Updated user, or None if no user has this id
        """
        hashed = get_password_hash(user_in.password) if user_in.password else None

        with store.locked(USERS):
            users = UserService.list_all(store)
            idx = _index_of(users, user_id)
            if idx is None:
                return None

            current = users[idx]
            updated = current.model_copy(
                update={
                    "name": user_in.name if user_in.name is not None else current.name,
                    "email": user_in.email if user_in.email is not None else current.email,
                    "password": hashed if hashed is not None else current.password,
                    "role": user_in.role if user_in.role is not None else current.role,
                }
            )
            users[idx] = updated
            store.save(USERS, [u.to_record() for u in users])

        logger.info(f"User updated: ID {user_id}")
        return updated

    @staticmethod
    def delete(store: JsonFileStore, user_id: int) -> Optional[User]:
        """
        Remove exactly one user.

        Returns:
            The removed user, or None if no user has this id
        """
        with store.locked(USERS):
            users = UserService.list_all(store)
            idx = _index_of(users, user_id)
            if idx is None:
                return None
            deleted = users.pop(idx)
            store.save(USERS, [u.to_record() for u in users])

        logger.info(f"User deleted: {deleted.email} (ID: {deleted.id})")
        return deleted

    @staticmethod
    def authenticate(store: JsonFileStore, email: str, password: str) -> Optional[User]:
        """
        Authenticate a user by email and password.

        Returns:
            User if authentication successful, None otherwise
        """
        user = UserService.get_by_email(store, email)
        if not user:
            return None
        if not verify_password(password, user.password):
            return None
        return user
