"""
User routes for user management.
All routes require a session; everything except fetching one user by id
requires the admin role.
"""

from typing import List, Optional

from fastapi import APIRouter, status

from blog_api.api.deps import AdminIdentity, CurrentIdentity, Store, parse_id
from blog_api.core.errors import NotFoundError
from blog_api.models.user import User
from blog_api.schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Page, parse_positive_int
from blog_api.schemas.user import UserCreate, UserUpdate
from blog_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/all", response_model=List[User])
def list_all_users(current_user: AdminIdentity, store: Store) -> List[User]:
    """
    Get every user, unfiltered (password hashes included).
    Admin only.
    """
    return UserService.list_all(store)


@router.get("/{user_id}", response_model=User)
def get_user(user_id: str, current_user: CurrentIdentity, store: Store) -> User:
    """
    Get one user by id.
    Any authenticated user may call this.

    Raises:
        NotFoundError: Bare 404 if no user has this id
    """
    user = UserService.get_by_id(store, parse_id(user_id))
    if user is None:
        raise NotFoundError()
    return user


@router.get("", response_model=Page[User])
def list_users_page(
    current_user: AdminIdentity,
    store: Store,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Page[User]:
    """
    Paginated user listing for the admin panel.

    Args:
        page: 1-based page number (default 1 when absent or invalid)
        limit: Page size (default 10 when absent or invalid)
    """
    return UserService.page(
        store,
        page=parse_positive_int(page, DEFAULT_PAGE),
        limit=parse_positive_int(limit, DEFAULT_LIMIT),
    )


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(user_in: UserCreate, current_user: AdminIdentity, store: Store) -> User:
    """
    Create a user. ``name`` and ``email`` are required.

    Raises:
        ValidationError: 400 if name or email is missing
    """
    return UserService.create(store, user_in)


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: str,
    user_in: UserUpdate,
    current_user: AdminIdentity,
    store: Store,
) -> User:
    """Partially update a user; omitted fields keep their values."""
    user = UserService.update(store, parse_id(user_id, "User not found"), user_in)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.delete("/{user_id}", response_model=User)
def delete_user(user_id: str, current_user: AdminIdentity, store: Store) -> User:
    """Delete a user and return the removed record."""
    user = UserService.delete(store, parse_id(user_id, "User not found"))
    if user is None:
        raise NotFoundError("User not found")
    return user
