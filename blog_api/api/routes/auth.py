"""
Authentication routes: login, logout, registration and the current user.
The session is a JWT stored in an HTTP-only cookie.
"""

from fastapi import APIRouter, Response, status

from blog_api.api.deps import CurrentIdentity, Store
from blog_api.core.config import settings
from blog_api.core.errors import InvalidCredentialsError, NotFoundError, ValidationError
from blog_api.core.logging import get_logger
from blog_api.core.security import create_access_token
from blog_api.models.user import User, UserRole
from blog_api.schemas.user import UserCreate, UserLogin, UserPublic
from blog_api.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, user: User) -> None:
    """Issue a session token for ``user`` and attach it as a cookie."""
    token = create_access_token(subject=user.id, role=user.role)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        # Cross-site frontends need SameSite=None, which browsers only accept with Secure
        samesite="none" if settings.AUTH_COOKIE_SECURE else "lax",
    )


@router.post("/login", response_model=UserPublic)
def login(credentials: UserLogin, response: Response, store: Store) -> UserPublic:
    """
    Log in with email and password.

    Returns:
        The logged-in user (without password); the session cookie is set

    Raises:
        ValidationError: 400 if email or password is missing
        InvalidCredentialsError: 401 if the credentials are wrong
    """
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required")

    user = UserService.authenticate(store, email=credentials.email, password=credentials.password)
    if not user:
        logger.warning(f"Failed login attempt for email: {credentials.email}")
        raise InvalidCredentialsError("Incorrect email or password")

    set_session_cookie(response, user)
    logger.info(f"User logged in: {user.email} (ID: {user.id})")
    return UserPublic.model_validate(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response) -> None:
    """Clear the session cookie."""
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="none" if settings.AUTH_COOKIE_SECURE else "lax",
    )


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, response: Response, store: Store) -> UserPublic:
    """
    Register a new account with the ``user`` role and log it in.

    Raises:
        ValidationError: 400 if a field is missing or the email is taken
    """
    if not user_in.name or not user_in.email or not user_in.password:
        raise ValidationError("Name, email and password are required")

    if UserService.get_by_email(store, email=user_in.email):
        logger.warning(f"Registration attempt with existing email: {user_in.email}")
        raise ValidationError("Email already registered")

    user = UserService.create(
        store,
        user_in.model_copy(update={"role": UserRole.USER.value}),
    )
    set_session_cookie(response, user)
    logger.info(f"New user registered: {user.email} (ID: {user.id})")
    return UserPublic.model_validate(user)


@router.get("/me", response_model=UserPublic)
def read_current_user(current_user: CurrentIdentity, store: Store) -> UserPublic:
    """
    Get the logged-in user's profile.

    Raises:
        NotFoundError: Bare 404 if the account was deleted after login
    """
    user = UserService.get_by_id(store, current_user.id)
    if user is None:
        raise NotFoundError()
    return UserPublic.model_validate(user)
