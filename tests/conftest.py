"""
Pytest configuration and fixtures.
Provides a throwaway data directory, test client, and session helpers.
"""

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient

from blog_api.core.config import settings
from blog_api.core.security import create_access_token
from blog_api.db.store import JsonFileStore, get_store
from blog_api.main import app
from blog_api.models.user import User, UserRole
from blog_api.schemas.user import UserCreate
from blog_api.services.user_service import UserService


def session_headers(user_id: int, role: str) -> Dict[str, str]:
    """Cookie header carrying a session token for the given identity."""
    token = create_access_token(subject=user_id, role=role)
    return {"Cookie": f"{settings.AUTH_COOKIE_NAME}={token}"}


@pytest.fixture(name="session_for")
def session_for_fixture() -> Callable[[int, str], Dict[str, str]]:
    """
    Build session cookie headers for arbitrary identities.
    """
    return session_headers


@pytest.fixture(name="store")
def store_fixture(tmp_path) -> JsonFileStore:
    """
    Create a store rooted in a fresh temporary directory.
    """
    return JsonFileStore(tmp_path / "data")


@pytest.fixture(name="client")
def client_fixture(store: JsonFileStore, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """
    Create a test client whose routes use the temporary store.
    The startup admin is not created so collections start empty.
    """
    monkeypatch.setattr(settings, "DISABLE_BOOTSTRAP_USERS", True)
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(store: JsonFileStore) -> User:
    """
    Create a regular user.
    """
    return UserService.create(
        store,
        UserCreate(name="Test User", email="test@example.com", password="testpassword123"),
    )


@pytest.fixture(name="test_admin")
def test_admin_fixture(store: JsonFileStore) -> User:
    """
    Create an admin user.
    """
    return UserService.create(
        store,
        UserCreate(
            name="Admin User",
            email="admin@example.com",
            password="adminpassword123",
            role=UserRole.ADMIN.value,
        ),
    )


@pytest.fixture(name="user_headers")
def user_headers_fixture(test_user: User) -> Dict[str, str]:
    """
    Session cookie for the regular user.
    """
    return session_headers(test_user.id, test_user.role)


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(test_admin: User) -> Dict[str, str]:
    """
    Session cookie for the admin user.
    """
    return session_headers(test_admin.id, test_admin.role)
