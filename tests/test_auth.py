"""
Tests for authentication endpoints.
"""

from fastapi.testclient import TestClient

from blog_api.core.config import settings
from blog_api.core.security import decode_access_token
from blog_api.db.store import JsonFileStore
from blog_api.models.user import User
from blog_api.schemas.user import UserUpdate
from blog_api.services.user_service import UserService

AUTH_URL = f"{settings.API_PREFIX}/auth"


def test_login_success_sets_cookie(client: TestClient, test_user: User) -> None:
    """Test successful login."""
    response = client.post(
        f"{AUTH_URL}/login",
        json={"email": "test@example.com", "password": "testpassword123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == test_user.id
    assert data["role"] == "user"
    assert "password" not in data

    token = response.cookies.get(settings.AUTH_COOKIE_NAME)
    assert token
    payload = decode_access_token(token)
    assert payload is not None
    assert payload.sub == test_user.id
    assert payload.role == "user"


def test_cookie_session_reaches_protected_route(client: TestClient, test_user: User) -> None:
    client.post(
        f"{AUTH_URL}/login",
        json={"email": "test@example.com", "password": "testpassword123"},
    )
    response = client.get(f"{AUTH_URL}/me")
    assert response.status_code == 200
    assert response.json()["email"] == test_user.email


def test_login_wrong_password(client: TestClient, test_user: User) -> None:
    """Test login with wrong password."""
    response = client.post(
        f"{AUTH_URL}/login",
        json={"email": "test@example.com", "password": "wrongpassword"},
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Incorrect email or password"}


def test_login_nonexistent_user(client: TestClient) -> None:
    """Test login with non-existent user."""
    response = client.post(
        f"{AUTH_URL}/login",
        json={"email": "nonexistent@example.com", "password": "password123"},
    )
    assert response.status_code == 401


def test_login_missing_fields(client: TestClient) -> None:
    response = client.post(f"{AUTH_URL}/login", json={"email": "test@example.com"})
    assert response.status_code == 400


def test_login_reflects_role_change(client: TestClient, store: JsonFileStore, test_user: User) -> None:
    UserService.update(store, test_user.id, UserUpdate(role="admin"))
    response = client.post(
        f"{AUTH_URL}/login",
        json={"email": "test@example.com", "password": "testpassword123"},
    )
    payload = decode_access_token(response.cookies[settings.AUTH_COOKIE_NAME])
    assert payload is not None
    assert payload.role == "admin"


def test_logout_clears_cookie(client: TestClient, test_user: User) -> None:
    client.post(
        f"{AUTH_URL}/login",
        json={"email": "test@example.com", "password": "testpassword123"},
    )
    response = client.post(f"{AUTH_URL}/logout")
    assert response.status_code == 204
    assert settings.AUTH_COOKIE_NAME in response.headers.get("set-cookie", "")

    assert client.get(f"{AUTH_URL}/me").status_code == 401


def test_register_user(client: TestClient, store: JsonFileStore) -> None:
    """Test user registration."""
    response = client.post(
        f"{AUTH_URL}/register",
        json={"name": "New User", "email": "newuser@example.com", "password": "newpassword123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "newuser@example.com"
    assert data["role"] == "user"
    assert "password" not in data
    assert response.cookies.get(settings.AUTH_COOKIE_NAME)

    [record] = store.load("users")
    assert record["password"] != "newpassword123"


def test_register_cannot_pick_role(client: TestClient) -> None:
    response = client.post(
        f"{AUTH_URL}/register",
        json={"name": "Sneaky", "email": "sneaky@example.com", "password": "pw", "role": "admin"},
    )
    assert response.status_code == 201
    assert response.json()["role"] == "user"


def test_register_duplicate_email(client: TestClient, test_user: User) -> None:
    """Test that duplicate email registration fails."""
    response = client.post(
        f"{AUTH_URL}/register",
        json={"name": "Duplicate", "email": test_user.email, "password": "password123"},
    )
    assert response.status_code == 400
    assert "already registered" in response.json()["message"].lower()


def test_register_requires_password(client: TestClient) -> None:
    response = client.post(
        f"{AUTH_URL}/register", json={"name": "No Pass", "email": "np@example.com"}
    )
    assert response.status_code == 400


def test_me_after_account_deleted(
    client: TestClient, store: JsonFileStore, user_headers: dict, test_user: User
) -> None:
    UserService.delete(store, test_user.id)
    response = client.get(f"{AUTH_URL}/me", headers=user_headers)
    assert response.status_code == 404
