"""
Tests for identity construction and the auth routes.
"""

from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from app.modules.auth.service import AuthService, clear_auth_cache, parse_superuser_flag


@pytest.fixture(autouse=True)
def _reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


def fake_auth_client(user=None, error=None):
    calls = []

    def get_user(jwt):
        calls.append(jwt)
        if error:
            raise error
        return SimpleNamespace(user=user)

    return SimpleNamespace(auth=SimpleNamespace(get_user=get_user)), calls


def auth_user(app_metadata=None, user_metadata=None):
    return SimpleNamespace(
        id="user-x",
        email="x@example.com",
        app_metadata=app_metadata,
        user_metadata=user_metadata,
    )


@pytest.mark.parametrize("metadata, expected", [
    (None, False),
    ({}, False),
    ({"is_superuser": True}, True),
    ({"is_superuser": "true"}, True),
    ({"is_superuser": "TRUE "}, True),
    ({"is_superuser": "false"}, False),
    ({"is_superuser": False}, False),
    ({"is_superuser": 1}, False),
    ({"type": "super_user"}, False),
])
def test_parse_superuser_flag(metadata, expected):
    assert parse_superuser_flag(metadata) is expected


class TestGetCurrentUser:

    def test_superuser_flag_from_app_metadata(self):
        client, _ = fake_auth_client(auth_user(app_metadata={"is_superuser": "true"}))
        user = AuthService(client).get_current_user("token-1")
        assert user.id == "user-x"
        assert user.is_superuser is True

    def test_user_metadata_is_not_trusted(self):
        client, _ = fake_auth_client(auth_user(user_metadata={"is_superuser": "true"}))
        user = AuthService(client).get_current_user("token-2")
        assert user.is_superuser is False
        assert user.user_metadata == {"is_superuser": "true"}

    def test_identity_is_cached_per_token(self):
        client, calls = fake_auth_client(auth_user())
        service = AuthService(client)
        service.get_current_user("token-3")
        service.get_current_user("token-3")
        assert calls == ["token-3"]

    def test_missing_user_is_unauthorized(self):
        client, _ = fake_auth_client(None)
        with pytest.raises(HTTPException) as exc_info:
            AuthService(client).get_current_user("token-4")
        assert exc_info.value.status_code == 401

    def test_invalid_jwt_is_unauthorized(self):
        client, _ = fake_auth_client(error=RuntimeError("invalid JWT: signature mismatch"))
        with pytest.raises(HTTPException) as exc_info:
            AuthService(client).get_current_user("token-5")
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid or expired token"


class TestAuthRoutes:

    def test_me(self, client_as):
        response = client_as("user-e").get("/api/v1/auth/me")
        assert response.status_code == 200
        assert response.json()["id"] == "user-e"
        assert response.json()["is_superuser"] is True

    def test_me_requires_authentication(self, client_as):
        assert client_as(None).get("/api/v1/auth/me").status_code == 401

    def test_set_super_user_requires_superuser(self, client_as):
        response = client_as("user-a").post("/api/v1/auth/set-super-user", json={"user_id": "user-b"})
        assert response.status_code == 403
