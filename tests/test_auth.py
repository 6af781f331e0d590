"""Tests for bearer token authentication."""

from datetime import timedelta

import jwt
from fastapi import status
from fastapi.testclient import TestClient

from talkbuddy import models
from talkbuddy.config import get_settings
from talkbuddy.infrastructure.identity.auth.token_service import ALGORITHM, verify_access_token
from talkbuddy.infrastructure.identity.dependencies import get_current_user
from talkbuddy.main import app
from tests.conftest import create_access_token


class TestTokenService:
    """Test suite for access token verification."""

    def test_round_trip(self) -> None:
        assert verify_access_token(create_access_token(7)) == 7

    def test_expired_token_rejected(self) -> None:
        token = create_access_token(7, expires_in=timedelta(seconds=-1))
        assert verify_access_token(token) is None

    def test_refresh_token_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "7", "type": "refresh"}, get_settings().SECRET_KEY, algorithm=ALGORITHM
        )
        assert verify_access_token(token) is None

    def test_garbage_rejected(self) -> None:
        assert verify_access_token("not-a-token") is None


class TestAuthenticatedEndpoints:
    """Requests go through the real current-user dependency."""

    def test_missing_token(self, client: TestClient) -> None:
        app.dependency_overrides.pop(get_current_user)

        response = client.get("/api/v1/progress")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_valid_token(self, client: TestClient, test_user: models.User) -> None:
        app.dependency_overrides.pop(get_current_user)
        token = create_access_token(test_user.id)

        response = client.get(
            "/api/v1/progress", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_200_OK

    def test_token_for_deleted_user(self, client: TestClient) -> None:
        app.dependency_overrides.pop(get_current_user)
        token = create_access_token(999)

        response = client.get("/api/v1/achievements", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
