"""Integration tests for registration, login and token handling."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from httpx import AsyncClient

from crm.config.settings import settings

pytestmark = pytest.mark.asyncio

AUTH = f"{settings.API_PREFIX}/auth"


class TestRegistration:
    async def test_register_returns_user_and_tokens(self, async_client: AsyncClient, test_user_data):
        response = await async_client.post(f"{AUTH}/register", json=test_user_data)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["user"]["email"] == test_user_data["email"]
        assert body["data"]["user"]["roles"] == []
        assert body["data"]["token"]
        assert body["data"]["refreshToken"]

    async def test_duplicate_email_conflicts(self, async_client: AsyncClient, test_user_data):
        await async_client.post(f"{AUTH}/register", json=test_user_data)
        response = await async_client.post(f"{AUTH}/register", json=test_user_data)

        assert response.status_code == 409
        assert response.json()["message"] == "User with this email already exists"

    async def test_short_password_rejected(self, async_client: AsyncClient, test_user_data):
        test_user_data["password"] = "123"

        response = await async_client.post(f"{AUTH}/register", json=test_user_data)

        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 6 characters"


class TestLogin:
    async def test_login_success_updates_last_login(
        self, async_client: AsyncClient, test_user_data
    ):
        await async_client.post(f"{AUTH}/register", json=test_user_data)

        response = await async_client.post(
            f"{AUTH}/login",
            json={"email": test_user_data["email"], "password": test_user_data["password"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"]["last_login"] is not None
        assert body["data"]["token"]

    async def test_wrong_password(self, async_client: AsyncClient, test_user_data):
        await async_client.post(f"{AUTH}/register", json=test_user_data)

        response = await async_client.post(
            f"{AUTH}/login", json={"email": test_user_data["email"], "password": "wrong-password"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    async def test_unknown_email(self, async_client: AsyncClient):
        response = await async_client.post(
            f"{AUTH}/login", json={"email": "nobody@example.com", "password": "whatever"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    async def test_deactivated_account(self, async_client: AsyncClient, make_user):
        user = await make_user("Salesperson", is_active=False)

        response = await async_client.post(
            f"{AUTH}/login", json={"email": user.email, "password": "Password123!"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == (
            "Your account has been deactivated. Contact administrator."
        )


class TestTokens:
    async def test_refresh_issues_new_pair(self, async_client: AsyncClient, test_user_data):
        register = await async_client.post(f"{AUTH}/register", json=test_user_data)
        refresh_token = register.json()["data"]["refreshToken"]

        response = await async_client.post(f"{AUTH}/refresh", json={"refreshToken": refresh_token})

        assert response.status_code == 200
        assert response.json()["data"]["token"]
        assert response.json()["data"]["refreshToken"]

    async def test_access_token_cannot_refresh(self, async_client: AsyncClient, test_user_data):
        register = await async_client.post(f"{AUTH}/register", json=test_user_data)
        access_token = register.json()["data"]["token"]

        response = await async_client.post(f"{AUTH}/refresh", json={"refreshToken": access_token})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token."

    async def test_expired_token(self, async_client: AsyncClient, sales_user):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": sales_user.id,
                "type": "access",
                "iat": now - timedelta(hours=2),
                "exp": now - timedelta(hours=1),
                "iss": "crm-api",
            },
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        response = await async_client.get(
            f"{AUTH}/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired. Please login again."
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_garbage_token(self, async_client: AsyncClient):
        response = await async_client.get(
            f"{settings.API_PREFIX}/contacts/", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token."

    async def test_deactivated_user_token(self, async_client: AsyncClient, make_user, auth_headers):
        user = await make_user("Salesperson", is_active=False)

        response = await async_client.get(f"{AUTH}/me", headers=auth_headers(user))

        assert response.status_code == 401
        assert response.json()["message"] == "User account is deactivated."


class TestCurrentUser:
    async def test_me_lists_effective_permissions(
        self, async_client: AsyncClient, sales_headers, sales_user
    ):
        response = await async_client.get(f"{AUTH}/me", headers=sales_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == sales_user.id
        assert [r["name"] for r in data["user"]["roles"]] == ["Salesperson"]
        assert "contacts:update" in data["permissions"]
        assert "contacts:delete" not in data["permissions"]
        assert data["permissions"] == sorted(data["permissions"])

    async def test_me_without_token(self, async_client: AsyncClient):
        response = await async_client.get(f"{AUTH}/me")

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided. Authorization header required."

    async def test_logout(self, async_client: AsyncClient, sales_headers):
        response = await async_client.post(f"{AUTH}/logout", headers=sales_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
