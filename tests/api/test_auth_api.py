"""Tests for login and token-protected access."""

import pytest
from httpx import AsyncClient


class TestLogin:
    """Tests for POST /api/auth/login."""

    @pytest.mark.asyncio
    async def test_login_returns_usable_token(self, client: AsyncClient, admin_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": "Admin@Example.com", "password": "admin-pass"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "bearer"
        assert data["user"]["id"] == admin_user.id
        assert data["user"]["role"] == "admin"
        assert "password" not in data["user"]

        headers = {"Authorization": f"Bearer {data['accessToken']}"}
        me = await client.get(f"/api/users/{admin_user.id}", headers=headers)
        assert me.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"email": "a@b.com"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: AsyncClient, regular_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": "ana@example.com", "password": "nope"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login",
            json={"email": "ghost@example.com", "password": "x"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_inactive_user(self, client: AsyncClient, repos, regular_user):
        regular_user.is_active = False
        await repos.users.update(regular_user)

        response = await client.post(
            "/api/auth/login",
            json={"email": "ana@example.com", "password": "user-pass"},
        )

        assert response.status_code == 401


class TestProtectedRoutes:
    """Tests for the bearer token dependency."""

    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/minutes")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get(
            "/api/minutes", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_deleted_user(self, client: AsyncClient, repos, regular_user, user_headers):
        await repos.users.delete(regular_user.id)

        response = await client.get("/api/minutes", headers=user_headers)

        assert response.status_code == 403
