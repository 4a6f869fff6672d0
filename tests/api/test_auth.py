import pytest
from httpx import AsyncClient
from fastapi import status

pytestmark = pytest.mark.asyncio

def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}

class TestLogin:
    async def test_login_success(self, client: AsyncClient, officer):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "officer@lasu.edu.ng", "password": "secret1"},
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["refresh_token"]

    async def test_login_wrong_password(self, client: AsyncClient, officer):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "officer@lasu.edu.ng", "password": "wrong-password"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Incorrect email or password"}

    async def test_login_requires_valid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "not-an-email", "password": "secret1"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("email")

class TestSession:
    async def test_me_reports_profile_and_role(self, client: AsyncClient, admin):
        admin_user, token = admin
        response = await client.get("/api/v1/auth/me", headers=bearer(token))
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["user_id"] == admin_user.id
        assert data["role"] == "admin"
        assert data["is_admin"] is True
        assert data["profile"]["full_name"] == "LASU Legal Admin"

    async def test_me_for_officer(self, client: AsyncClient, officer):
        _, token = officer
        response = await client.get("/api/v1/auth/me", headers=bearer(token))
        assert response.json()["is_admin"] is False
        assert response.json()["role"] == "legal_officer"

    async def test_user_without_role(self, client: AsyncClient, fake_supabase):
        _, token = fake_supabase.add_user("norole@lasu.edu.ng", None)
        response = await client.get("/api/v1/auth/me", headers=bearer(token))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] is None
        assert response.json()["is_admin"] is False

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_logout_revokes_token(self, client: AsyncClient, fake_supabase, officer):
        _, token = officer
        response = await client.post("/api/v1/auth/logout", headers=bearer(token))
        assert response.status_code == status.HTTP_200_OK
        assert token in fake_supabase.revoked
