"""
Identity provider endpoint tests for CareRelay API
"""
from httpx import AsyncClient


class TestUserRegistration:
    """Test user registration functionality"""

    async def test_successful_registration(self, client: AsyncClient, test_user_data):
        """Test successful user registration"""
        response = await client.post("/api/v1/auth/register", json=test_user_data)

        assert response.status_code == 201
        data = response.json()
        assert "access_token" in data
        assert data["token_type"] == "bearer"

    async def test_duplicate_email_registration(self, client: AsyncClient, test_user_data):
        """Test registration with duplicate email"""
        response1 = await client.post("/api/v1/auth/register", json=test_user_data)
        assert response1.status_code == 201

        response2 = await client.post("/api/v1/auth/register", json=test_user_data)
        assert response2.status_code == 409
        assert "already exists" in response2.json()["detail"]

    async def test_email_is_case_insensitive(self, client: AsyncClient, test_user_data):
        response1 = await client.post("/api/v1/auth/register", json=test_user_data)
        assert response1.status_code == 201

        shouting = {**test_user_data, "email": test_user_data["email"].upper()}
        response2 = await client.post("/api/v1/auth/register", json=shouting)
        assert response2.status_code == 409

    async def test_weak_password_registration(self, client: AsyncClient):
        """Test registration with weak password"""
        weak_password_data = {
            "email": "test@example.com",
            "password": "weak",
            "password_confirm": "weak"
        }

        response = await client.post("/api/v1/auth/register", json=weak_password_data)
        assert response.status_code == 422

    async def test_password_mismatch_registration(self, client: AsyncClient):
        """Test registration with password mismatch"""
        mismatch_data = {
            "email": "test@example.com",
            "password": "StrongPassword123!",
            "password_confirm": "DifferentPassword123!"
        }

        response = await client.post("/api/v1/auth/register", json=mismatch_data)
        assert response.status_code == 422


class TestUserLogin:
    """Test user login functionality"""

    async def test_oauth2_login_success(self, client: AsyncClient, authenticated_user):
        """Test successful OAuth2 login"""
        login_data = {
            "username": authenticated_user["user_data"]["email"],
            "password": authenticated_user["user_data"]["password"]
        }

        response = await client.post(
            "/api/v1/auth/login",
            data=login_data,
            headers={"Content-Type": "application/x-www-form-urlencoded"}
        )

        assert response.status_code == 200
        assert "access_token" in response.json()

    async def test_json_login_success(self, client: AsyncClient, authenticated_user):
        """Test successful JSON login"""
        login_data = {
            "username": authenticated_user["user_data"]["email"],
            "password": authenticated_user["user_data"]["password"]
        }

        response = await client.post("/api/v1/auth/login-json", json=login_data)

        assert response.status_code == 200
        assert "access_token" in response.json()

    async def test_invalid_credentials_login(self, client: AsyncClient, authenticated_user):
        """Test login with invalid credentials"""
        login_data = {
            "username": authenticated_user["user_data"]["email"],
            "password": "WrongPassword123!"
        }

        response = await client.post("/api/v1/auth/login-json", json=login_data)
        assert response.status_code == 401
        assert "Incorrect username or password" in response.json()["detail"]

    async def test_unknown_user_login(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/login-json", json={
            "username": "nobody@example.com",
            "password": "WrongPassword123!"
        })
        assert response.status_code == 401


class TestLogout:
    """Test logout functionality"""

    async def test_successful_logout(self, client: AsyncClient, authenticated_user):
        """Test successful logout"""
        response = await client.post("/api/v1/auth/logout", headers=authenticated_user["headers"])
        assert response.status_code == 204

    async def test_logout_without_token(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/logout")
        assert response.status_code == 401

    async def test_token_blacklisted_after_logout(self, client: AsyncClient, authenticated_user):
        """Test that token is blacklisted after logout"""
        headers = authenticated_user["headers"]

        logout_response = await client.post("/api/v1/auth/logout", headers=headers)
        assert logout_response.status_code == 204

        profile_response = await client.get("/api/v1/profiles/me", headers=headers)
        assert profile_response.status_code == 401

        second_logout = await client.post("/api/v1/auth/logout", headers=headers)
        assert second_logout.status_code == 401
