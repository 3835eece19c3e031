"""
Integration tests for the auth controller using the Flask test client.

Accounts are created through the public signup routes against the in-memory
SQLite database; no repository or service is mocked.
"""

import pytest

from tests.fixtures.integration_auth_fixtures import ApiActor


@pytest.mark.auth
class TestSignup:
    def test_customer_signup(self, client):
        response = client.post(
            "/api/auth/signup/customer",
            json={"name": "Jane Doe", "email": "jane@example.com", "password": "secret1"},
        )

        assert response.status_code == 201
        body = response.get_json()
        assert body["success"] is True
        assert body["message"] == "Customer registered successfully"

    def test_owner_signup_requires_phone(self, client):
        response = client.post(
            "/api/auth/signup/owner",
            json={"name": "Owen", "email": "owen@example.com", "password": "secret1"},
        )

        assert response.status_code == 400
        body = response.get_json()
        assert body["message"] == "Validation failed"
        assert "Phone number is required" in body["errors"]

    def test_duplicate_email_across_roles(self, client):
        ApiActor(client, "customer", "same@example.com").register()
        response = ApiActor(client, "owner", "SAME@example.com").register()

        assert response.status_code == 409
        assert response.get_json() == {"success": False, "error": "Email already registered"}

    def test_non_json_body(self, client):
        response = client.post("/api/auth/signup/customer", data="name=x")
        assert response.status_code == 400
        assert response.get_json()["success"] is False


@pytest.mark.auth
class TestLogin:
    def test_login_returns_token_and_user(self, client):
        actor = ApiActor(client, "owner", "boss@example.com")
        actor.register(name="Big Boss")

        response = client.post(
            "/api/auth/login", json={"email": "Boss@Example.com", "password": "secret123"}
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["role"] == "owner"
        assert data["user"]["email"] == "boss@example.com"
        assert data["user"]["fullName"] == "Big Boss"
        assert data["token"]

    def test_wrong_password(self, client):
        ApiActor(client, "customer", "jane@example.com").register()
        response = client.post(
            "/api/auth/login", json={"email": "jane@example.com", "password": "nope-nope"}
        )

        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid credentials"

    def test_unknown_email(self, client):
        response = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"}
        )
        assert response.status_code == 401


@pytest.mark.auth
class TestRoleGating:
    def test_missing_header(self, client):
        response = client.get("/api/customer/profile")
        assert response.status_code == 401
        assert response.get_json()["error"] == "Authorization header missing"

    def test_garbage_token(self, client):
        response = client.get(
            "/api/owner/dashboard", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 403
        assert response.get_json()["error"] == "Invalid or expired token"

    def test_customer_cannot_reach_owner_routes(self, customer):
        response = customer.get("/api/owner/dashboard")
        assert response.status_code == 403
        assert response.get_json()["error"] == "Access denied: insufficient role"

    def test_owner_cannot_reach_customer_routes(self, owner):
        assert owner.get("/api/customer-profile/my-profile").status_code == 403

    def test_customer_landing_route(self, customer):
        response = customer.get("/api/customer/profile")
        assert response.status_code == 200
        assert response.get_json()["message"] == "Customer profile route"

    def test_owner_dashboard(self, owner):
        response = owner.get("/api/owner/dashboard")
        assert response.status_code == 200
        body = response.get_json()
        assert body["message"] == "Welcome to owner dashboard"
        assert body["data"]["status"] == "pending"


@pytest.mark.auth
class TestPasswordReset:
    def test_full_reset_flow(self, client):
        actor = ApiActor(client, "customer", "forgetful@example.com")
        actor.register()

        response = client.post(
            "/api/auth/forgot-password", json={"email": "forgetful@example.com"}
        )
        assert response.status_code == 200
        token = response.get_json()["data"]["resetToken"]

        response = client.post(
            "/api/auth/reset-password", json={"token": token, "newPassword": "brandnew1"}
        )
        assert response.status_code == 200
        assert response.get_json()["message"] == "Password reset successful"

        old = client.post(
            "/api/auth/login",
            json={"email": "forgetful@example.com", "password": "secret123"},
        )
        assert old.status_code == 401

        actor.password = "brandnew1"
        actor.login()
        assert actor.token

    def test_reset_token_is_single_use(self, client):
        ApiActor(client, "customer", "once@example.com").register()
        token = client.post(
            "/api/auth/forgot-password", json={"email": "once@example.com"}
        ).get_json()["data"]["resetToken"]

        first = client.post(
            "/api/auth/reset-password", json={"token": token, "newPassword": "another1"}
        )
        second = client.post(
            "/api/auth/reset-password", json={"token": token, "newPassword": "another2"}
        )

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.get_json()["error"] == "Invalid or expired token"

    def test_forgot_password_unknown_email(self, client):
        response = client.post(
            "/api/auth/forgot-password", json={"email": "ghost@example.com"}
        )
        assert response.status_code == 404
        assert response.get_json()["error"] == "User not found"

    def test_forgot_password_requires_email(self, client):
        response = client.post("/api/auth/forgot-password", json={})
        assert response.status_code == 400
        assert response.get_json()["message"] == "Email is required"
