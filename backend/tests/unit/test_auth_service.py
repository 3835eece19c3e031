"""
Unit tests for AuthService with a mocked user repository.
"""

from datetime import datetime, timedelta, timezone

import pytest

from barberx.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from barberx.core.security import get_user_from_token, hash_password, verify_password
from barberx.services.auth_service import AuthService
from tests.factories.repository_factories import make_user


@pytest.fixture
def service(mock_user_repo):
    return AuthService(mock_user_repo)


class TestRegister:
    def test_register_customer_hashes_password(self, service, mock_user_repo):
        result = service.register(
            {"name": " Jane Doe ", "email": "Jane@Example.com", "password": "secret1"},
            "customer",
        )

        assert result == {"message": "Customer registered successfully"}
        created = mock_user_repo.create.call_args[0][0]
        assert created.email == "jane@example.com"
        assert created.name == "Jane Doe"
        assert created.role == "customer"
        assert created.status is None
        assert created.password_hash != "secret1"
        assert verify_password("secret1", created.password_hash)

    def test_register_owner_starts_pending(self, service, mock_user_repo):
        result = service.register(
            {
                "name": "Owen",
                "email": "owen@example.com",
                "password": "secret1",
                "phoneNumber": "555-0100",
            },
            "owner",
        )

        assert result == {"message": "Owner registered successfully"}
        created = mock_user_repo.create.call_args[0][0]
        assert created.status == "pending"
        assert created.phone_number == "555-0100"

    def test_duplicate_email_is_a_conflict(self, service, mock_user_repo):
        mock_user_repo.get_by_email.return_value = make_user()

        with pytest.raises(ConflictError, match="Email already registered"):
            service.register(
                {"name": "Jane", "email": "jane@example.com", "password": "secret1"},
                "customer",
            )
        mock_user_repo.create.assert_not_called()


class TestLogin:
    def test_login_returns_token_with_role(self, service, mock_user_repo):
        mock_user_repo.get_by_email.return_value = make_user(
            id=7, role="owner", status="pending", password_hash=hash_password("secret1")
        )

        result = service.login("jane@example.com", "secret1")

        assert result["role"] == "owner"
        assert result["user"] == {"id": 7, "email": "jane@example.com", "fullName": "Jane Doe"}
        assert get_user_from_token(result["token"]) == {"user_id": 7, "role": "owner"}

    def test_wrong_password_is_rejected(self, service, mock_user_repo):
        mock_user_repo.get_by_email.return_value = make_user(
            password_hash=hash_password("secret1")
        )

        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            service.login("jane@example.com", "wrong-password")

    def test_unknown_email_is_rejected(self, service):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            service.login("nobody@example.com", "secret1")


class TestPasswordReset:
    def test_forgot_password_unknown_email(self, service):
        with pytest.raises(NotFoundError, match="User not found"):
            service.forgot_password("nobody@example.com")

    def test_forgot_password_stores_expiring_token(self, service, mock_user_repo):
        mock_user_repo.get_by_email.return_value = make_user(id=3)
        before = datetime.now(timezone.utc)

        result = service.forgot_password("jane@example.com")

        user_id, token, expires = mock_user_repo.set_reset_token.call_args[0]
        assert user_id == 3
        assert result == {"message": "Reset link generated", "resetToken": token}
        assert len(token) == 40
        assert before + timedelta(minutes=59) < expires <= before + timedelta(hours=1, seconds=5)

    def test_reset_with_unknown_token(self, service):
        with pytest.raises(ValueError, match="Invalid or expired token"):
            service.reset_password("nope", "newsecret")

    def test_reset_with_expired_token(self, service, mock_user_repo):
        mock_user_repo.get_by_reset_token.return_value = make_user(
            reset_password_token="abc",
            reset_password_expires=datetime.now(timezone.utc) - timedelta(seconds=1),
        )

        with pytest.raises(ValueError, match="Token expired"):
            service.reset_password("abc", "newsecret")
        mock_user_repo.update_password.assert_not_called()

    def test_reset_accepts_naive_utc_expiry(self, service, mock_user_repo):
        naive_future = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(minutes=5)
        mock_user_repo.get_by_reset_token.return_value = make_user(
            id=4, reset_password_token="abc", reset_password_expires=naive_future
        )

        result = service.reset_password("abc", "newsecret")

        assert result == {"message": "Password reset successful"}
        user_id, new_hash = mock_user_repo.update_password.call_args[0]
        assert user_id == 4
        assert verify_password("newsecret", new_hash)
