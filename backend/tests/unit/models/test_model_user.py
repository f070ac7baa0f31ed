import pytest
from studyhub.models.user import DEFAULT_BIO, Role, User
from tests.factories.user import UserFactory


class TestUserModel:
    def test_email_and_username_are_normalized(self):
        user = User(email="  Alice@Example.COM ", username="  Alice ")
        assert user.email == "alice@example.com"
        assert user.username == "alice"

    def test_rejects_malformed_email(self):
        with pytest.raises(ValueError):
            User(email="not-an-email")

    def test_password_is_write_only_and_hashed(self):
        user = User(email="bob@example.com", username="bob")
        user.password = "S3cret-pass"

        assert user.password_hash != "S3cret-pass"
        assert user.verify_password("S3cret-pass")
        assert not user.verify_password("wrong")
        with pytest.raises(AttributeError):
            _ = user.password

    def test_defaults_after_flush(self, session):
        user = UserFactory(raw_password="whatever1")
        session.flush()
        session.refresh(user)

        assert user.role is Role.USER
        assert not user.is_admin
        assert user.bio == DEFAULT_BIO
        assert user.refresh_token is None
        assert user.is_blocked is False
        assert user.created_at is not None
