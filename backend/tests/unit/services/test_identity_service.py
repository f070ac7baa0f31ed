import pytest
from studyhub.api.deps import get_token_service
from studyhub.repositories.user import UserRepository
from studyhub.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RefreshMismatchError,
    ValidationError,
)
from studyhub.services.identity.dto import (
    UserAuthIn,
    UserPasswordChangeIn,
    UserRegisterIn,
    UserUpdateIn,
)
from studyhub.services.identity.service import IdentityService
from tests.factories.resource import ResourceFactory
from tests.factories.user import UserFactory


def _register_dto(**overrides) -> UserRegisterIn:
    data = {
        "full_name": "John Doe",
        "email": "new@example.com",
        "username": "NewUser",
        "password": "password123",
        "avatar": "https://cdn.example.com/a.png",
    }
    data.update(overrides)
    return UserRegisterIn(**data)


class TestIdentityService:
    """Validate IdentityService behaviours for the User aggregate."""

    @pytest.fixture()
    def tokens(self, app):
        return get_token_service()

    @pytest.fixture()
    def service(self, tokens) -> IdentityService:
        """Return a fresh service instance per test."""
        return IdentityService(tokens=tokens)

    @pytest.fixture()
    def repo(self, session) -> UserRepository:
        """Provide repository bound to the current transactional session."""
        return UserRepository(session=session)

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def test_register_creates_user_with_role_user(self, service, repo):
        result = service.register(_register_dto())

        assert result.email == "new@example.com"
        assert result.username == "newuser"
        assert result.role == "user"

        stored = repo.get_by_email("new@example.com")
        assert stored is not None
        assert stored.verify_password("password123")
        assert stored.refresh_token is None

    def test_register_conflict_on_email(self, service, session):
        UserFactory(email="dup@example.com")
        session.commit()

        with pytest.raises(ConflictError) as exc:
            service.register(_register_dto(email="DUP@example.com", username="another"))
        assert exc.value.status_code == 409

    def test_register_conflict_on_username(self, service, session):
        UserFactory(username="taken")
        session.commit()

        with pytest.raises(ConflictError):
            service.register(_register_dto(username="Taken"))

    def test_register_requires_avatar(self, service):
        with pytest.raises(ValidationError, match="Avatar"):
            service.register(_register_dto(avatar=""))

    # --------------------------------------------------------------------- #
    # Login / logout
    # --------------------------------------------------------------------- #

    def test_login_then_verify_recovers_same_principal(self, service, tokens, session):
        user = UserFactory(raw_password="validpass1")
        session.commit()

        out = service.login(UserAuthIn(email=user.email, password="validpass1"))

        assert out.user.id == user.id
        assert tokens.verify_access(out.tokens.access_token).id == user.id
        session.refresh(user)
        assert user.refresh_token == out.tokens.refresh_token

    def test_login_with_wrong_password(self, service, session):
        user = UserFactory(raw_password="validpass1")
        session.commit()

        with pytest.raises(AuthenticationError, match="Invalid user credentials"):
            service.login(UserAuthIn(email=user.email, password="nope"))

    def test_login_blocked_user(self, service, session):
        user = UserFactory(raw_password="validpass1", is_blocked=True)
        session.commit()

        with pytest.raises(AuthorizationError, match="Your account has been blocked"):
            service.login(UserAuthIn(email=user.email, password="validpass1"))

    def test_logout_invalidates_refresh_token(self, service, tokens, session):
        user = UserFactory(raw_password="validpass1")
        session.commit()
        out = service.login(UserAuthIn(email=user.email, password="validpass1"))

        service.logout(user.id)

        with pytest.raises(RefreshMismatchError):
            tokens.rotate(out.tokens.refresh_token)

    def test_session_operations_need_token_service(self):
        with pytest.raises(RuntimeError):
            IdentityService().logout(1)

    # --------------------------------------------------------------------- #
    # Account
    # --------------------------------------------------------------------- #

    def test_update_account(self, service, session):
        user = UserFactory()
        session.commit()

        out = service.update_account(user.id, UserUpdateIn(full_name="New Name", bio="Hi"))

        assert out.full_name == "New Name"
        assert out.bio == "Hi"

    def test_update_account_requires_a_field(self, service, session):
        user = UserFactory()
        session.commit()

        with pytest.raises(ValidationError):
            service.update_account(user.id, UserUpdateIn())

    def test_update_account_email_conflict(self, service, session):
        UserFactory(email="first@example.com")
        second = UserFactory(email="second@example.com")
        session.commit()

        with pytest.raises(ConflictError):
            service.update_account(second.id, UserUpdateIn(email="first@example.com"))

    def test_change_password(self, service, repo, session):
        user = UserFactory(raw_password="oldpassword")
        session.commit()

        service.change_password(
            UserPasswordChangeIn(user_id=user.id, old_password="oldpassword", new_password="newpassword")
        )

        assert repo.authenticate(user.email, "newpassword") is not None

    def test_change_password_wrong_old(self, service, session):
        user = UserFactory(raw_password="oldpassword")
        session.commit()

        with pytest.raises(ValidationError, match="Invalid old password"):
            service.change_password(
                UserPasswordChangeIn(user_id=user.id, old_password="bad", new_password="newpassword")
            )

    def test_get_user_missing(self, service):
        with pytest.raises(NotFoundError):
            service.get_user(404_404)

    def test_get_profile_counts_visible_resources(self, service, session):
        user = UserFactory(username="profiled")
        ResourceFactory(owner=user)
        ResourceFactory(owner=user)
        ResourceFactory(owner=user, is_blocked=True)
        session.commit()

        profile = service.get_profile("Profiled")

        assert profile.username == "profiled"
        assert profile.resource_count == 2

    def test_get_profile_unknown(self, service):
        with pytest.raises(NotFoundError, match="User not found"):
            service.get_profile("ghost")
