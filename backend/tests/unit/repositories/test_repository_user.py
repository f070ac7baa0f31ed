import pytest
from sqlalchemy import select
from studyhub.models.user import Role, User
from studyhub.repositories.user import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


class TestUserRepository:
    def test_lookup_by_email_and_username_is_case_insensitive(self, repo, session):
        user = UserFactory(email="carol@example.com", username="carol")
        session.flush()

        assert repo.get_by_email("CAROL@example.com").id == user.id
        assert repo.get_by_username(" Carol ").id == user.id
        assert repo.exists_by_email("carol@example.com")
        assert not repo.exists_by_username("nobody")

    def test_authenticate(self, repo, session):
        user = UserFactory(raw_password="right-password")
        session.flush()

        assert repo.authenticate(user.email, "right-password").id == user.id
        assert repo.authenticate(user.email, "wrong-password") is None
        assert repo.authenticate("missing@example.com", "right-password") is None

    def test_update_rejects_non_whitelisted_fields(self, repo, session):
        user = UserFactory()
        session.flush()

        with pytest.raises(ValueError):
            repo.update(user, role=Role.ADMIN)

    def test_set_refresh_token_reports_missing_user(self, repo):
        assert repo.set_refresh_token(999_999, "token") is False

    def test_swap_refresh_token_only_matches_current_value(self, repo, session):
        user = UserFactory()
        session.flush()
        assert repo.set_refresh_token(user.id, "first")

        assert repo.swap_refresh_token(user.id, "stale", "second") is False
        assert repo.swap_refresh_token(user.id, "first", "second") is True
        # The old value cannot win a second time.
        assert repo.swap_refresh_token(user.id, "first", "third") is False
        stored = session.execute(select(User.refresh_token).where(User.id == user.id)).scalar_one()
        assert stored == "second"

    def test_set_blocked_and_role(self, repo, session):
        user = UserFactory()
        session.flush()

        assert repo.set_blocked(user.id, True)
        assert repo.set_role(user.id, Role.ADMIN)
        row = session.execute(select(User.is_blocked, User.role).where(User.id == user.id)).one()
        assert row.is_blocked is True
        assert row.role is Role.ADMIN
