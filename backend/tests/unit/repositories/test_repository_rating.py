import pytest
from studyhub.models.rating import Rating
from studyhub.repositories.rating import RatingRepository
from tests.factories.resource import ResourceFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> RatingRepository:
    return RatingRepository(session=session)


def _values(session, resource_id):
    return session.execute(
        Rating.__table__.select().where(Rating.resource_id == resource_id)
    ).all()


class TestRatingRepository:
    def test_upsert_keeps_one_row_per_pair_with_latest_value(self, repo, session):
        user = UserFactory()
        resource = ResourceFactory()
        session.flush()

        for value in (1, 5, 3):
            repo.upsert(user.id, resource.id, value)

        rows = _values(session, resource.id)
        assert len(rows) == 1
        assert rows[0].rating == 3

    def test_stats_is_unrounded_mean(self, repo, session):
        resource = ResourceFactory()
        users = [UserFactory() for _ in range(3)]
        session.flush()
        for user, value in zip(users, (1, 2, 2)):
            repo.upsert(user.id, resource.id, value)

        mean, count = repo.stats(resource.id)

        assert count == 3
        assert mean == pytest.approx(5 / 3)

    def test_stats_without_ratings(self, repo, session):
        resource = ResourceFactory()
        session.flush()

        assert repo.stats(resource.id) == (0.0, 0)

    def test_delete_for_pair(self, repo, session):
        user = UserFactory()
        resource = ResourceFactory()
        session.flush()
        repo.upsert(user.id, resource.id, 4)

        assert repo.delete_for_pair(user.id, resource.id) is True
        assert repo.delete_for_pair(user.id, resource.id) is False
        assert repo.get_for_pair(user.id, resource.id) is None
