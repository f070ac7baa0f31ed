import pytest
from studyhub.models.resource import Branch, Resource
from tests.factories.resource import CommentFactory, RatingFactory, ResourceFactory


class TestResourceModel:
    @pytest.mark.parametrize("semester", [0, 9, -1])
    def test_semester_out_of_range_is_rejected(self, semester):
        with pytest.raises(ValueError, match="Semester must be a number between 1 and 8"):
            Resource(semester=semester)

    def test_semester_must_be_integer(self):
        with pytest.raises(ValueError):
            Resource(semester="3")

    def test_branch_accepts_enum_values(self):
        assert Resource(branch="ECE").branch is Branch.ECE

    def test_unknown_branch_is_rejected(self):
        with pytest.raises(ValueError, match="Invalid branch provided"):
            Resource(branch="ART")

    def test_deleting_resource_cascades_ratings_and_comments(self, session):
        resource = ResourceFactory()
        RatingFactory(resource=resource)
        CommentFactory(resource=resource)
        session.flush()

        session.delete(resource)
        session.flush()

        from studyhub.models import Comment, Rating

        assert session.query(Rating).count() == 0
        assert session.query(Comment).count() == 0


class TestBranchParse:
    @pytest.mark.parametrize("raw", ["aiml", " AIML", Branch.AIML])
    def test_accepts_any_case(self, raw):
        assert Branch.parse(raw) is Branch.AIML

    def test_rejects_unknown(self):
        with pytest.raises(ValueError, match="Invalid branch provided"):
            Branch.parse("ARTS")
