import pytest
from studyhub.services._shared.base import ServiceContext
from studyhub.services._shared.errors import NotFoundError, ValidationError
from studyhub.services.comments import CommentService
from tests.factories.resource import CommentFactory, ResourceFactory
from tests.factories.user import UserFactory


def _service(user) -> CommentService:
    return CommentService(ctx=ServiceContext(actor_id=user.id, actor_role="user"))


class TestCommentService:
    def test_add_and_list(self, session):
        author = UserFactory(full_name="Commenter")
        resource = ResourceFactory()
        session.commit()

        added = _service(author).add(resource.id, "  Great summary!  ")
        listed = CommentService().list(resource.id)

        assert added.comment == "Great summary!"
        assert [c.id for c in listed] == [added.id]
        assert listed[0].author.full_name == "Commenter"

    @pytest.mark.parametrize("text", ["", "hi", "x" * 1001])
    def test_length_limits(self, session, text):
        author = UserFactory()
        resource = ResourceFactory()
        session.commit()

        with pytest.raises(ValidationError):
            _service(author).add(resource.id, text)

    def test_only_author_can_edit_or_delete(self, session):
        comment = CommentFactory()
        stranger = UserFactory()
        session.commit()

        with pytest.raises(NotFoundError, match="not the author"):
            _service(stranger).edit(comment.resource_id, comment.id, "Changed text")
        with pytest.raises(NotFoundError, match="not the author"):
            _service(stranger).delete(comment.resource_id, comment.id)

    def test_author_edits_and_deletes(self, session):
        comment = CommentFactory()
        session.commit()
        service = _service(comment.user)
        resource_id, comment_id = comment.resource_id, comment.id

        edited = service.edit(resource_id, comment_id, "Updated thoughts")
        assert edited.comment == "Updated thoughts"

        service.delete(resource_id, comment_id)
        assert CommentService().list(resource_id) == []

    def test_blocked_resource_refuses_comments(self, session):
        author = UserFactory()
        resource = ResourceFactory(is_blocked=True)
        session.commit()

        with pytest.raises(NotFoundError):
            _service(author).add(resource.id, "Hello there")
        with pytest.raises(NotFoundError):
            CommentService().list(resource.id)
