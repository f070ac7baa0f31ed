import pytest
from studyhub.models.resource import Branch
from studyhub.services._shared.errors import ValidationError
from studyhub.services.resources.dto import ResourceQueryIn
from studyhub.services.resources.query import MAX_PAGE, ResourceQueryBuilder
from tests.helpers.utils import not_raises


@pytest.fixture()
def builder() -> ResourceQueryBuilder:
    return ResourceQueryBuilder(default_limit=10, max_limit=100)


class TestResourceQueryBuilder:
    def test_defaults(self, builder):
        flt = builder.build(ResourceQueryIn())

        assert flt.semester is None
        assert flt.branch is None
        assert flt.search_text is None
        assert (flt.page, flt.limit) == (1, 10)

    def test_parses_all_parameters(self, builder):
        flt = builder.build(
            ResourceQueryIn(search_text="  graphs ", semester="3", branch="cse", page="2", limit="25")
        )

        assert flt.semester == 3
        assert flt.branch is Branch.CSE
        assert flt.search_text == "graphs"
        assert (flt.page, flt.limit) == (2, 25)

    @pytest.mark.parametrize("semester", ["0", "9", "abc", "3.5", "-1"])
    def test_invalid_semester(self, builder, semester):
        with pytest.raises(ValidationError, match="Semester must be a number between 1 and 8"):
            builder.build(ResourceQueryIn(semester=semester))

    @pytest.mark.parametrize("semester", ["1", "8", 4])
    def test_valid_semester_bounds(self, builder, semester):
        with not_raises(ValidationError):
            builder.build(ResourceQueryIn(semester=semester))

    def test_invalid_branch(self, builder):
        with pytest.raises(ValidationError, match="Invalid branch provided"):
            builder.build(ResourceQueryIn(branch="ART"))

    def test_blank_values_are_ignored(self, builder):
        flt = builder.build(ResourceQueryIn(search_text="   ", semester="", branch=" "))

        assert flt.search_text is None
        assert flt.semester is None
        assert flt.branch is None

    def test_page_and_limit_are_clamped(self, builder):
        flt = builder.build(ResourceQueryIn(page="0", limit="5000"))

        assert flt.page == 1
        assert flt.limit == 100

    def test_non_numeric_page(self, builder):
        with pytest.raises(ValidationError):
            builder.build(ResourceQueryIn(page="first"))

    def test_search_text_is_kept_verbatim(self, builder):
        flt = builder.build(ResourceQueryIn(search_text="50%_off.*"))
        assert flt.search_text == "50%_off.*"

    @pytest.mark.parametrize("semester", ["²", "٣", "３"])
    def test_non_ascii_digits_are_rejected(self, builder, semester):
        with pytest.raises(ValidationError, match="Semester must be a number between 1 and 8"):
            builder.build(ResourceQueryIn(semester=semester))

    def test_non_ascii_page_and_limit(self, builder):
        with pytest.raises(ValidationError, match="Page must be a positive integer"):
            builder.build(ResourceQueryIn(page="²"))
        with pytest.raises(ValidationError, match="Limit must be a positive integer"):
            builder.build(ResourceQueryIn(limit="٣"))

    def test_page_beyond_ceiling(self, builder):
        with pytest.raises(ValidationError, match="Page must not exceed"):
            builder.build(ResourceQueryIn(page="99999999999999999999"))

    def test_page_at_ceiling(self, builder):
        with not_raises(ValidationError):
            flt = builder.build(ResourceQueryIn(page=str(MAX_PAGE), limit="100"))
        assert flt.page == MAX_PAGE

    @pytest.mark.parametrize("branch", ["cse", " Cse ", "CSE"])
    def test_branch_is_case_insensitive(self, builder, branch):
        assert builder.build(ResourceQueryIn(branch=branch)).branch is Branch.CSE
