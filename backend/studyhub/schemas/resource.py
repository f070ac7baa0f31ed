"""Resource, rating and discovery schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_dump, validate

from studyhub.models.resource import MAX_SEMESTER, MIN_SEMESTER, Branch


def _validate_branch(value: str) -> None:
    """Same case-insensitive rule the model and discovery filter apply."""
    try:
        Branch.parse(value)
    except ValueError as exc:
        raise ValidationError("Invalid branch provided") from exc


class ResourceCreateSchema(Schema):
    """Payload for sharing a resource; ``url`` points at the stored file."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=3, max=255))
    description = fields.String(required=True, validate=validate.Length(min=10, max=500))
    semester = fields.Integer(
        required=True,
        validate=validate.Range(
            min=MIN_SEMESTER,
            max=MAX_SEMESTER,
            error="Semester must be a number between 1 and 8",
        ),
    )
    branch = fields.String(required=True, validate=_validate_branch)
    url = fields.Url(required=True, error_messages={"required": "Resource file is required"})
    file_size = fields.Integer(
        load_default=None, allow_none=True, data_key="fileSize", validate=validate.Range(min=0)
    )


class ResourceUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=3, max=255))
    description = fields.String(required=True, validate=validate.Length(min=10, max=500))


class ResourceQuerySchema(Schema):
    """Maps query-string keys; values stay raw for the query builder."""

    class Meta:
        unknown = EXCLUDE

    search_text = fields.String(load_default=None, data_key="searchQuery")
    semester = fields.String(load_default=None)
    branch = fields.String(load_default=None)
    page = fields.String(load_default=None)
    limit = fields.String(load_default=None)


class OwnerSchema(Schema):
    full_name = fields.String(allow_none=True, data_key="fullName")
    username = fields.String(allow_none=True)
    avatar = fields.String(allow_none=True)


class ResourceSchema(Schema):
    """Public representation of a resource.

    ``averageRating`` is left out until the resource has been rated.
    """

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String(required=True)
    semester = fields.Integer(required=True)
    branch = fields.String(required=True)
    url = fields.String(required=True)
    file_size = fields.Integer(allow_none=True, data_key="fileSize")
    owner_id = fields.Integer(allow_none=True, data_key="ownerId")
    owner = fields.Nested(OwnerSchema)
    average_rating = fields.Float(allow_none=True, data_key="averageRating")
    total_ratings = fields.Integer(data_key="totalRatings")
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")

    @post_dump
    def drop_unrated_average(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        if data.get("averageRating") is None:
            data.pop("averageRating", None)
        return data


class RateSchema(Schema):
    """``rating`` is checked by the rating service (integer in ``[1, 5]``)."""

    class Meta:
        unknown = EXCLUDE

    rating = fields.Raw(required=True, error_messages={"required": "Rating is required"})


class RatingStatsSchema(Schema):
    average_rating = fields.Float(data_key="averageRating")
    total_ratings = fields.Integer(data_key="totalRatings")
