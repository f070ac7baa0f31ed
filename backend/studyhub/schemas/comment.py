"""Comment schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class CommentInSchema(Schema):
    """Length (3 to 1000 after trimming) is enforced by the comment service."""

    class Meta:
        unknown = EXCLUDE

    comment = fields.String(required=True)


class CommentAuthorSchema(Schema):
    full_name = fields.String(data_key="fullName")
    username = fields.String()
    avatar = fields.String(allow_none=True)


class CommentSchema(Schema):
    id = fields.Integer(required=True)
    resource_id = fields.Integer(data_key="resourceId")
    comment = fields.String(required=True)
    author = fields.Nested(CommentAuthorSchema)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
