"""User schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserSchema(Schema):
    """Public representation of a user. Never carries secrets."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    full_name = fields.String(data_key="fullName")
    avatar = fields.String()
    cover_image = fields.String(allow_none=True, data_key="coverImage")
    bio = fields.String()
    role = fields.String()
    created_at = fields.DateTime(data_key="createdAt")


class ProfileSchema(Schema):
    """Public profile looked up by username."""

    username = fields.String(required=True)
    full_name = fields.String(data_key="fullName")
    avatar = fields.String()
    cover_image = fields.String(allow_none=True, data_key="coverImage")
    bio = fields.String()
    resource_count = fields.Integer(data_key="resourceCount")
    created_at = fields.DateTime(data_key="createdAt")


class UpdateAccountSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(
        load_default=None, data_key="fullName", validate=validate.Length(min=1, max=100)
    )
    email = fields.Email(load_default=None, validate=validate.Length(max=254))
    bio = fields.String(load_default=None, validate=validate.Length(max=500))


class ChangePasswordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    old_password = fields.String(required=True, data_key="oldPassword")
    new_password = fields.String(
        required=True, data_key="newPassword", validate=validate.Length(min=8, max=128)
    )
