"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, RefreshTokenSchema, RegisterSchema
from .comment import CommentInSchema, CommentSchema
from .common import MetaSchema, build_meta
from .resource import (
    RateSchema,
    RatingStatsSchema,
    ResourceCreateSchema,
    ResourceQuerySchema,
    ResourceSchema,
    ResourceUpdateSchema,
)
from .user import ChangePasswordSchema, ProfileSchema, UpdateAccountSchema, UserSchema

__all__ = [
    "LoginSchema",
    "RegisterSchema",
    "RefreshTokenSchema",
    "MetaSchema",
    "build_meta",
    "UserSchema",
    "ProfileSchema",
    "UpdateAccountSchema",
    "ChangePasswordSchema",
    "ResourceCreateSchema",
    "ResourceUpdateSchema",
    "ResourceQuerySchema",
    "ResourceSchema",
    "RateSchema",
    "RatingStatsSchema",
    "CommentInSchema",
    "CommentSchema",
]
