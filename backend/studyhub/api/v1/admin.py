"""Moderation endpoints. Every route passes the auth gate, then the admin gate."""

from __future__ import annotations

from flask import Blueprint

from studyhub.api.deps import json_response, parse_id, require_auth, require_role, service_context, timing
from studyhub.models.user import Role
from studyhub.services.admin import AdminService

bp = Blueprint("admin", __name__)


@bp.delete("/delete-user/<user_id>")
@require_auth
@require_role(Role.ADMIN.value)
@timing
def delete_user(user_id: str):
    """Delete a user with their resources, ratings and comments."""

    AdminService(ctx=service_context()).delete_user(parse_id(user_id, label="user"))
    return json_response({}, "User and related resources deleted successfully")


@bp.patch("/block-resource/<resource_id>")
@require_auth
@require_role(Role.ADMIN.value)
@timing
def block_resource(resource_id: str):
    AdminService(ctx=service_context()).set_resource_blocked(parse_id(resource_id), True)
    return json_response(None, "Resource blocked successfully")


@bp.patch("/unblock-resource/<resource_id>")
@require_auth
@require_role(Role.ADMIN.value)
@timing
def unblock_resource(resource_id: str):
    AdminService(ctx=service_context()).set_resource_blocked(parse_id(resource_id), False)
    return json_response(None, "Resource unblocked successfully")


@bp.patch("/block-user/<user_id>")
@require_auth
@require_role(Role.ADMIN.value)
@timing
def block_user(user_id: str):
    AdminService(ctx=service_context()).set_user_blocked(parse_id(user_id, label="user"), True)
    return json_response(None, "User blocked successfully")


@bp.patch("/unblock-user/<user_id>")
@require_auth
@require_role(Role.ADMIN.value)
@timing
def unblock_user(user_id: str):
    AdminService(ctx=service_context()).set_user_blocked(parse_id(user_id, label="user"), False)
    return json_response(None, "User unblocked successfully")
