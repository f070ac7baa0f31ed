"""Account endpoints for the authenticated user and public profiles."""

from __future__ import annotations

from flask import Blueprint, request

from studyhub.api.deps import current_principal, json_response, require_auth, timing
from studyhub.schemas import (
    ChangePasswordSchema,
    ProfileSchema,
    UpdateAccountSchema,
    UserSchema,
)
from studyhub.services.identity.dto import UserPasswordChangeIn, UserUpdateIn
from studyhub.services.identity.service import IdentityService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
profile_schema = ProfileSchema()
update_schema = UpdateAccountSchema()
password_schema = ChangePasswordSchema()


@bp.get("/me")
@require_auth
@timing
def me():
    user = IdentityService().get_user(current_principal().id)
    return json_response(user_schema.dump(user), "Current user fetched successfully")


@bp.patch("/me")
@require_auth
@timing
def update_me():
    """Update full name, email and/or bio."""

    data = update_schema.load(request.get_json(silent=True) or {})
    user = IdentityService().update_account(current_principal().id, UserUpdateIn(**data))
    return json_response(user_schema.dump(user), "Account details updated successfully")


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = password_schema.load(request.get_json(silent=True) or {})
    IdentityService().change_password(
        UserPasswordChangeIn(user_id=current_principal().id, **data)
    )
    return json_response({}, "Password changed successfully")


@bp.get("/profile/<username>")
@require_auth
@timing
def profile(username: str):
    """Public profile with the number of shared resources."""

    out = IdentityService().get_profile(username)
    return json_response(profile_schema.dump(out), "User profile fetched successfully")
