"""Session endpoints: register, login, logout and token refresh."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from studyhub.api.deps import (
    REFRESH_COOKIE,
    clear_auth_cookies,
    current_principal,
    get_token_service,
    json_response,
    request_payload,
    require_auth,
    set_auth_cookies,
    timing,
)
from studyhub.core.extensions import limiter
from studyhub.schemas import LoginSchema, RefreshTokenSchema, RegisterSchema, UserSchema
from studyhub.services.identity.dto import UserAuthIn, UserRegisterIn
from studyhub.services.identity.service import IdentityService

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Register a new user and return the created representation."""

    data = register_schema.load(request_payload())
    user = IdentityService().register(UserRegisterIn(**data))
    return json_response(user_schema.dump(user), "User registered successfully", status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and set the access/refresh cookie pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = IdentityService(tokens=get_token_service()).login(UserAuthIn(**data))
    body = {
        "user": user_schema.dump(result.user),
        "accessToken": result.tokens.access_token,
        "refreshToken": result.tokens.refresh_token,
    }
    response = json_response(body, "User logged in successfully")
    return set_auth_cookies(response, result.tokens)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Clear the refresh slot and both cookies."""

    IdentityService(tokens=get_token_service()).logout(current_principal().id)
    return clear_auth_cookies(json_response({}, "User logged out successfully"))


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token (cookie first, then body) into a new pair."""

    token = request.cookies.get(REFRESH_COOKIE)
    if not token:
        token = refresh_schema.load(request.get_json(silent=True) or {})["refresh_token"]
    pair = get_token_service().rotate(token)
    body = {"accessToken": pair.access_token, "refreshToken": pair.refresh_token}
    return set_auth_cookies(json_response(body, "Access token refreshed"), pair)
