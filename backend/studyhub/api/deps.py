"""Shared API helpers: envelope, gates, request parsing and cookies."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from studyhub.core.logger import ensure_request_id
from studyhub.infra.db.credential_store import SQLAlchemyCredentialStore
from studyhub.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from studyhub.services._shared.base import ServiceContext
from studyhub.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from studyhub.services.auth.dto import AuthTokenConfig, Principal, TokenPairOut
from studyhub.services.auth.tokens import TokenService

F = TypeVar("F", bound=Callable[..., Any])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"
LOGIN_REQUIRED = "You need to login to access this route"
MAX_ID = 2**63 - 1


# ------------------------------- Envelope ------------------------------------


def json_response(data: Any = None, message: str = "Success", *, status: int = 200) -> Response:
    """Return ``{statusCode, message, data, success}`` with ``success = status < 400``."""

    response = jsonify(
        {"statusCode": status, "message": message, "data": data, "success": status < 400}
    )
    response.status_code = status
    return response


# ------------------------------- Token service -------------------------------


def get_token_service() -> TokenService:
    """Return the app-wide :class:`TokenService`, built on first use from config."""

    service = current_app.extensions.get("token_service")
    if service is None:
        cfg = current_app.config
        service = TokenService(
            token_provider=PyJWTTokenProvider.from_config(cfg),
            credential_store=SQLAlchemyCredentialStore(),
            token_cfg=AuthTokenConfig(
                access_expires=timedelta(minutes=int(cfg["ACCESS_TOKEN_EXPIRES_MINUTES"])),
                refresh_expires=timedelta(days=int(cfg["REFRESH_TOKEN_EXPIRES_DAYS"])),
            ),
        )
        current_app.extensions["token_service"] = service
    return cast(TokenService, service)


# ------------------------------- Gates ---------------------------------------


def extract_access_token() -> str | None:
    """Cookie first, then ``Authorization: Bearer``, then ``?accessToken=``."""

    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.args.get(ACCESS_COOKIE) or None


def require_auth(func: F) -> F:
    """Resolve the request's principal into ``g.current_user`` or reject with 401.

    Blocked users are rejected with 403. Nothing downstream runs on failure.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.current_user = None
        token = extract_access_token()
        if not token:
            raise AuthenticationError(LOGIN_REQUIRED)
        g.current_user = get_token_service().authenticate(token)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(role: str) -> Callable[[F], F]:
    """Require ``g.current_user.role == role``. Must run after :func:`require_auth`."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            principal = getattr(g, "current_user", None)
            if principal is None:
                raise AuthenticationError(LOGIN_REQUIRED)
            if principal.role != role:
                raise AuthorizationError("Access denied: Admins only" if role == "admin" else None)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_principal() -> Principal:
    principal = getattr(g, "current_user", None)
    if principal is None:
        raise AuthenticationError(LOGIN_REQUIRED)
    return cast(Principal, principal)


def service_context() -> ServiceContext:
    """Build the service context from the authenticated principal."""

    principal = current_principal()
    return ServiceContext(
        actor_id=principal.id, actor_role=principal.role, request_id=ensure_request_id()
    )


# ------------------------------- Parsing -------------------------------------


def parse_id(raw: str, *, label: str = "resource") -> int:
    """Parse a path identifier; anything but a positive 64-bit integer is a 400."""

    if not (raw.isascii() and raw.isdigit()) or not 1 <= int(raw) <= MAX_ID:
        raise ValidationError(f"Invalid {label} ID format")
    return int(raw)


def request_payload() -> dict[str, Any]:
    """JSON body, or form fields for multipart/urlencoded submissions."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


# ------------------------------- Cookies -------------------------------------


def _cookie_options() -> dict[str, Any]:
    cfg = current_app.config
    return {
        "httponly": True,
        "secure": bool(cfg.get("COOKIE_SECURE", True)),
        "samesite": cfg.get("COOKIE_SAMESITE", "Lax"),
    }


def set_auth_cookies(response: Response, pair: TokenPairOut) -> Response:
    cfg = current_app.config
    opts = _cookie_options()
    response.set_cookie(
        ACCESS_COOKIE,
        pair.access_token,
        max_age=int(cfg["ACCESS_TOKEN_EXPIRES_MINUTES"]) * 60,
        **opts,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        pair.refresh_token,
        max_age=int(cfg["REFRESH_TOKEN_EXPIRES_DAYS"]) * 24 * 3600,
        **opts,
    )
    return response


def clear_auth_cookies(response: Response) -> Response:
    opts = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **opts)
    response.delete_cookie(REFRESH_COOKIE, **opts)
    return response


# ------------------------------- Timing --------------------------------------


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
