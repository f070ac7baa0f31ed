"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. Each one carries the status code of the taxonomy it belongs to so
the API boundary can render it without a lookup table; the translation to
the response envelope happens once in ``studyhub/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.

    Notes
    -----
    PostgreSQL reports the constraint name. SQLite only reports the columns
    (``UNIQUE constraint failed: users.email``), so the ``uq_<table>_<col>``
    naming convention is also matched against ``<table>.<col>``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        table, _, column = name[3:].partition("_")
        return bool(column) and f"{table}.{column}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    :param message: Client-safe summary.
    :type message: str
    :param errors: Optional list of detail messages (e.g. field errors).
    :type errors: list[str] | None

    Notes
    -----
    - These are *not* HTTP errors, but ``status_code`` states the class of
      failure so the boundary can render them uniformly.
    - They can be safely raised from repositories or domain logic.
    """

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(ServiceError):
    """Malformed or missing input (400)."""

    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(ServiceError):
    """Missing, invalid or expired credential (401)."""

    status_code = 401
    default_message = "Unauthorized request"


class TokenExpiredError(AuthenticationError):
    """The token signature is valid but ``exp`` has passed."""

    default_message = "Token has expired, please log in again"


class TokenInvalidError(AuthenticationError):
    """Bad signature, wrong secret, or malformed token."""

    default_message = "Invalid access token"


class PrincipalNotFoundError(AuthenticationError):
    """The token refers to a user that no longer exists."""

    default_message = "Invalid access token"


class RefreshMismatchError(AuthenticationError):
    """The refresh token is not the one held in the user's slot."""

    default_message = "Invalid or expired Refresh Token"


class AuthorizationError(ServiceError):
    """Authenticated but not allowed: wrong role, not the owner, blocked (403)."""

    status_code = 403
    default_message = "Forbidden"


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Resource").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    :param detail: Optional client-facing message overriding the default.
    :type detail: str | None
    """

    entity: str
    key: str | int | None = None
    detail: str | None = None
    status_code: int = field(default=404, init=False)

    def __post_init__(self) -> None:
        ServiceError.__init__(self, self.detail or f"{self.entity} not found")


@dataclass(eq=False)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str
    status_code: int = field(default=409, init=False)

    def __post_init__(self) -> None:
        ServiceError.__init__(self, self.detail)
