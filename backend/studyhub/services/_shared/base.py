# studyhub/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from studyhub.services._shared.errors import AuthorizationError, ValidationError
from studyhub.services._shared.policies.common import can_manage
from studyhub.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated user identifier.
    :param actor_role: Role of the authenticated user (``"user"``/``"admin"``).
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    actor_role: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (actor, ownership).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; they always use a Unit of Work.
    - Errors are raised as :mod:`studyhub.services._shared.errors` types and
      translated to HTTP once, at the API boundary.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ----------------------- Validation utilities ---------------------------

    def ensure_actor(self) -> int:
        """Return the acting user id, failing when the context carries none."""
        if self.ctx.actor_id is None:
            raise ValidationError("An authenticated actor is required.")
        return self.ctx.actor_id

    # --------------------------- AuthZ --------------------------------

    def ensure_can_manage(self, owner_id: int | None, *, msg: str | None = None) -> None:
        """
        Ensure the current actor owns the entity or is an administrator.

        :param owner_id: Owner of the entity being modified.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If the actor may not modify it.
        """
        if not can_manage(
            actor_id=self.ctx.actor_id, actor_role=self.ctx.actor_role, owner_id=owner_id
        ):
            raise AuthorizationError(msg or "You are not allowed to modify this resource")
