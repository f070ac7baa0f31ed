# studyhub/infra/db/credential_store.py
from __future__ import annotations

from studyhub.services._shared.ports import CredentialStore
from studyhub.services.auth.dto import Principal
from studyhub.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


class SQLAlchemyCredentialStore(CredentialStore):
    """
    Credential store over the ``users`` table.

    Each call runs in its own unit of work. The slot swap is one conditional
    ``UPDATE`` so concurrent rotations of the same token cannot both win.
    """

    def get_principal(self, user_id: int) -> Principal | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            user = uow.users.get(user_id)
            return Principal.from_user(user) if user is not None else None

    def set_refresh_token(self, user_id: int, token: str | None) -> bool:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.users.set_refresh_token(user_id, token)

    def swap_refresh_token(self, user_id: int, expected: str, new: str) -> bool:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.users.swap_refresh_token(user_id, expected, new)
