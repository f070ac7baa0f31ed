"""Flask CLI commands for managing accounts outside the HTTP surface."""

from __future__ import annotations

import logging

import click
from flask.cli import AppGroup

from studyhub.models.user import Role
from studyhub.services._shared.errors import ServiceError
from studyhub.services.identity.dto import UserRegisterIn
from studyhub.services.identity.service import IdentityService
from studyhub.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)

users_cli = AppGroup("users", help="Account administration commands.")


def _promote(username: str) -> int:
    with SQLAlchemyUnitOfWork() as uow:
        user = uow.users.get_by_username(username)
        if user is None:
            raise click.ClickException(f"User '{username}' not found")
        uow.users.set_role(user.id, Role.ADMIN)
        return user.id


@users_cli.command("create-admin")
@click.option("--email", required=True)
@click.option("--username", required=True)
@click.option("--full-name", "full_name", required=True)
@click.option("--avatar", required=True, help="Avatar URL.")
@click.password_option()
def create_admin(email: str, username: str, full_name: str, avatar: str, password: str) -> None:
    """Register an account and grant it the admin role."""
    try:
        user = IdentityService().register(
            UserRegisterIn(
                full_name=full_name,
                email=email,
                username=username,
                password=password,
                avatar=avatar,
            )
        )
    except ServiceError as exc:
        raise click.ClickException(exc.message) from exc
    _promote(user.username)
    LOGGER.info("Admin created", extra={"user_id": user.id})
    click.echo(f"Admin '{user.username}' created (id={user.id}).")


@users_cli.command("promote")
@click.argument("username")
def promote(username: str) -> None:
    """Grant the admin role to an existing user."""
    user_id = _promote(username)
    click.echo(f"User '{username.lower().strip()}' is now an admin (id={user_id}).")
