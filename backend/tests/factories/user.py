"""Factory Boy definition for :class:`studyhub.models.user.User`."""

from __future__ import annotations

from functools import lru_cache

import factory
from studyhub.models.user import Role, User
from tests.factories import BaseFactory
from werkzeug.security import generate_password_hash

DEFAULT_PASSWORD = "Passw0rd!"


@lru_cache(maxsize=32)
def hash_password(raw: str) -> str:
    # Cheap iteration count: hashing cost is irrelevant in tests.
    return generate_password_hash(raw, method="pbkdf2:sha256:1000")


class UserFactory(BaseFactory):
    """
    Build persisted :class:`studyhub.models.user.User` instances.

    Pass ``raw_password=...`` to choose the password; the hash is computed
    up front so the row is complete on the first flush.
    """

    class Meta:
        model = User

    class Params:
        raw_password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.Faker("name")
    avatar = factory.LazyAttribute(lambda o: f"https://cdn.example.com/avatars/{o.username}.png")
    role = Role.USER
    is_blocked = False
    password_hash = factory.LazyAttribute(lambda o: hash_password(o.raw_password))


class AdminFactory(UserFactory):
    role = Role.ADMIN
