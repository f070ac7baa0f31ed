"""Fixtures for HTTP-level tests driven through the Flask test client."""

from __future__ import annotations

import pytest
from tests.factories.user import UserFactory

PASSWORD = "Passw0rd!"


@pytest.fixture()
def login(client, session):
    """Return a callable that logs ``user`` in and yields the response body.

    The test client keeps the ``accessToken``/``refreshToken`` cookies set by
    the login response, so subsequent requests are authenticated.
    """

    def _login(user, *, password: str = PASSWORD, http=None):
        http = http or client
        resp = http.post("/api/v1/users/login", json={"email": user.email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["data"]

    return _login


@pytest.fixture()
def user(session):
    user = UserFactory(full_name="Ada Lovelace", raw_password=PASSWORD)
    session.commit()
    return user
