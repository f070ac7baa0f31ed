from studyhub.models.user import User


def _register_payload(**overrides):
    payload = {
        "fullName": "Alan Turing",
        "email": "alan@example.com",
        "username": "Alan",
        "password": "EnigmaMachine1",
        "avatar": "https://cdn.example.com/avatars/alan.png",
    }
    payload.update(overrides)
    return payload


class TestRegister:
    def test_register_returns_created_envelope(self, client, session):
        resp = client.post("/api/v1/users/register", json=_register_payload())

        body = resp.get_json()
        assert resp.status_code == 201
        assert body["success"] is True
        assert body["statusCode"] == 201
        assert body["data"]["username"] == "alan"
        assert body["data"]["role"] == "user"
        assert "password" not in body["data"]
        assert "refreshToken" not in body["data"]

    def test_duplicate_registration_conflicts(self, client, session):
        client.post("/api/v1/users/register", json=_register_payload())

        resp = client.post("/api/v1/users/register", json=_register_payload(username="other"))

        assert resp.status_code == 409
        assert resp.get_json()["message"] == "User with email or username already exists"

    def test_missing_avatar(self, client, session):
        payload = _register_payload()
        payload.pop("avatar")

        resp = client.post("/api/v1/users/register", json=payload)

        assert resp.status_code == 400
        assert resp.get_json()["success"] is False


class TestLogin:
    def test_login_sets_cookies_and_returns_tokens(self, client, user):
        resp = client.post(
            "/api/v1/users/login", json={"email": user.email, "password": "Passw0rd!"}
        )

        data = resp.get_json()["data"]
        assert resp.status_code == 200
        assert data["user"]["id"] == user.id
        assert data["accessToken"] and data["refreshToken"]
        assert client.get_cookie("accessToken").value == data["accessToken"]
        assert client.get_cookie("refreshToken").value == data["refreshToken"]

    def test_wrong_password(self, client, user):
        resp = client.post("/api/v1/users/login", json={"email": user.email, "password": "nope"})

        assert resp.status_code == 401
        assert resp.get_json()["message"] == "Invalid user credentials"

    def test_me_with_cookie(self, client, user, login):
        login(user)

        resp = client.get("/api/v1/users/me")

        assert resp.status_code == 200
        assert resp.get_json()["data"]["fullName"] == "Ada Lovelace"

    def test_me_with_bearer_header(self, app, user, login):
        tokens = login(user, http=app.test_client())
        fresh = app.test_client()

        resp = fresh.get(
            "/api/v1/users/me", headers={"Authorization": f"Bearer {tokens['accessToken']}"}
        )

        assert resp.status_code == 200
        assert resp.get_json()["data"]["id"] == user.id

    def test_missing_token(self, client, session):
        resp = client.get("/api/v1/users/me")

        body = resp.get_json()
        assert resp.status_code == 401
        assert body["message"] == "You need to login to access this route"
        assert body["success"] is False

    def test_garbage_token(self, client, session):
        resp = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not.a.jwt"})
        assert resp.status_code == 401

    def test_blocked_user_cannot_login(self, client, user, session):
        user.is_blocked = True
        session.commit()

        resp = client.post(
            "/api/v1/users/login", json={"email": user.email, "password": "Passw0rd!"}
        )

        assert resp.status_code == 403


class TestRefreshAndLogout:
    def test_refresh_rotates_and_old_token_is_rejected(self, app, user, login):
        old = login(user, http=app.test_client())["refreshToken"]

        first = app.test_client().post("/api/v1/users/refresh-token", json={"refreshToken": old})
        reused = app.test_client().post("/api/v1/users/refresh-token", json={"refreshToken": old})

        assert first.status_code == 200
        assert first.get_json()["data"]["refreshToken"] != old
        assert reused.status_code == 401
        assert reused.get_json()["message"] == "Invalid or expired Refresh Token"

    def test_refresh_from_cookie(self, client, user, login, session):
        login(user)

        resp = client.post("/api/v1/users/refresh-token")

        new_token = resp.get_json()["data"]["refreshToken"]
        assert resp.status_code == 200
        assert client.get_cookie("refreshToken").value == new_token
        assert session.get(User, user.id).refresh_token == new_token

    def test_refresh_without_token(self, app, session):
        resp = app.test_client().post("/api/v1/users/refresh-token", json={})
        assert resp.status_code == 401

    def test_logout_clears_slot(self, app, client, user, login, session):
        token = login(user)["refreshToken"]

        out = client.post("/api/v1/users/logout")
        after = app.test_client().post("/api/v1/users/refresh-token", json={"refreshToken": token})

        assert out.status_code == 200
        assert client.get_cookie("accessToken") is None
        assert after.status_code == 401
        session.expire_all()
        assert session.get(User, user.id).refresh_token is None


class TestAccessTokenSources:
    def test_query_string_token(self, app, user, login):
        tokens = login(user, http=app.test_client())

        resp = app.test_client().get(f"/api/v1/users/me?accessToken={tokens['accessToken']}")

        assert resp.status_code == 200
        assert resp.get_json()["data"]["id"] == user.id

    def test_cookie_wins_over_header(self, client, user, login):
        login(user)

        resp = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not.a.jwt"})

        assert resp.status_code == 200

    def test_bad_cookie_is_not_rescued_by_header(self, app, user, login):
        tokens = login(user, http=app.test_client())
        http = app.test_client()
        http.set_cookie("accessToken", "not.a.jwt")

        resp = http.get(
            "/api/v1/users/me", headers={"Authorization": f"Bearer {tokens['accessToken']}"}
        )

        assert resp.status_code == 401

    def test_header_wins_over_query_string(self, app, user, login):
        tokens = login(user, http=app.test_client())

        resp = app.test_client().get(
            "/api/v1/users/me?accessToken=not.a.jwt",
            headers={"Authorization": f"Bearer {tokens['accessToken']}"},
        )

        assert resp.status_code == 200
