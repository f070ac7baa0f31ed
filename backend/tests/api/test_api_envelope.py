from tests.helpers.utils import envelope


def test_health(client, session):
    body = envelope(client.get("/api/v1/health"), 200)

    assert body["data"]["status"] == "ok"
    assert body["data"]["db"] == "ok"


def test_request_id_is_echoed(client, session):
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


def test_unknown_route_uses_error_envelope(client, session):
    body = envelope(client.get("/api/v1/does-not-exist"), 404)

    assert isinstance(body["error"], list)
    assert "data" not in body


def test_schema_errors_are_listed(client, session):
    resp = client.post("/api/v1/users/login", json={"email": "not-an-email"})

    body = envelope(resp, 400)
    assert body["message"] == "Validation failed"
    assert any(line.startswith("password") for line in body["error"])


def test_service_errors_use_error_envelope(client, session):
    body = envelope(client.get("/api/v1/users/me"), 401)
    assert body["message"] == "You need to login to access this route"
