from fastapi.testclient import TestClient

from sio_capture.mini import create_mini_app


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    # /health reste cacheable
    assert "Cache-Control" not in r.headers


def test_health_rate_limit_disabled_in_tests(client):
    info = client.get("/health/rate-limit").json()
    assert info["enabled"] is False


def test_mini_app_health():
    with TestClient(create_mini_app()) as c:
        r = c.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_asgi_entrypoint_serves_health():
    from sio_capture.asgi import app

    with TestClient(app) as c:
        assert c.get("/health").json() == {"ok": True}
