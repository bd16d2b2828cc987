import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskactivity.core.rate_limit import RateLimitMiddleware, TokenBucketRegistry


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestTokenBucketRegistry:

    def test_capacity_then_rejects(self):
        buckets = TokenBucketRegistry(capacity=2, refill_seconds=60, clock=FakeClock())

        assert buckets.try_consume("1.2.3.4") == (True, 0)
        assert buckets.try_consume("1.2.3.4") == (True, 0)
        assert buckets.try_consume("1.2.3.4") == (False, 60)

    def test_keys_are_independent(self):
        buckets = TokenBucketRegistry(capacity=1, refill_seconds=60, clock=FakeClock())

        assert buckets.try_consume("a")[0] is True
        assert buckets.try_consume("b")[0] is True
        assert buckets.try_consume("a")[0] is False

    def test_full_refill_after_window(self):
        clock = FakeClock()
        buckets = TokenBucketRegistry(capacity=1, refill_seconds=60, clock=clock)
        buckets.try_consume("a")

        clock.now += 45
        assert buckets.try_consume("a") == (False, 15)

        clock.now += 15
        assert buckets.try_consume("a") == (True, 0)


@pytest.fixture
def limited_client():
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, enabled=True, capacity=2, refill_minutes=1)

    @app.post("/api/auth/login")
    def api_login():
        return {"ok": True}

    @app.get("/login")
    def login_page():
        return {"ok": True}

    @app.post("/login")
    def login_submit():
        return {"ok": True}

    @app.post("/other")
    def other():
        return {"ok": True}

    return TestClient(app)


def test_json_429_with_retry_after(limited_client):
    for _ in range(2):
        assert limited_client.post("/api/auth/login").status_code == 200

    response = limited_client.post("/api/auth/login")

    assert response.status_code == 429
    assert response.json()["error"] == "Too Many Requests"
    assert int(response.headers["Retry-After"]) > 0


def test_browser_gets_rate_limit_page(limited_client):
    headers = {"Accept": "text/html,application/xhtml+xml"}
    for _ in range(2):
        limited_client.post("/login", headers=headers)

    response = limited_client.post("/login", headers=headers)

    assert response.status_code == 429
    assert "text/html" in response.headers["content-type"]
    assert "Too Many Requests" in response.text


def test_cloudflare_ip_header_separates_clients(limited_client):
    for _ in range(2):
        limited_client.post("/api/auth/login", headers={"CF-Connecting-IP": "10.0.0.1"})

    assert limited_client.post("/api/auth/login", headers={"CF-Connecting-IP": "10.0.0.1"}).status_code == 429
    assert limited_client.post("/api/auth/login", headers={"CF-Connecting-IP": "10.0.0.2"}).status_code == 200


def test_other_paths_and_login_form_get_not_limited(limited_client):
    for _ in range(5):
        assert limited_client.post("/other").status_code == 200
        assert limited_client.get("/login").status_code == 200


def test_disabled_limiter_passes_everything():
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, enabled=False, capacity=1)

    @app.post("/api/auth/login")
    def api_login():
        return {"ok": True}

    client = TestClient(app)
    assert all(client.post("/api/auth/login").status_code == 200 for _ in range(3))
