"""Tests for security headers, rate limiting, and client IP resolution."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from votesmart_api.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, get_client_ip


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/test")
    async def test_route() -> dict:
        return {"ok": True}

    return app


def _make_request(headers: dict[str, str], client: tuple[str, int] | None = ("10.0.0.1", 1234)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        return TestClient(app)

    def test_headers_present(self, client: TestClient) -> None:
        response = client.get("/test")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=5)
        return TestClient(app)

    def test_requests_within_limit_succeed(self, client: TestClient) -> None:
        for _ in range(5):
            assert client.get("/test").status_code == 200

    def test_request_over_limit_returns_429(self, client: TestClient) -> None:
        for _ in range(5):
            client.get("/test")
        response = client.get("/test")
        assert response.status_code == 429
        assert response.json() == {"detail": "Rate limit exceeded"}

    def test_limit_is_per_client(self) -> None:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=1, trusted_proxy_headers=["X-Real-IP"])
        client = TestClient(app)

        assert client.get("/test", headers={"X-Real-IP": "1.1.1.1"}).status_code == 200
        assert client.get("/test", headers={"X-Real-IP": "1.1.1.1"}).status_code == 429
        assert client.get("/test", headers={"X-Real-IP": "2.2.2.2"}).status_code == 200

    def test_untrusted_header_rotation_does_not_bypass_limit(self) -> None:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=2)
        client = TestClient(app)

        codes = [client.get("/test", headers={"X-Forwarded-For": f"10.1.0.{n}"}).status_code for n in range(50)]
        assert codes[:2] == [200, 200]
        assert set(codes[2:]) == {429}

    def test_forwarded_for_prefix_cannot_be_spoofed(self) -> None:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=2, trusted_proxy_headers=["X-Forwarded-For"])
        client = TestClient(app)

        codes = [
            client.get("/test", headers={"X-Forwarded-For": f"10.1.0.{n}, 203.0.113.5"}).status_code for n in range(10)
        ]
        assert codes.count(429) == 8

    def test_retry_after_header(self) -> None:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=1, clock=lambda: 1000.0)
        client = TestClient(app)

        client.get("/test")
        response = client.get("/test")
        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestRateLimitWindow:
    """Window expiry and client-history sweeping, driven by a fake clock."""

    @pytest.fixture
    def clock(self) -> _FakeClock:
        return _FakeClock()

    @pytest.fixture
    def limiter(self, clock: _FakeClock) -> RateLimitMiddleware:
        return RateLimitMiddleware(_create_test_app(), requests_per_minute=2, clock=clock)

    def test_budget_returns_after_window(self, limiter: RateLimitMiddleware, clock: _FakeClock) -> None:
        assert limiter._retry_after("1.1.1.1", clock()) is None
        assert limiter._retry_after("1.1.1.1", clock()) is None
        assert limiter._retry_after("1.1.1.1", clock()) == 60

        clock.now += 61
        assert limiter._retry_after("1.1.1.1", clock()) is None

    def test_idle_clients_are_swept(self, limiter: RateLimitMiddleware, clock: _FakeClock) -> None:
        for n in range(50):
            limiter._retry_after(f"10.1.0.{n}", clock())
        assert limiter.tracked_clients == 50

        clock.now += 61
        limiter._retry_after("1.1.1.1", clock())
        assert limiter.tracked_clients == 1


class TestGetClientIp:
    """Tests for get_client_ip."""

    def test_socket_peer_without_trusted_headers(self) -> None:
        request = _make_request({"X-Forwarded-For": "9.9.9.9"})
        assert get_client_ip(request, []) == "10.0.0.1"

    def test_forwarded_for_uses_nearest_hop(self) -> None:
        request = _make_request({"X-Forwarded-For": "6.6.6.6, 9.9.9.9, 8.8.8.8"})
        assert get_client_ip(request, ["X-Forwarded-For"]) == "8.8.8.8"

    def test_empty_forwarded_for_falls_through(self) -> None:
        request = _make_request({"X-Forwarded-For": " , ", "X-Real-IP": "7.7.7.7"})
        assert get_client_ip(request, ["X-Forwarded-For", "X-Real-IP"]) == "7.7.7.7"

    def test_first_populated_header_wins(self) -> None:
        request = _make_request({"X-Real-IP": "7.7.7.7"})
        assert get_client_ip(request, ["CF-Connecting-IP", "X-Real-IP"]) == "7.7.7.7"

    def test_unknown_without_client(self) -> None:
        request = _make_request({}, client=None)
        assert get_client_ip(request, []) == "unknown"
