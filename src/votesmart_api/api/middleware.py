"""CORS, security headers, and per-client request metering.

Every request, read or write, is metered against a per-client budget of
``requests_per_minute``. Clients are identified by socket peer address unless
the deployment names proxy headers it trusts.
"""

import math
import time
from collections import deque
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from votesmart_api.core.config import Settings

WINDOW_SECONDS = 60.0


def get_client_ip(request: Request, trusted_headers: list[str]) -> str:
    """Return the address a request is metered under.

    Only headers named in ``trusted_headers`` are consulted, in order. For
    ``X-Forwarded-For`` the rightmost hop is used: it was appended by the
    nearest proxy, while entries to its left are whatever the client sent.
    Falls back to the socket peer, then to ``"unknown"``.
    """
    for header in trusted_headers:
        value = request.headers.get(header, "").strip()
        if not value:
            continue
        if header.lower() == "x-forwarded-for":
            hops = [hop.strip() for hop in value.split(",") if hop.strip()]
            if hops:
                return hops[-1]
            continue
        return value

    if request.client:
        return request.client.host
    return "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app."""
    kwargs: dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        kwargs["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **kwargs)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window request budget per client, held in process memory.

    Each client keeps the timestamps of its admitted requests from the last
    minute. Clients whose window has emptied are dropped by a sweep that runs
    at most once per window, so memory tracks recently active clients only.

    Args:
        app: The wrapped ASGI app.
        requests_per_minute: Budget per client per window.
        trusted_proxy_headers: Headers allowed to override the socket peer.
            Empty by default; set only behind a proxy that overwrites them.
        clock: Monotonic time source, in seconds.
    """

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 60,
        trusted_proxy_headers: list[str] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers or []
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._next_sweep = clock() + WINDOW_SECONDS

    @property
    def tracked_clients(self) -> int:
        """Number of clients currently holding request history."""
        return len(self._hits)

    def _sweep(self, now: float) -> None:
        cutoff = now - WINDOW_SECONDS
        for client_ip in list(self._hits):
            hits = self._hits[client_ip]
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if not hits:
                del self._hits[client_ip]
        self._next_sweep = now + WINDOW_SECONDS

    def _retry_after(self, client_ip: str, now: float) -> int | None:
        """Record a request; return seconds to wait if it is over budget."""
        if now >= self._next_sweep:
            self._sweep(now)

        hits = self._hits.setdefault(client_ip, deque())
        while hits and hits[0] <= now - WINDOW_SECONDS:
            hits.popleft()
        if len(hits) >= self.requests_per_minute:
            return max(1, math.ceil(hits[0] + WINDOW_SECONDS - now))
        hits.append(now)
        return None

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = get_client_ip(request, self.trusted_proxy_headers)
        retry_after = self._retry_after(client_ip, self._clock())
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded"},
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)
