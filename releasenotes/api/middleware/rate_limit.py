"""Rate limiting middleware for the release notes API

Fixed-ceiling sliding window per client IP (default 100 requests per 15
minutes). Buckets live in a TTLCache so idle IPs are evicted.

X-Forwarded-For is only trusted behind Cloud Run (X-Cloud-Trace-Context
present) or in development.
"""

from __future__ import annotations

import ipaddress
import os
import time
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from releasenotes.config import (
    RATE_LIMIT_MAX_IPS,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
)
from releasenotes.observability.telemetry import log_event

EXEMPT_PATHS = frozenset({"/health"})


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limit each client IP to max_requests per window_seconds on /api routes."""

    def __init__(
        self,
        app: Any,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        max_ips: int = RATE_LIMIT_MAX_IPS,
    ) -> None:
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds

        # {ip: [timestamp, ...]}; entries expire one window after the last write
        self.buckets: TTLCache[str, list[float]] = TTLCache(maxsize=max_ips, ttl=window_seconds)

        self._trusted_proxy_header = "X-Cloud-Trace-Context"

    def _is_valid_ip(self, ip_str: str) -> bool:
        try:
            ipaddress.ip_address(ip_str)
            return True
        except ValueError:
            return False

    def _forwarded_ip(self, request: Request) -> str | None:
        forwarded = request.headers.get("X-Forwarded-For")
        if not forwarded:
            return None
        ip = forwarded.split(",")[0].strip()
        return ip if self._is_valid_ip(ip) else None

    def _get_client_ip(self, request: Request) -> str:
        """Client IP, trusting X-Forwarded-For only from Cloud Run or in development."""
        if self._trusted_proxy_header in request.headers:
            ip = self._forwarded_ip(request)
            if ip:
                return ip

        if os.getenv("RELEASENOTES_ENV", os.getenv("NODE_ENV", "development")) == "development":
            ip = self._forwarded_ip(request)
            if ip:
                return ip

        return request.client.host if request.client else "unknown"

    def _recent(self, client_ip: str, now: float) -> list[float]:
        return [ts for ts in self.buckets.get(client_ip, []) if now - ts < self.window_seconds]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Static assets and health checks are not limited
        if request.url.path in EXEMPT_PATHS or not request.url.path.startswith("/api"):
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        now = time.time()
        recent = self._recent(client_ip, now)

        if len(recent) >= self.max_requests:
            retry_after = max(1, int(self.window_seconds - (now - recent[0])))
            self.buckets[client_ip] = recent
            log_event("api.rate_limit.exceeded", ip=client_ip, count=len(recent))
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Too Many Requests",
                    "message": (
                        f"Rate limit exceeded. Maximum {self.max_requests} requests "
                        f"per {self.window_seconds // 60} minutes."
                    ),
                    "retry_after": retry_after,
                },
                headers={"Retry-After": str(retry_after)},
            )

        recent.append(now)
        self.buckets[client_ip] = recent

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(self.max_requests - len(recent))
        return response
