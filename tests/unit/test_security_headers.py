"""Unit tests for security headers middleware"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from releasenotes.api.middleware.security_headers import (
    CONTENT_SECURITY_POLICY,
    SecurityHeadersMiddleware,
)


def build_app(is_production: bool) -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)

    @app.get("/api/ping")
    async def ping():
        return {"pong": True}

    return app


def test_headers_present():
    response = TestClient(build_app(is_production=False)).get("/api/ping")

    assert response.headers["Content-Security-Policy"] == CONTENT_SECURITY_POLICY
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert "Strict-Transport-Security" not in response.headers


def test_hsts_only_in_production():
    response = TestClient(build_app(is_production=True)).get("/api/ping")

    assert response.headers["Strict-Transport-Security"].startswith("max-age=31536000")


def test_csp_allows_inline_styles_and_google_fonts():
    assert "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com" in CONTENT_SECURITY_POLICY
    assert "https://fonts.gstatic.com" in CONTENT_SECURITY_POLICY
