# app/middleware/security.py
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

# Stored logos are immutable once written; everything else may carry patient data
BLOB_PATH_PREFIX = "/api/v1/storage/"
BLOB_CACHE_SECONDS = 86400


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers to all responses and keeps API payloads out of caches
    """

    def __init__(self, app, enable_hsts: bool = True):
        super().__init__(app)
        self.enable_hsts = enable_hsts

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"

        # HSTS (only in production with HTTPS)
        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        path = request.url.path
        if request.method == "GET" and path.startswith(BLOB_PATH_PREFIX) and response.status_code == 200:
            response.headers["Cache-Control"] = f"public, max-age={BLOB_CACHE_SECONDS}, immutable"
        elif path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"

        return response
