"""Edge security middleware: runs before every route.

Gates, in order, stopping at the first failure:
  1. rate limit        → 429
  2. admin auth gate   → 401
  3. security headers  (always, on the passing response)
  4. CSRF presence     → 403 (non-API writes only)
  5. CSRF issuance     (non-API GETs)
  6. API request log
"""


import logging
import math
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

from app.core.config import Settings
from app.core.security import (
    CSRF_COOKIE,
    CSRF_HEADER,
    CSRF_MAX_AGE_SECONDS,
    RateLimitStore,
    UrlSigner,
    approval_link_payload,
    generate_csrf_token,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"
PROTECTED_PREFIXES: tuple[str, ...] = ("/api/credit-approval", "/api/admin", "/admin")
SIGNED_LINK_PREFIX = "/api/credit-approval"

# Methods that mutate state
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "script-src 'self' 'unsafe-inline'",
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com",
    "font-src 'self' https://fonts.gstatic.com",
    "img-src 'self' data: https: blob:",
    "connect-src 'self' https://api.openai.com",
    "form-action 'self'",
    "base-uri 'self'",
    "object-src 'none'",
    "frame-ancestors 'none'",
    "upgrade-insecure-requests",
])

SECURITY_HEADERS: dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-XSS-Protection": "1; mode=block",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=(), interest-cohort=()",
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
}
HSTS_VALUE = "max-age=31536000; includeSubDomains; preload"


def client_address(request: Request) -> str:
    if request.client and request.client.host:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return "unknown"


def _is_api(path: str) -> bool:
    return path.startswith(API_PREFIX)


class EdgeSecurityMiddleware(BaseHTTPMiddleware):
    """Rate limiting, coarse auth gating, CSRF and security headers."""

    def __init__(
        self,
        app,
        *,
        settings: Settings,
        rate_limit_store: RateLimitStore,
        url_signer: UrlSigner,
    ):
        super().__init__(app)
        self._settings = settings
        self._store = rate_limit_store
        self._signer = url_signer

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        client = client_address(request)

        # 1. Rate limit
        limit = (
            self._settings.rate_limit_api_requests
            if _is_api(path)
            else self._settings.rate_limit_page_requests
        )
        decision = self._store.hit(
            f"{client}-{path}", limit, self._settings.rate_limit_window_seconds
        )
        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s on %s", client, path)
            return PlainTextResponse(
                "Too Many Requests",
                status_code=429,
                headers={
                    "Retry-After": str(self._settings.rate_limit_window_seconds),
                    "X-RateLimit-Limit": str(decision.limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(math.ceil(decision.reset_at)),
                },
            )

        # 2. Auth gate
        if not self._is_authorized(request):
            logger.warning("Unauthorized access attempt to %s from %s", path, client)
            return PlainTextResponse(
                "Unauthorized",
                status_code=401,
                headers={
                    "WWW-Authenticate": 'Bearer realm="Admin Area"',
                    "X-Content-Type-Options": "nosniff",
                },
            )

        # 4. CSRF presence for browser form posts (API callers are exempt)
        if request.method in _WRITE_METHODS and not _is_api(path):
            if not request.headers.get(CSRF_HEADER) and not request.cookies.get(CSRF_COOKIE):
                logger.warning("CSRF token missing for %s %s", request.method, path)
                return PlainTextResponse(
                    "CSRF Token Required",
                    status_code=403,
                    headers={"X-Content-Type-Options": "nosniff"},
                )

        # 6. Monitoring log
        if _is_api(path):
            logger.info("API Request: %s %s from %s", request.method, path, client)

        response = await call_next(request)

        # 3. Security headers
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        if self._settings.is_production:
            response.headers["Strict-Transport-Security"] = HSTS_VALUE

        # 5. CSRF issuance for pages that render forms
        if request.method == "GET" and not _is_api(path):
            token = generate_csrf_token()
            response.set_cookie(
                CSRF_COOKIE,
                token,
                max_age=CSRF_MAX_AGE_SECONDS,
                httponly=True,
                secure=self._settings.is_production,
                samesite="strict",
            )
            response.headers[CSRF_HEADER] = token

        return response

    def _is_authorized(self, request: Request) -> bool:
        path = request.url.path
        if not path.startswith(PROTECTED_PREFIXES):
            return True

        has_admin_credential = bool(
            request.headers.get("authorization")
            or request.headers.get("x-admin-token")
            or request.cookies.get("admin-session")
        )

        if path.startswith(SIGNED_LINK_PREFIX):
            params = request.query_params
            token = params.get("token")
            signature = params.get("sig")
            # E-mailed approve/deny links sign every parameter they carry
            if token and signature:
                payload = approval_link_payload(
                    params.get("id"), params.get("decision"), token, params.get("amount"),
                )
                return self._signer.verify(payload, signature)

        return has_admin_credential
