"""Security header middleware.

Installed on the application itself (not per route) so that every response
carries the hardening headers: handler responses, gateway errors, FastAPI's
own 404/405 responses, and the generic 500 produced here for unhandled
exceptions.
"""

import logging
from collections.abc import Mapping

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# frame-ancestors and form-action do not fall back to default-src, so both
# are spelled out.
CONTENT_SECURITY_POLICY = "; ".join(
    [
        "default-src 'self'",
        "script-src 'self'",
        "style-src 'self'",
        "img-src 'self' data:",
        "font-src 'self'",
        "base-uri 'self'",
        "object-src 'none'",
        "frame-ancestors 'none'",
        "form-action 'self'",
    ]
)

SECURITY_HEADERS: Mapping[str, str] = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "Permissions-Policy": "geolocation=(), camera=(), microphone=()",
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Embedder-Policy": "require-corp",
}

# Stack fingerprinting headers stripped from every response
FINGERPRINT_HEADERS: tuple[str, ...] = ("Server", "X-Powered-By")


def apply_security_headers(response: Response) -> Response:
    """Set the hardening headers on a response in place and return it."""
    for name in FINGERPRINT_HEADERS:
        if name in response.headers:
            del response.headers[name]
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set hardening headers on every response before it leaves the app.

    Exceptions that escape the route layer would otherwise be rendered by
    Starlette's ServerErrorMiddleware, which sits outside all user middleware
    and would send a bare 500. They are logged and converted here instead.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error while serving request",
                extra={"method": request.method, "path": request.url.path},
            )
            response = JSONResponse({"error": "Internal server error"}, status_code=500)
        return apply_security_headers(response)
