"""Tests for the security header set."""

from starlette.responses import JSONResponse

from resource_gateway.core.headers import (
    CONTENT_SECURITY_POLICY,
    SECURITY_HEADERS,
    apply_security_headers,
)


class TestContentSecurityPolicy:
    def test_directives_without_fallback_are_explicit(self) -> None:
        """frame-ancestors and form-action never inherit from default-src."""
        directives = {d.split()[0] for d in CONTENT_SECURITY_POLICY.split("; ")}
        assert {"default-src", "frame-ancestors", "form-action"} <= directives

    def test_no_unsafe_sources(self) -> None:
        assert "unsafe-inline" not in CONTENT_SECURITY_POLICY
        assert "unsafe-eval" not in CONTENT_SECURITY_POLICY


class TestApplySecurityHeaders:
    def test_sets_every_header(self) -> None:
        response = apply_security_headers(JSONResponse({"ok": True}))
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    def test_permissions_policy_denies_devices(self) -> None:
        assert SECURITY_HEADERS["Permissions-Policy"] == (
            "geolocation=(), camera=(), microphone=()"
        )

    def test_overrides_handler_cache_headers(self) -> None:
        """A handler cannot re-enable caching."""
        response = JSONResponse({}, headers={"Cache-Control": "public, max-age=3600"})
        apply_security_headers(response)
        assert response.headers["Cache-Control"].startswith("no-store")

    def test_strips_fingerprint_headers(self) -> None:
        response = JSONResponse({}, headers={"X-Powered-By": "Express", "Server": "uvicorn"})
        apply_security_headers(response)
        assert "x-powered-by" not in response.headers
        assert "server" not in response.headers
