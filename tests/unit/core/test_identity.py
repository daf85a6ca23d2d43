"""Unit tests for resolver selection and the authenticate middleware."""

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest

from resource_gateway.core.identity import (
    HeaderIdentityResolver,
    SessionIdentityResolver,
    authenticate,
    resolver_for,
)
from resource_gateway.exceptions import ConfigurationError, Unauthenticated
from resource_gateway.models import User

ALICE = User(1, "alice", "Alice", "customer", "north", "alice@example.com")


class _StaticResolver:
    name = "static"

    def __init__(self, user: User | None) -> None:
        self.user = user

    async def resolve(self, request: Any) -> User:
        if self.user is None:
            raise Unauthenticated("nobody")
        return self.user


def _request(**app_state: Any) -> Any:
    return SimpleNamespace(
        state=SimpleNamespace(),
        app=SimpleNamespace(state=SimpleNamespace(**app_state)),
        url=SimpleNamespace(path="/test"),
    )


class TestResolverFor:
    def test_header_mode(self) -> None:
        assert isinstance(resolver_for("header"), HeaderIdentityResolver)

    def test_session_mode(self) -> None:
        assert isinstance(resolver_for("session"), SessionIdentityResolver)

    def test_unknown_mode(self) -> None:
        with pytest.raises(ConfigurationError, match="AUTH_MODE"):
            resolver_for("basic")


class TestAuthenticate:
    def test_sets_identity_before_handler(self) -> None:
        middleware = authenticate(_StaticResolver(ALICE))
        request = _request()

        async def call_next(req: Any) -> Any:
            return req.state.identity

        assert asyncio.run(middleware(request, call_next)) is ALICE

    def test_failure_skips_handler(self) -> None:
        middleware = authenticate(_StaticResolver(None))
        called: list[bool] = []

        async def call_next(req: Any) -> Any:
            called.append(True)

        with pytest.raises(Unauthenticated):
            asyncio.run(middleware(_request(), call_next))
        assert called == []

    def test_configured_resolver_read_per_request(self) -> None:
        """Without an explicit resolver, app.state.identity_resolver is used."""
        middleware = authenticate()
        request = _request(identity_resolver=_StaticResolver(ALICE))

        async def call_next(req: Any) -> Any:
            return req.state.identity

        assert asyncio.run(middleware(request, call_next)) is ALICE

    def test_middleware_name_describes_mode(self) -> None:
        assert authenticate(SessionIdentityResolver()).__name__ == "authenticate_session"
        assert authenticate().__name__ == "authenticate_configured"
