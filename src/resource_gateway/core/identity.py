"""Identity resolution ("authentication").

Two resolvers are provided. Either one is wrapped by ``authenticate`` into a
route middleware that stores the resolved ``User`` on ``request.state``.

- ``HeaderIdentityResolver`` trusts a client-supplied ``X-User-Id`` header.
  Any client can claim any identity with it. It exists only as the baseline
  for the access-control lesson and must never guard real data.
- ``SessionIdentityResolver`` looks the ``sid`` cookie up in the in-process
  session table created by ``POST /login``.
"""

import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from starlette.requests import Request

from resource_gateway.dependencies import get_sessions, get_store
from resource_gateway.exceptions import ConfigurationError, Unauthenticated
from resource_gateway.models import User

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"
SESSION_COOKIE = "sid"

AUTH_MODES: tuple[str, ...] = ("header", "session")

_DECIMAL_ID = re.compile(r"[0-9]+")


class IdentityResolver(Protocol):
    name: str

    async def resolve(self, request: Request) -> User: ...


class HeaderIdentityResolver:
    """Resolve the caller from the ``X-User-Id`` request header.

    INSECURE: the header is entirely client-controlled.
    """

    name = "header"

    def __init__(self, header: str = USER_ID_HEADER) -> None:
        self.header = header

    async def resolve(self, request: Request) -> User:
        raw = request.headers.get(self.header, "").strip()
        message = f"Unauthenticated: set {self.header}"

        if not _DECIMAL_ID.fullmatch(raw):
            raise Unauthenticated(message)

        user = await get_store(request).get_user(int(raw))
        if user is None:
            raise Unauthenticated(message)
        return user


class SessionIdentityResolver:
    """Resolve the caller from the session cookie."""

    name = "session"

    def __init__(self, cookie: str = SESSION_COOKIE) -> None:
        self.cookie = cookie

    async def resolve(self, request: Request) -> User:
        user_id = get_sessions(request).lookup(request.cookies.get(self.cookie))
        if user_id is None:
            raise Unauthenticated("Not authenticated")

        user = await get_store(request).get_user(user_id)
        if user is None:
            # A session always points at a live user; only a reseeded store breaks that.
            raise Unauthenticated("Not authenticated")
        return user


def resolver_for(mode: str) -> IdentityResolver:
    """Return the resolver configured by ``AUTH_MODE``.

    Raises:
        ConfigurationError: If mode is not one of AUTH_MODES.
    """
    if mode == "header":
        return HeaderIdentityResolver()
    if mode == "session":
        return SessionIdentityResolver()
    raise ConfigurationError(f"AUTH_MODE must be one of {list(AUTH_MODES)}, got {mode!r}")


def authenticate(
    resolver: IdentityResolver | None = None,
) -> Callable[[Request, Callable[[Request], Awaitable[Any]]], Awaitable[Any]]:
    """Build a route middleware that requires an identity.

    The identity is stored as ``request.state.identity`` before the handler
    runs; handlers read it through ``dependencies.current_identity``.

    Args:
        resolver: Resolver to use. When omitted, the application's configured
            resolver (``app.state.identity_resolver``, chosen by AUTH_MODE) is
            looked up on each request.

    Raises (per request):
        Unauthenticated: If the resolver cannot establish an identity.
    """

    async def require_identity(request: Request, call_next: Callable[..., Any]) -> Any:
        active = resolver or request.app.state.identity_resolver
        try:
            request.state.identity = await active.resolve(request)
        except Unauthenticated:
            logger.info(
                "Authentication failed",
                extra={"mode": active.name, "path": request.url.path},
            )
            raise
        return await call_next(request)

    label = resolver.name if resolver is not None else "configured"
    require_identity.__name__ = f"authenticate_{label}"
    require_identity.__qualname__ = require_identity.__name__
    return require_identity
