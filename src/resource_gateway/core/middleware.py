"""Route-level middleware primitives.

A route middleware is an async callable ``(request, call_next)``. It runs
inside the app-wide security headers and before the handler's dependencies
are solved, which is where identity resolution lives.

``class get(route): ...`` declares a handler that carries its own middleware;
``build_middleware_chain`` folds a middleware list around a handler.
"""

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from resource_gateway.exceptions import RouteValidationError

Middleware = Callable[..., Any]


@dataclass(frozen=True)
class RouteConfig:
    """Handler plus the middleware and OpenAPI overrides declared with it.

    Produced by ``class <verb>(route)`` blocks and consumed by the router.
    Calling it calls the handler.

    Attributes:
        handler: The endpoint function FastAPI introspects.
        middleware: Middleware for this handler only, outermost first. Runs
            after the route module's own middleware.
        tags: Replaces the module's TAGS when set.
        summary: Replaces the module's SUMMARY when set.
        status_code: Success status for the endpoint.
    """

    handler: Callable[..., Any]
    middleware: Sequence[Middleware] = ()
    tags: tuple[str, ...] | None = None
    summary: str | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        # Frozen, so bypass __setattr__ to copy the handler's identity
        for attr, fallback in (("__name__", "handler"), ("__doc__", None), ("__module__", __name__)):
            object.__setattr__(self, attr, getattr(self.handler, attr, fallback))
        object.__setattr__(self, "__wrapped__", self.handler)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.handler(*args, **kwargs)


def normalize_middleware(value: Any, *, source: str = "") -> tuple[Middleware, ...]:
    """Turn a ``middleware`` declaration into a tuple of async callables.

    None gives an empty tuple and a single callable a 1-tuple; lists and
    tuples are copied.

    Args:
        value: What the module or route class declared.
        source: Where it was declared, prefixed to error messages.

    Raises:
        RouteValidationError: For any other type, or an entry that is not a
            coroutine function.
    """
    where = f"{source}: " if source else ""

    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        layers = tuple(value)
    elif callable(value):
        layers = (value,)
    else:
        raise RouteValidationError(
            f"{where}middleware must be a list or callable, got {type(value).__name__}"
        )

    for index, layer in enumerate(layers):
        if not callable(layer):
            raise RouteValidationError(f"{where}non-callable middleware at index {index}")
        if not inspect.iscoroutinefunction(layer):
            name = getattr(layer, "__name__", layer)
            raise RouteValidationError(
                f"{where}middleware at index {index} must be async, got sync function {name!r}"
            )
    return layers


class _RouteMeta(type):
    """Turns every subclass body of ``route`` into a RouteConfig."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]) -> Any:
        if not bases:
            # `route` itself
            return super().__new__(mcs, name, bases, namespace)

        handler = namespace.get("handler")
        if handler is None:
            raise RouteValidationError(
                f"class {name}(route) must define an async def handler(...) function"
            )
        if not callable(handler):
            raise RouteValidationError(
                f"class {name}(route): handler must be a callable, got {type(handler).__name__}"
            )

        tags = namespace.get("tags")
        return RouteConfig(
            handler=handler,
            middleware=normalize_middleware(
                namespace.get("middleware"), source=f"class {name}(route)"
            ),
            tags=tuple(tags) if tags else None,
            summary=namespace.get("summary"),
            status_code=namespace.get("status_code"),
        )


class route(metaclass=_RouteMeta):  # noqa: N801
    """Base for handlers that need middleware of their own.

    Example:
        class get(route):
            middleware = [authenticate(SessionIdentityResolver())]
            summary = "Current user's profile"

            async def handler(identity: User = Depends(current_identity)) -> dict:
                return identity.to_json()

    The name ``get`` is then bound to a RouteConfig.
    """


def build_middleware_chain(
    handler: Callable[..., Any],
    middleware: Sequence[Middleware],
) -> Callable[..., Any]:
    """Fold middleware around handler, first entry outermost.

    Each layer is called as ``layer(request, call_next)``; ``call_next``
    continues with the next layer or, at the end, the handler. An empty
    sequence returns handler itself.
    """
    chain = handler
    for layer in reversed(middleware):
        chain = _wrap(chain, layer)
    return chain


def _wrap(inner: Callable[..., Any], layer: Middleware) -> Callable[..., Any]:
    async def call_next(request: Any) -> Any:
        return await inner(request)

    async def wrapped(request: Any) -> Any:
        return await layer(request, call_next)

    wrapped.__name__ = wrapped.__qualname__ = (
        f"{layer.__name__}_wrapping_{getattr(inner, '__name__', 'handler')}"
    )
    return wrapped
