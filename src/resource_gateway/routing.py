"""Router factory for route modules.

A route module declares one URL path and the handlers for it:

    PATH = "/orders/{order_id}"
    TAGS = ["orders"]
    middleware = [...]             # optional, applies to every handler

    async def get(order_id: int): ...     # plain handler
    class post(route): ...                # handler with its own middleware

``create_router`` turns a sequence of such modules into a FastAPI APIRouter.
"""

import inspect
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any

from fastapi import APIRouter
from fastapi.routing import APIRoute

from resource_gateway.core.middleware import (
    RouteConfig,
    build_middleware_chain,
    normalize_middleware,
)
from resource_gateway.exceptions import DuplicateRouteError, RouteValidationError

logger = logging.getLogger(__name__)

# HTTP methods that can be exported from route modules
ALLOWED_HANDLERS: frozenset[str] = frozenset(
    {"get", "post", "put", "patch", "delete", "head", "options"}
)


@dataclass(frozen=True)
class ExtractedRoute:
    """Handlers and metadata extracted from a route module.

    Attributes:
        path: FastAPI path string from the module's PATH constant.
        handlers: HTTP method (lowercase) -> handler or RouteConfig.
        tags: OpenAPI tags from TAGS, or derived from the path.
        summary: OpenAPI summary from SUMMARY.
        module_middleware: Middleware applying to every handler in the module.
        source: Module name, for error messages.
    """

    path: str
    handlers: dict[str, Callable[..., Any]]
    tags: list[str]
    summary: str | None = None
    module_middleware: tuple[Callable[..., Any], ...] = field(default_factory=tuple)
    source: str = ""


def extract_handlers(module: ModuleType) -> ExtractedRoute:
    """Extract HTTP method handlers and metadata from a route module.

    Raises:
        RouteValidationError: If PATH is missing or malformed, a public
            function is not an HTTP verb, or middleware is invalid.
    """
    source = module.__name__
    path = getattr(module, "PATH", None)
    if not isinstance(path, str) or not path.startswith("/"):
        raise RouteValidationError(
            f"Route module {source} must define PATH as a string starting with '/', "
            f"got {path!r}"
        )

    tags = getattr(module, "TAGS", None)
    module_middleware = normalize_middleware(
        getattr(module, "middleware", None),
        source=f"module {source}",
    )
    middleware_names = {getattr(mw, "__name__", "") for mw in module_middleware}

    handlers: dict[str, Callable[..., Any]] = {}
    invalid_exports: list[str] = []

    for name in dir(module):
        if name.startswith("_") or name.isupper() or name == "middleware":
            continue

        obj = getattr(module, name)

        # RouteConfig is callable, so check it first
        if isinstance(obj, RouteConfig):
            if name.lower() in ALLOWED_HANDLERS:
                handlers[name.lower()] = obj
            else:
                invalid_exports.append(name)
            continue

        if not inspect.isfunction(obj):
            continue
        # Imported helpers
        if obj.__module__ != module.__name__:
            continue
        if name in middleware_names:
            continue

        if name.lower() in ALLOWED_HANDLERS:
            handlers[name.lower()] = obj
        else:
            invalid_exports.append(name)

    if invalid_exports:
        raise RouteValidationError(
            f"Invalid export(s) {invalid_exports} in route module {source}\n"
            f"  Hint: Only HTTP verbs ({', '.join(sorted(ALLOWED_HANDLERS))}) are allowed.\n"
            f"        Prefix helper functions with underscore: _{invalid_exports[0]}"
        )

    return ExtractedRoute(
        path=path,
        handlers=handlers,
        tags=list(tags) if tags else _derive_tags(path),
        summary=getattr(module, "SUMMARY", None),
        module_middleware=module_middleware,
        source=source,
    )


def create_router(
    modules: Iterable[ModuleType],
    *,
    prefix: str = "",
) -> APIRouter:
    """Create a FastAPI APIRouter from route modules.

    Routes are registered static-before-dynamic so that ``/orders/export``
    would win over ``/orders/{order_id}``.

    Args:
        modules: Imported route modules.
        prefix: Optional URL prefix for every route.

    Raises:
        RouteValidationError: If a module is invalid.
        DuplicateRouteError: If two modules register the same path+method.
    """
    extracted = [extract_handlers(module) for module in modules]
    extracted.sort(key=lambda r: (r.path.count("{"), r.path.count("/"), r.path))

    router = APIRouter(prefix=prefix)
    registered: dict[tuple[str, str], str] = {}

    for route_def in extracted:
        for method, handler in route_def.handlers.items():
            route_key = (route_def.path, method.upper())
            if route_key in registered:
                raise DuplicateRouteError(
                    f"Duplicate route: {method.upper()} {route_def.path}\n"
                    f"  First: {registered[route_key]}\n"
                    f"  Second: {route_def.source}"
                )
            registered[route_key] = route_def.source
            _register(router, route_def, method, handler)

    logger.info(
        "Route registration complete",
        extra={"route_count": len(registered), "prefix": prefix or "(none)"},
    )
    return router


def _register(
    router: APIRouter,
    route_def: ExtractedRoute,
    method: str,
    handler: Callable[..., Any],
) -> None:
    handler_fn = handler
    handler_mw: tuple[Callable[..., Any], ...] = ()
    kwargs: dict[str, Any] = {
        "tags": route_def.tags,
        "description": handler.__doc__,
    }
    if route_def.summary is not None:
        kwargs["summary"] = route_def.summary

    if isinstance(handler, RouteConfig):
        handler_fn = handler.handler
        handler_mw = tuple(handler.middleware)
        if handler.tags is not None:
            kwargs["tags"] = list(handler.tags)
        if handler.summary is not None:
            kwargs["summary"] = handler.summary
        if handler.status_code is not None:
            kwargs["status_code"] = handler.status_code

    # Order: module-level, then handler-level
    full_middleware = (*route_def.module_middleware, *handler_mw)
    if full_middleware:
        kwargs["route_class_override"] = _make_middleware_route(full_middleware)

    router.add_api_route(
        path=route_def.path,
        endpoint=handler_fn,
        methods=[method.upper()],
        **kwargs,
    )
    logger.debug(
        "Registered route",
        extra={
            "method": method.upper(),
            "path": route_def.path,
            "middleware_count": len(full_middleware),
        },
    )


def _derive_tags(path: str) -> list[str]:
    """Take the first non-parameter segment: /orders/{id} -> ["orders"], / -> ["root"]."""
    parts = [p for p in path.split("/") if p and not p.startswith("{")]
    return [parts[0]] if parts else ["root"]


def _make_middleware_route(
    middleware_stack: Sequence[Callable[..., Any]],
) -> type[APIRoute]:
    """Create an APIRoute subclass whose request handler runs the middleware chain.

    The chain wraps the handler returned by get_route_handler(), so it runs
    before FastAPI solves the endpoint's dependencies. Middleware can therefore
    populate ``request.state`` for dependencies such as current_identity.
    """

    class MiddlewareRoute(APIRoute):
        def get_route_handler(self) -> Callable[..., Any]:
            original_handler = super().get_route_handler()
            return build_middleware_chain(original_handler, middleware_stack)

    return MiddlewareRoute
