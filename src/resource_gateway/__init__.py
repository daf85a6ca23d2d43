"""Authenticated resource gateway for web-security lessons."""

__version__ = "1.0.0"

# Primary API
from resource_gateway.app import create_app  # noqa: E402

# Route building blocks
from resource_gateway.core.middleware import RouteConfig, route  # noqa: E402

# Exceptions
from resource_gateway.exceptions import (  # noqa: E402
    AccessDenied,
    ConfigurationError,
    DuplicateRouteError,
    GatewayError,
    InternalStoreError,
    InvalidCredential,
    InvalidInput,
    NotFound,
    RouteValidationError,
    Unauthenticated,
)
from resource_gateway.routing import create_router  # noqa: E402
from resource_gateway.settings import Settings  # noqa: E402

__all__ = [
    # Primary API
    "create_app",
    "Settings",
    # Route building blocks
    "create_router",
    "route",
    "RouteConfig",
    # Exceptions
    "AccessDenied",
    "ConfigurationError",
    "DuplicateRouteError",
    "GatewayError",
    "InternalStoreError",
    "InvalidCredential",
    "InvalidInput",
    "NotFound",
    "RouteValidationError",
    "Unauthenticated",
]
