"""Route modules served by the gateway.

Each module declares ``PATH`` and HTTP-verb handlers; see
``resource_gateway.routing`` for the conventions.
"""

from resource_gateway.routes import (
    change_email,
    feedback,
    health,
    login,
    me,
    orders,
    read,
    read_no_validate,
    robots,
    root,
    search,
    sitemap,
    transactions,
)

ROUTE_MODULES = (
    root,
    orders,
    login,
    me,
    transactions,
    feedback,
    change_email,
    read,
    read_no_validate,
    search,
    robots,
    sitemap,
    health,
)

__all__ = ["ROUTE_MODULES"]
