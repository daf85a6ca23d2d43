"""Exception hierarchy for gateway errors.

Every error a request can fail with maps to one HTTP status code and a
client-safe message. The application renders these as ``{"error": message}``.
"""


class GatewayError(Exception):
    """Base exception for all resource gateway errors.

    Catching this exception will catch every error raised by the
    resource-gateway package, including configuration errors raised at
    startup.

    Attributes:
        status_code: HTTP status code used when the error reaches a client.
        message: Client-safe description, rendered as the ``error`` field.

    Example:
        try:
            order = await store.get_order(order_id)
        except GatewayError as e:
            logger.warning(f"Lookup failed: {e}")
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(GatewayError):
    """Raised when no identity can be resolved for a request.

    Covers a missing or non-numeric ``X-User-Id`` header, an id that matches
    no user, and a missing or unknown session cookie.

    Example:
        Unauthenticated("Unauthenticated: set X-User-Id")
    """

    status_code = 401
    default_message = "Not authenticated"


class InvalidCredential(GatewayError):
    """Raised when a login supplies a wrong password for a known user.

    Example:
        InvalidCredential("Wrong password")
    """

    status_code = 401
    default_message = "Wrong password"


class AccessDenied(GatewayError):
    """Raised when an authenticated identity may not touch a resource.

    Also raised when a file name escapes the served base directory or is
    absent from an allow-list.

    Example:
        AccessDenied("Access Denied: You do not own this order.")
    """

    status_code = 403
    default_message = "Access denied"


class NotFound(GatewayError):
    """Raised when a requested resource, user, or file does not exist.

    Example:
        NotFound("Order not found")
    """

    status_code = 404
    default_message = "Not found"


class InvalidInput(GatewayError):
    """Raised for malformed request input.

    Examples of invalid input:
        - An email address without ``@``
        - A file name containing a NUL byte
        - A non-string or empty file name

    Example:
        InvalidInput("Invalid email")
    """

    status_code = 400
    default_message = "Invalid input"


class InternalStoreError(GatewayError):
    """Raised when the record store fails.

    The message is always generic; SQL text and driver errors are logged
    server-side and never reach the client.
    """

    status_code = 500
    default_message = "Database error"


class ConfigurationError(GatewayError):
    """Raised when the gateway is misconfigured.

    These errors are raised at startup (settings loading, router
    construction), never while handling a request.

    Example:
        ConfigurationError("AUTH_MODE must be one of ['header', 'session'], got 'jwt'")
    """


class RouteValidationError(ConfigurationError):
    """Raised for an invalid route module.

    This exception is raised when a route module has invalid content:
        - Missing ``PATH`` constant
        - Exports non-handler public functions (should be prefixed with _)
        - Sync middleware, or middleware that is not a list or callable
        - A ``class get(route)`` block without a handler

    Example:
        RouteValidationError(
            "Invalid export(s) ['helper'] in route module resource_gateway.routes.orders"
        )
    """


class DuplicateRouteError(ConfigurationError):
    """Raised when two route modules register the same path+method.

    Example:
        DuplicateRouteError(
            "Duplicate route: GET /orders/{order_id}\\n"
            "  First: resource_gateway.routes.orders\\n"
            "  Second: myapp.routes.orders"
        )
    """
