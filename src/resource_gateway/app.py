"""Application factory.

Creates the gateway app: security headers on every response, CORS for the
front-end, gateway error rendering, and the route modules with their
identity middleware. The record store, session table, allow-list, and
settings are built once here and kept on ``app.state``.

Run with:
    resource-gateway
    uvicorn resource_gateway.app:create_app --factory
"""

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from types import ModuleType

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resource_gateway import __version__
from resource_gateway.core.headers import SecurityHeadersMiddleware
from resource_gateway.core.identity import resolver_for
from resource_gateway.core.paths import AllowList
from resource_gateway.exceptions import GatewayError
from resource_gateway.logging_config import setup_logging
from resource_gateway.routes import ROUTE_MODULES
from resource_gateway.routing import create_router
from resource_gateway.settings import Settings
from resource_gateway.store import RecordStore, SessionTable

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Closed by an earlier serve cycle
    if app.state.store.closed:
        _open_records(app, app.state.settings)
    logger.info(
        "Gateway started",
        extra={"auth_mode": app.state.settings.auth_mode, "port": app.state.settings.port},
    )
    yield
    app.state.store.close()
    logger.info("Gateway stopped")


def create_app(
    settings: Settings | None = None,
    *,
    routes: Iterable[ModuleType] = ROUTE_MODULES,
) -> FastAPI:
    """Build a gateway application.

    Args:
        settings: Configuration; read from the environment when omitted.
        routes: Route modules to serve.

    Raises:
        ConfigurationError: For invalid settings, allow-list entries, or
            route modules. Raised here, never while serving a request.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Resource Gateway",
        description="Authenticated, access-controlled resource lookups",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    _open_records(app, settings)
    app.state.identity_resolver = resolver_for(settings.auth_mode)
    app.state.allow_list = AllowList(settings.files_dir, settings.allowed_files)

    # Added last, so outermost: wraps CORS responses and error responses too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-User-Id"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(
            "Rejected malformed request",
            extra={"path": request.url.path, "error_count": len(exc.errors())},
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    app.include_router(create_router(routes))
    return app


def _open_records(app: FastAPI, settings: Settings) -> None:
    app.state.store = RecordStore.open(demo_password=settings.demo_password)
    app.state.sessions = SessionTable()


def main() -> None:
    """Console entry point: serve the gateway with uvicorn."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        server_header=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
