"""FastAPI dependencies exposing process-wide objects to handlers.

The store, session table, and settings are created once by the application
factory and kept on ``app.state``; handlers receive them through ``Depends``
rather than importing module-level globals.
"""

from fastapi import Request

from resource_gateway.exceptions import Unauthenticated
from resource_gateway.models import User
from resource_gateway.settings import Settings
from resource_gateway.store import RecordStore, SessionTable


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_sessions(request: Request) -> SessionTable:
    return request.app.state.sessions


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def current_identity(request: Request) -> User:
    """Return the identity resolved by the route's ``authenticate`` middleware.

    Raises:
        Unauthenticated: If the route was registered without authentication.
    """
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthenticated()
    return identity
