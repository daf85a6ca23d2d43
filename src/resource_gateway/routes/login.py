"""Password login that starts a cookie session."""

import asyncio
import logging

from fastapi import Depends, Response
from pydantic import BaseModel

from resource_gateway.core.identity import SESSION_COOKIE
from resource_gateway.core.passwords import verify_password
from resource_gateway.dependencies import get_sessions, get_settings, get_store
from resource_gateway.exceptions import InvalidCredential, NotFound
from resource_gateway.settings import Settings
from resource_gateway.store import RecordStore, SessionTable

logger = logging.getLogger(__name__)

PATH = "/login"
TAGS = ["account"]


class LoginRequest(BaseModel):
    username: str
    password: str


async def post(
    body: LoginRequest,
    response: Response,
    store: RecordStore = Depends(get_store),
    sessions: SessionTable = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Check username and password; on success set an HttpOnly session cookie.

    Unknown usernames get 404 and wrong passwords 401. No session is created
    in either case.
    """
    credential = await store.find_credential(body.username)
    if credential is None:
        raise NotFound("Unknown username")

    matches = await asyncio.to_thread(verify_password, body.password, credential.password_hash)
    if not matches:
        logger.info("Login rejected", extra={"user_id": credential.user_id})
        raise InvalidCredential("Wrong password")

    session_id = sessions.create(credential.user_id)
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure,
    )
    logger.info("Login succeeded", extra={"user_id": credential.user_id})
    return {"success": True}
