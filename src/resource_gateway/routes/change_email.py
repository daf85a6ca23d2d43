"""Email change for the logged-in user."""

import re

from fastapi import Depends
from pydantic import BaseModel

from resource_gateway.core.identity import SessionIdentityResolver, authenticate
from resource_gateway.dependencies import current_identity, get_store
from resource_gateway.exceptions import InvalidInput
from resource_gateway.models import User
from resource_gateway.store import RecordStore

PATH = "/change-email"
TAGS = ["account"]

middleware = [authenticate(SessionIdentityResolver())]

# local@domain, no whitespace, exactly one @
_EMAIL = re.compile(r"[^@\s]+@[^@\s]+")


class ChangeEmailRequest(BaseModel):
    email: str


async def post(
    body: ChangeEmailRequest,
    identity: User = Depends(current_identity),
    store: RecordStore = Depends(get_store),
) -> dict:
    if not _EMAIL.fullmatch(body.email):
        raise InvalidInput("Invalid email")

    await store.update_email(identity.id, body.email)
    return {"success": True, "email": body.email}
