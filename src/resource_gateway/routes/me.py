"""Profile of the logged-in user."""

from fastapi import Depends

from resource_gateway.core.identity import SessionIdentityResolver, authenticate
from resource_gateway.core.middleware import route
from resource_gateway.dependencies import current_identity
from resource_gateway.models import User

PATH = "/me"
TAGS = ["account"]


class get(route):  # noqa: N801
    middleware = [authenticate(SessionIdentityResolver())]
    summary = "Current user's profile"

    async def handler(identity: User = Depends(current_identity)) -> dict:  # noqa: N805
        return identity.to_json()
