"""Access-control lesson landing route: echoes the resolved identity."""

from fastapi import Depends

from resource_gateway.core.identity import authenticate
from resource_gateway.dependencies import current_identity
from resource_gateway.models import User

PATH = "/"
TAGS = ["access-control"]

middleware = [authenticate()]


async def get(identity: User = Depends(current_identity)) -> dict:
    """Status of the API and the caller it resolved."""
    return {"message": "Access Control Tutorial API", "currentUser": identity.to_json()}
