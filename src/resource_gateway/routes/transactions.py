"""Transaction history search for the logged-in user."""

from fastapi import Depends

from resource_gateway.core.identity import SessionIdentityResolver, authenticate
from resource_gateway.dependencies import current_identity, get_store
from resource_gateway.models import User
from resource_gateway.store import RecordStore

PATH = "/transactions"
TAGS = ["account"]

middleware = [authenticate(SessionIdentityResolver())]


async def get(
    q: str = "",
    identity: User = Depends(current_identity),
    store: RecordStore = Depends(get_store),
) -> list[dict]:
    """The caller's transactions whose description contains ``q`` literally."""
    transactions = await store.list_transactions(identity.id, q)
    return [tx.to_json() for tx in transactions]
