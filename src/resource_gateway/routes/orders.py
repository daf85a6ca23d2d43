"""Single-order lookup guarded by the ownership check."""

import re

from fastapi import Depends

from resource_gateway.core.access import authorize_owner
from resource_gateway.core.identity import authenticate
from resource_gateway.dependencies import current_identity, get_store
from resource_gateway.exceptions import NotFound
from resource_gateway.models import User
from resource_gateway.store import RecordStore

PATH = "/orders/{order_id}"
TAGS = ["access-control"]

middleware = [authenticate()]

_DECIMAL_ID = re.compile(r"[0-9]+")


async def get(
    order_id: str,
    identity: User = Depends(current_identity),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return an order to its owner or to a privileged role."""
    # A non-numeric id names no order
    if not _DECIMAL_ID.fullmatch(order_id):
        raise NotFound("Order not found")

    order = await store.get_order(int(order_id))
    return authorize_owner(identity, order, kind="Order").to_json()
