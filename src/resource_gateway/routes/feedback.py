"""Feedback wall: comments are stored and returned as literal text."""

from fastapi import Depends
from pydantic import BaseModel

from resource_gateway.core.identity import SessionIdentityResolver, authenticate
from resource_gateway.dependencies import current_identity, get_store
from resource_gateway.models import User
from resource_gateway.store import RecordStore

PATH = "/feedback"
TAGS = ["account"]

middleware = [authenticate(SessionIdentityResolver())]


class FeedbackRequest(BaseModel):
    comment: str


async def post(
    body: FeedbackRequest,
    identity: User = Depends(current_identity),
    store: RecordStore = Depends(get_store),
) -> dict:
    await store.add_feedback(identity.username, body.comment)
    return {"success": True}


async def get(store: RecordStore = Depends(get_store)) -> list[dict]:
    """All feedback, newest first."""
    return [entry.to_json() for entry in await store.list_feedback()]
