"""File read constrained to the served directory by canonical path."""

import asyncio

from fastapi import Depends
from pydantic import BaseModel

from resource_gateway.core.paths import resolve_within
from resource_gateway.dependencies import get_settings
from resource_gateway.settings import Settings

PATH = "/read"
TAGS = ["files"]


class ReadRequest(BaseModel):
    filename: str


async def post(body: ReadRequest, settings: Settings = Depends(get_settings)) -> dict:
    """Return a file from the served directory.

    The name is percent-decoded and resolved before the containment check:
    anything landing outside the directory is 403, a missing file 404.
    """
    path = resolve_within(settings.files_dir, body.filename)
    content = await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")
    relative = path.relative_to(settings.files_dir.resolve())
    return {"path": relative.as_posix(), "content": content}
