"""File read through a fixed allow-list of public names."""

import asyncio

from fastapi import Request
from pydantic import BaseModel

from resource_gateway.core.paths import AllowList

PATH = "/read-no-validate"
TAGS = ["files"]


class ReadRequest(BaseModel):
    filename: str


async def post(body: ReadRequest, request: Request) -> dict:
    """Return the file mapped to ``filename``.

    The name itself is never used as a path: names outside the allow-list
    are 403 without touching the filesystem.
    """
    allow_list: AllowList = request.app.state.allow_list
    path = allow_list.resolve(body.filename)
    content = await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")
    return {"path": path.relative_to(allow_list.base_dir).as_posix(), "content": content}
