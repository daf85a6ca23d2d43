"""Crawler policy: everything may be indexed."""

from fastapi.responses import PlainTextResponse

PATH = "/robots.txt"
TAGS = ["crawlers"]


async def get() -> PlainTextResponse:
    return PlainTextResponse("User-agent: *\nDisallow:\n")
