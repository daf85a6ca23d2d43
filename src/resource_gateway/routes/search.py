"""Search echo. The term is returned inside JSON, never rendered as HTML."""

PATH = "/search"
TAGS = ["xss"]


async def get(q: str = "") -> dict:
    return {"message": "Results found", "searchTerm": q}
