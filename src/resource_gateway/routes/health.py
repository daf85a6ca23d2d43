"""Liveness check."""

PATH = "/health"
TAGS = ["health"]


async def get() -> dict:
    return {"status": "healthy"}
