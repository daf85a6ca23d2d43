from xml.sax.saxutils import escape

from fastapi import Request
from fastapi.responses import Response

PATH = "/sitemap.xml"
TAGS = ["crawlers"]


async def get(request: Request) -> Response:
    """Sitemap listing the API root."""
    # base_url is built from the Host header
    loc = escape(str(request.base_url))
    body = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"<url><loc>{loc}</loc></url>"
        "</urlset>\n"
    )
    return Response(content=body, media_type="application/xml")
