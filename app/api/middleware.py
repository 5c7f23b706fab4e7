"""ASGI middleware for the viewing-tenant override channel."""

from starlette.datastructures import Headers
from starlette.requests import cookie_parser
from starlette.types import ASGIApp, Receive, Scope, Send

from app.access.context import VIEWING_TENANT_HEADER


class ViewingTenantMiddleware:
    """Forward the viewing-tenant cookie as the ``x-viewing-tenant`` header.

    An explicit header always wins. The cookie is read fresh on every
    request; nothing is cached between requests.
    """

    def __init__(self, app: ASGIApp, cookie_name: str) -> None:
        self.app = app
        self.cookie_name = cookie_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)
            if VIEWING_TENANT_HEADER not in headers:
                value = cookie_parser(headers.get("cookie", "")).get(self.cookie_name)
                if value:
                    header = (
                        VIEWING_TENANT_HEADER.encode("latin-1"),
                        value.encode("latin-1", errors="replace"),
                    )
                    scope = dict(scope)
                    scope["headers"] = [*scope["headers"], header]
        await self.app(scope, receive, send)
