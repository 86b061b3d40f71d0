# File: shadow_ssr/middleware.py
"""
Page-lifecycle hook for aiohttp applications.

The middleware captures the complete body of every HTML response and passes
it through :meth:`Engine.render_page` before it is sent to the client::

    app = web.Application()
    Engine(config).init(app)

Rendering reads component files from disk, so it runs in the loop's default
executor and the event loop keeps serving other requests meanwhile.
"""
from __future__ import annotations

import asyncio
from functools import partial
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from aiohttp import web

from shadow_ssr.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from shadow_ssr.engine import Engine

__all__ = ["ssr_middleware"]

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def ssr_middleware(engine: "Engine", embed_css: Optional[bool] = None):
    """Build a middleware bound to *engine*.

    Only buffered ``text/html`` responses are transformed; streamed and
    non-HTML responses pass through untouched. Render errors propagate to
    aiohttp, which answers with 500.
    """

    @web.middleware
    async def _middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        response = await handler(request)
        if not isinstance(response, web.Response) or response.content_type != "text/html":
            return response
        if not isinstance(response.body, (bytes, bytearray)):
            return response

        logger.debug("Rendering HTML response for %s", request.path)
        loop = asyncio.get_running_loop()
        response.text = await loop.run_in_executor(
            None, partial(engine.render_page, response.text or "", embed_css=embed_css)
        )
        return response

    return _middleware
