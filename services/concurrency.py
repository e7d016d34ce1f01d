"""Concurrency limit for chat endpoints.

Every chat request holds a long-lived model stream, so each worker caps how
many may run at once.  Requests over the cap get 503 instead of queuing
forever.

Pure ASGI implementation (not BaseHTTPMiddleware) to preserve SSE
streaming compatibility.
"""

from __future__ import annotations

import asyncio
import json
import logging

from starlette.types import ASGIApp, Receive, Scope, Send

from config.settings import get_settings

logger = logging.getLogger(__name__)

# Paths that hold a model stream for the whole request
CHAT_PATHS = frozenset({
    "/api/chat",
    "/api/chat/stream",
})


class ConcurrencyLimitMiddleware:
    """Pure ASGI middleware — reject chat requests when the worker is at capacity.

    Returns HTTP 503 with a ``Retry-After`` header.  Other endpoints
    (health, curriculum, metrics) pass through unaffected.
    """

    def __init__(self, app: ASGIApp, max_concurrent: int | None = None) -> None:
        self.app = app
        self.max_concurrent = (
            max_concurrent if max_concurrent is not None else get_settings().max_concurrent_streams
        )
        self._semaphore: asyncio.Semaphore | None = None

    def _get_semaphore(self) -> asyncio.Semaphore:
        # Created lazily so it binds to the running event loop.
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
            logger.info("Chat concurrency semaphore initialized (max=%d)", self.max_concurrent)
        return self._semaphore

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        if path not in CHAT_PATHS:
            await self.app(scope, receive, send)
            return

        sem = self._get_semaphore()

        # Full: reject instead of queuing
        if sem.locked():
            logger.warning("Concurrency limit reached for %s — returning 503", path)
            body = json.dumps(
                {"error": "Server busy — too many concurrent chats. Please retry."}
            ).encode()
            await send({
                "type": "http.response.start",
                "status": 503,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"retry-after", b"5"),
                ],
            })
            await send({
                "type": "http.response.body",
                "body": body,
            })
            return

        async with sem:
            await self.app(scope, receive, send)
