"""Async HTTP client for the chat stream endpoint.

Posts the conversation to ``/api/chat/stream`` and folds the SSE body into
a :class:`ChatState` as it arrives.  Whatever happens (HTTP error, dropped
connection, ``error`` event) the state ends with a finalized assistant
message and ``is_loading == False``.
"""

from __future__ import annotations

import logging
from typing import Callable

import httpx

from models.stream_events import StreamEvent
from services.chat_state import AssistantMessage, ChatState
from services.stream_codec import EventStreamDecoder

logger = logging.getLogger(__name__)

STREAM_PATH = "/api/chat/stream"


class ChatClient:
    """Send teacher messages and keep the conversation state in sync.

    Usage::

        async with ChatClient("http://localhost:5000") as client:
            reply = await client.send("Show me the teacher guide for Unit 1 Lesson 1")
            print(reply.content, client.state.active_artifact)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        *,
        state: ChatState | None = None,
        http: httpx.AsyncClient | None = None,
        timeout: float = 300.0,
    ) -> None:
        self.state = state or ChatState()
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> ChatClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def send(
        self,
        text: str,
        on_event: Callable[[StreamEvent, ChatState], None] | None = None,
    ) -> AssistantMessage:
        """Send *text*, stream the reply into :attr:`state`, return the reply."""
        self.state.begin_turn(text)
        body = {
            "messages": [m.model_dump(by_alias=True) for m in self.state.history()],
        }
        active = self.state.active_artifact
        if active is not None:
            body["currentArtifact"] = active.to_wire()

        decoder = EventStreamDecoder()
        error: str | None = None
        try:
            async with self._http.stream("POST", STREAM_PATH, json=body) as response:
                if response.status_code >= 400:
                    await response.aread()
                    error = _error_detail(response)
                else:
                    async for chunk in response.aiter_bytes():
                        for event in decoder.feed(chunk):
                            self._apply(event, on_event)
                    for event in decoder.flush():
                        self._apply(event, on_event)
        except httpx.HTTPError as exc:
            logger.warning("chat stream failed: %s", exc)
            error = str(exc) or type(exc).__name__
        finally:
            reply = self.state.finish(error)
        return reply

    def _apply(
        self,
        event: StreamEvent,
        on_event: Callable[[StreamEvent, ChatState], None] | None,
    ) -> None:
        self.state.apply(event)
        if on_event is not None:
            on_event(event, self.state)


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"HTTP {response.status_code}"
