"""Output sinks for the orchestration loop.

The loop emits every :data:`StreamEvent` into a sink and does not know how
it is delivered:

- :class:`CollectingSink` buffers events in memory (``POST /api/chat``).
- :class:`QueueSink` hands events to an ``asyncio.Queue`` that the
  streaming endpoint drains into SSE frames (``POST /api/chat/stream``).
"""

from __future__ import annotations

import asyncio
import logging

from models.stream_events import StreamEvent

logger = logging.getLogger(__name__)


class EventSink:
    """Base sink — discards everything."""

    async def emit(self, event: StreamEvent) -> None:
        return None


class CollectingSink(EventSink):
    """Keep every event in emission order."""

    def __init__(self) -> None:
        self.events: list[StreamEvent] = []

    async def emit(self, event: StreamEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> list[StreamEvent]:
        return [e for e in self.events if e.type == event_type]


class QueueSink(EventSink):
    """Forward events to a queue; ``None`` marks the end of the stream.

    Usage::

        sink = QueueSink()
        task = asyncio.create_task(run_and_close(sink))
        async for event in sink:
            yield encoder.encode(event)
    """

    _CLOSED = None

    def __init__(self, maxsize: int = 0) -> None:
        self.queue: asyncio.Queue[StreamEvent | None] = asyncio.Queue(maxsize)
        self._closed = False

    async def emit(self, event: StreamEvent) -> None:
        if self._closed:
            logger.debug("dropping %s event emitted after close", event.type)
            return
        await self.queue.put(event)

    async def close(self) -> None:
        if not self._closed:
            self._closed = True
            await self.queue.put(self._CLOSED)

    async def get(self, timeout: float | None = None) -> StreamEvent | None:
        """Next event, or ``None`` once the sink is closed.

        Raises:
            TimeoutError: nothing arrived within *timeout* seconds.
        """
        if timeout is None:
            return await self.queue.get()
        return await asyncio.wait_for(self.queue.get(), timeout=timeout)

    def __aiter__(self) -> QueueSink:
        return self

    async def __anext__(self) -> StreamEvent:
        event = await self.get()
        if event is self._CLOSED:
            raise StopAsyncIteration
        return event
