"""Chat event stream framing — SSE ``data: {json}\\n\\n`` units.

Server side, :class:`EventStreamEncoder` turns each stream event into one
ready-to-yield SSE string.  Client side, :class:`EventStreamDecoder` is fed
raw body chunks as they arrive and returns the events completed so far.

Chunks may split a unit (or a multi-byte UTF-8 character) anywhere; the
decoder buffers the remainder until the next chunk.  A unit that is not
valid JSON or not a known event is logged and skipped.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import Any

from pydantic import ValidationError

from models.stream_events import StreamEvent, parse_stream_event

logger = logging.getLogger(__name__)

UNIT_SEPARATOR = "\n\n"
DATA_PREFIX = "data:"


class EventStreamEncoder:
    """Encode stream events as SSE units."""

    @staticmethod
    def _sse(payload: dict[str, Any]) -> str:
        return f"data: {json.dumps(payload, ensure_ascii=False, default=str)}\n\n"

    def encode(self, event: StreamEvent) -> str:
        return self._sse(event.to_wire())

    def encode_bytes(self, event: StreamEvent) -> bytes:
        return self.encode(event).encode("utf-8")


class EventStreamDecoder:
    """Incremental decoder for the chat event stream.

    Usage::

        decoder = EventStreamDecoder()
        async for chunk in response.aiter_bytes():
            for event in decoder.feed(chunk):
                state.apply(event)
        for event in decoder.flush():
            state.apply(event)
    """

    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.skipped = 0

    def feed(self, chunk: bytes | str) -> list[StreamEvent]:
        """Add a body chunk; return every event whose unit is now complete."""
        if isinstance(chunk, bytes):
            self._buffer += self._utf8.decode(chunk)
        else:
            self._buffer += chunk
        # SSE allows CRLF line endings.
        self._buffer = self._buffer.replace("\r\n", "\n")

        events: list[StreamEvent] = []
        while UNIT_SEPARATOR in self._buffer:
            unit, self._buffer = self._buffer.split(UNIT_SEPARATOR, 1)
            event = self._decode_unit(unit)
            if event is not None:
                events.append(event)
        return events

    def flush(self) -> list[StreamEvent]:
        """Decode whatever is left once the body has ended."""
        self._buffer += self._utf8.decode(b"", final=True)
        unit, self._buffer = self._buffer, ""
        if not unit.strip():
            return []
        event = self._decode_unit(unit)
        return [event] if event is not None else []

    def _decode_unit(self, unit: str) -> StreamEvent | None:
        data_lines = []
        for line in unit.split("\n"):
            if line.startswith(DATA_PREFIX):
                data_lines.append(line[len(DATA_PREFIX) :].lstrip(" "))
            # Comments (":keep-alive") and other SSE fields are ignored.
        if not data_lines:
            return None

        data = "\n".join(data_lines)
        try:
            return parse_stream_event(json.loads(data))
        except (json.JSONDecodeError, ValidationError) as exc:
            self.skipped += 1
            logger.warning("skipping malformed stream unit (%s): %.120r", type(exc).__name__, data)
            return None
