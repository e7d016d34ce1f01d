"""Scripted stand-ins for the Anthropic streaming API.

The fake turns mirror what ``AsyncAnthropic.messages.stream`` yields: raw
``content_block_start`` / ``content_block_delta`` events followed by a final
message made of real ``anthropic.types`` content blocks.
"""

from __future__ import annotations

import asyncio
import copy
import json
from dataclasses import dataclass, field, replace
from types import SimpleNamespace
from typing import Any

from anthropic.types import TextBlock, ToolUseBlock

# ── Scripted model turns ────────────────────────────────────


@dataclass
class FakeTurn:
    events: list[Any]
    message: Any
    stall: bool = False


def _start(index: int, block_type: str, **fields) -> SimpleNamespace:
    return SimpleNamespace(
        type="content_block_start",
        index=index,
        content_block=SimpleNamespace(type=block_type, **fields),
    )


def _text_delta(index: int, text: str) -> SimpleNamespace:
    return SimpleNamespace(
        type="content_block_delta",
        index=index,
        delta=SimpleNamespace(type="text_delta", text=text),
    )


def _json_delta(index: int, partial: str) -> SimpleNamespace:
    return SimpleNamespace(
        type="content_block_delta",
        index=index,
        delta=SimpleNamespace(type="input_json_delta", partial_json=partial),
    )


def text_turn(text: str, *, stop_reason: str = "end_turn", usage: tuple[int, int] = (10, 5)) -> FakeTurn:
    """A model turn with only text, streamed in two chunks."""
    half = len(text) // 2
    events = [_start(0, "text", text=""), _text_delta(0, text[:half]), _text_delta(0, text[half:])]
    message = SimpleNamespace(
        content=[TextBlock(type="text", text=text)],
        stop_reason=stop_reason,
        usage=SimpleNamespace(input_tokens=usage[0], output_tokens=usage[1]),
    )
    return FakeTurn(events=events, message=message)


def tool_turn(
    *calls: tuple[str, str, dict[str, Any]],
    text: str = "",
    stop_reason: str = "tool_use",
    usage: tuple[int, int] = (20, 8),
    final_inputs: dict[str, dict[str, Any]] | None = None,
) -> FakeTurn:
    """A model turn requesting tools; each input arrives as split JSON fragments.

    ``final_inputs`` overrides the finalized ``input`` of a block by id, to
    check which source the loop trusts.
    """
    events: list[Any] = []
    content: list[Any] = []
    index = 0
    if text:
        events += [_start(0, "text", text=""), _text_delta(0, text)]
        content.append(TextBlock(type="text", text=text))
        index = 1
    for tool_id, name, tool_input in calls:
        raw = json.dumps(tool_input)
        cut = len(raw) // 2
        events += [
            _start(index, "tool_use", id=tool_id, name=name, input={}),
            _json_delta(index, raw[:cut]),
            _json_delta(index, raw[cut:]),
        ]
        final_input = (final_inputs or {}).get(tool_id, tool_input)
        content.append(ToolUseBlock(type="tool_use", id=tool_id, name=name, input=final_input))
        index += 1
    message = SimpleNamespace(
        content=content,
        stop_reason=stop_reason,
        usage=SimpleNamespace(input_tokens=usage[0], output_tokens=usage[1]),
    )
    return FakeTurn(events=events, message=message)


def stalled(turn: FakeTurn) -> FakeTurn:
    """The same turn, but the stream hangs after its last event."""
    return replace(turn, stall=True)


class FakeStream:
    def __init__(self, turn: FakeTurn) -> None:
        self._turn = turn
        self.closed = False

    async def __aenter__(self) -> FakeStream:
        return self

    async def __aexit__(self, *exc_info) -> bool:
        self.closed = True
        return False

    def __aiter__(self):
        return self._iter()

    async def _iter(self):
        for event in self._turn.events:
            yield event
        if self._turn.stall:
            # A model that goes quiet mid-turn.
            await asyncio.Event().wait()

    async def get_final_message(self) -> Any:
        return self._turn.message


@dataclass
class FakeLLM:
    """Stand-in for :class:`AnthropicService`.

    Replays ``turns`` in order; the last turn repeats once the script runs
    out.  ``follow_up`` is returned by :meth:`complete`, or raised when it is
    an exception.
    """

    turns: list[FakeTurn]
    follow_up: Any = '["Adapt this for ELL students", "Create an exit ticket", "Show Lesson 2"]'
    timeout: float = 5.0
    requests: list[dict[str, Any]] = field(default_factory=list)
    streams: list[FakeStream] = field(default_factory=list)
    complete_calls: int = 0

    def stream(self, messages, *, system="", tools=None, config=None) -> FakeStream:
        self.requests.append(
            {"messages": copy.deepcopy(messages), "system": system, "tools": tools}
        )
        turn = self.turns[min(len(self.requests) - 1, len(self.turns) - 1)]
        stream = FakeStream(turn)
        self.streams.append(stream)
        return stream

    async def complete(self, messages, *, system="", config=None) -> str:
        self.complete_calls += 1
        if isinstance(self.follow_up, BaseException):
            raise self.follow_up
        return self.follow_up


