"""Tests for SSE framing of chat events."""

import json

from models.artifact import Artifact
from models.chat import ToolCallRecord, Usage
from models.stream_events import (
    ArtifactUpdateEvent,
    CompleteEvent,
    ErrorEvent,
    StatusEvent,
    TokenEvent,
    ToolResultEvent,
    ToolStartEvent,
)
from services.chat_state import ChatState
from services.stream_codec import EventStreamDecoder, EventStreamEncoder

ARTIFACT = Artifact(id="doc-1", type="handout", title="Ticket ✓", content="Ünïcødé — ok")
CALL = ToolCallRecord(id="toolu_1", name="create_document", input={"title": "Ticket ✓"})

EVENTS = [
    StatusEvent(message="Thinking…"),
    TokenEvent(text="Here’s your ticket "),
    TokenEvent(text="🎟️"),
    ToolStartEvent(tool_call=CALL, description="Creating “Ticket ✓”", label="Creating document"),
    ArtifactUpdateEvent(artifacts=[ARTIFACT], active_artifact_id="doc-1"),
    ToolResultEvent(
        tool_call=CALL.model_copy(update={"result": {"documentId": "doc-1"}}),
        label="Creating document",
        result_summary="Created “Ticket ✓”",
    ),
    CompleteEvent(
        response="Here’s your ticket 🎟️",
        tool_calls=[CALL],
        artifact=ARTIFACT,
        artifact_list=[ARTIFACT],
        follow_up_suggestions=["Add a rubric"],
        usage=Usage(input_tokens=3, output_tokens=4),
    ),
]


def _body() -> bytes:
    encoder = EventStreamEncoder()
    return b"".join(encoder.encode_bytes(event) for event in EVENTS)


def _snapshot(state: ChatState) -> dict:
    data = state.model_dump(exclude={"messages"})
    data["messages"] = [m.model_dump(exclude={"created_at"}) for m in state.messages]
    return data


def _fold(chunks: list[bytes]) -> ChatState:
    state = ChatState()
    state.begin_turn("make a ticket")
    decoder = EventStreamDecoder()
    for chunk in chunks:
        for event in decoder.feed(chunk):
            state.apply(event)
    for event in decoder.flush():
        state.apply(event)
    return state


def test_encode_unit_format():
    unit = EventStreamEncoder().encode(TokenEvent(text="hi"))
    assert unit == 'data: {"type": "token", "text": "hi"}\n\n'


def test_complete_event_wire_shape():
    payload = json.loads(EventStreamEncoder().encode(EVENTS[-1])[len("data: ") :])
    assert set(payload) == {
        "type",
        "response",
        "toolCalls",
        "artifact",
        "artifactList",
        "followUpSuggestions",
        "usage",
    }
    assert payload["usage"] == {"input_tokens": 3, "output_tokens": 4}


def test_round_trip_decodes_every_event():
    events = EventStreamDecoder().feed(_body())
    assert [e.type for e in events] == [e.type for e in EVENTS]
    assert events[4].artifacts[0].model_dump() == ARTIFACT.model_dump()


def test_split_at_every_byte_offset_gives_same_state():
    body = _body()
    whole = _snapshot(_fold([body]))
    for offset in range(1, len(body)):
        split = _fold([body[:offset], body[offset:]])
        assert _snapshot(split) == whole, offset


def test_one_byte_chunks():
    body = _body()
    state = _fold([body[i : i + 1] for i in range(len(body))])
    assert state.messages[-1].content == "Here’s your ticket 🎟️"
    assert state.active_artifact.title == "Ticket ✓"


def test_malformed_units_are_skipped():
    decoder = EventStreamDecoder()
    body = (
        b"data: {not json}\n\n"
        b'data: {"type": "mystery"}\n\n'
        b": heartbeat\n\n"
        b'data: {"type": "token", "text": "ok"}\n\n'
    )
    events = decoder.feed(body)
    assert [e.type for e in events] == ["token"]
    assert decoder.skipped == 2


def test_crlf_and_trailing_unit_without_separator():
    decoder = EventStreamDecoder()
    events = decoder.feed(b'data: {"type": "status", "message": "a"}\r\n\r\n')
    events += decoder.feed(b'data: {"type": "error", "message": "boom"}')
    assert [e.type for e in events] == ["status"]
    tail = decoder.flush()
    assert isinstance(tail[0], ErrorEvent)
    assert tail[0].message == "boom"
