"""Chat stream event models.

One discriminated union covers every event the orchestration loop emits.
The server serializes them with :meth:`to_wire`; the client decoder parses
payloads back with :func:`parse_stream_event`.

| type            | client effect                                    |
|-----------------|--------------------------------------------------|
| status          | transient progress line                          |
| token           | append to the growing assistant text             |
| tool_start      | register a pending tool activity                 |
| tool_result     | complete the matching activity, attach summary   |
| artifact_update | merge into the artifact list, set active         |
| complete        | finalize message, tool calls, artifacts, hints   |
| error           | inline error, stop loading                       |
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from models.artifact import Artifact
from models.base import CamelModel
from models.chat import ChatResult, ToolCallRecord, Usage


class _StreamEvent(CamelModel):
    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class StatusEvent(_StreamEvent):
    type: Literal["status"] = "status"
    message: str


class TokenEvent(_StreamEvent):
    type: Literal["token"] = "token"
    text: str


class ToolStartEvent(_StreamEvent):
    type: Literal["tool_start"] = "tool_start"
    tool_call: ToolCallRecord
    description: str = ""
    label: str = ""


class ToolResultEvent(_StreamEvent):
    type: Literal["tool_result"] = "tool_result"
    tool_call: ToolCallRecord
    description: str = ""
    label: str = ""
    result_summary: str | None = None


class ArtifactUpdateEvent(_StreamEvent):
    type: Literal["artifact_update"] = "artifact_update"
    artifacts: list[Artifact] = Field(default_factory=list)
    active_artifact_id: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "artifacts": [a.to_wire() for a in self.artifacts],
            "activeArtifactId": self.active_artifact_id,
        }


class CompleteEvent(_StreamEvent):
    type: Literal["complete"] = "complete"
    response: str = ""
    tool_calls: list[ToolCallRecord] = Field(default_factory=list)
    artifact: Artifact | None = None
    artifact_list: list[Artifact] = Field(default_factory=list)
    follow_up_suggestions: list[str] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)

    @classmethod
    def from_result(cls, result: ChatResult) -> CompleteEvent:
        return cls(
            response=result.response,
            tool_calls=result.tool_calls,
            artifact=result.artifact,
            artifact_list=result.artifact_list,
            follow_up_suggestions=result.follow_up_suggestions,
            usage=result.usage,
        )

    def to_wire(self) -> dict[str, Any]:
        result = ChatResult(
            response=self.response,
            tool_calls=self.tool_calls,
            artifact=self.artifact,
            artifact_list=self.artifact_list,
            follow_up_suggestions=self.follow_up_suggestions,
            usage=self.usage,
        )
        return {"type": self.type, **result.to_wire()}


class ErrorEvent(_StreamEvent):
    type: Literal["error"] = "error"
    message: str


StreamEvent = Annotated[
    Union[
        StatusEvent,
        TokenEvent,
        ToolStartEvent,
        ToolResultEvent,
        ArtifactUpdateEvent,
        CompleteEvent,
        ErrorEvent,
    ],
    Field(discriminator="type"),
]

_stream_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)


def parse_stream_event(payload: dict[str, Any]) -> StreamEvent:
    """Validate a decoded JSON payload into its event model.

    Raises:
        pydantic.ValidationError: unknown ``type`` or missing fields.
    """
    return _stream_event_adapter.validate_python(payload)
