"""Chat request / response models for ``/api/chat`` and ``/api/chat/stream``."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from models.artifact import Artifact
from models.base import CamelModel


class ChatMessage(CamelModel):
    """One turn of the client-side transcript (text only)."""

    role: Literal["user", "assistant"]
    content: str

    def to_anthropic(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class ChatRequest(CamelModel):
    """POST /api/chat — full message history plus the artifact on screen."""

    messages: list[ChatMessage] = Field(min_length=1)
    current_artifact: Artifact | None = None

    @field_validator("messages")
    @classmethod
    def _last_message_from_user(cls, value: list[ChatMessage]) -> list[ChatMessage]:
        if value[-1].role != "user":
            raise ValueError("the last message must come from the user")
        return value


class ToolCallRecord(CamelModel):
    """A model-requested tool call, completed in place once executed."""

    id: str
    name: str
    input: dict[str, Any] = Field(default_factory=dict)
    result: Any = None


class Usage(BaseModel):
    """Token usage summed over every model call of one request.

    Field names stay snake_case on the wire to match the Messages API.
    """

    input_tokens: int = 0
    output_tokens: int = 0

    def add(self, input_tokens: int, output_tokens: int) -> None:
        self.input_tokens += input_tokens
        self.output_tokens += output_tokens

    def to_wire(self) -> dict[str, int]:
        return {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens}


class ChatResult(CamelModel):
    """Final outcome of one orchestration run.

    Serialized as the body of ``POST /api/chat`` and as the payload of the
    ``complete`` stream event.
    """

    response: str = ""
    tool_calls: list[ToolCallRecord] = Field(default_factory=list)
    artifact: Artifact | None = None
    artifact_list: list[Artifact] = Field(default_factory=list)
    follow_up_suggestions: list[str] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
    iterations: int = Field(default=0, exclude=True)

    def to_wire(self) -> dict[str, Any]:
        return {
            "response": self.response,
            "toolCalls": [tc.model_dump(by_alias=True) for tc in self.tool_calls],
            "artifact": self.artifact.to_wire() if self.artifact else None,
            "artifactList": [a.to_wire() for a in self.artifact_list],
            "followUpSuggestions": list(self.follow_up_suggestions),
            "usage": self.usage.to_wire(),
        }
