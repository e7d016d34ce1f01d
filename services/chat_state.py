"""Client-side conversation state folded from the chat event stream.

:meth:`ChatState.apply` is a reducer: feeding it the events of one
``/api/chat/stream`` response, in order, reconstructs the assistant
message, its tool activity, the artifact list and the follow-up
suggestions.  :meth:`ChatState.finish` must run when the stream closes,
whatever happened, so loading always stops and an assistant message
always exists.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Literal

from pydantic import Field

from models.artifact import Artifact
from models.base import CamelModel
from models.chat import ChatMessage, ToolCallRecord, Usage
from models.stream_events import (
    ArtifactUpdateEvent,
    CompleteEvent,
    ErrorEvent,
    StatusEvent,
    StreamEvent,
    TokenEvent,
    ToolResultEvent,
    ToolStartEvent,
)
from services.artifact_store import merge_artifact

logger = logging.getLogger(__name__)


def error_fallback_text(detail: str) -> str:
    return (
        f"I'm sorry, I encountered an error: {detail}. "
        "Please make sure your ANTHROPIC_API_KEY is set and valid."
    )


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ToolActivity(CamelModel):
    """Live progress row for one tool call."""

    id: str
    name: str
    label: str = ""
    description: str = ""
    status: Literal["running", "done"] = "running"
    result_summary: str | None = None


class Message(CamelModel):
    """One chat transcript entry."""

    role: Literal["user", "assistant"]
    content: str = ""
    tool_calls: list[ToolCallRecord] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)

    def to_chat_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class AssistantMessage(Message):
    """Assistant entry, mutated while ``is_streaming`` and frozen after."""

    role: Literal["assistant"] = "assistant"
    status_messages: list[str] = Field(default_factory=list)
    tool_activities: list[ToolActivity] = Field(default_factory=list)
    is_streaming: bool = True
    error: str | None = None


class ChatState(CamelModel):
    """Everything the chat UI shows, rebuilt from events."""

    messages: list[Message] = Field(default_factory=list)
    artifacts: list[Artifact] = Field(default_factory=list)
    active_artifact_id: str | None = None
    follow_up_suggestions: list[str] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
    is_loading: bool = False

    # ── Accessors ───────────────────────────────────────────

    @property
    def active_artifact(self) -> Artifact | None:
        for artifact in self.artifacts:
            if artifact.id == self.active_artifact_id:
                return artifact
        return None

    @property
    def current(self) -> AssistantMessage | None:
        """The assistant message being streamed, if any."""
        if self.messages and isinstance(self.messages[-1], AssistantMessage):
            last = self.messages[-1]
            if last.is_streaming:
                return last
        return None

    def history(self) -> list[ChatMessage]:
        return [m.to_chat_message() for m in self.messages if m.content or m.role == "user"]

    # ── Turn lifecycle ──────────────────────────────────────

    def begin_turn(self, text: str) -> AssistantMessage:
        """Record the user's message and open an empty streaming reply."""
        self.messages.append(Message(role="user", content=text))
        reply = AssistantMessage()
        self.messages.append(reply)
        self.follow_up_suggestions = []
        self.is_loading = True
        return reply

    def finish(self, error: str | None = None) -> AssistantMessage:
        """Freeze the streaming reply; on *error* fall back to an apology."""
        reply = self.current
        if reply is None:
            last = self.messages[-1] if self.messages else None
            if isinstance(last, AssistantMessage):
                # Already finalized by a complete or error event.
                self.is_loading = False
                return last
            reply = AssistantMessage()
            self.messages.append(reply)
        if error is not None and not reply.error:
            reply.error = error
        if reply.error and not reply.content:
            reply.content = error_fallback_text(reply.error)
        reply.is_streaming = False
        reply.status_messages = []
        self.is_loading = False
        return reply

    # ── Reducer ─────────────────────────────────────────────

    def apply(self, event: StreamEvent) -> None:
        reply = self.current
        if reply is None:
            logger.debug("%s event arrived with no open reply; opening one", event.type)
            reply = AssistantMessage()
            self.messages.append(reply)
            self.is_loading = True

        if isinstance(event, StatusEvent):
            reply.status_messages.append(event.message)
        elif isinstance(event, TokenEvent):
            reply.content += event.text
        elif isinstance(event, ToolStartEvent):
            reply.tool_activities.append(
                ToolActivity(
                    id=event.tool_call.id,
                    name=event.tool_call.name,
                    label=event.label,
                    description=event.description,
                )
            )
        elif isinstance(event, ToolResultEvent):
            self._complete_activity(reply, event)
        elif isinstance(event, ArtifactUpdateEvent):
            for artifact in event.artifacts:
                self.artifacts, _ = merge_artifact(self.artifacts, artifact)
            if event.active_artifact_id:
                self.active_artifact_id = event.active_artifact_id
        elif isinstance(event, CompleteEvent):
            self._complete(reply, event)
        elif isinstance(event, ErrorEvent):
            reply.error = event.message
            self.finish()

    def _complete_activity(self, reply: AssistantMessage, event: ToolResultEvent) -> None:
        for activity in reply.tool_activities:
            if activity.id == event.tool_call.id:
                activity.status = "done"
                activity.result_summary = event.result_summary
                return
        reply.tool_activities.append(
            ToolActivity(
                id=event.tool_call.id,
                name=event.tool_call.name,
                label=event.label,
                description=event.description,
                status="done",
                result_summary=event.result_summary,
            )
        )

    def _complete(self, reply: AssistantMessage, event: CompleteEvent) -> None:
        reply.content = event.response
        reply.tool_calls = list(event.tool_calls)
        self.artifacts = list(event.artifact_list)
        if event.artifact is not None:
            self.active_artifact_id = event.artifact.id
        elif not self.artifacts:
            self.active_artifact_id = None
        self.follow_up_suggestions = list(event.follow_up_suggestions)
        self.usage = event.usage
        self.finish()
