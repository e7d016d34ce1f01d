"""CurriculumAgent — bounded tool-use loop over the Anthropic Messages API.

One run per chat request:

1. Stream a model turn with the full conversation and the tool catalogue,
   forwarding text deltas as ``token`` events and buffering each tool-use
   block's ``input_json_delta`` fragments.
2. Append the finished assistant turn verbatim.
3. Execute the requested tools in order, feeding every result back in a
   single ``user`` message and merging any ``artifact`` payload into the
   request's :class:`ArtifactStore`.
4. Go round again only when the turn asked for tools *and* stopped with
   ``stop_reason == "tool_use"``; at most ``agent_max_iterations`` turns.

Events go to an :class:`EventSink`, so the buffered ``POST /api/chat`` and
the streaming ``POST /api/chat/stream`` endpoints share this loop.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any

from config.prompts.curriculum_assistant import build_system_prompt
from config.prompts.follow_ups import FOLLOW_UP_SYSTEM_PROMPT, build_follow_up_prompt
from config.settings import Settings, get_settings
from errors.exceptions import ToolError, UnknownToolError
from models.chat import ChatMessage, ChatRequest, ChatResult, ToolCallRecord, Usage
from models.errors import classify_exception
from models.stream_events import (
    ArtifactUpdateEvent,
    CompleteEvent,
    ErrorEvent,
    StatusEvent,
    TokenEvent,
    ToolResultEvent,
    ToolStartEvent,
)
from services.anthropic_service import AnthropicService
from services.artifact_store import ArtifactStore
from services.event_sink import EventSink
from services.metrics import get_metrics_collector
from services.tool_summaries import describe_tool_call, summarize_tool_result, tool_label
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

MAX_FOLLOW_UPS = 4

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


# ── Per-turn / per-run state ────────────────────────────────


@dataclass
class PendingToolUse:
    """A tool-use block of a finished model turn, with its parsed input."""

    id: str
    name: str
    input: dict[str, Any]


@dataclass
class ModelTurn:
    """One finished model call."""

    content: list[dict[str, Any]]
    text: str
    tool_uses: list[PendingToolUse]
    stop_reason: str | None
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class RunState:
    """Mutable state of one orchestration run."""

    conversation: list[dict[str, Any]]
    artifacts: ArtifactStore
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    text_parts: list[str] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)
    iterations: int = 0

    @property
    def response(self) -> str:
        return "".join(self.text_parts)


def _block_param(block: Any) -> dict[str, Any]:
    """Serialize an SDK content block back into a request ``content`` entry."""
    return block.model_dump(exclude_none=True)


def _parse_tool_input(buffered: str, fallback: Any, tool_name: str) -> dict[str, Any]:
    """Parse the concatenated ``input_json_delta`` fragments of one block.

    Falls back to the SDK's finalized ``input`` when nothing was buffered or
    the fragments do not form a JSON object.
    """
    if buffered.strip():
        try:
            parsed = json.loads(buffered)
        except json.JSONDecodeError:
            logger.warning("tool %s: buffered input is not valid JSON, using final input", tool_name)
        else:
            if isinstance(parsed, dict):
                return parsed
    return dict(fallback) if isinstance(fallback, dict) else {}


def _flatten_transcript(messages: list[ChatMessage], answer: str) -> str:
    lines = [f"{m.role.capitalize()}: {m.content}" for m in messages]
    if answer:
        lines.append(f"Assistant: {answer}")
    return "\n\n".join(lines)


def parse_suggestions(text: str) -> list[str]:
    """Extract the JSON array of suggestion strings from a model reply.

    Raises:
        ValueError: no JSON array of strings could be found.
    """
    cleaned = _CODE_FENCE_RE.sub("", text.strip())
    start, end = cleaned.find("["), cleaned.rfind("]")
    if start == -1 or end <= start:
        raise ValueError("no JSON array in follow-up reply")
    data = json.loads(cleaned[start : end + 1])
    if not isinstance(data, list):
        raise ValueError("follow-up reply is not a list")
    suggestions = [s.strip() for s in data if isinstance(s, str) and s.strip()]
    return suggestions[:MAX_FOLLOW_UPS]


# ── Agent ───────────────────────────────────────────────────


class CurriculumAgent:
    """Run the tool-use loop for one chat request at a time.

    The agent itself is stateless between runs; everything request-scoped
    lives in a :class:`RunState`.
    """

    def __init__(
        self,
        llm: AnthropicService,
        registry: ToolRegistry,
        settings: Settings | None = None,
    ) -> None:
        self._llm = llm
        self._registry = registry
        self._settings = settings or get_settings()

    async def run(self, request: ChatRequest, sink: EventSink) -> ChatResult:
        """Run the loop, emitting events into *sink*.

        On failure an ``error`` event is emitted and the exception re-raised.
        Cancellation propagates without an ``error`` event.
        """
        seed = [request.current_artifact] if request.current_artifact else []
        state = RunState(
            conversation=[m.to_anthropic() for m in request.messages],
            artifacts=ArtifactStore(seed),
        )
        system = build_system_prompt(self._registry.deps.content, request.current_artifact)
        metrics = get_metrics_collector()
        start = time.monotonic()

        try:
            outcome = await self._loop(state, system, sink)
            suggestions = await self._follow_ups(request.messages, state.response, sink)
        except asyncio.CancelledError:
            logger.info("chat run cancelled after %d iteration(s)", state.iterations)
            raise
        except Exception as exc:
            logger.exception("chat run failed after %d iteration(s)", state.iterations)
            metrics.record_run(outcome="error", iterations=state.iterations)
            await sink.emit(ErrorEvent(message=classify_exception(exc)))
            raise

        metrics.record_run(outcome=outcome, iterations=state.iterations)
        result = ChatResult(
            response=state.response,
            tool_calls=state.tool_calls,
            artifact=state.artifacts.active,
            artifact_list=state.artifacts.snapshot(),
            follow_up_suggestions=suggestions,
            usage=state.usage,
            iterations=state.iterations,
        )
        logger.info(
            "chat run %s: iterations=%d tools=%d artifacts=%d tokens=%d/%d elapsed=%.2fs",
            outcome,
            state.iterations,
            len(state.tool_calls),
            len(result.artifact_list),
            state.usage.input_tokens,
            state.usage.output_tokens,
            time.monotonic() - start,
        )
        await sink.emit(CompleteEvent.from_result(result))
        return result

    # ── Loop ────────────────────────────────────────────────

    async def _loop(self, state: RunState, system: str, sink: EventSink) -> str:
        """Drive model turns until done; return ``"done"`` or ``"cap_reached"``."""
        max_iterations = self._settings.agent_max_iterations
        tools = self._registry.anthropic_tools()

        while state.iterations < max_iterations:
            state.iterations += 1
            await sink.emit(
                StatusEvent(
                    message="Thinking…" if state.iterations == 1 else "Reviewing tool results…"
                )
            )
            turn = await asyncio.wait_for(
                self._stream_turn(state.conversation, system, tools, sink),
                timeout=self._llm.timeout,
            )
            state.usage.add(turn.input_tokens, turn.output_tokens)
            state.text_parts.append(turn.text)
            state.conversation.append({"role": "assistant", "content": turn.content})

            if not turn.tool_uses:
                return "done"

            results = []
            for tool_use in turn.tool_uses:
                results.append(await self._dispatch(tool_use, state, sink))
            state.conversation.append({"role": "user", "content": results})

            if turn.stop_reason != "tool_use":
                return "done"

        logger.warning("tool loop stopped at the %d-iteration cap", max_iterations)
        return "cap_reached"

    async def _stream_turn(
        self,
        conversation: list[dict[str, Any]],
        system: str,
        tools: list[dict[str, Any]],
        sink: EventSink,
    ) -> ModelTurn:
        """Stream one model call, forwarding text and buffering tool input."""
        json_parts: dict[int, list[str]] = {}
        text_parts: list[str] = []

        async with self._llm.stream(conversation, system=system, tools=tools) as stream:
            async for event in stream:
                if event.type == "content_block_start":
                    if event.content_block.type == "tool_use":
                        json_parts[event.index] = []
                elif event.type == "content_block_delta":
                    delta = event.delta
                    if delta.type == "text_delta" and delta.text:
                        text_parts.append(delta.text)
                        await sink.emit(TokenEvent(text=delta.text))
                    elif delta.type == "input_json_delta":
                        json_parts.setdefault(event.index, []).append(delta.partial_json)
            message = await stream.get_final_message()

        tool_uses = [
            PendingToolUse(
                id=block.id,
                name=block.name,
                input=_parse_tool_input("".join(json_parts.get(idx, [])), block.input, block.name),
            )
            for idx, block in enumerate(message.content)
            if block.type == "tool_use"
        ]
        usage = getattr(message, "usage", None)
        return ModelTurn(
            content=[_block_param(block) for block in message.content],
            text="".join(text_parts),
            tool_uses=tool_uses,
            stop_reason=message.stop_reason,
            input_tokens=getattr(usage, "input_tokens", 0) or 0,
            output_tokens=getattr(usage, "output_tokens", 0) or 0,
        )

    # ── Tool dispatch ───────────────────────────────────────

    async def _dispatch(
        self, tool_use: PendingToolUse, state: RunState, sink: EventSink
    ) -> dict[str, Any]:
        """Execute one tool call and return its ``tool_result`` block."""
        label = tool_label(tool_use.name)
        description = describe_tool_call(tool_use.name, tool_use.input)
        record = ToolCallRecord(id=tool_use.id, name=tool_use.name, input=tool_use.input)
        await sink.emit(ToolStartEvent(tool_call=record, description=description, label=label))

        is_error = False
        try:
            result = await self._registry.execute(tool_use.name, tool_use.input)
        except UnknownToolError:
            raise
        except ToolError as exc:
            logger.warning("tool %s rejected: %s", tool_use.name, exc)
            result = {"error": str(exc)}
            is_error = True

        result = self._verify_update(result, state.artifacts)
        block: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": tool_use.id,
            "content": json.dumps(result, ensure_ascii=False, default=str),
        }
        if is_error:
            block["is_error"] = True

        artifact = result.get("artifact") if isinstance(result, dict) else None
        if isinstance(artifact, dict) and artifact.get("id"):
            state.artifacts.merge(artifact)
            await sink.emit(
                ArtifactUpdateEvent(
                    artifacts=state.artifacts.snapshot(),
                    active_artifact_id=state.artifacts.active_id,
                )
            )

        record = record.model_copy(update={"result": result})
        state.tool_calls.append(record)
        await sink.emit(
            ToolResultEvent(
                tool_call=record,
                description=description,
                label=label,
                result_summary=summarize_tool_result(tool_use.name, result),
            )
        )
        return block

    @staticmethod
    def _verify_update(result: Any, artifacts: ArtifactStore) -> Any:
        """Reject updates aimed at a document this conversation does not have."""
        if not isinstance(result, dict) or result.get("action") != "update":
            return result
        document_id = result.get("documentId")
        if document_id in artifacts:
            return result
        logger.info("update_document target %s not in artifact store", document_id)
        return {
            "error": "Document not found",
            "documentId": document_id,
            "availableDocuments": artifacts.ids(),
        }

    # ── Follow-up suggestions ───────────────────────────────

    async def _follow_ups(
        self, messages: list[ChatMessage], answer: str, sink: EventSink
    ) -> list[str]:
        """3-4 next-step suggestions; any failure degrades to ``[]``."""
        if not self._settings.follow_up_suggestions_enabled:
            return []
        await sink.emit(StatusEvent(message="Suggesting next steps…"))
        transcript = _flatten_transcript(messages, answer)
        try:
            reply = await self._llm.complete(
                [{"role": "user", "content": build_follow_up_prompt(transcript)}],
                system=FOLLOW_UP_SYSTEM_PROMPT,
                config=self._settings.get_follow_up_llm_config(),
            )
            return parse_suggestions(reply)
        except Exception as exc:
            logger.warning("follow-up suggestions unavailable: %s", exc)
            return []
