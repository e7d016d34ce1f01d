"""Chat API — curriculum assistant tool-use loop.

Endpoints:
- ``POST /api/chat``         — run the loop, return the final result as JSON
- ``POST /api/chat/stream``  — run the loop, stream every event as SSE

Both share :class:`CurriculumAgent`; only the output sink differs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.responses import StreamingResponse

from agents.curriculum_agent import CurriculumAgent
from config.settings import Settings, get_settings
from models.chat import ChatRequest
from models.errors import classify_exception
from services.anthropic_service import AnthropicService, get_llm_service
from services.content_store import ContentStore, get_content_store
from services.event_sink import CollectingSink, QueueSink
from services.google_docs import GoogleDocsClient, get_google_docs_client
from services.stream_codec import EventStreamEncoder
from tools.registry import ToolDeps, ToolRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

_SSE_HEARTBEAT_INTERVAL = 15  # seconds
RUN_TASK_NAME = "chat-stream-run"


def get_curriculum_agent(
    settings: Settings = Depends(get_settings),
    content: ContentStore = Depends(get_content_store),
    google_docs: GoogleDocsClient = Depends(get_google_docs_client),
    llm: AnthropicService = Depends(get_llm_service),
) -> CurriculumAgent:
    """Wire the agent to the process-wide services."""
    registry = ToolRegistry(ToolDeps(content=content, google_docs=google_docs))
    return CurriculumAgent(llm, registry, settings)


@router.post("/chat")
async def chat(req: ChatRequest, agent: CurriculumAgent = Depends(get_curriculum_agent)):
    """Run the tool-use loop to completion and return the result."""
    try:
        result = await agent.run(req, CollectingSink())
    except Exception as exc:
        logger.warning("chat request failed: %s", exc)
        return JSONResponse(status_code=502, content={"error": classify_exception(exc)})
    return result.to_wire()


@router.post("/chat/stream")
async def chat_stream(req: ChatRequest, agent: CurriculumAgent = Depends(get_curriculum_agent)):
    """Stream the tool-use loop as ``data: {json}`` SSE units.

    The body ends after a ``complete`` or ``error`` event; there is no
    trailing JSON document.
    """
    return StreamingResponse(
        _chat_stream_generator(req, agent),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache, no-transform",
            "X-Accel-Buffering": "no",
        },
    )


async def _chat_stream_generator(
    req: ChatRequest, agent: CurriculumAgent
) -> AsyncGenerator[str, None]:
    sink = QueueSink()
    encoder = EventStreamEncoder()

    async def _runner() -> None:
        try:
            await agent.run(req, sink)
        except Exception:
            # The agent has already logged it and emitted an error event.
            logger.debug("chat stream run ended with an error", exc_info=True)
        finally:
            await sink.close()

    task = asyncio.create_task(_runner(), name=RUN_TASK_NAME)
    try:
        while True:
            try:
                event = await sink.get(timeout=_SSE_HEARTBEAT_INTERVAL)
            except TimeoutError:
                yield ": heartbeat\n\n"
                continue
            if event is None:
                break
            yield encoder.encode(event)
    finally:
        # Client went away (or the stream ended): stop the loop and release
        # the model stream it holds.
        if not task.done():
            logger.info("chat stream closed early, cancelling run")
            task.cancel()
        # Only the run's own cancellation is absorbed; one aimed at this
        # generator still propagates.
        await asyncio.gather(task, return_exceptions=True)
