"""Shared pytest fixtures for the curriculum assistant tests.

Provides:
- ``content_store``: the static curriculum catalogue
- ``google_docs``: a mocked :class:`GoogleDocsClient` (no network)
- ``registry``: the tool registry bound to both
- ``settings``: Settings with a fake key and the default iteration cap
- ``make_llm``: builds a :class:`FakeLLM` that replays scripted model turns
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import Settings
from services.content_store import ContentStore, get_content_store
from services.google_docs import GoogleDocContent, GoogleDocsClient
from services.metrics import get_metrics_collector
from tests.fakes import FakeLLM, FakeTurn
from tools.registry import ToolDeps, ToolRegistry

# ── Fixtures ────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_metrics():
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()


@pytest.fixture
def content_store() -> ContentStore:
    return get_content_store()


@pytest.fixture
def google_docs() -> MagicMock:
    """Google Docs client whose ``fetch`` returns a small exported doc."""
    client = MagicMock(spec=GoogleDocsClient)
    client.fetch = AsyncMock(
        return_value=GoogleDocContent(
            id="doc-1",
            title="Lesson 1 Teacher Guide (live)",
            content="Learning Objectives\nStudents will analyze Binti.",
            html=(
                "<html><head><title>Lesson 1 Teacher Guide (live)</title></head>"
                "<body><h1>Learning Objectives</h1><p>Students will analyze <b>Binti</b>.</p>"
                "</body></html>"
            ),
            url="https://docs.google.com/document/d/doc-1/edit",
        )
    )
    return client


@pytest.fixture
def registry(content_store, google_docs) -> ToolRegistry:
    return ToolRegistry(ToolDeps(content=content_store, google_docs=google_docs))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        anthropic_api_key="test-key",
        agent_max_iterations=10,
        follow_up_suggestions_enabled=True,
    )


@pytest.fixture
def make_llm():
    def _make(*turns: FakeTurn, follow_up: Any = None) -> FakeLLM:
        llm = FakeLLM(turns=list(turns))
        if follow_up is not None:
            llm.follow_up = follow_up
        return llm

    return _make
