"""Async wrapper around the Anthropic Messages API.

The orchestration loop streams every tool-use turn through :meth:`stream`
and makes one plain :meth:`complete` call for follow-up suggestions.
Generation parameters come from :class:`LLMConfig`, merged on top of the
global defaults in Settings.

Priority chain (low → high):
    .env global defaults  →  per-call LLMConfig
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any

import anthropic
from anthropic.lib.streaming import AsyncMessageStreamManager

from config.llm_config import LLMConfig
from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class AnthropicService:
    """Thin async client for tool-use conversations with Claude."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._config = self._settings.get_default_llm_config()
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        # Created on first use so the app can boot without a key configured.
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._settings.anthropic_api_key or None,
                timeout=self._settings.llm_timeout_seconds,
            )
        return self._client

    @property
    def model(self) -> str | None:
        return self._config.model

    @property
    def timeout(self) -> float:
        """Deadline in seconds for one model call, streamed or not."""
        return self._settings.llm_timeout_seconds

    def _request_kwargs(
        self,
        messages: list[dict[str, Any]],
        *,
        system: str = "",
        tools: list[dict[str, Any]] | None = None,
        config: LLMConfig | None = None,
    ) -> dict[str, Any]:
        effective = self._config.merge(config) if config else self._config
        kwargs: dict[str, Any] = {"messages": messages, **effective.to_request_kwargs()}
        if system:
            kwargs["system"] = system
        if tools:
            kwargs["tools"] = tools
        return kwargs

    def stream(
        self,
        messages: list[dict[str, Any]],
        *,
        system: str = "",
        tools: list[dict[str, Any]] | None = None,
        config: LLMConfig | None = None,
    ) -> AsyncMessageStreamManager:
        """Open a streamed model call.

        Usage::

            async with llm.stream(messages, system=..., tools=...) as stream:
                async for event in stream:
                    ...
                message = await stream.get_final_message()

        Leaving the ``async with`` block (normally or by cancellation)
        closes the HTTP response.
        """
        kwargs = self._request_kwargs(messages, system=system, tools=tools, config=config)
        logger.debug("messages.stream model=%s turns=%d", kwargs.get("model"), len(messages))
        return self.client.messages.stream(**kwargs)

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        system: str = "",
        config: LLMConfig | None = None,
    ) -> str:
        """Single non-streamed, tool-free call; returns the concatenated text.

        Raises:
            TimeoutError: the call exceeded :attr:`timeout`.
            anthropic.APIError: the provider rejected or failed the call.
        """
        kwargs = self._request_kwargs(messages, system=system, config=config)
        response = await asyncio.wait_for(
            self.client.messages.create(**kwargs),
            timeout=self.timeout,
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None


@lru_cache
def get_llm_service() -> AnthropicService:
    """Process-wide Anthropic service."""
    return AnthropicService()
