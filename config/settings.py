"""Pydantic Settings — typed configuration with .env auto-loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from config.llm_config import LLMConfig


class Settings(BaseSettings):
    """Application configuration loaded from environment / .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    service_port: int = 5000
    cors_origins: list[str] = ["*"]
    debug: bool = False
    max_concurrent_streams: int = 15  # per worker; extra requests get 503

    # ── LLM ──────────────────────────────────────────────────
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    temperature: float | None = None
    agent_max_iterations: int = 10  # tool-use loop safety bound
    llm_timeout_seconds: float = 120.0  # per model call, streamed or not

    # ── Follow-up suggestions ────────────────────────────────
    follow_up_suggestions_enabled: bool = True
    follow_up_model: str = ""  # empty = anthropic_model
    follow_up_max_tokens: int = 300

    # ── External documents ───────────────────────────────────
    google_docs_timeout: float = 15.0  # seconds

    # ── Helpers ───────────────────────────────────────────────

    def get_default_llm_config(self) -> LLMConfig:
        """Build an :class:`LLMConfig` from global .env defaults."""
        return LLMConfig(
            model=self.anthropic_model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

    def get_follow_up_llm_config(self) -> LLMConfig:
        """LLM config for the suggestion sub-call (small, non-tool)."""
        return self.get_default_llm_config().merge(
            LLMConfig(
                model=self.follow_up_model or None,
                max_tokens=self.follow_up_max_tokens,
            )
        )


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor for application settings."""
    return Settings()
