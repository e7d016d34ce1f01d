"""Reusable LLM generation parameters.

LLMConfig is a standalone Pydantic model that can be:
- embedded in Settings as the global default,
- declared per-call for task-specific tuning (e.g. follow-up suggestions).

Priority chain (low → high):
    .env global defaults  →  per-call overrides
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Anthropic generation parameters.

    All fields are optional.  ``None`` means "use the model's default".
    """

    model: str | None = Field(default=None, description="Anthropic model identifier")
    max_tokens: int | None = Field(default=None, description="Max tokens to generate")
    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    top_k: int | None = Field(default=None, ge=0)
    stop_sequences: list[str] | None = Field(default=None, description="Stop sequences")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def merge(self, overrides: LLMConfig) -> LLMConfig:
        """Return a new LLMConfig: *self* as base, *overrides* wins on non-None fields."""
        base = self.model_dump(exclude_none=True)
        over = overrides.model_dump(exclude_none=True)
        base.update(over)
        return LLMConfig(**base)

    def to_request_kwargs(self) -> dict:
        """Convert to ``messages.create()`` / ``messages.stream()`` keyword arguments.

        ``max_tokens`` is mandatory for the Messages API, so it falls back to 4096.
        """
        kw: dict = {"max_tokens": self.max_tokens or 4096}
        if self.model:
            kw["model"] = self.model
        for field in ("temperature", "top_p", "top_k", "stop_sequences"):
            val = getattr(self, field)
            if val is not None:
                kw[field] = val
        return kw
