"""Tests for config.llm_config — LLMConfig model, merge, and request kwargs."""

import pytest

from config.llm_config import LLMConfig
from config.settings import Settings


# ── Construction & defaults ───────────────────────────────────


def test_default_all_none():
    cfg = LLMConfig()
    assert cfg.model is None
    assert cfg.temperature is None
    assert cfg.stop_sequences is None


def test_validation_temperature_range():
    with pytest.raises(ValueError):
        LLMConfig(temperature=1.5)  # Messages API max is 1.0


# ── merge ─────────────────────────────────────────────────────


def test_merge_override_non_none():
    base = LLMConfig(model="claude-sonnet-4-20250514", temperature=0.7, max_tokens=4096)
    merged = base.merge(LLMConfig(temperature=0.2))

    assert merged.model == "claude-sonnet-4-20250514"  # kept from base
    assert merged.temperature == 0.2                    # overridden
    assert merged.max_tokens == 4096                    # kept from base
    assert merged.top_p is None                         # neither set


def test_merge_does_not_mutate():
    base = LLMConfig(temperature=0.7)
    base.merge(LLMConfig(temperature=0.2))
    assert base.temperature == 0.7


# ── to_request_kwargs ─────────────────────────────────────────


def test_to_request_kwargs_basic():
    cfg = LLMConfig(model="claude-haiku", max_tokens=300, temperature=0.3, top_k=40)
    assert cfg.to_request_kwargs() == {
        "max_tokens": 300,
        "model": "claude-haiku",
        "temperature": 0.3,
        "top_k": 40,
    }


def test_to_request_kwargs_requires_max_tokens():
    assert LLMConfig().to_request_kwargs() == {"max_tokens": 4096}


# ── Settings integration ──────────────────────────────────────


def test_settings_default_llm_config():
    s = Settings(anthropic_model="claude-x", max_tokens=2048, temperature=0.6)
    cfg = s.get_default_llm_config()

    assert cfg.model == "claude-x"
    assert cfg.max_tokens == 2048
    assert cfg.temperature == 0.6


def test_follow_up_config_falls_back_to_main_model():
    s = Settings(anthropic_model="claude-x", follow_up_max_tokens=200)
    cfg = s.get_follow_up_llm_config()
    assert cfg.model == "claude-x"
    assert cfg.max_tokens == 200

    s = Settings(anthropic_model="claude-x", follow_up_model="claude-small")
    assert s.get_follow_up_llm_config().model == "claude-small"
