"""Structured error codes for client-facing error messages.

Stream ``error`` events and JSON error bodies share one format::

    {ERROR_CODE}: {human_readable_detail}

Tool failures additionally name the tool::

    TOOL_EXECUTION_FAILED: {tool_name} — {detail}
"""

from __future__ import annotations

import re
from enum import Enum

import anthropic

from errors.exceptions import GoogleDocFetchError, ToolError


class ErrorCode(str, Enum):
    """Canonical error codes."""

    INVALID_REQUEST = "INVALID_REQUEST"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TOOL_EXECUTION_FAILED = "TOOL_EXECUTION_FAILED"
    LLM_PROVIDER_ERROR = "LLM_PROVIDER_ERROR"
    EXTERNAL_DOCUMENT_ERROR = "EXTERNAL_DOCUMENT_ERROR"


def format_tool_error(tool_name: str, detail: str) -> str:
    """``TOOL_EXECUTION_FAILED: {tool_name} — {detail}``"""
    return f"{ErrorCode.TOOL_EXECUTION_FAILED.value}: {tool_name} — {detail}"


def format_llm_error(detail: str) -> str:
    """``LLM_PROVIDER_ERROR: {detail}``"""
    return f"{ErrorCode.LLM_PROVIDER_ERROR.value}: {detail}"


def format_error(code: ErrorCode, detail: str) -> str:
    """``{ERROR_CODE}: {detail}``"""
    return f"{code.value}: {detail}"


# LLM-provider patterns (timeout, connection, context-length, token limits).
_LLM_PROVIDER_RE = re.compile(
    r"timeout|timed out|connection|context length|token|overloaded",
    re.IGNORECASE,
)


def classify_exception(exc: BaseException) -> str:
    """Turn an exception raised during a chat run into an ``error`` message.

    Classification order (first match wins):
        1. Tool failures (unknown tool, invalid arguments).
        2. External document export failures.
        3. Anthropic SDK errors and deadline expiry.
        4. Anything whose text looks like a provider problem.
        5. Fallback: ``INTERNAL_ERROR``.
    """
    if isinstance(exc, ToolError):
        return format_tool_error(exc.tool_name, str(exc))
    if isinstance(exc, GoogleDocFetchError):
        return format_error(ErrorCode.EXTERNAL_DOCUMENT_ERROR, str(exc))
    if isinstance(exc, anthropic.AuthenticationError):
        return format_llm_error(
            "Authentication failed — check that ANTHROPIC_API_KEY is set and valid"
        )
    if isinstance(exc, anthropic.RateLimitError):
        return format_error(ErrorCode.RATE_LIMITED, str(exc))
    if isinstance(exc, (anthropic.APIError, TimeoutError)):
        return format_llm_error(str(exc) or type(exc).__name__)
    text = str(exc) or type(exc).__name__
    if _LLM_PROVIDER_RE.search(text):
        return format_llm_error(text)
    return format_error(ErrorCode.INTERNAL_ERROR, text)
