"""Single-source tool registry.

All tools register here via ``@register_tool(...)``.  Each registration
carries the Anthropic tool definition (name, description, ``input_schema``)
and the typed argument model the raw input is validated against.

Design:
- Tools are plain async functions ``(deps, args) -> dict``.
- The catalogue is static: it is filled when the tool modules are imported.
- :class:`ToolRegistry` binds the catalogue to its dependencies (content
  store, Google Docs client) and is the single dispatch point:
  ``await registry.execute(name, raw_args)``.
- Unknown names raise :class:`UnknownToolError`; invalid arguments raise
  :class:`ToolArgumentError` before the tool body runs.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

from pydantic import ValidationError

from errors.exceptions import ToolArgumentError, UnknownToolError
from models.tool_args import ToolArgs
from services.content_store import ContentStore
from services.google_docs import GoogleDocsClient
from services.metrics import get_metrics_collector

logger = logging.getLogger(__name__)


# ── Dependencies ────────────────────────────────────────────


@dataclass(frozen=True)
class ToolDeps:
    """Read-only services every tool may use."""

    content: ContentStore
    google_docs: GoogleDocsClient


ToolFunc = Callable[[ToolDeps, Any], Awaitable[dict[str, Any]]]


# ── Registry internals ──────────────────────────────────────


@dataclass(frozen=True)
class RegisteredTool:
    """Metadata for a registered tool."""

    name: str
    func: ToolFunc
    args_model: type[ToolArgs]
    description: str
    input_schema: dict[str, Any]

    def to_anthropic(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }


# Module-level catalogue
_registry: dict[str, RegisteredTool] = {}


def register_tool(
    args_model: type[ToolArgs],
    *,
    description: str,
    input_schema: dict[str, Any],
    name: str | None = None,
):
    """Decorator to register a tool function.

    Usage::

        @register_tool(
            OpenFileArgs,
            description="Open and read a curriculum file.",
            input_schema={"type": "object", "properties": {...}, "required": ["fileId"]},
        )
        async def open_file(deps: ToolDeps, args: OpenFileArgs) -> dict:
            ...
    """

    def decorator(func: ToolFunc) -> ToolFunc:
        tool_name = name or func.__name__
        _registry[tool_name] = RegisteredTool(
            name=tool_name,
            func=func,
            args_model=args_model,
            description=description,
            input_schema=input_schema,
        )
        return func

    return decorator


def get_registered_tools() -> dict[str, RegisteredTool]:
    """Return a copy of the static catalogue (tool modules must be imported)."""
    _load_tool_modules()
    return dict(_registry)


def _load_tool_modules() -> None:
    # Importing the modules runs their @register_tool decorators.
    import tools.curriculum_tools  # noqa: F401
    import tools.document_tools  # noqa: F401


def _format_validation_problems(exc: ValidationError) -> list[str]:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<input>"
        problems.append(f"{loc}: {err.get('msg', 'invalid')}")
    return problems


# ── Public API ──────────────────────────────────────────────


class ToolRegistry:
    """The tool catalogue bound to its dependencies."""

    def __init__(
        self,
        deps: ToolDeps,
        tools: Mapping[str, RegisteredTool] | None = None,
    ) -> None:
        self.deps = deps
        self._tools = dict(tools) if tools is not None else get_registered_tools()

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> RegisteredTool:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def anthropic_tools(self) -> list[dict[str, Any]]:
        """Tool definitions for the ``tools`` parameter of the Messages API."""
        return [tool.to_anthropic() for tool in self._tools.values()]

    def parse_args(self, name: str, raw_args: Mapping[str, Any] | None) -> ToolArgs:
        """Validate raw model input into the tool's argument record."""
        tool = self.get(name)
        try:
            return tool.args_model.model_validate(dict(raw_args or {}))
        except ValidationError as exc:
            raise ToolArgumentError(name, _format_validation_problems(exc)) from exc

    async def execute(self, name: str, raw_args: Mapping[str, Any] | None) -> dict[str, Any]:
        """Dispatch *name* with *raw_args* and return the result payload.

        Raises:
            UnknownToolError: *name* is not registered.
            ToolArgumentError: arguments failed validation.
        """
        tool = self.get(name)
        args = self.parse_args(name, raw_args)

        start = time.monotonic()
        status = "ok"
        try:
            result = await tool.func(self.deps, args)
            if isinstance(result, dict) and "error" in result:
                status = "lookup_error"
            return result
        except Exception:
            status = "error"
            logger.exception("tool %s raised an unhandled exception", name)
            raise
        finally:
            latency_ms = (time.monotonic() - start) * 1000
            logger.info("tool %s finished status=%s latency=%.1fms", name, status, latency_ms)
            get_metrics_collector().record_tool_call(
                tool_name=name,
                status=status,
                latency_ms=latency_ms,
            )
