"""Domain-specific exceptions for the curriculum assistant.

These exceptions let the orchestration loop and the API layer distinguish
between failure modes: some are fed back to the model as tool results,
others end the request with an ``error`` event or an HTTP error.
"""

from __future__ import annotations


class ToolError(Exception):
    """Base class for tool execution errors."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool '{tool_name}' failed: {message}")


class UnknownToolError(ToolError):
    """The model asked for a tool that is not in the registry.

    Fatal to the whole loop: the catalogue sent to the model and the
    registry are out of sync, so retrying cannot help.
    """

    def __init__(self, tool_name: str) -> None:
        super().__init__(tool_name, f"unknown tool '{tool_name}'")


class ToolArgumentError(ToolError):
    """Tool arguments failed validation at the registry boundary.

    Raised before the tool body runs.  ``problems`` lists one readable
    line per invalid or missing field.
    """

    def __init__(self, tool_name: str, problems: list[str]) -> None:
        self.problems = problems
        super().__init__(tool_name, "invalid arguments: " + "; ".join(problems))


class GoogleDocFetchError(Exception):
    """Exporting a Google Doc failed (bad id, non-success status, network)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ContentStoreError(Exception):
    """The static curriculum definition violates a containment invariant."""
