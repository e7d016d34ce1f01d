"""Custom exception hierarchy for the curriculum assistant."""

from errors.exceptions import (
    ContentStoreError,
    GoogleDocFetchError,
    ToolArgumentError,
    ToolError,
    UnknownToolError,
)

__all__ = [
    "ContentStoreError",
    "GoogleDocFetchError",
    "ToolArgumentError",
    "ToolError",
    "UnknownToolError",
]
