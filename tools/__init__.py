"""Curriculum assistant tools — re-exports from tools.registry.

Tool modules (``tools.curriculum_tools``, ``tools.document_tools``) register
themselves on import; :func:`get_registered_tools` imports them on demand.
"""

from tools.registry import (  # noqa: F401
    RegisteredTool,
    ToolDeps,
    ToolRegistry,
    get_registered_tools,
    register_tool,
)
