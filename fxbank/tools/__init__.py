"""
Tool surface: metadata + dispatch for the direct and reasoning paths.
"""

from .registry import TOOL_METADATA, ToolDispatcher, ToolName  # noqa: F401
