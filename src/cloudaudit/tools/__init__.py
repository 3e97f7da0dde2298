"""Wrappers around the external scanners and their subprocess runtime."""

from .availability import (
    EXTERNAL_TOOLS,
    REQUIRED_UTILITIES,
    check_tool_availability,
    find_binary,
    missing_dependencies,
)
from .base import ToolContext
from .runtime import CommandResult, run_tool

__all__ = [
    "CommandResult",
    "EXTERNAL_TOOLS",
    "REQUIRED_UTILITIES",
    "ToolContext",
    "check_tool_availability",
    "find_binary",
    "missing_dependencies",
    "run_tool",
]
