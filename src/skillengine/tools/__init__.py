"""External-tool collaborators for skillengine."""

from skillengine.tools.base import BaseTool, FunctionTool, ToolClient, tool
from skillengine.tools.registry import ToolRegistry

__all__ = ["BaseTool", "FunctionTool", "ToolClient", "tool", "ToolRegistry"]
