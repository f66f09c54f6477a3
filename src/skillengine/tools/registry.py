"""Tool registry: an in-process external-tool collaborator."""

from typing import Any

from skillengine.tools.base import BaseTool, ToolClient


class ToolRegistry(ToolClient):
    """
    Registry of in-process tools.

    Serves as the external-tool collaborator when tools are plain Python
    functions rather than a remote tool server.
    """

    def __init__(self) -> None:
        """Initialize an empty tool registry."""
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> BaseTool | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_all(self) -> list[BaseTool]:
        """List all registered tools."""
        return list(self._tools.values())

    async def call_tool(self, name: str, args: dict[str, Any]) -> Any:
        """
        Execute a tool by name.

        Raises:
            ValueError: If tool is not found
        """
        return await self._require(name).execute(**args)

    async def describe_tool(self, name: str) -> dict[str, Any]:
        return self._require(name).describe()

    def _require(self, name: str) -> BaseTool:
        tool = self.get(name)
        if tool is None:
            raise ValueError(f"Tool not found: {name}")
        return tool
