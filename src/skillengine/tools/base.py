"""External-tool collaborator interface and in-process tool base classes."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable


class ToolClient(ABC):
    """
    Access to tools that live outside the skill engine.

    Implemented by in-process registries (see ToolRegistry) or by adapters
    around a tool-protocol client.
    """

    @abstractmethod
    async def call_tool(self, name: str, args: dict[str, Any]) -> Any:
        """Invoke a tool and return its structured result."""

    @abstractmethod
    async def describe_tool(self, name: str) -> dict[str, Any]:
        """Return {"name", "description", "input_schema"} for a tool."""


class BaseTool(ABC):
    """Abstract base class for in-process tools."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema of the arguments

    @abstractmethod
    async def execute(self, **kwargs: Any) -> Any:
        """Execute the tool with keyword arguments."""

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }


def tool(name: str, description: str, parameters: dict[str, Any]) -> Callable:
    """Decorator to turn a function into a tool."""

    def decorator(func: Callable) -> "FunctionTool":
        return FunctionTool(name, description, parameters, func)

    return decorator


class FunctionTool(BaseTool):
    """A tool created from a function using the @tool decorator."""

    def __init__(
        self,
        name: str,
        description: str,
        parameters: dict[str, Any],
        func: Callable,
    ):
        self.name = name
        self.description = description
        self.parameters = parameters
        self._func = func

    async def execute(self, **kwargs: Any) -> Any:
        result = self._func(**kwargs)
        if asyncio.iscoroutine(result):
            result = await result
        return result
