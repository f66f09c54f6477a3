"""External-tool backend: call a tool through the external-tool collaborator."""

from collections.abc import Mapping, Sequence
from typing import Any, cast

from skillengine.backends.base import Backend
from skillengine.core.exceptions import ExternalToolError, NoProviderError, SkillError
from skillengine.core.interpolation import resolve_reference
from skillengine.core.skill_def import ExternalToolExecution, SkillDefinition
from skillengine.tools.base import ToolClient


class ExternalToolBackend(Backend):
    kinds = ("external-tool", "mcp")

    def __init__(self, tool_client: ToolClient | None = None):
        self.tool_client = tool_client

    async def run(
        self,
        skill: SkillDefinition,
        inputs: dict[str, Any],
        context: dict[str, Any],
    ) -> Any:
        if self.tool_client is None:
            raise NoProviderError("external-tool")

        execution = cast(ExternalToolExecution, skill.execution)
        mapping = execution.mapping

        if mapping is not None and mapping.inputs is not None:
            args = {
                arg: resolve_reference(value, inputs)
                for arg, value in mapping.inputs.items()
            }
        else:
            args = dict(inputs)

        try:
            raw = await self.tool_client.call_tool(execution.tool, args)
        except SkillError:
            raise
        except Exception as e:
            raise ExternalToolError(execution.tool, str(e)) from e

        if mapping is None or mapping.outputs is None:
            return raw

        return {
            output: get_nested_value(raw, path)
            for output, path in mapping.outputs.items()
        }


def get_nested_value(obj: Any, path: str) -> Any:
    """
    Look up a dotted path such as "a.b.c" (or "items.0.id").

    Missing keys resolve to None instead of raising.
    """
    current = obj
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        elif isinstance(current, Sequence) and not isinstance(current, str):
            if not key.lstrip("-").isdigit():
                return None
            index = int(key)
            current = current[index] if -len(current) <= index < len(current) else None
        else:
            current = getattr(current, key, None)
    return current
