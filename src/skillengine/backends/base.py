"""Base backend interface."""

from abc import ABC, abstractmethod
from typing import Any

from skillengine.core.skill_def import SkillDefinition


class Backend(ABC):
    """Abstract base class for execution backends."""

    # execution.type tags this backend handles
    kinds: tuple[str, ...]

    @abstractmethod
    async def run(
        self,
        skill: SkillDefinition,
        inputs: dict[str, Any],
        context: dict[str, Any],
    ) -> Any:
        """Run a skill and return its raw result.

        Args:
            skill: Validated skill whose execution.type is in `kinds`
            inputs: Validated invocation inputs
            context: Invocation context (dependencies, few_shot_examples, ...)
        """
