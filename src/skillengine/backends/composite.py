"""Composite backend: run a chain of skills, merging each step's result."""

import logging
from typing import Any, Awaitable, Callable, cast

from skillengine.backends.base import Backend
from skillengine.core.interpolation import resolve_reference
from skillengine.core.skill_def import CompositeExecution, SkillDefinition

logger = logging.getLogger(__name__)

# Re-enters the full execute pipeline: (skill name, inputs, context) -> result
RunSkill = Callable[[str, dict[str, Any], dict[str, Any]], Awaitable[dict[str, Any]]]


class CompositeBackend(Backend):
    """
    Execute steps in order.

    Step inputs may reference the accumulated data with "{{name}}". After each
    step its result is shallow-merged over the accumulated data, which starts
    as the composite's own inputs. A failing step aborts the chain and the
    partial data is dropped.
    """

    kinds = ("composite",)

    def __init__(self, run_skill: RunSkill):
        self.run_skill = run_skill

    async def run(
        self,
        skill: SkillDefinition,
        inputs: dict[str, Any],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        execution = cast(CompositeExecution, skill.execution)
        accumulated = dict(inputs)

        for index, step in enumerate(execution.steps, start=1):
            step_inputs = {
                key: resolve_reference(value, accumulated)
                for key, value in step.inputs.items()
            }
            logger.debug(f"{skill.name} step {index}: {step.skill}")
            step_result = await self.run_skill(step.skill, step_inputs, context)
            accumulated = {**accumulated, **step_result}

        return accumulated
