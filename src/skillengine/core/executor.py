"""Skill executor: dispatch a validated invocation to its backend."""

import logging
import time
from collections.abc import Iterable
from typing import Any

from skillengine.backends.base import Backend
from skillengine.core.exceptions import ExecutionError, InvalidSkillError
from skillengine.core.skill_def import SkillDefinition

logger = logging.getLogger(__name__)


class SkillExecutor:
    """Dispatch table of backends keyed by execution type."""

    def __init__(self, backends: Iterable[Backend]):
        self._backends: dict[str, Backend] = {}
        for backend in backends:
            for kind in backend.kinds:
                self._backends[kind] = backend

    def backend_for(self, skill: SkillDefinition) -> Backend:
        backend = self._backends.get(skill.execution.type)
        if backend is None:
            raise InvalidSkillError(
                skill.name, f"Unsupported execution type: {skill.execution.type}"
            )
        return backend

    async def execute(
        self,
        skill: SkillDefinition,
        inputs: dict[str, Any],
        context: dict[str, Any],
    ) -> Any:
        """
        Run a skill through its backend.

        Raises:
            ExecutionError: Wrapping whatever the backend raised
        """
        start = time.perf_counter()
        try:
            result = await self.backend_for(skill).run(skill, inputs, context)
        except Exception as e:
            raise ExecutionError(skill.name, e) from e

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Executed {skill.name} in {duration_ms:.0f}ms")
        return result
