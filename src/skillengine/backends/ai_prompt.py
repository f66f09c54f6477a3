"""AI-prompt backend: interpolate a prompt and complete it with an LLM."""

import json
import logging
import re
from typing import Any, cast

from skillengine.backends.base import Backend
from skillengine.core.exceptions import NoProviderError
from skillengine.core.interpolation import interpolate
from skillengine.core.skill_def import (
    AIPromptExecution,
    FewShotExample,
    OutputSpec,
    SkillDefinition,
)
from skillengine.provider.llm.base import CompletionProvider, CompletionRequest
from skillengine.utils.config import ExecutionDefaults

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class AIPromptBackend(Backend):
    kinds = ("ai-prompt",)

    def __init__(
        self,
        provider: CompletionProvider | None = None,
        defaults: ExecutionDefaults | None = None,
    ):
        self.provider = provider
        self.defaults = defaults or ExecutionDefaults()

    async def run(
        self,
        skill: SkillDefinition,
        inputs: dict[str, Any],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        request = self.build_request(skill, inputs, context)

        if self.provider is None:
            raise NoProviderError("ai-prompt")

        response = await self.provider.complete(request)
        return parse_response(response, skill.outputs)

    def build_request(
        self,
        skill: SkillDefinition,
        inputs: dict[str, Any],
        context: dict[str, Any],
    ) -> CompletionRequest:
        """Build the completion request for an invocation."""
        execution = cast(AIPromptExecution, skill.execution)
        prompt = interpolate(execution.prompt, inputs)

        examples = context.get("few_shot_examples") or skill.examples
        if examples:
            prompt = f"{format_examples(examples)}\n\n{prompt}"

        return CompletionRequest(
            prompt=prompt,
            model=execution.model or self.defaults.model,
            temperature=(
                execution.temperature
                if execution.temperature is not None
                else self.defaults.temperature
            ),
            max_tokens=execution.max_tokens or self.defaults.max_tokens,
        )


def format_examples(examples: list[Any]) -> str:
    """Render few-shot examples as a prompt preamble."""
    blocks = ["Here are some examples:"]
    for idx, example in enumerate(examples, start=1):
        if isinstance(example, FewShotExample):
            example = example.model_dump()
        lines = [
            f"Example {idx}:",
            f"Input: {json.dumps(example.get('input'), default=str)}",
            f"Output: {json.dumps(example.get('output'), default=str)}",
        ]
        if example.get("explanation"):
            lines.append(f"Explanation: {example['explanation']}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def parse_response(response: str, outputs: list[OutputSpec]) -> dict[str, Any]:
    """
    Turn raw completion text into a result mapping.

    Tries a JSON object first (bare or inside a ``` fence), then
    "<output>: <value>" lines for each declared output, and finally wraps
    the whole text as {"response": text}.
    """
    parsed = _load_json_object(response)
    if parsed is not None:
        return parsed

    result: dict[str, Any] = {}
    for output in outputs:
        match = re.search(
            rf"{re.escape(output.name)}:\s*(.+)", response, re.IGNORECASE
        )
        if match:
            result[output.name] = match.group(1).strip()

    if not result:
        logger.debug("No structured fields in response, returning raw text")
        return {"response": response}
    return result


def _load_json_object(text: str) -> dict[str, Any] | None:
    candidates = [text]
    fenced = _JSON_FENCE.search(text)
    if fenced:
        candidates.append(fenced.group(1))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (json.JSONDecodeError, TypeError):
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
