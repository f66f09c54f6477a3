"""Contract validation for skill definitions and invocations."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from skillengine.core.exceptions import (
    InvalidEnumValueError,
    InvalidResultError,
    InvalidSkillError,
    MissingInputError,
    MissingOutputError,
)
from skillengine.core.skill_def import SkillDefinition

REQUIRED_FIELDS = ("name", "version", "description", "execution")


def validate_definition(data: Any) -> SkillDefinition:
    """
    Validate a raw definition document and build a SkillDefinition.

    Args:
        data: Parsed definition (usually a dict loaded from YAML)

    Returns:
        The validated SkillDefinition

    Raises:
        InvalidSkillError: If a required field is missing or the document
            does not match the definition schema
    """
    if isinstance(data, SkillDefinition):
        return data

    if not isinstance(data, Mapping):
        raise InvalidSkillError("<unknown>", "definition must be a mapping")

    name = str(data.get("name") or "<unknown>")

    for field in REQUIRED_FIELDS:
        if not data.get(field):
            raise InvalidSkillError(name, f"missing required field: {field}")

    execution = data["execution"]
    if not isinstance(execution, Mapping) or not execution.get("type"):
        raise InvalidSkillError(name, "execution must have a type")

    try:
        return SkillDefinition.model_validate(data)
    except ValidationError as e:
        raise InvalidSkillError(name, _summarize(e)) from e


def validate_inputs(skill: SkillDefinition, inputs: Mapping[str, Any]) -> None:
    """Check invocation inputs against the declared inputs."""
    for spec in skill.inputs:
        if spec.name not in inputs:
            if spec.required:
                raise MissingInputError(skill.name, spec.name)
            continue

        value = inputs[spec.name]
        if spec.type == "enum" and value not in (spec.values or []):
            raise InvalidEnumValueError(
                skill.name, spec.name, value, list(spec.values or [])
            )


def validate_outputs(skill: SkillDefinition, result: Any) -> None:
    """Check a backend result against the declared outputs."""
    if not isinstance(result, Mapping):
        raise InvalidResultError(skill.name, type(result).__name__)

    for spec in skill.outputs:
        if spec.required and spec.name not in result:
            raise MissingOutputError(skill.name, spec.name)


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)
