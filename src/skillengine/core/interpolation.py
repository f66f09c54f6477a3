"""{{placeholder}} substitution for prompts, commands and step inputs."""

import json
import re
from collections.abc import Mapping
from typing import Any

PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def stringify(value: Any) -> str:
    """Render a value for insertion into text."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def interpolate(template: Any, variables: Mapping[str, Any]) -> Any:
    """
    Replace {{name}} placeholders with the matching variable values.

    Placeholders with no matching variable are left as they are.
    Non-string templates are returned unchanged.
    """
    if not isinstance(template, str):
        return template

    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        return stringify(variables[key])

    return PLACEHOLDER.sub(replace, template)


def resolve_reference(value: Any, variables: Mapping[str, Any]) -> Any:
    """
    Resolve a mapped value against `variables`.

    A value that is exactly one placeholder ("{{x}}") resolves to the raw
    variable (None when absent), keeping its type. Other strings are
    interpolated; anything else is a literal.
    """
    if isinstance(value, str):
        match = PLACEHOLDER.fullmatch(value.strip())
        if match:
            return variables.get(match.group(1))
        return interpolate(value, variables)
    return value
