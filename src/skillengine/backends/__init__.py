"""Execution backends for skillengine."""

from skillengine.backends.ai_prompt import AIPromptBackend
from skillengine.backends.base import Backend
from skillengine.backends.composite import CompositeBackend
from skillengine.backends.external_tool import ExternalToolBackend
from skillengine.backends.script import ScriptBackend

__all__ = [
    "Backend",
    "AIPromptBackend",
    "ScriptBackend",
    "ExternalToolBackend",
    "CompositeBackend",
]
