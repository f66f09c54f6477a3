"""AI-completion providers for skillengine."""

from .base import CompletionProvider, CompletionRequest, LLMProvider
from .providers import AnthropicProvider, OpenAIProvider, OtherProvider

__all__ = [
    "CompletionProvider",
    "CompletionRequest",
    "LLMProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "OtherProvider",
]
