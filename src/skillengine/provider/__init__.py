"""Collaborator providers for skillengine."""

from skillengine.provider.llm import (
    AnthropicProvider,
    CompletionProvider,
    CompletionRequest,
    LLMProvider,
    OpenAIProvider,
    OtherProvider,
)

__all__ = [
    "CompletionProvider",
    "CompletionRequest",
    "LLMProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "OtherProvider",
]
