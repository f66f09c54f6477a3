"""Concrete LLM provider implementations."""

from .base import LLMProvider


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider."""

    provider_config_name = ["openai"]


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider."""

    provider_config_name = ["anthropic", "claude"]


class OtherProvider(LLMProvider):
    """Fallback for custom/self-hosted providers (set api_base)."""

    provider_config_name = ["other"]
