"""AI-completion provider abstraction."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, cast

from litellm import Choices, acompletion

from skillengine.utils.config import LLMConfig


@dataclass
class CompletionRequest:
    """A single-prompt completion request issued by the ai-prompt backend."""

    prompt: str
    model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 2000


class CompletionProvider(ABC):
    """Anything that can turn a prompt into text."""

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> str:
        """Complete a prompt and return the response text."""


class LLMProvider(CompletionProvider):
    """
    Completion provider backed by litellm.

    Subclasses only need to define `provider_config_name`; they register
    themselves so `from_config` can find them by name.
    """

    provider_config_name: list[str]
    name2provider: dict[str, type["LLMProvider"]] = {}

    def __init__(
        self,
        model: Optional[str],
        api_key: str,
        api_base: Optional[str] = None,
        **kwargs: Any,
    ):
        self.model = model
        self.api_key = api_key
        self.api_base = api_base
        self._settings = kwargs

    def __init_subclass__(cls):
        for c_name in cls.provider_config_name:
            LLMProvider.name2provider[c_name] = cls
        return super().__init_subclass__()

    @staticmethod
    def from_config(config: LLMConfig) -> "LLMProvider":
        """Create a provider from config."""
        provider_name = config.provider.lower()
        if provider_name not in LLMProvider.name2provider:
            raise ValueError(f"Unknown provider: {provider_name}")

        provider_class = LLMProvider.name2provider[provider_name]
        return provider_class(
            model=config.model,
            api_key=config.api_key,
            api_base=config.api_base,
        )

    async def complete(self, request: CompletionRequest) -> str:
        """
        Send the prompt as a single user message.

        The request's model wins over the provider's configured model.
        """
        model = request.model or self.model
        if not model:
            raise ValueError("No model given in request or provider config")

        request_kwargs: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": request.prompt}],
            "api_key": self.api_key,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

        if self.api_base:
            request_kwargs["api_base"] = self.api_base
        request_kwargs.update(self._settings)

        response = await acompletion(**request_kwargs)

        message = cast(Choices, response.choices[0]).message
        return message.content or ""
