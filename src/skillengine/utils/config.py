"""Configuration management for skillengine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


# ============================================================================
# Configuration Models
# ============================================================================


class LLMConfig(BaseModel):
    """LLM provider configuration for the ai-prompt backend."""

    provider: str
    api_key: str
    model: str | None = None
    api_base: str | None = None

    @field_validator("api_base")
    @classmethod
    def api_base_must_be_url(cls, v: str | None) -> str | None:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("api_base must be a valid URL")
        return v


class ExecutionDefaults(BaseModel):
    """Values used when an ai-prompt skill leaves them unset."""

    model: str = "claude-sonnet-4"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, gt=0)


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config(BaseModel):
    """
    Main configuration for skillengine.

    Configuration is loaded from the workspace directory:
    1. config.user.yaml - User configuration (optional)
    2. config.runtime.yaml - Runtime state (optional, overrides user)

    Pydantic defaults are used for fields not present in either file.
    """

    workspace: Path
    skills_path: Path = Field(default=Path("skills"))
    logging_path: Path = Field(default=Path(".logs"))
    cache_ttl: float = Field(default=300.0, gt=0)
    defaults: ExecutionDefaults = Field(default_factory=ExecutionDefaults)
    llm: LLMConfig | None = None

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve relative paths to absolute using workspace."""
        for field_name in ("skills_path", "logging_path"):
            path = getattr(self, field_name)
            if path.is_absolute():
                raise ValueError(f"{field_name} must be relative, got: {path}")
            setattr(self, field_name, self.workspace / path)
        return self

    @classmethod
    def load(cls, workspace_dir: Path) -> "Config":
        """
        Load configuration from a workspace directory.

        Args:
            workspace_dir: Path to the workspace directory

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            ValidationError: If configuration is invalid
        """
        config_data: dict[str, Any] = {"workspace": workspace_dir}

        for filename in ("config.user.yaml", "config.runtime.yaml"):
            config_file = workspace_dir / filename
            if config_file.exists():
                with open(config_file) as f:
                    file_data = yaml.safe_load(f) or {}
                config_data = cls._deep_merge(config_data, file_data)

        return cls.model_validate(config_data)

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
