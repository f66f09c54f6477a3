"""Skill definition models."""

import re
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

# Storage scopes under the skills root, in discovery order
SKILL_SCOPES = ("builtin", "community", "custom")

# Skill names double as file names in the store
SKILL_NAME_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")

InputType = Literal["string", "number", "boolean", "array", "object", "enum"]


class InputSpec(BaseModel):
    """Declared input of a skill."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    type: InputType = "string"
    required: bool = False
    values: list[str] | None = None
    description: str | None = None

    @model_validator(mode="after")
    def enum_requires_values(self) -> "InputSpec":
        if self.type == "enum" and not self.values:
            raise ValueError(f"Enum input {self.name} must have values array")
        return self


class OutputSpec(BaseModel):
    """Declared output of a skill."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    required: bool = False
    type: str | None = None
    description: str | None = None


class DependencySpec(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    optional: bool = False


class FewShotExample(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    input: dict[str, Any]
    output: dict[str, Any]
    explanation: str | None = None


# ============================================================================
# Execution variants
# ============================================================================


class AIPromptExecution(BaseModel):
    """Prompt completed by the AI-completion collaborator."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: Literal["ai-prompt"] = "ai-prompt"
    prompt: str
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("max_tokens", "maxTokens"),
    )


class ScriptExecution(BaseModel):
    """
    Local script.

    For `procedural` scripts `code` names a procedure: either one registered
    on the SkillsCenter or an importable "package.module:function" entry point.
    For `shell` scripts `code` is a command template; substituted values are
    shell-quoted unless `escape` is false.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    type: Literal["script"] = "script"
    language: Literal["procedural", "shell"]
    code: str
    escape: bool = True


class ToolMapping(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    inputs: dict[str, Any] | None = None  # tool argument -> value template
    outputs: dict[str, str] | None = None  # skill output -> dotted result path


class ExternalToolExecution(BaseModel):
    """Invocation of a tool owned by the external-tool collaborator."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: Literal["external-tool", "mcp"] = "external-tool"
    tool: str
    mapping: ToolMapping | None = None


class CompositeStep(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    skill: str
    inputs: dict[str, Any] = Field(default_factory=dict)


class CompositeExecution(BaseModel):
    """Ordered chain of other skills, results merged step by step."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: Literal["composite"] = "composite"
    steps: list[CompositeStep] = Field(min_length=1)


ExecutionSpec = Annotated[
    Union[AIPromptExecution, ScriptExecution, ExternalToolExecution, CompositeExecution],
    Field(discriminator="type"),
]


# ============================================================================
# Skill definition
# ============================================================================


class SkillMetadata(BaseModel):
    """Free-form skill metadata; unknown keys (author, homepage...) are kept."""

    model_config = ConfigDict(extra="allow", frozen=True)

    tags: list[str] = Field(default_factory=list)
    mcp_compatible: bool = False
    source: str | None = None


class SkillDefinition(BaseModel):
    """
    Loaded skill definition.

    Instances are immutable; enable/disable produce an updated copy.
    `source_path` and `loaded_at` record provenance and are never written
    back to the definition file.
    Keys the model does not know are kept, so a definition survives a
    load-then-save round trip unchanged.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(min_length=1)
    version: str
    description: str
    category: str = "custom"
    inputs: list[InputSpec] = Field(default_factory=list)
    outputs: list[OutputSpec] = Field(default_factory=list)
    dependencies: list[DependencySpec] = Field(default_factory=list)
    examples: list[FewShotExample] = Field(default_factory=list)
    execution: ExecutionSpec
    metadata: SkillMetadata = Field(default_factory=SkillMetadata)
    enabled: bool = True

    source_path: Path | None = Field(default=None, exclude=True)
    loaded_at: datetime | None = Field(default=None, exclude=True)

    @field_validator("name")
    @classmethod
    def name_is_file_safe(cls, v: str) -> str:
        if not SKILL_NAME_PATTERN.fullmatch(v):
            raise ValueError(
                "name may only contain letters, digits, '.', '_' and '-' "
                "and must start with a letter or digit"
            )
        return v

    @field_validator("version", mode="before")
    @classmethod
    def version_to_str(cls, v: Any) -> Any:
        # YAML reads `version: 1.0` as a float
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def tags(self) -> list[str]:
        return self.metadata.tags

    def to_document(self) -> dict[str, Any]:
        """Serialize to the on-disk definition layout."""
        return self.model_dump(mode="json", exclude_none=True)
