"""Custom exceptions for skillengine."""

from typing import Any


class SkillError(Exception):
    """Base class for every skill engine failure."""


class InvalidSkillError(SkillError):
    """Skill definition is malformed."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid skill '{name}': {reason}")
        self.name = name
        self.reason = reason


class SkillNotFoundError(SkillError):
    """Raised when a skill is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Skill not found: {name}")
        self.name = name


class SkillDisabledError(SkillError):
    """Raised when executing a disabled skill."""

    def __init__(self, name: str):
        super().__init__(f"Skill is disabled: {name}")
        self.name = name


class MissingInputError(SkillError):
    def __init__(self, skill: str, input_name: str):
        super().__init__(f"Required input missing: {input_name}")
        self.skill = skill
        self.input_name = input_name


class InvalidEnumValueError(SkillError):
    def __init__(self, skill: str, input_name: str, value: Any, allowed: list[str]):
        super().__init__(
            f"Invalid value for {input_name}: must be one of {', '.join(allowed)}"
        )
        self.skill = skill
        self.input_name = input_name
        self.value = value
        self.allowed = allowed


class MissingDependencyError(SkillError):
    def __init__(self, skill: str, dependency: str):
        super().__init__(f"Required dependency not found: {dependency}")
        self.skill = skill
        self.dependency = dependency


class NoProviderError(SkillError):
    """A backend needs a collaborator that was not configured."""

    def __init__(self, backend: str):
        super().__init__(f"No provider configured for {backend} execution")
        self.backend = backend


class ScriptError(SkillError):
    """Procedural script raised or could not be resolved."""

    def __init__(self, reason: str):
        super().__init__(f"Script execution error: {reason}")
        self.reason = reason


class ShellError(ScriptError):
    """Shell command exited with a non-zero status."""

    def __init__(self, exit_code: int, stderr: str):
        SkillError.__init__(
            self, f"Command failed with exit code {exit_code}: {stderr}"
        )
        self.reason = stderr
        self.exit_code = exit_code
        self.stderr = stderr


class ExternalToolError(SkillError):
    def __init__(self, tool: str, reason: str):
        super().__init__(f"External tool '{tool}' failed: {reason}")
        self.tool = tool
        self.reason = reason


class MissingOutputError(SkillError):
    def __init__(self, skill: str, output_name: str):
        super().__init__(f"Required output missing: {output_name}")
        self.skill = skill
        self.output_name = output_name


class InvalidResultError(SkillError):
    def __init__(self, skill: str, result_type: str):
        super().__init__(f"Skill must return a mapping, got {result_type}")
        self.skill = skill
        self.result_type = result_type


class CyclicCompositionError(SkillError):
    """A composite chain re-entered a skill that is already running."""

    def __init__(self, chain: list[str]):
        super().__init__(f"Cyclic skill composition: {' -> '.join(chain)}")
        self.chain = chain


class SkillInstallError(SkillError):
    def __init__(self, source: str, reason: str):
        super().__init__(f"Cannot install skill from {source}: {reason}")
        self.source = source
        self.reason = reason


class ExecutionError(SkillError):
    """
    Wraps any failure raised while executing a skill.

    Nested composite failures produce a chain of ExecutionErrors, one per
    skill on the call stack; `root_cause` returns the innermost error.
    """

    def __init__(self, skill_name: str, cause: BaseException):
        super().__init__(f"Skill execution failed ({skill_name}): {cause}")
        self.skill_name = skill_name
        self.cause = cause

    @property
    def root_cause(self) -> BaseException:
        cause: BaseException = self.cause
        while isinstance(cause, ExecutionError):
            cause = cause.cause
        return cause
