"""Skills Center: the composition root of the skill engine."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from skillengine.backends import (
    AIPromptBackend,
    CompositeBackend,
    ExternalToolBackend,
    ScriptBackend,
)
from skillengine.backends.script import Procedure
from skillengine.core.cache import DEFAULT_TTL, ResultCache
from skillengine.core.dependencies import resolve_dependencies
from skillengine.core.exceptions import (
    CyclicCompositionError,
    ExecutionError,
    NoProviderError,
    SkillDisabledError,
    SkillError,
    SkillInstallError,
    SkillNotFoundError,
)
from skillengine.core.executor import SkillExecutor
from skillengine.core.registry import SkillRegistry
from skillengine.core.skill_def import (
    SKILL_SCOPES,
    ExternalToolExecution,
    InputSpec,
    SkillDefinition,
    SkillMetadata,
)
from skillengine.core.skill_store import SkillStore
from skillengine.core.validator import (
    validate_definition,
    validate_inputs,
    validate_outputs,
)
from skillengine.provider.llm.base import CompletionProvider, LLMProvider
from skillengine.tools.base import ToolClient
from skillengine.utils.config import ExecutionDefaults

if TYPE_CHECKING:
    from skillengine.utils.config import Config

logger = logging.getLogger(__name__)

# JSON-schema types that map directly onto skill input types
_SCHEMA_INPUT_TYPES = {"string", "number", "boolean", "array", "object"}


@dataclass
class SkillUsage:
    executions: int = 0
    last_used: datetime | None = None
    total_duration_ms: float = 0.0

    @property
    def avg_duration_ms(self) -> float:
        if not self.executions:
            return 0.0
        return self.total_duration_ms / self.executions


@dataclass
class CenterStats:
    """Process-lifetime counters; they only ever grow."""

    discovered: int = 0
    executed: int = 0
    cached: int = 0
    errors: int = 0
    usage: dict[str, SkillUsage] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def increment(self, counter: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)

    def record_execution(self, name: str, duration_ms: float) -> None:
        with self._lock:
            self.executed += 1
            usage = self.usage.setdefault(name, SkillUsage())
            usage.executions += 1
            usage.last_used = datetime.now(timezone.utc)
            usage.total_duration_ms += duration_ms


class SkillsCenter:
    """
    Central skills repository.

    Owns the skill registry, the result cache and the executor, and is the
    single entry point for discovering, installing and executing skills.
    """

    @staticmethod
    def from_config(
        config: "Config", tool_client: ToolClient | None = None
    ) -> "SkillsCenter":
        """Create a SkillsCenter from config, building the LLM provider if set."""
        provider = LLMProvider.from_config(config.llm) if config.llm else None
        return SkillsCenter(
            skills_path=config.skills_path,
            completion_provider=provider,
            tool_client=tool_client,
            cache_ttl=config.cache_ttl,
            defaults=config.defaults,
        )

    def __init__(
        self,
        skills_path: Path,
        completion_provider: CompletionProvider | None = None,
        tool_client: ToolClient | None = None,
        cache_ttl: float = DEFAULT_TTL,
        defaults: ExecutionDefaults | None = None,
        procedures: dict[str, Procedure] | None = None,
        cache: ResultCache | None = None,
    ):
        self.store = SkillStore(skills_path)
        self.registry = SkillRegistry()
        self.cache = cache if cache is not None else ResultCache(ttl=cache_ttl)
        self.completion_provider = completion_provider
        self.tool_client = tool_client
        self.stats = CenterStats()
        self.initialized = False

        self._scripts = ScriptBackend(procedures)
        self.executor = SkillExecutor(
            [
                AIPromptBackend(completion_provider, defaults),
                self._scripts,
                ExternalToolBackend(tool_client),
                CompositeBackend(self.execute),
            ]
        )

    @property
    def skills_path(self) -> Path:
        return self.store.skills_path

    def initialize(self) -> None:
        """Create the scope directories and run discovery once."""
        if self.initialized:
            return
        self.store.ensure_directories()
        self.discover()
        self.initialized = True
        logger.info(f"Skills Center initialized: {len(self.registry)} skills loaded")

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def discover(self) -> list[SkillDefinition]:
        """
        Scan every scope and replace the catalog with what was found.

        Invalid files are logged and skipped. Later scopes win on duplicate
        names (custom over community over builtin).
        """
        found: dict[str, SkillDefinition] = {}
        for scope in SKILL_SCOPES:
            for skill in self.store.load_scope(scope):
                if skill.name in found:
                    logger.warning(
                        f"Skill '{skill.name}' in {scope} overrides "
                        f"{found[skill.name].source_path}"
                    )
                found[skill.name] = skill

        self.registry.replace(found.values())
        self.stats.increment("discovered", len(found))
        logger.info(f"Discovered {len(found)} skills")
        return list(found.values())

    def search(
        self,
        query: str = "",
        category: str | None = None,
        tags: list[str] | None = None,
        mcp_compatible: bool | None = None,
    ) -> list[SkillDefinition]:
        return self.registry.search(query, category, tags, mcp_compatible)

    def list(self, category: str | None = None) -> list[SkillDefinition]:
        return self.registry.list(category)

    def get(self, name: str) -> SkillDefinition | None:
        return self.registry.get(name)

    def has(self, name: str) -> bool:
        return self.registry.has(name)

    def register_procedure(self, name: str, procedure: Procedure) -> None:
        """Make a callable available to procedural script skills by name."""
        self._scripts.register_procedure(name, procedure)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(
        self,
        name: str,
        inputs: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Execute a skill by name.

        Pipeline: lookup, cache check, input validation, dependency
        resolution, backend dispatch, output validation, cache store.

        Args:
            name: Registered skill name
            inputs: Input values keyed by input name
            context: Invocation context (few_shot_examples, ...)

        Returns:
            The skill result mapping

        Raises:
            SkillNotFoundError: If no skill has this name
            ExecutionError: For any other failure, carrying the skill name
                and the underlying cause
        """
        inputs = dict(inputs or {})
        context = dict(context or {})

        skill = self.registry.get(name)
        if skill is None:
            raise SkillNotFoundError(name)

        try:
            if not skill.enabled:
                raise SkillDisabledError(name)

            cached = self.cache.get(name, inputs)
            if cached is not None:
                self.stats.increment("cached")
                logger.debug(f"Cache hit for {name}")
                return cached

            call_stack = list(context.get("call_stack", ()))
            if name in call_stack:
                raise CyclicCompositionError([*call_stack, name])

            validate_inputs(skill, inputs)
            dependencies = resolve_dependencies(skill, self.registry)

            run_context = {
                **context,
                "dependencies": dependencies,
                "call_stack": [*call_stack, name],
            }
            start = time.perf_counter()
            result = await self.executor.execute(skill, inputs, run_context)
            duration_ms = (time.perf_counter() - start) * 1000

            validate_outputs(skill, result)
        except SkillError as e:
            self.stats.increment("errors")
            if isinstance(e, ExecutionError) and e.skill_name == name:
                raise
            raise ExecutionError(name, e) from e

        self.cache.put(name, inputs, result)
        self.stats.record_execution(name, duration_ms)
        return result

    async def execute_with_few_shot(
        self,
        name: str,
        examples: list[dict[str, Any]],
        inputs: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a skill with few-shot examples prepended to its prompt."""
        return await self.execute(name, inputs, {"few_shot_examples": examples})

    def clear_cache(self) -> None:
        self.cache.clear()

    # ------------------------------------------------------------------
    # Store management
    # ------------------------------------------------------------------

    def install(self, source: str | Path | dict[str, Any] | SkillDefinition) -> str:
        """
        Install a skill from a file path or an in-memory definition.

        The definition is validated, written to the scope matching its
        category (custom when the category is not a scope), then registered.

        Returns:
            The installed skill name

        Raises:
            SkillInstallError: For remote or unknown sources, or when the
                skill is already installed
            InvalidSkillError: If the definition is invalid
        """
        skill = self._load_source(source)

        target = self.store.path_for(skill)
        if self.registry.has(skill.name) or target.exists():
            raise SkillInstallError(str(target), f"Skill already installed: {skill.name}")

        self.store.save(skill, target)
        self.registry.register(
            skill.model_copy(
                update={"source_path": target, "loaded_at": datetime.now(timezone.utc)}
            )
        )
        logger.info(f"Installed skill: {skill.name}")
        return skill.name

    def uninstall(self, name: str) -> None:
        """Delete a skill's file, then drop it from the registry."""
        skill = self._require(name)
        if skill.source_path is None:
            raise SkillInstallError(name, "Cannot uninstall skill without file path")

        try:
            self.store.delete(skill)
        except OSError as e:
            raise SkillInstallError(str(skill.source_path), f"Cannot delete file: {e}") from e
        self.registry.unregister(name)
        logger.info(f"Uninstalled skill: {name}")

    def enable(self, name: str) -> None:
        self._set_enabled(name, True)

    def disable(self, name: str) -> None:
        self._set_enabled(name, False)

    async def load_from_tool(self, tool_name: str) -> SkillDefinition:
        """
        Wrap an external tool as a skill definition.

        The definition is not registered; pass it to `install` to keep it.

        Raises:
            NoProviderError: If no external-tool collaborator is configured
        """
        if self.tool_client is None:
            raise NoProviderError("external-tool")

        tool = await self.tool_client.describe_tool(tool_name)
        schema = tool.get("input_schema") or {}
        required = set(schema.get("required") or [])

        inputs = []
        for input_name, prop in (schema.get("properties") or {}).items():
            prop_type = prop.get("type", "string")
            if prop.get("enum"):
                spec = InputSpec(
                    name=input_name,
                    type="enum",
                    values=[str(v) for v in prop["enum"]],
                    required=input_name in required,
                    description=prop.get("description"),
                )
            else:
                spec = InputSpec(
                    name=input_name,
                    type=prop_type if prop_type in _SCHEMA_INPUT_TYPES else "string",
                    required=input_name in required,
                    description=prop.get("description"),
                )
            inputs.append(spec)

        return SkillDefinition(
            name=f"mcp-{tool_name}",
            version="1.0.0",
            description=tool.get("description") or f"External tool {tool_name}",
            category="mcp",
            inputs=inputs,
            execution=ExternalToolExecution(tool=tool_name),
            metadata=SkillMetadata(mcp_compatible=True, source="mcp"),
        )

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def get_stats(self) -> dict[str, Any]:
        return {
            "discovered": self.stats.discovered,
            "executed": self.stats.executed,
            "cached": self.stats.cached,
            "errors": self.stats.errors,
            "total_skills": len(self.registry),
            "categories": self.registry.category_counts(),
            "cache_size": len(self.cache),
        }

    def get_usage(self, name: str) -> dict[str, Any]:
        usage = self.stats.usage.get(name, SkillUsage())
        return {
            "executions": usage.executions,
            "last_used": usage.last_used,
            "avg_duration_ms": usage.avg_duration_ms,
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, name: str) -> SkillDefinition:
        skill = self.registry.get(name)
        if skill is None:
            raise SkillNotFoundError(name)
        return skill

    def _set_enabled(self, name: str, enabled: bool) -> None:
        skill = self._require(name)
        if skill.source_path is None:
            raise SkillInstallError(name, "Cannot save skill without file path")

        updated = skill.model_copy(update={"enabled": enabled})
        try:
            self.store.save(updated)
        except OSError as e:
            raise SkillInstallError(str(skill.source_path), f"Cannot save file: {e}") from e
        self.registry.register(updated)
        logger.info(f"{'Enabled' if enabled else 'Disabled'} skill: {name}")

    def _load_source(
        self, source: str | Path | dict[str, Any] | SkillDefinition
    ) -> SkillDefinition:
        if isinstance(source, SkillDefinition):
            return source.model_copy(update={"source_path": None, "loaded_at": None})
        if isinstance(source, dict):
            return validate_definition({"category": "custom", **source})

        source_str = str(source)
        if source_str.startswith(("http://", "https://")):
            raise SkillInstallError(
                source_str, "Installing from remote sources is not supported"
            )

        path = Path(source)
        if not path.is_file():
            raise SkillInstallError(source_str, "Invalid skill source")

        skill = self.store.load(path)
        return skill.model_copy(update={"source_path": None, "loaded_at": None})
