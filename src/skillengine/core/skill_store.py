"""Skill store: definition files under the builtin/community/custom scopes."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from skillengine.core.skill_def import SKILL_SCOPES, SkillDefinition
from skillengine.core.validator import validate_definition
from skillengine.utils.def_loader import (
    discover_definitions,
    read_definition,
    write_definition,
)

if TYPE_CHECKING:
    from skillengine.utils.config import Config

logger = logging.getLogger(__name__)


class SkillStore:
    """Load, save and delete skill definition files."""

    @staticmethod
    def from_config(config: "Config") -> "SkillStore":
        """Create SkillStore from config."""
        return SkillStore(config.skills_path)

    def __init__(self, skills_path: Path):
        self.skills_path = skills_path

    def scope_path(self, scope: str) -> Path:
        return self.skills_path / scope

    def ensure_directories(self) -> None:
        """Create the skills root and every scope directory."""
        for scope in SKILL_SCOPES:
            self.scope_path(scope).mkdir(parents=True, exist_ok=True)

    def load_scope(self, scope: str) -> list[SkillDefinition]:
        """Load every valid definition in a scope, skipping invalid files."""
        return discover_definitions(
            self.scope_path(scope),
            lambda path, raw: self._build(path, raw, default_category=scope),
        )

    def load(self, path: Path) -> SkillDefinition:
        """
        Load a single definition file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            InvalidSkillError: If the file is malformed or fails validation
        """
        category = path.parent.name if path.parent.name in SKILL_SCOPES else "custom"
        return self._build(path, read_definition(path), default_category=category)

    def path_for(self, skill: SkillDefinition) -> Path:
        """Storage path assigned to a skill from its category."""
        scope = skill.category if skill.category in SKILL_SCOPES else "custom"
        return self.scope_path(scope) / f"{skill.name}.yml"

    def save(self, skill: SkillDefinition, path: Path | None = None) -> Path:
        """Write a skill to `path` (default: its source path, else `path_for`)."""
        target = path or skill.source_path or self.path_for(skill)
        return write_definition(target, skill.to_document())

    def delete(self, skill: SkillDefinition) -> None:
        if skill.source_path is None:
            raise ValueError(f"Cannot delete skill without file path: {skill.name}")
        if not skill.source_path.exists():
            logger.warning(f"Skill file already removed: {skill.source_path}")
            return
        skill.source_path.unlink()

    def _build(
        self, path: Path, raw: dict[str, Any], default_category: str
    ) -> SkillDefinition:
        raw.setdefault("category", default_category)
        skill = validate_definition(raw)
        return skill.model_copy(
            update={"source_path": path, "loaded_at": datetime.now(timezone.utc)}
        )
