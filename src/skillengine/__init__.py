"""Skill execution engine: discover, validate and run declarative skills."""

from skillengine.core.exceptions import ExecutionError, SkillError, SkillNotFoundError
from skillengine.core.skill_def import SkillDefinition
from skillengine.core.skills_center import SkillsCenter

__all__ = [
    "SkillsCenter",
    "SkillDefinition",
    "SkillError",
    "SkillNotFoundError",
    "ExecutionError",
]
