"""Dependency resolution for skill definitions."""

from skillengine.core.exceptions import MissingDependencyError
from skillengine.core.registry import SkillRegistry
from skillengine.core.skill_def import SkillDefinition


def resolve_dependencies(
    skill: SkillDefinition, registry: SkillRegistry
) -> dict[str, SkillDefinition]:
    """
    Look up a skill's declared dependencies in the registry.

    Only the skill's own dependencies are resolved; a dependency's
    dependencies are resolved when that dependency is itself executed.

    Raises:
        MissingDependencyError: If a non-optional dependency is not registered
    """
    resolved: dict[str, SkillDefinition] = {}

    for dep in skill.dependencies:
        dep_skill = registry.get(dep.name)
        if dep_skill is None:
            if dep.optional:
                continue
            raise MissingDependencyError(skill.name, dep.name)
        resolved[dep.name] = dep_skill

    return resolved
