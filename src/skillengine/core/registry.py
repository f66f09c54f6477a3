"""Skill registry: in-memory catalog of skill definitions keyed by name."""

from __future__ import annotations

import threading
from collections import Counter
from collections.abc import Iterable

from skillengine.core.skill_def import SkillDefinition


class SkillRegistry:
    """
    Catalog of loaded skills.

    Every mutation builds a new dict and swaps the reference, so readers
    always see a consistent snapshot without taking a lock.
    """

    def __init__(self) -> None:
        """Initialize an empty skill registry."""
        self._skills: dict[str, SkillDefinition] = {}
        self._write_lock = threading.Lock()

    def replace(self, skills: Iterable[SkillDefinition]) -> None:
        """Replace the whole catalog in one step."""
        new_skills = {skill.name: skill for skill in skills}
        with self._write_lock:
            self._skills = new_skills

    def register(self, skill: SkillDefinition) -> None:
        """Add or overwrite a single skill."""
        with self._write_lock:
            self._skills = {**self._skills, skill.name: skill}

    def unregister(self, name: str) -> None:
        with self._write_lock:
            skills = dict(self._skills)
            skills.pop(name, None)
            self._skills = skills

    def get(self, name: str) -> SkillDefinition | None:
        """Get a skill by name."""
        return self._skills.get(name)

    def has(self, name: str) -> bool:
        return name in self._skills

    def list(self, category: str | None = None) -> list[SkillDefinition]:
        """List all skills, optionally restricted to one category."""
        skills = list(self._skills.values())
        if category is None:
            return skills
        return [skill for skill in skills if skill.category == category]

    def search(
        self,
        query: str = "",
        category: str | None = None,
        tags: list[str] | None = None,
        mcp_compatible: bool | None = None,
    ) -> list[SkillDefinition]:
        """
        Search skills by text and filters.

        Args:
            query: Case-insensitive substring matched against name,
                description and tags (empty matches everything)
            category: Exact category the skill must have
            tags: Tags that must all be present on the skill
            mcp_compatible: Required value of metadata.mcp_compatible

        Returns:
            Skills matching the query and every given filter
        """
        query_lower = query.lower()

        def matches(skill: SkillDefinition) -> bool:
            if query and not (
                query_lower in skill.name.lower()
                or query_lower in skill.description.lower()
                or any(query_lower in tag.lower() for tag in skill.tags)
            ):
                return False
            if category is not None and skill.category != category:
                return False
            if tags and not all(tag in skill.tags for tag in tags):
                return False
            if (
                mcp_compatible is not None
                and skill.metadata.mcp_compatible != mcp_compatible
            ):
                return False
            return True

        return [skill for skill in self._skills.values() if matches(skill)]

    def category_counts(self) -> dict[str, int]:
        return dict(Counter(skill.category for skill in self._skills.values()))

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, name: object) -> bool:
        return name in self._skills
