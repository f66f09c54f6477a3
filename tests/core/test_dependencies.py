"""Tests for dependency resolution."""

import pytest

from skillengine.core.dependencies import resolve_dependencies
from skillengine.core.exceptions import MissingDependencyError
from skillengine.core.registry import SkillRegistry
from skillengine.core.validator import validate_definition


@pytest.fixture
def registry(skill_doc) -> SkillRegistry:
    registry = SkillRegistry()
    registry.replace(
        [
            validate_definition(skill_doc("lint")),
            validate_definition(
                skill_doc("format", dependencies=[{"name": "not-installed"}])
            ),
        ]
    )
    return registry


class TestResolveDependencies:
    def test_no_dependencies(self, registry, skill_doc):
        skill = validate_definition(skill_doc("plain"))
        assert resolve_dependencies(skill, registry) == {}

    def test_resolves_registered(self, registry, skill_doc):
        skill = validate_definition(skill_doc("review", dependencies=[{"name": "lint"}]))

        resolved = resolve_dependencies(skill, registry)

        assert list(resolved) == ["lint"]
        assert resolved["lint"] is registry.get("lint")

    def test_missing_optional_skipped(self, registry, skill_doc):
        skill = validate_definition(
            skill_doc(
                "review",
                dependencies=[{"name": "lint"}, {"name": "ghost", "optional": True}],
            )
        )
        assert list(resolve_dependencies(skill, registry)) == ["lint"]

    def test_missing_required_fails(self, registry, skill_doc):
        skill = validate_definition(skill_doc("review", dependencies=[{"name": "ghost"}]))

        with pytest.raises(MissingDependencyError) as exc:
            resolve_dependencies(skill, registry)

        assert exc.value.dependency == "ghost"
        assert exc.value.skill == "review"

    def test_one_level_deep(self, registry, skill_doc):
        """A dependency's own missing dependency is not checked here."""
        skill = validate_definition(skill_doc("review", dependencies=[{"name": "format"}]))
        assert list(resolve_dependencies(skill, registry)) == ["format"]
