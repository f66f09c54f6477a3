"""Shared test fixtures for skillengine test suite."""

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from skillengine.core.skills_center import SkillsCenter
from skillengine.provider.llm.base import CompletionProvider, CompletionRequest
from skillengine.tools.base import ToolClient
from skillengine.utils.config import Config


class StubCompletionProvider(CompletionProvider):
    """Returns a canned response and records every request."""

    def __init__(self, response: str = '{"response": "ok"}'):
        self.response = response
        self.requests: list[CompletionRequest] = []

    async def complete(self, request: CompletionRequest) -> str:
        self.requests.append(request)
        return self.response


class StubToolClient(ToolClient):
    """Returns a canned result per tool and records every call."""

    def __init__(self, results: dict[str, Any] | None = None):
        self.results = results or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.descriptions: dict[str, dict[str, Any]] = {}

    async def call_tool(self, name: str, args: dict[str, Any]) -> Any:
        self.calls.append((name, args))
        result = self.results[name]
        if isinstance(result, Exception):
            raise result
        return result

    async def describe_tool(self, name: str) -> dict[str, Any]:
        return self.descriptions[name]


@pytest.fixture
def anyio_backend() -> str:
    """The code under test is built on asyncio; run async tests on that backend."""
    return "asyncio"


@pytest.fixture
def completion_provider() -> StubCompletionProvider:
    return StubCompletionProvider()


@pytest.fixture
def tool_client() -> StubToolClient:
    return StubToolClient()


@pytest.fixture
def skills_path(tmp_path: Path) -> Path:
    """Skills root inside the temporary workspace."""
    return tmp_path / "skills"


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with workspace pointing to tmp_path."""
    return Config(workspace=tmp_path)


@pytest.fixture
def skill_doc() -> Callable[..., dict[str, Any]]:
    """Factory for minimal valid skill documents."""

    def make(name: str, **overrides: Any) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "name": name,
            "version": "1.0.0",
            "description": f"The {name} skill",
            "execution": {"type": "ai-prompt", "prompt": "Do {{task}}"},
        }
        doc.update(overrides)
        return doc

    return make


@pytest.fixture
def write_skill(skills_path: Path) -> Callable[..., Path]:
    """Write a skill document (dict or raw text) into a scope directory."""

    def write(document: dict[str, Any] | str, scope: str = "custom", filename: str | None = None) -> Path:
        scope_dir = skills_path / scope
        scope_dir.mkdir(parents=True, exist_ok=True)
        if isinstance(document, dict):
            filename = filename or f"{document['name']}.yml"
            content = yaml.dump(document, sort_keys=False)
        else:
            content = document
        path = scope_dir / (filename or "skill.yml")
        path.write_text(content)
        return path

    return write


@pytest.fixture
def center(
    skills_path: Path,
    completion_provider: StubCompletionProvider,
    tool_client: StubToolClient,
) -> SkillsCenter:
    """Initialized SkillsCenter with stub collaborators and an empty store."""
    skills_center = SkillsCenter(
        skills_path,
        completion_provider=completion_provider,
        tool_client=tool_client,
    )
    skills_center.initialize()
    return skills_center
