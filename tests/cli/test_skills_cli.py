"""Tests for the skills CLI commands."""

import json
import re

import pytest
import yaml
from typer.testing import CliRunner

from skillengine.cli.main import app

runner = CliRunner()


def flat(output: str) -> str:
    """Collapse console line wrapping."""
    return " ".join(output.split())


@pytest.fixture
def invoke(tmp_path):
    def run(*args: str):
        return runner.invoke(app, ["--workspace", str(tmp_path), "skills", *args])

    return run


@pytest.fixture
def echo_skill(write_skill, skill_doc):
    return write_skill(
        skill_doc(
            "echo",
            category="tools",
            inputs=[{"name": "msg", "required": True}],
            execution={"type": "script", "language": "shell", "code": "echo {{msg}}"},
        )
    )


def test_skills_help(tmp_path):
    result = runner.invoke(app, ["--workspace", str(tmp_path), "skills", "--help"])

    assert result.exit_code == 0
    for command in ("list", "search", "run", "install", "stats"):
        assert command in flat(result.output)


def test_bad_config_exits(tmp_path):
    (tmp_path / "config.user.yaml").write_text(yaml.dump({"cache_ttl": -1}))

    result = runner.invoke(app, ["--workspace", str(tmp_path), "skills", "list"])

    assert result.exit_code == 1
    assert "Error loading config" in flat(result.output)


class TestListAndSearch:
    def test_empty_catalog(self, invoke, tmp_path):
        result = invoke("list")

        assert result.exit_code == 0
        assert "No skills found" in flat(result.output)
        assert (tmp_path / "skills" / "custom").is_dir()

    def test_list(self, invoke, echo_skill):
        result = invoke("list")

        assert result.exit_code == 0
        assert "echo" in flat(result.output)

    def test_list_by_category(self, invoke, echo_skill):
        assert "No skills found" in invoke("list", "--category", "other").output

    def test_search(self, invoke, echo_skill):
        assert "echo" in invoke("search", "ech").output
        assert "No skills found" in invoke("search", "zzz").output


class TestInfo:
    def test_shows_inputs(self, invoke, echo_skill):
        result = invoke("info", "echo")

        assert result.exit_code == 0
        assert "Skill: echo" in flat(result.output)
        assert "msg" in flat(result.output)

    def test_unknown(self, invoke):
        result = invoke("info", "ghost")

        assert result.exit_code == 1
        assert "Skill not found: ghost" in flat(result.output)


class TestRun:
    def test_prints_json_result(self, invoke, echo_skill):
        result = invoke("run", "echo", "--args", '{"msg": "hi there"}')

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "stdout": "hi there\n",
            "stderr": "",
            "exit_code": 0,
        }

    def test_missing_input(self, invoke, echo_skill):
        result = invoke("run", "echo")

        assert result.exit_code == 1
        assert "Required input missing" in flat(result.output)

    def test_invalid_json(self, invoke, echo_skill):
        result = invoke("run", "echo", "--args", "{nope")

        assert result.exit_code == 1
        assert "Invalid JSON" in flat(result.output)

    def test_unknown_skill(self, invoke):
        result = invoke("run", "ghost")

        assert result.exit_code == 1
        assert "Skill not found" in flat(result.output)


class TestManage:
    def test_install_and_uninstall(self, invoke, tmp_path, skill_doc):
        source = tmp_path / "new.yml"
        source.write_text(yaml.dump(skill_doc("fresh")))

        result = invoke("install", str(source))
        assert result.exit_code == 0
        assert "Installed skill: fresh" in flat(result.output)
        assert (tmp_path / "skills" / "custom" / "fresh.yml").exists()

        result = invoke("uninstall", "fresh")
        assert result.exit_code == 0
        assert not (tmp_path / "skills" / "custom" / "fresh.yml").exists()

    def test_install_remote_rejected(self, invoke):
        result = invoke("install", "https://example.com/s.yml")

        assert result.exit_code == 1
        assert "not supported" in flat(result.output)

    def test_disable_then_run_fails(self, invoke, echo_skill):
        assert invoke("disable", "echo").exit_code == 0
        assert yaml.safe_load(echo_skill.read_text())["enabled"] is False

        result = invoke("run", "echo", "--args", '{"msg": "x"}')
        assert result.exit_code == 1
        assert "disabled" in flat(result.output)

        assert invoke("enable", "echo").exit_code == 0
        assert yaml.safe_load(echo_skill.read_text())["enabled"] is True

    def test_stats(self, invoke, echo_skill):
        result = invoke("stats")

        assert result.exit_code == 0
        output = flat(result.output)
        assert re.search(r"Total skills\W+1\b", output)
        assert re.search(r"Discovered\W+1\b", output)
        for counter in ("Executed", "Cached", "Errors", "Cache size"):
            assert re.search(rf"{counter}\W+0\b", output)
        assert re.search(r"category: tools\W+1\b", output)

