"""Tests for the script backend."""

import pytest

from skillengine.backends.script import ScriptBackend, render_command, run_command
from skillengine.core.exceptions import ScriptError, ShellError, SkillError
from skillengine.core.validator import validate_definition


def script_skill(skill_doc, language, code, **extra):
    return validate_definition(
        skill_doc(
            "script",
            execution={"type": "script", "language": language, "code": code, **extra},
        )
    )


class TestProcedures:
    @pytest.mark.anyio
    async def test_registered_procedure(self, skill_doc):
        backend = ScriptBackend({"add": lambda inputs, context: {"sum": inputs["a"] + inputs["b"]}})

        result = await backend.run(script_skill(skill_doc, "procedural", "add"), {"a": 1, "b": 2}, {})

        assert result == {"sum": 3}

    @pytest.mark.anyio
    async def test_async_procedure(self, skill_doc):
        async def fetch(inputs, context):
            return {"context": sorted(context)}

        backend = ScriptBackend()
        backend.register_procedure("fetch", fetch)

        result = await backend.run(
            script_skill(skill_doc, "procedural", "fetch"), {}, {"call_stack": []}
        )

        assert result == {"context": ["call_stack"]}

    def test_entry_point_reference(self):
        from collections import ChainMap

        assert ScriptBackend().resolve_procedure("collections:ChainMap") is ChainMap

    def test_dotted_attribute_path(self):
        import os.path

        assert ScriptBackend().resolve_procedure("os:path.join") is os.path.join

    @pytest.mark.parametrize(
        "reference",
        ["unknown", "no_such_module_xyz:func", "collections:Missing", "math:pi"],
    )
    def test_unresolvable_reference(self, reference):
        with pytest.raises(ScriptError):
            ScriptBackend().resolve_procedure(reference)

    @pytest.mark.anyio
    async def test_procedure_exception_wrapped(self, skill_doc):
        def explode(inputs, context):
            raise KeyError("missing")

        backend = ScriptBackend({"explode": explode})

        with pytest.raises(ScriptError, match="missing"):
            await backend.run(script_skill(skill_doc, "procedural", "explode"), {}, {})

    @pytest.mark.anyio
    async def test_skill_errors_pass_through(self, skill_doc):
        error = SkillError("nested")

        def fail(inputs, context):
            raise error

        backend = ScriptBackend({"fail": fail})

        with pytest.raises(SkillError) as exc:
            await backend.run(script_skill(skill_doc, "procedural", "fail"), {}, {})
        assert exc.value is error

    @pytest.mark.anyio
    async def test_inputs_are_copied(self, skill_doc):
        def mutate(inputs, context):
            inputs["changed"] = True
            return inputs

        backend = ScriptBackend({"mutate": mutate})
        inputs = {"a": 1}

        await backend.run(script_skill(skill_doc, "procedural", "mutate"), inputs, {})

        assert inputs == {"a": 1}


class TestRenderCommand:
    def test_values_quoted(self):
        command = render_command("echo {{msg}}", {"msg": "hi; rm -rf /"})
        assert command == "echo 'hi; rm -rf /'"

    def test_safe_values_unchanged(self):
        assert render_command("echo {{msg}}", {"msg": "hello"}) == "echo hello"

    def test_escape_disabled(self):
        command = render_command("echo {{msg}}", {"msg": "a b"}, escape=False)
        assert command == "echo a b"

    def test_unknown_placeholder_left(self):
        assert render_command("echo {{other}}", {"msg": "x"}) == "echo {{other}}"


class TestShell:
    @pytest.mark.anyio
    async def test_captures_output(self, skill_doc):
        skill = script_skill(skill_doc, "shell", "echo {{msg}}")

        result = await ScriptBackend().run(skill, {"msg": "hello world"}, {})

        assert result == {"stdout": "hello world\n", "stderr": "", "exit_code": 0}

    @pytest.mark.anyio
    async def test_injection_is_literal(self):
        result = await run_command(render_command("echo {{msg}}", {"msg": "$(echo pwned)"}))

        assert result["stdout"] == "$(echo pwned)\n"

    @pytest.mark.anyio
    async def test_non_zero_exit(self):
        with pytest.raises(ShellError) as exc:
            await run_command("echo oops >&2; exit 3")

        assert exc.value.exit_code == 3
        assert exc.value.stderr == "oops\n"
        assert isinstance(exc.value, ScriptError)
