"""Script backend: registered/importable procedures and shell commands."""

import asyncio
import importlib
import inspect
import logging
import shlex
from typing import Any, Callable, cast

from skillengine.backends.base import Backend
from skillengine.core.exceptions import ScriptError, ShellError, SkillError
from skillengine.core.interpolation import interpolate, stringify
from skillengine.core.skill_def import ScriptExecution, SkillDefinition

logger = logging.getLogger(__name__)

# Called as procedure(inputs, context); may return a value or an awaitable
Procedure = Callable[[dict[str, Any], dict[str, Any]], Any]


class ScriptBackend(Backend):
    """
    Run `script` skills.

    Procedural scripts never compile code from the definition file. The
    `code` field names a procedure registered with `register_procedure`,
    or a "package.module:function" entry point imported on first use.
    """

    kinds = ("script",)

    def __init__(self, procedures: dict[str, Procedure] | None = None):
        self.procedures: dict[str, Procedure] = dict(procedures or {})

    def register_procedure(self, name: str, procedure: Procedure) -> None:
        self.procedures[name] = procedure

    async def run(
        self,
        skill: SkillDefinition,
        inputs: dict[str, Any],
        context: dict[str, Any],
    ) -> Any:
        execution = cast(ScriptExecution, skill.execution)

        if execution.language == "procedural":
            return await self.run_procedure(execution.code, inputs, context)

        command = render_command(execution.code, inputs, escape=execution.escape)
        return await run_command(command)

    def resolve_procedure(self, reference: str) -> Procedure:
        """
        Find the callable a procedural script refers to.

        Raises:
            ScriptError: If the reference is neither registered nor importable
        """
        name = reference.strip()
        if name in self.procedures:
            return self.procedures[name]

        module_name, sep, attr_path = name.partition(":")
        if not sep or not module_name or not attr_path:
            raise ScriptError(f"Unknown procedure: {name}")

        try:
            target: Any = importlib.import_module(module_name)
        except ImportError as e:
            raise ScriptError(f"Cannot import {module_name}: {e}") from e

        for attr in attr_path.split("."):
            try:
                target = getattr(target, attr)
            except AttributeError as e:
                raise ScriptError(f"Procedure not found: {name}") from e

        if not callable(target):
            raise ScriptError(f"Procedure is not callable: {name}")
        return target

    async def run_procedure(
        self, reference: str, inputs: dict[str, Any], context: dict[str, Any]
    ) -> Any:
        procedure = self.resolve_procedure(reference)
        try:
            result = procedure(dict(inputs), context)
            if inspect.isawaitable(result):
                result = await result
        except SkillError:
            raise
        except Exception as e:
            raise ScriptError(str(e)) from e
        return result


def render_command(template: str, inputs: dict[str, Any], escape: bool = True) -> str:
    """
    Substitute inputs into a shell command template.

    With `escape` every value is shell-quoted before substitution, so an
    input cannot break out of its argument position.
    """
    if not escape:
        return interpolate(template, inputs)
    quoted = {key: shlex.quote(stringify(value)) for key, value in inputs.items()}
    return interpolate(template, quoted)


async def run_command(command: str) -> dict[str, Any]:
    """
    Run a shell command and capture its output.

    Raises:
        ShellError: If the command exits with a non-zero status
        ScriptError: If the shell could not be started
    """
    logger.debug(f"Running shell command: {command}")
    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
    except OSError as e:
        raise ScriptError(f"Failed to execute command: {e}") from e

    output = stdout.decode(errors="replace") if stdout else ""
    error = stderr.decode(errors="replace") if stderr else ""
    exit_code = process.returncode or 0

    if exit_code != 0:
        raise ShellError(exit_code, error)

    return {"stdout": output, "stderr": error, "exit_code": exit_code}
