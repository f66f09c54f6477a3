"""CLI interface for skillengine using Typer."""

from pathlib import Path

import typer
from rich.console import Console

from skillengine.cli.skills import skills_app
from skillengine.utils.config import Config
from skillengine.utils.logging import setup_logging

app = typer.Typer(
    name="skillengine",
    help="Skill Engine: discover, manage and execute declarative skills",
    no_args_is_help=True,
    add_completion=True,
)
app.add_typer(skills_app, name="skills")

console = Console()


# Global config option callback
def load_config_callback(ctx: typer.Context, workspace: str):
    """Load configuration and store it in the context."""
    try:
        cfg = Config.load(Path(workspace))
    except Exception as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(cfg)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@app.callback()
def main(
    ctx: typer.Context,
    workspace: str = typer.Option(
        Path.home() / ".skillengine",
        "--workspace",
        "-w",
        help="Path to workspace directory",
        callback=load_config_callback,
    ),
) -> None:
    """
    Skill Engine: discover, manage and execute declarative skills.

    Configuration is loaded from ~/.skillengine/ by default.
    Use --workspace to specify a custom workspace directory.
    """
    # Config is loaded via callback, nothing to do here
    pass


if __name__ == "__main__":
    app()
