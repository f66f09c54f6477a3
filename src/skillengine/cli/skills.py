"""Skills subcommand group for the skillengine CLI."""

import asyncio
import json
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from skillengine.core.exceptions import SkillError
from skillengine.core.skill_def import SkillDefinition
from skillengine.core.skills_center import SkillsCenter

skills_app = typer.Typer(
    help="Manage and execute skills",
    no_args_is_help=True,
    add_completion=True,
)
console = Console()


def _center(ctx: typer.Context) -> SkillsCenter:
    center = SkillsCenter.from_config(ctx.obj["config"])
    center.initialize()
    return center


def _print_skills(skills: list[SkillDefinition]) -> None:
    if not skills:
        console.print("[yellow]No skills found[/yellow]")
        return

    table = Table(title=f"Skills: {len(skills)}")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Type")
    table.add_column("Enabled")
    table.add_column("Description")
    for skill in sorted(skills, key=lambda s: s.name):
        table.add_row(
            skill.name,
            skill.category,
            skill.execution.type,
            "yes" if skill.enabled else "no",
            skill.description,
        )
    console.print(table)


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


@skills_app.command("list")
def list_skills(
    ctx: typer.Context,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Only this category")
    ] = None,
) -> None:
    """List installed skills."""
    _print_skills(_center(ctx).list(category))


@skills_app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Text to search for")] = "",
    category: Annotated[str | None, typer.Option("--category", "-c")] = None,
    tag: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Required tag (repeatable)")
    ] = None,
    mcp: Annotated[
        bool | None, typer.Option("--mcp/--no-mcp", help="Filter on MCP compatibility")
    ] = None,
) -> None:
    """Search skills by name, description and tags."""
    skills = _center(ctx).search(query, category=category, tags=tag, mcp_compatible=mcp)
    _print_skills(skills)


@skills_app.command()
def info(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the skill"),
) -> None:
    """Show detailed information about a skill."""
    skill = _center(ctx).get(name)
    if skill is None:
        console.print(f"[red]Skill not found: {name}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold cyan]Skill: {skill.name}[/bold cyan] v{skill.version}")
    console.print(f"Description: {skill.description}")
    console.print(f"Category: {skill.category}  Type: {skill.execution.type}")
    if skill.source_path:
        console.print(f"Source: {skill.source_path}")

    console.print("\nInputs:")
    if not skill.inputs:
        console.print("  No inputs")
    for spec in skill.inputs:
        required = "[red] required[/red]" if spec.required else "[green] optional[/green]"
        values = f" one of {', '.join(spec.values)}" if spec.values else ""
        console.print(f"  [bold]{spec.name}[/bold] ({spec.type}){required}{values}")

    if skill.outputs:
        console.print("\nOutputs:")
        for output in skill.outputs:
            console.print(f"  [bold]{output.name}[/bold]{' (required)' if output.required else ''}")

    if skill.dependencies:
        console.print("\nDependencies:")
        for dep in skill.dependencies:
            console.print(f"  {dep.name}{' (optional)' if dep.optional else ''}")


@skills_app.command()
def run(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the skill to execute"),
    args: str = typer.Option(
        None,
        "--args",
        "-a",
        help="Inputs as JSON string (e.g., '{\"code\": \"print(1)\"}')",
    ),
) -> None:
    """Execute a skill and print its result as JSON."""
    inputs = {}
    if args:
        try:
            inputs = json.loads(args)
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid JSON in args: {e}[/red]")
            raise typer.Exit(1)

    center = _center(ctx)
    try:
        result = asyncio.run(center.execute(name, inputs))
    except SkillError as e:
        _fail(e)

    console.print_json(json.dumps(result, default=str))


@skills_app.command()
def install(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Path to a skill definition file"),
) -> None:
    """Install a skill definition into the skills directory."""
    try:
        name = _center(ctx).install(source)
    except SkillError as e:
        _fail(e)
    console.print(f"[green]Installed skill: {name}[/green]")


@skills_app.command()
def uninstall(ctx: typer.Context, name: str = typer.Argument(...)) -> None:
    """Remove an installed skill."""
    try:
        _center(ctx).uninstall(name)
    except SkillError as e:
        _fail(e)
    console.print(f"[green]Uninstalled skill: {name}[/green]")


@skills_app.command()
def enable(ctx: typer.Context, name: str = typer.Argument(...)) -> None:
    """Enable a skill."""
    try:
        _center(ctx).enable(name)
    except SkillError as e:
        _fail(e)
    console.print(f"[green]Enabled skill: {name}[/green]")


@skills_app.command()
def disable(ctx: typer.Context, name: str = typer.Argument(...)) -> None:
    """Disable a skill."""
    try:
        _center(ctx).disable(name)
    except SkillError as e:
        _fail(e)
    console.print(f"[green]Disabled skill: {name}[/green]")


@skills_app.command()
def stats(ctx: typer.Context) -> None:
    """Show catalog and execution statistics."""
    center_stats = _center(ctx).get_stats()

    table = Table(title="Skills Center")
    table.add_column("Counter", style="cyan")
    table.add_column("Value", justify="right")
    for label, key in (
        ("Total skills", "total_skills"),
        ("Discovered", "discovered"),
        ("Executed", "executed"),
        ("Cached", "cached"),
        ("Errors", "errors"),
        ("Cache size", "cache_size"),
    ):
        table.add_row(label, str(center_stats[key]))
    for category, count in sorted(center_stats["categories"].items()):
        table.add_row(f"category: {category}", str(count))
    console.print(table)
