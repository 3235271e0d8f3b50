"""agentdocs CLI — lint and inspect agent definition documents.

`agentdocs lint` checks every document in the agents directory.
`agentdocs show NAME`, `agentdocs check NAME bash "git push"` and
friends inspect a single agent.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from agentdocs.catalog import AgentCatalog
from agentdocs.cli import agents
from agentdocs.cli.context import (
    EXIT_FAILED,
    EXIT_USAGE,
    configure_logging,
    console,
    load_catalog,
)
from agentdocs.config import settings
from agentdocs.lint import Linter, default_registry
from agentdocs.types import Severity

app = typer.Typer(
    name="agentdocs",
    help="agentdocs -- lint, inspect and export agent definition documents.",
    no_args_is_help=True,
)

_SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "dim",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    configure_logging(verbose)


# Agent inspection commands
app.command("list")(agents.list_agents)
app.command("show")(agents.show)
app.command("check")(agents.check)
app.command("graph")(agents.graph)
app.command("new")(agents.new)
app.command("export")(agents.export)


@app.command("lint")
def lint(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories (default: agents dir)"),
    strict: bool = typer.Option(settings.strict, "--strict", help="Warnings fail the run"),
    disable: Optional[List[str]] = typer.Option(None, "--disable", help="Rule id to skip (repeatable)"),
    output_format: str = typer.Option("text", "--format", "-f", help="text or json"),
):
    """Check agent documents for problems."""
    if output_format not in ("text", "json"):
        console.print(f"[red]Unknown format '{escape(output_format)}' (use text or json)[/red]")
        raise typer.Exit(EXIT_USAGE)

    if paths:
        missing = [p for p in paths if not p.exists()]
        if missing:
            console.print(f"[red]Not found: {escape(', '.join(map(str, missing)))}[/red]")
            raise typer.Exit(EXIT_USAGE)
        catalog = AgentCatalog.from_paths(paths)
    else:
        catalog = load_catalog()

    report = Linter(disabled=disable or ()).lint_catalog(catalog)

    if output_format == "json":
        from agentdocs.export import dump_json
        typer.echo(dump_json(report.to_dict()).decode(), nl=False)
    else:
        if not report.checked and not report.issues:
            console.print("[dim]No agent documents found.[/dim]")
        for issue in report.issues:
            style = _SEVERITY_STYLE[issue.severity]
            console.print(f"[{style}]{escape(str(issue))}[/{style}]", soft_wrap=True)
        counts = report.summary()
        console.print(
            f"\n{counts['checked']} checked: "
            f"{counts['errors']} error(s), {counts['warnings']} warning(s), "
            f"{counts['infos']} note(s)"
        )

    if not report.ok(strict=strict):
        raise typer.Exit(EXIT_FAILED)


@app.command("rules")
def rules():
    """List the lint rules."""
    table = Table(title="Lint Rules")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Description", style="white")

    for rule in default_registry().list_rules():
        style = _SEVERITY_STYLE[rule.severity]
        table.add_row(rule.id, f"[{style}]{rule.severity.value}[/{style}]", rule.description)
    console.print(table)


@app.command("version")
def version_cmd():
    """Show agentdocs version."""
    from agentdocs import __version__
    console.print(f"agentdocs v{__version__}")
