"""Agent inspection commands — list, show, check, graph, new, export."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from agentdocs.cli.context import (
    EXIT_FAILED,
    console,
    fail,
    get_agent,
    load_catalog,
)
from agentdocs.exceptions import AgentdocsError
from agentdocs.permissions.engine import PermissionEngine
from agentdocs.types import AgentMode, PermissionAction

_ACTION_STYLE = {
    PermissionAction.ALLOW: "green",
    PermissionAction.ASK: "yellow",
    PermissionAction.DENY: "bold red",
}

DirOption = typer.Option(None, "--dir", "-d", help="Agents directory")


def _styled(action: PermissionAction) -> str:
    style = _ACTION_STYLE[action]
    return f"[{style}]{action.value}[/{style}]"


def list_agents(
    directory: Optional[Path] = typer.Argument(None, help="Agents directory"),
    mode: Optional[AgentMode] = typer.Option(None, "--mode", "-m", help="Only this mode"),
):
    """List agent documents."""
    catalog = load_catalog(directory)
    docs = catalog.filter(mode)

    if not docs:
        console.print("[dim]No agents found.[/dim]")
        return

    table = Table(title="Agents")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Mode", style="blue")
    table.add_column("Model", style="white")
    table.add_column("Description", style="white")

    for doc in docs:
        desc = doc.description
        name = f"[dim]{escape(doc.name)}[/dim]" if doc.config.disable else escape(doc.name)
        table.add_row(
            name,
            doc.mode.value,
            escape(doc.config.model) if doc.config.model else "[dim]inherit[/dim]",
            escape(desc[:80] + ("..." if len(desc) > 80 else "")),
        )

    console.print(table)
    if catalog.failures:
        console.print(f"[yellow]{len(catalog.failures)} file(s) failed to load; run lint for details[/yellow]")


def show(
    name: str = typer.Argument(help="Agent name"),
    directory: Optional[Path] = DirOption,
):
    """Show an agent's configuration, permissions and prompt outline."""
    catalog, doc = get_agent(name, directory)
    config = doc.config

    lines = [
        f"[bold]{escape(doc.description) or '[red]no description[/red]'}[/bold]",
        "",
        f"Mode:         {doc.mode.value}",
        f"Model:        {escape(config.model or 'inherit')}",
        f"Temperature:  {config.temperature if config.temperature is not None else 'default'}",
        f"File:         {escape(str(doc.path))}",
    ]
    if config.max_steps:
        lines.append(f"Max steps:    {config.max_steps}")
    disabled_tools = [t for t, on in config.tools.items() if not on]
    if disabled_tools:
        lines.append(f"Tools off:    {escape(', '.join(disabled_tools))}")
    console.print(Panel("\n".join(lines), title=escape(doc.name), border_style="cyan"))

    perms = Table(title="Permissions")
    perms.add_column("Category", style="cyan")
    perms.add_column("Pattern", style="white")
    perms.add_column("Action")
    for category, rule in PermissionEngine().effective_table(doc).items():
        if isinstance(rule, PermissionAction):
            perms.add_row(escape(category), "", _styled(rule))
            continue
        for pattern, action in rule.items():
            perms.add_row(escape(category), escape(pattern), _styled(action))
    console.print(perms)

    outline = doc.outline
    if outline.sections:
        tree = Tree("Sections")
        for section in outline.sections:
            tree.add(f"{'#' * section.level} {escape(section.title)}")
        console.print(tree)

    if outline.commands:
        cmds = Table(title="Commands")
        cmds.add_column("Command", style="green")
        cmds.add_column("Purpose", style="white")
        for entry in outline.commands:
            cmds.add_row(escape(entry.command), escape(entry.purpose))
        console.print(cmds)

    if outline.mentions:
        names = [
            escape(n) if n in catalog else f"[red]{escape(n)}[/red]"
            for n in outline.mentioned_names
        ]
        console.print(f"Mentions: {', '.join('@' + n for n in names)}")


def check(
    name: str = typer.Argument(help="Agent name"),
    category: str = typer.Argument(help="Permission category (bash, edit, webfetch, ...)"),
    subject: Optional[str] = typer.Argument(None, help="Command or target, e.g. 'git push'"),
    directory: Optional[Path] = DirOption,
):
    """Would this agent be allowed to do something?"""
    _, doc = get_agent(name, directory)
    decision = PermissionEngine().decide(doc, category, subject)

    what = escape(f"{category} {subject!r}" if subject else category)
    via = f" via pattern {escape(repr(decision.pattern))}" if decision.pattern else ""
    console.print(
        f"{escape(doc.name)}: {what} -> {_styled(decision.action)} ({decision.reason}{via})",
        soft_wrap=True,
    )

    if decision.denied:
        raise typer.Exit(EXIT_FAILED)


def graph(directory: Optional[Path] = DirOption):
    """Show which agents mention which."""
    catalog = load_catalog(directory)
    unresolved = catalog.unresolved_mentions()

    tree = Tree("Agents")
    for source, targets in catalog.mention_graph().items():
        node = tree.add(f"[cyan]{escape(source)}[/cyan]")
        for target in sorted(targets):
            node.add(escape(f"@{target}"))
        for missing in unresolved.get(source, []):
            node.add(f"[red]{escape('@' + missing)} (unresolved)[/red]")
    console.print(tree)


def new(
    name: str = typer.Argument(help="Agent name (kebab-case)"),
    description: str = typer.Option(..., "--description", help="One-line description"),
    mode: AgentMode = typer.Option(AgentMode.SUBAGENT, "--mode", "-m"),
    model: Optional[str] = typer.Option(None, "--model", help="provider/model-id"),
    temperature: Optional[float] = typer.Option(None, "--temperature", "-t"),
    read_only: bool = typer.Option(False, "--read-only", help="Disable edits and most shell commands"),
    directory: Optional[Path] = DirOption,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Create a new agent document from a template."""
    from agentdocs.scaffold import create_document

    try:
        path = create_document(
            name,
            description,
            directory=directory,
            force=force,
            mode=mode,
            model=model,
            temperature=temperature,
            read_only=read_only,
        )
    except AgentdocsError as e:
        fail(str(e))
    console.print(f"[green]Created[/green] {escape(str(path))}")


def export(
    directory: Optional[Path] = DirOption,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
    no_prompt: bool = typer.Option(False, "--no-prompt", help="Leave prompts out"),
    skip_disabled: bool = typer.Option(False, "--skip-disabled", help="Leave disabled agents out"),
):
    """Export agents as an opencode.json-style config."""
    from agentdocs.export import dump_json, to_host_config, write_host_config

    catalog = load_catalog(directory)
    if output is None:
        data = to_host_config(
            catalog, include_prompt=not no_prompt, include_disabled=not skip_disabled,
        )
        typer.echo(dump_json(data).decode(), nl=False)
        return

    try:
        path = write_host_config(
            catalog, output, include_prompt=not no_prompt, include_disabled=not skip_disabled,
        )
    except AgentdocsError as e:
        fail(str(e))
    console.print(f"[green]Exported {len(catalog)} agents to[/green] {escape(str(path))}")
