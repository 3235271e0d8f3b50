"""CLI context — shared helpers for loading agents and failing cleanly."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from agentdocs.catalog import AgentCatalog
from agentdocs.config import settings
from agentdocs.document.parser import AgentDocument
from agentdocs.exceptions import AgentNotFoundError

console = Console()

# Exit codes
EXIT_OK = 0
EXIT_FAILED = 1  # lint failed, permission denied
EXIT_USAGE = 2  # bad input, missing agent or directory


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def fail(message: str, code: int = EXIT_USAGE) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    raise typer.Exit(code)


def load_catalog(directory: Path | None = None) -> AgentCatalog:
    root = directory or settings.agents_dir
    if not root.is_dir():
        fail(f"Agents directory not found: {root}")
    return AgentCatalog.load(root)


def get_agent(name: str, directory: Path | None = None) -> tuple[AgentCatalog, AgentDocument]:
    catalog = load_catalog(directory)
    try:
        return catalog, catalog.get(name)
    except AgentNotFoundError as e:
        known = ", ".join(catalog.names()) or "none"
        fail(f"{e} (known agents: {known})")
