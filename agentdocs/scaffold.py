"""Scaffolding — start a new agent document from a template."""

from __future__ import annotations

import re
from pathlib import Path

from agentdocs.config import settings
from agentdocs.document.parser import AgentDocument
from agentdocs.document.render import write_document
from agentdocs.document.schema import AgentConfig
from agentdocs.exceptions import ScaffoldError
from agentdocs.types import AgentMode, PermissionAction

_NAME = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")

# Inspection-only shell access: everything denied except read-only commands
READ_ONLY_BASH: dict[str, PermissionAction] = {
    "*": PermissionAction.DENY,
    "git status*": PermissionAction.ALLOW,
    "git log*": PermissionAction.ALLOW,
    "git diff*": PermissionAction.ALLOW,
    "git show*": PermissionAction.ALLOW,
    "grep *": PermissionAction.ALLOW,
    "find *": PermissionAction.ALLOW,
    "ls*": PermissionAction.ALLOW,
    "cat *": PermissionAction.ALLOW,
    "head *": PermissionAction.ALLOW,
    "tail *": PermissionAction.ALLOW,
    "wc *": PermissionAction.ALLOW,
}

_BODY_TEMPLATE = """\
# {title}

You are **{title}**. {description}

## Responsibilities

- Describe what this agent owns.
- Describe what it hands off, and to whom.

## Commands

| Command | Purpose |
|---------|---------|
| `git status` | Inspect the working tree |
| `git diff` | Review pending changes |

## Boundaries

- State what this agent must never do.
"""


def new_document(
    name: str,
    description: str,
    mode: AgentMode | str = AgentMode.SUBAGENT,
    model: str | None = None,
    temperature: float | None = None,
    read_only: bool = False,
) -> AgentDocument:
    """Build a starter document. Names must be lowercase kebab-case."""
    if not _NAME.match(name):
        raise ScaffoldError(f"Invalid agent name '{name}': use lowercase kebab-case")
    if not description.strip():
        raise ScaffoldError("An agent needs a description")

    tools: dict[str, bool] = {}
    permission: dict = {}
    if read_only:
        tools = {"write": False, "edit": False, "patch": False}
        permission = {"bash": dict(READ_ONLY_BASH), "webfetch": PermissionAction.DENY}

    config = AgentConfig(
        description=description.strip(),
        mode=AgentMode(mode),
        model=model,
        temperature=temperature,
        tools=tools,
        permission=permission,
    )
    title = name.replace("-", " ").title()
    body = _BODY_TEMPLATE.format(title=title, description=description.strip())
    return AgentDocument(name=name, config=config, body=body)


def create_document(
    name: str,
    description: str,
    directory: str | Path | None = None,
    force: bool = False,
    **options,
) -> Path:
    """Write a new document to `<directory>/<name>.md`. Refuses to overwrite unless forced."""
    doc = new_document(name, description, **options)
    path = Path(directory or settings.agents_dir) / f"{name}.md"
    if path.exists() and not force:
        raise ScaffoldError(f"{path} already exists (use --force to overwrite)")
    doc.path = path
    return write_document(doc, path)
