"""Shared test fixtures — sample agent documents on disk."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from agentdocs.document.parser import AgentDocument, parse_document

REVIEWER = textwrap.dedent("""\
    ---
    description: Reviews code for quality and best practices
    mode: subagent
    model: anthropic/claude-sonnet-4-20250514
    temperature: 0.1
    tools:
      write: false
      edit: false
    permission:
      bash:
        "*": ask
        "git diff*": allow
        "git log*": allow
        "git push*": deny
      webfetch: deny
    ---

    # The Oracle

    You are in code review mode. Hand security questions to @scout.

    ## Commands

    | Command | Purpose |
    |---------|---------|
    | `git diff` | See pending changes |
    | `git log --oneline` | Recent history |
    | `git push origin main` | Never do this |

    ## Example

    ```python
    @decorator
    def f():
        pass
    ```
    """)

SCOUT = textwrap.dedent("""\
    ---
    description: Explores the codebase and reports findings
    mode: subagent
    tools:
      bash: true
    ---

    # The Scout

    Search widely, report to @build and @ghost.
    """)

BUILD = textwrap.dedent("""\
    ---
    description: Primary build agent
    mode: primary
    model: anthropic/claude-sonnet-4-20250514
    ---

    # The Warrior

    Delegate reviews to @reviewer.
    """)


def make_doc(text: str, name: str = "agent") -> AgentDocument:
    return parse_document(text, name=name)


def write_agent(directory: Path, name: str, text: str) -> Path:
    path = directory / f"{name}.md"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def reviewer_doc() -> AgentDocument:
    return make_doc(REVIEWER, name="reviewer")


@pytest.fixture
def agents_dir(tmp_path):
    directory = tmp_path / "agent"
    directory.mkdir()
    write_agent(directory, "reviewer", REVIEWER)
    write_agent(directory, "scout", SCOUT)
    write_agent(directory, "build", BUILD)
    return directory
