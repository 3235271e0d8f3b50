"""Agent document parser — YAML frontmatter plus Markdown body.

A document looks like:

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
    ---

    You are in code review mode. Focus on...

The agent's name is the file stem (`review.md` -> `review`) unless the
frontmatter sets `name` explicitly.
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from agentdocs.document.body import BodyOutline, outline as build_outline
from agentdocs.document.schema import AgentConfig
from agentdocs.exceptions import DocumentParseError, DocumentValidationError
from agentdocs.types import AgentMode, SourceLocation

_logger = logging.getLogger(__name__)

_DELIMITER = "---"


class AgentDocument(BaseModel):
    """A parsed agent definition document."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    path: Path | None = None
    config: AgentConfig = Field(default_factory=AgentConfig)
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
    body_line: int = 1  # file line on which the body starts

    @cached_property
    def outline(self) -> BodyOutline:
        return build_outline(self.body)

    @property
    def description(self) -> str:
        return self.config.description

    @property
    def mode(self) -> AgentMode:
        return self.config.mode

    @property
    def is_primary(self) -> bool:
        return self.config.mode in (AgentMode.PRIMARY, AgentMode.ALL)

    @property
    def is_subagent(self) -> bool:
        return self.config.mode in (AgentMode.SUBAGENT, AgentMode.ALL)

    @property
    def prompt_text(self) -> str:
        """The system prompt the host would use."""
        return self.body.strip() or (self.config.prompt or "").strip()

    def location(self, body_line: int = 0) -> SourceLocation:
        """Map a body-relative line to a file location."""
        line = self.body_line + body_line - 1 if body_line else 0
        return SourceLocation(path=str(self.path) if self.path else self.name, line=line)


def split_frontmatter(text: str, path: str | None = None) -> tuple[str, str, int]:
    """Split raw text into (yaml_text, body, body_line).

    `body_line` is the 1-based file line where the body begins.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    lines = text.splitlines(keepends=True)

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1

    if start >= len(lines) or lines[start].strip() != _DELIMITER:
        raise DocumentParseError(
            "Missing YAML frontmatter: document must start with '---'", path,
        )

    for end in range(start + 1, len(lines)):
        if lines[end].rstrip() == _DELIMITER:
            yaml_text = "".join(lines[start + 1:end])
            body = "".join(lines[end + 1:])
            return yaml_text, body, end + 2

    raise DocumentParseError("Unterminated YAML frontmatter: no closing '---'", path)


def _format_errors(exc: ValidationError) -> list[str]:
    out = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "frontmatter"
        out.append(f"{loc}: {err['msg']}")
    return out


def parse_document(
    text: str, name: str | None = None, path: str | Path | None = None,
) -> AgentDocument:
    """Parse document text into an AgentDocument.

    Raises:
        DocumentParseError: delimiters missing, YAML invalid, or not a mapping.
        DocumentValidationError: frontmatter violates the agent schema.
    """
    where = str(path) if path is not None else None
    yaml_text, body, body_line = split_frontmatter(text, where)

    try:
        frontmatter = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise DocumentParseError(f"Invalid YAML frontmatter: {e}", where) from e

    if frontmatter is None:
        frontmatter = {}
    if not isinstance(frontmatter, dict):
        raise DocumentParseError(
            f"YAML frontmatter must be a mapping, got {type(frontmatter).__name__}",
            where,
        )

    try:
        config = AgentConfig.model_validate(frontmatter)
    except ValidationError as e:
        errors = _format_errors(e)
        raise DocumentValidationError(
            "Invalid frontmatter: " + "; ".join(errors), where, errors,
        ) from e

    resolved = config.name or name or (Path(path).stem if path is not None else None)
    if not resolved:
        raise DocumentParseError(
            "Agent has no name: set 'name' in frontmatter or pass one", where,
        )

    return AgentDocument(
        name=resolved,
        path=Path(path) if path is not None else None,
        config=config,
        frontmatter=frontmatter,
        body=body,
        body_line=body_line,
    )


def load_document(path: str | Path) -> AgentDocument:
    """Read and parse an agent document from disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DocumentParseError("File not found", str(path)) from None
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentParseError(f"Error reading file: {e}", str(path)) from e

    _logger.debug("Loading agent document %s", path)
    return parse_document(text, name=path.stem, path=path)
