"""Custom exception hierarchy for agentdocs."""

from __future__ import annotations


class AgentdocsError(Exception):
    """Base for all agentdocs errors."""


class DocumentParseError(AgentdocsError):
    """The document is not frontmatter + Markdown, or the YAML is broken."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message + (f" in {path}" if path else ""))


class DocumentValidationError(AgentdocsError):
    """Frontmatter parsed but does not satisfy the agent schema."""

    def __init__(
        self, message: str, path: str | None = None, errors: list[str] | None = None,
    ) -> None:
        self.path = path
        self.errors = errors or []
        super().__init__(message + (f" in {path}" if path else ""))


class AgentNotFoundError(AgentdocsError):
    """No agent with the given name exists in the catalog."""


class DuplicateAgentError(AgentdocsError):
    """Two documents resolve to the same agent name."""


class PermissionDeniedError(AgentdocsError):
    """Action blocked by the agent's permission rules."""


class ExportError(AgentdocsError):
    """Failed to write exported host configuration."""


class ScaffoldError(AgentdocsError):
    """Cannot create a new agent document."""
