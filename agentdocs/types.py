"""Core types shared across all agentdocs subsystems."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


# ── Agent Modes ───────────────────────────────────────────────────────────────


class AgentMode(str, Enum):
    PRIMARY = "primary"
    SUBAGENT = "subagent"
    ALL = "all"


# ── Permission Actions ───────────────────────────────────────────────────────


class PermissionAction(str, Enum):
    ALLOW = "allow"
    ASK = "ask"
    DENY = "deny"


# ── Lint Severity ────────────────────────────────────────────────────────────


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class SourceLocation(BaseModel):
    path: str = ""
    line: int = 0

    def __str__(self) -> str:
        if self.line:
            return f"{self.path}:{self.line}"
        return self.path
