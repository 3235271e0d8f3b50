"""Decision Log — append-only record of permission checks.

Every decision made through `PermissionEngine.check()` is kept here,
timestamped, so a session of "what if" questions can be reviewed.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from agentdocs.types import PermissionAction

if TYPE_CHECKING:
    from agentdocs.permissions.engine import PermissionDecision


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class DecisionRecord(BaseModel):
    id: str = Field(default_factory=new_id)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    agent: str
    category: str
    subject: str | None = None
    action: PermissionAction
    pattern: str | None = None
    reason: str = ""


class DecisionLog:
    """In-memory, append-only decision log."""

    def __init__(self) -> None:
        self._entries: list[DecisionRecord] = []

    def record(self, decision: PermissionDecision) -> DecisionRecord:
        entry = DecisionRecord(**decision.model_dump())
        self._entries.append(entry)
        return entry

    def query(
        self,
        agent: str = "",
        action: PermissionAction | str = "",
        limit: int = 50,
    ) -> list[DecisionRecord]:
        """Query the log with filters, most recent first."""
        results = self._entries
        if agent:
            results = [e for e in results if e.agent == agent]
        if action:
            results = [e for e in results if e.action == PermissionAction(action)]
        return list(reversed(results))[:limit]

    def denials(self, limit: int = 50) -> list[DecisionRecord]:
        return self.query(action=PermissionAction.DENY, limit=limit)

    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DecisionLog(entries={len(self._entries)})"
