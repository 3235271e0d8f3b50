"""Permission Engine — what would the host allow this agent to do?

Evaluates an agent document's `tools` and `permission` blocks the way an
OpenCode-style host does at run time:

* A tool set to `false` in `tools` is unavailable, so every permission
  category it gates resolves to `deny`.
* A category with a bare action (`edit: deny`) applies it directly.
* A category with a pattern table (`bash: {"*": ask, "git diff*": allow}`)
  is matched against the subject. The LAST matching pattern wins, so
  general patterns go first and specific ones after.
* Anything unconfigured falls back to the engine default.
"""

from __future__ import annotations

import fnmatch

from pydantic import BaseModel

from agentdocs.config import settings
from agentdocs.document.parser import AgentDocument
from agentdocs.document.schema import KNOWN_PERMISSIONS, PERMISSION_TOOLS, PermissionRule
from agentdocs.exceptions import PermissionDeniedError
from agentdocs.permissions.log import DecisionLog
from agentdocs.types import PermissionAction


class PermissionDecision(BaseModel):
    agent: str
    category: str
    subject: str | None = None
    action: PermissionAction
    pattern: str | None = None  # the pattern that decided, if any
    reason: str = ""

    @property
    def allowed(self) -> bool:
        return self.action == PermissionAction.ALLOW

    @property
    def denied(self) -> bool:
        return self.action == PermissionAction.DENY


def normalize_subject(subject: str) -> str:
    return " ".join(subject.split())


def match_last(patterns: dict[str, PermissionAction], subject: str) -> tuple[str, PermissionAction] | None:
    """Return the last (pattern, action) whose glob matches the subject."""
    subject = normalize_subject(subject)
    found = None
    for pattern, action in patterns.items():
        if fnmatch.fnmatchcase(subject, normalize_subject(pattern)):
            found = (pattern, action)
    return found


def tool_enabled(doc: AgentDocument, tool: str) -> bool:
    """Tools are enabled unless a matching `tools` key says otherwise. Last match wins."""
    enabled = True
    for pattern, flag in doc.config.tools.items():
        if fnmatch.fnmatchcase(tool, pattern):
            enabled = flag
    return enabled


class PermissionEngine:
    """Evaluates permission questions against agent documents.

    Decisions made through `check()` are appended to the decision log.
    """

    def __init__(
        self,
        default: PermissionAction | str | None = None,
        log: DecisionLog | None = None,
    ) -> None:
        self._default = PermissionAction(default or settings.default_permission)
        self.log = log if log is not None else DecisionLog()

    @property
    def default(self) -> PermissionAction:
        return self._default

    def tool_enabled(self, doc: AgentDocument, tool: str) -> bool:
        return tool_enabled(doc, tool)

    def gated_off(self, doc: AgentDocument, category: str) -> bool:
        """True when every tool behind a category is disabled."""
        tools = PERMISSION_TOOLS.get(category)
        if not tools:
            return False
        return not any(tool_enabled(doc, t) for t in tools)

    def decide(
        self, doc: AgentDocument, category: str, subject: str | None = None,
    ) -> PermissionDecision:
        """Resolve the action for a category (and optional subject, e.g. a command)."""
        decision = dict(agent=doc.name, category=category, subject=subject)

        if self.gated_off(doc, category):
            return PermissionDecision(
                **decision, action=PermissionAction.DENY, reason="tool disabled",
            )

        rule = doc.config.rule_for(category)
        if rule is None:
            return PermissionDecision(
                **decision, action=self._default, reason="no rule configured",
            )

        if isinstance(rule, PermissionAction):
            return PermissionDecision(**decision, action=rule, reason="category rule")

        if subject is None:
            if "*" in rule:
                return PermissionDecision(
                    **decision, action=rule["*"], pattern="*", reason="wildcard pattern",
                )
            return PermissionDecision(
                **decision, action=self._default, reason="no subject given",
            )

        found = match_last(rule, subject)
        if found is None:
            return PermissionDecision(
                **decision, action=self._default, reason="no pattern matched",
            )
        pattern, action = found
        return PermissionDecision(
            **decision, action=action, pattern=pattern, reason="pattern match",
        )

    def check(
        self, doc: AgentDocument, category: str, subject: str | None = None,
    ) -> PermissionDecision:
        """Decide and record. Raises on deny; `ask` and `allow` are returned."""
        decision = self.decide(doc, category, subject)
        self.log.record(decision)

        if decision.denied:
            what = f"{category} '{subject}'" if subject else category
            raise PermissionDeniedError(
                f"Agent '{doc.name}' is not allowed to use {what} ({decision.reason})"
            )
        return decision

    def effective_table(self, doc: AgentDocument) -> dict[str, PermissionRule]:
        """Every known category plus any configured ones, resolved for display."""
        categories = list(KNOWN_PERMISSIONS)
        categories += [c for c in doc.config.permission if c not in categories and c != "*"]

        table: dict[str, PermissionRule] = {}
        for category in categories:
            if self.gated_off(doc, category):
                table[category] = PermissionAction.DENY
                continue
            rule = doc.config.rule_for(category)
            table[category] = self._default if rule is None else rule
        return table
