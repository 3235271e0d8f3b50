"""Lint issues and the report that collects them."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from pydantic import BaseModel, Field

from agentdocs.types import Severity


class LintIssue(BaseModel):
    rule: str
    severity: Severity
    message: str
    agent: str = ""
    path: str = ""
    line: int = 0

    def __str__(self) -> str:
        where = f"{self.path}:{self.line}" if self.line else self.path
        return f"{where}: {self.severity.value} [{self.rule}] {self.message}"


class LintReport(BaseModel):
    issues: list[LintIssue] = Field(default_factory=list)
    checked: int = 0  # documents linted

    def add(self, issue: LintIssue) -> None:
        self.issues.append(issue)

    def extend(self, other: LintReport) -> None:
        self.issues.extend(other.issues)
        self.checked += other.checked

    def _with(self, severity: Severity) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == severity]

    @property
    def errors(self) -> list[LintIssue]:
        return self._with(Severity.ERROR)

    @property
    def warnings(self) -> list[LintIssue]:
        return self._with(Severity.WARNING)

    @property
    def infos(self) -> list[LintIssue]:
        return self._with(Severity.INFO)

    def ok(self, strict: bool = False) -> bool:
        """No errors (and, when strict, no warnings either)."""
        if self.errors:
            return False
        return not (strict and self.warnings)

    def by_agent(self) -> dict[str, list[LintIssue]]:
        grouped: dict[str, list[LintIssue]] = defaultdict(list)
        for issue in self.issues:
            grouped[issue.agent].append(issue)
        return dict(grouped)

    def for_rule(self, rule: str) -> list[LintIssue]:
        return [i for i in self.issues if i.rule == rule]

    def sort(self) -> None:
        self.issues.sort(key=lambda i: (i.path, i.line, i.rule))

    def summary(self) -> dict[str, int]:
        return {
            "checked": self.checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "infos": len(self.infos),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary(),
            "issues": [i.model_dump(mode="json") for i in self.issues],
        }
