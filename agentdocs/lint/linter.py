"""Linter — runs registered rules over documents and catalogs."""

from __future__ import annotations

import logging
from typing import Iterable

from agentdocs.catalog import AgentCatalog
from agentdocs.config import settings
from agentdocs.document.parser import AgentDocument
from agentdocs.lint.registry import RuleRegistry, default_registry
from agentdocs.lint.report import LintIssue, LintReport
from agentdocs.lint.rules import LintContext
from agentdocs.permissions.engine import PermissionEngine
from agentdocs.types import Severity

_logger = logging.getLogger(__name__)


class Linter:
    """Static checks for agent definition documents. Never modifies them."""

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        disabled: Iterable[str] = (),
        engine: PermissionEngine | None = None,
        known_tools: Iterable[str] | None = None,
        max_description_length: int | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.disabled = set(disabled)
        self._engine = engine if engine is not None else PermissionEngine()
        self._known_tools = set(settings.known_tools if known_tools is None else known_tools)
        self._max_description_length = (
            settings.max_description_length
            if max_description_length is None
            else max_description_length
        )

    def _context(self, catalog: AgentCatalog | None = None) -> LintContext:
        return LintContext(
            engine=self._engine,
            known_tools=self._known_tools,
            max_description_length=self._max_description_length,
            catalog=catalog,
        )

    def _enabled(self, rule_id: str) -> bool:
        return rule_id not in self.disabled

    def lint_document(
        self, doc: AgentDocument, catalog: AgentCatalog | None = None,
    ) -> LintReport:
        ctx = self._context(catalog)
        report = LintReport(checked=1)
        for rule in self.registry.document_rules():
            if not self._enabled(rule.id):
                continue
            _logger.debug("Running %s on %s", rule.id, doc.name)
            for issue in rule.check(doc, ctx):
                report.add(issue)
        report.sort()
        return report

    def lint_catalog(self, catalog: AgentCatalog) -> LintReport:
        ctx = self._context(catalog)
        report = LintReport()

        for failure in catalog.failures:
            if failure.kind == "parse":
                report.add(LintIssue(
                    rule="parse-error",
                    severity=Severity.ERROR,
                    message=failure.error,
                    path=failure.path,
                ))

        for doc in catalog:
            report.extend(self.lint_document(doc, catalog))

        for rule in self.registry.catalog_rules():
            if not self._enabled(rule.id):
                continue
            _logger.debug("Running catalog rule %s", rule.id)
            for issue in rule.check_catalog(catalog, ctx):
                report.add(issue)

        report.sort()
        return report
