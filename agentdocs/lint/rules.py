"""Built-in lint rules for agent definition documents.

Document rules look at one file at a time. Catalog rules need the whole
set of agents (mentions, duplicates) and run once per lint pass.
"""

from __future__ import annotations

import fnmatch
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from agentdocs.document.parser import AgentDocument
from agentdocs.document.schema import KNOWN_PERMISSIONS
from agentdocs.lint.report import LintIssue
from agentdocs.permissions.engine import PermissionEngine, normalize_subject
from agentdocs.types import PermissionAction, Severity

if TYPE_CHECKING:
    from agentdocs.catalog import AgentCatalog

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")
_THEME_COLORS = {"primary", "secondary", "accent", "success", "warning", "error", "info"}
_GLOB_CHARS = set("*?[")


@dataclass
class LintContext:
    engine: PermissionEngine = field(default_factory=PermissionEngine)
    known_tools: set[str] = field(default_factory=set)
    max_description_length: int = 1024
    catalog: AgentCatalog | None = None


class Rule(ABC):
    id: str = ""
    severity: Severity = Severity.WARNING
    description: str = ""

    def issue(
        self,
        message: str,
        doc: AgentDocument | None = None,
        line: int = 0,
        path: str = "",
    ) -> LintIssue:
        """Build an issue; `line` is body-relative when a document is given."""
        agent = ""
        if doc is not None:
            loc = doc.location(line)
            path, line, agent = loc.path, loc.line, doc.name
        return LintIssue(
            rule=self.id,
            severity=self.severity,
            message=message,
            agent=agent,
            path=path,
            line=line,
        )


class DocumentRule(Rule):
    @abstractmethod
    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        ...


class CatalogRule(Rule):
    @abstractmethod
    def check_catalog(self, catalog: AgentCatalog, ctx: LintContext) -> Iterator[LintIssue]:
        ...


# ── Frontmatter ──────────────────────────────────────────────────────────────


class DescriptionRequired(DocumentRule):
    id = "description-required"
    severity = Severity.ERROR
    description = "Frontmatter must have a non-empty description."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        if not doc.description:
            yield self.issue("Missing or empty 'description'", doc)


class DescriptionLength(DocumentRule):
    id = "description-length"
    description = "Description should stay short enough for agent pickers."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        size = len(doc.description)
        if size > ctx.max_description_length:
            yield self.issue(
                f"Description is {size} characters (limit {ctx.max_description_length})",
                doc,
            )


class ModelFormat(DocumentRule):
    id = "model-format"
    description = "Model should be written as provider/model-id."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        model = doc.config.model
        if model is not None and "/" not in model:
            yield self.issue(f"Model '{model}' has no provider prefix (provider/model-id)", doc)


class TemperatureRange(DocumentRule):
    id = "temperature-range"
    description = "Temperatures above 1.0 are rarely what an agent wants."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        temperature = doc.config.temperature
        if temperature is not None and temperature > 1.0:
            yield self.issue(f"Temperature {temperature} is above 1.0", doc)


class UnknownTool(DocumentRule):
    id = "unknown-tool"
    severity = Severity.INFO
    description = "Tool flags should name a known tool or use a glob."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        for tool in doc.config.tools:
            if tool not in ctx.known_tools and not (_GLOB_CHARS & set(tool)):
                yield self.issue(f"Tool '{tool}' is not a known built-in tool", doc)


class UnknownPermission(DocumentRule):
    id = "unknown-permission"
    description = "Permission categories should be ones the host understands."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        for category in doc.config.permission:
            if category != "*" and category not in KNOWN_PERMISSIONS:
                yield self.issue(f"Unknown permission category '{category}'", doc)


class UnreachablePattern(DocumentRule):
    id = "unreachable-pattern"
    description = "A later pattern that matches an earlier one makes it dead (last match wins)."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        for category, rule in doc.config.permission.items():
            if isinstance(rule, PermissionAction):
                continue
            patterns = [(p, normalize_subject(p)) for p in rule]
            for i, (earlier, earlier_norm) in enumerate(patterns):
                for later, later_norm in patterns[i + 1:]:
                    if earlier_norm == later_norm or fnmatch.fnmatchcase(earlier_norm, later_norm):
                        yield self.issue(
                            f"{category}: pattern '{earlier}' is shadowed by later '{later}'",
                            doc,
                        )
                        break


class PermissionWithoutTool(DocumentRule):
    id = "permission-without-tool"
    severity = Severity.INFO
    description = "Permission rules for a disabled tool never apply."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        for category in doc.config.permission:
            if ctx.engine.gated_off(doc, category):
                yield self.issue(
                    f"Permission '{category}' is configured but its tool is disabled", doc,
                )


class NameMismatch(DocumentRule):
    id = "name-mismatch"
    severity = Severity.INFO
    description = "A frontmatter name different from the file name is confusing."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        if doc.config.name and doc.path is not None and doc.config.name != doc.path.stem:
            yield self.issue(
                f"Frontmatter name '{doc.config.name}' differs from file name '{doc.path.stem}'",
                doc,
            )


class ColorFormat(DocumentRule):
    id = "color-format"
    description = "Color should be #rrggbb or a theme color."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        color = doc.config.color
        if color and not (_HEX_COLOR.match(color) or color in _THEME_COLORS):
            yield self.issue(f"Color '{color}' is not #rrggbb or a theme color", doc)


# ── Body ─────────────────────────────────────────────────────────────────────


class EmptyBody(DocumentRule):
    id = "empty-body"
    severity = Severity.ERROR
    description = "The document must carry a system prompt."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        if not doc.prompt_text:
            yield self.issue("No system prompt: body is empty and no 'prompt' is set", doc)


class NoHeadings(DocumentRule):
    id = "no-headings"
    severity = Severity.INFO
    description = "Long prompts read better split into sections."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        if doc.body.strip() and not doc.outline.sections:
            yield self.issue("Body has no section headings", doc)


class UnterminatedFence(DocumentRule):
    id = "unterminated-fence"
    severity = Severity.ERROR
    description = "Every fenced code block must be closed."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        for block in doc.outline.code_blocks:
            if not block.terminated:
                yield self.issue("Code fence is never closed", doc, line=block.line)


class CommandDenied(DocumentRule):
    id = "command-denied"
    description = "Commands the prompt tells the agent to run should not be denied to it."

    def check(self, doc: AgentDocument, ctx: LintContext) -> Iterator[LintIssue]:
        for entry in doc.outline.commands:
            decision = ctx.engine.decide(doc, "bash", entry.command)
            if decision.denied:
                why = f"pattern '{decision.pattern}'" if decision.pattern else decision.reason
                yield self.issue(
                    f"Documented command '{entry.command}' is denied by bash permission ({why})",
                    doc,
                    line=entry.line,
                )


# ── Catalog ──────────────────────────────────────────────────────────────────


class UnresolvedMention(CatalogRule):
    id = "unresolved-mention"
    description = "@mentions should name an agent in the catalog."

    def check_catalog(self, catalog: AgentCatalog, ctx: LintContext) -> Iterator[LintIssue]:
        for doc in catalog:
            reported: set[str] = set()
            for mention in doc.outline.mentions:
                if mention.name in catalog or mention.name in reported:
                    continue
                reported.add(mention.name)
                yield self.issue(
                    f"Mention '@{mention.name}' does not match any agent",
                    doc,
                    line=mention.line,
                )


class DuplicateName(CatalogRule):
    id = "duplicate-name"
    severity = Severity.ERROR
    description = "Agent names must be unique."

    def check_catalog(self, catalog: AgentCatalog, ctx: LintContext) -> Iterator[LintIssue]:
        for failure in catalog.failures:
            if failure.kind == "duplicate":
                yield self.issue(failure.error, path=failure.path)


class NoPrimaryAgent(CatalogRule):
    id = "no-primary-agent"
    severity = Severity.INFO
    description = "A catalog of only subagents has no entry point."

    def check_catalog(self, catalog: AgentCatalog, ctx: LintContext) -> Iterator[LintIssue]:
        if len(catalog) and not catalog.primaries():
            root = str(catalog.root) if catalog.root else ""
            yield self.issue("No agent can run as a primary agent", path=root)


BUILTIN_RULES: list[type[Rule]] = [
    DescriptionRequired,
    DescriptionLength,
    ModelFormat,
    TemperatureRange,
    UnknownTool,
    UnknownPermission,
    UnreachablePattern,
    PermissionWithoutTool,
    NameMismatch,
    ColorFormat,
    EmptyBody,
    NoHeadings,
    UnterminatedFence,
    CommandDenied,
    UnresolvedMention,
    DuplicateName,
    NoPrimaryAgent,
]
