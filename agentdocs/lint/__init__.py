from agentdocs.lint.report import LintIssue, LintReport
from agentdocs.lint.registry import RuleRegistry, default_registry
from agentdocs.lint.linter import Linter

__all__ = ["LintIssue", "LintReport", "RuleRegistry", "default_registry", "Linter"]
