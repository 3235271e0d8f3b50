"""Rule Registry — the set of lint rules a Linter runs."""

from __future__ import annotations

from agentdocs.lint.rules import BUILTIN_RULES, CatalogRule, DocumentRule, Rule


class RuleRegistry:
    """Central registry of lint rules, keyed by rule id."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def unregister(self, rule_id: str) -> None:
        self._rules.pop(rule_id, None)

    def get(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def list_rules(self) -> list[Rule]:
        return list(self._rules.values())

    def document_rules(self) -> list[DocumentRule]:
        return [r for r in self._rules.values() if isinstance(r, DocumentRule)]

    def catalog_rules(self) -> list[CatalogRule]:
        return [r for r in self._rules.values() if isinstance(r, CatalogRule)]

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)


def default_registry() -> RuleRegistry:
    """A registry holding every built-in rule."""
    registry = RuleRegistry()
    for rule_cls in BUILTIN_RULES:
        registry.register(rule_cls())
    return registry
