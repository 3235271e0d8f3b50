"""Tests for catalog-wide linting and the rule registry."""

from agentdocs.catalog import AgentCatalog
from agentdocs.lint import Linter, LintIssue, LintReport, RuleRegistry, default_registry
from agentdocs.lint.rules import DescriptionRequired
from agentdocs.types import Severity
from tests.conftest import BUILD, SCOUT, make_doc, write_agent


def test_lint_catalog(agents_dir):
    report = Linter().lint_catalog(AgentCatalog.load(agents_dir))

    assert report.checked == 3
    assert report.errors == []
    assert sorted(i.rule for i in report.warnings) == ["command-denied", "unresolved-mention"]
    assert report.ok()
    assert not report.ok(strict=True)


def test_unresolved_mention_reported_once(agents_dir):
    report = Linter().lint_catalog(AgentCatalog.load(agents_dir))
    issues = report.for_rule("unresolved-mention")
    assert len(issues) == 1
    assert issues[0].agent == "scout"
    assert "@ghost" in issues[0].message


def test_parse_failures_become_errors(agents_dir):
    write_agent(agents_dir, "broken", "no frontmatter here")
    report = Linter().lint_catalog(AgentCatalog.load(agents_dir))
    errors = report.for_rule("parse-error")
    assert len(errors) == 1
    assert errors[0].path.endswith("broken.md")
    assert not report.ok()


def test_duplicate_name(tmp_path):
    write_agent(tmp_path, "a", "---\nname: same\ndescription: d\n---\n# A\nbody")
    write_agent(tmp_path, "b", "---\nname: same\ndescription: d\n---\n# B\nbody")
    report = Linter().lint_catalog(AgentCatalog.load(tmp_path))
    assert len(report.for_rule("duplicate-name")) == 1
    assert report.for_rule("parse-error") == []


def test_no_primary_agent(tmp_path):
    write_agent(tmp_path, "scout", SCOUT)
    report = Linter().lint_catalog(AgentCatalog.load(tmp_path))
    assert report.for_rule("no-primary-agent")


def test_primary_present(tmp_path):
    write_agent(tmp_path, "build", BUILD)
    report = Linter().lint_catalog(AgentCatalog.load(tmp_path))
    assert report.for_rule("no-primary-agent") == []


def test_lint_is_read_only(agents_dir):
    before = {p.name: p.read_text() for p in agents_dir.iterdir()}
    Linter().lint_catalog(AgentCatalog.load(agents_dir))
    after = {p.name: p.read_text() for p in agents_dir.iterdir()}
    assert before == after


def test_report_summary_and_grouping():
    report = LintReport(checked=2)
    report.add(LintIssue(rule="r1", severity=Severity.ERROR, message="m", agent="a", path="a.md", line=3))
    report.add(LintIssue(rule="r2", severity=Severity.INFO, message="m", agent="b", path="b.md"))

    assert report.summary() == {"checked": 2, "errors": 1, "warnings": 0, "infos": 1}
    assert set(report.by_agent()) == {"a", "b"}
    assert str(report.issues[0]) == "a.md:3: error [r1] m"
    assert report.to_dict()["issues"][1]["severity"] == "info"


def test_registry():
    registry = default_registry()
    assert "description-required" in registry
    assert len(registry.catalog_rules()) == 3

    registry.unregister("description-required")
    assert registry.get("description-required") is None

    custom = RuleRegistry()
    custom.register(DescriptionRequired())
    assert [r.id for r in custom.list_rules()] == ["description-required"]
    assert custom.catalog_rules() == []


def test_empty_registry_runs_no_rules():
    report = Linter(registry=RuleRegistry()).lint_document(make_doc("---\n---\n", "x"))
    assert report.issues == []


def test_custom_registry_runs_only_its_rules():
    custom = RuleRegistry()
    custom.register(DescriptionRequired())
    report = Linter(registry=custom).lint_document(make_doc("---\n---\n", "x"))
    assert [i.rule for i in report.issues] == ["description-required"]


def test_zero_description_limit_is_honoured():
    doc = make_doc("---\ndescription: d\n---\n# Hi\nbody")
    report = Linter(max_description_length=0).lint_document(doc)
    assert report.for_rule("description-length")
