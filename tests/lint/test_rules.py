"""Tests for individual lint rules."""

import pytest

from agentdocs.lint.linter import Linter
from agentdocs.types import Severity
from tests.conftest import make_doc


def _rules(text: str, **linter_kwargs) -> list[str]:
    report = Linter(**linter_kwargs).lint_document(make_doc(text))
    return [i.rule for i in report.issues]


def test_clean_document(reviewer_doc):
    report = Linter().lint_document(reviewer_doc)
    # Only the documented `git push` conflicts with the agent's own rules
    assert [i.rule for i in report.issues] == ["command-denied"]


def test_description_required():
    report = Linter().lint_document(make_doc("---\nmode: primary\n---\n# Hi\nbody"))
    issue = report.for_rule("description-required")[0]
    assert issue.severity == Severity.ERROR
    assert not report.ok()


def test_description_length():
    text = f"---\ndescription: {'x' * 50}\n---\n# Hi\nbody"
    assert "description-length" in _rules(text, max_description_length=20)
    assert "description-length" not in _rules(text)


def test_model_format():
    assert "model-format" in _rules("---\ndescription: d\nmodel: gpt-4\n---\n# Hi\nbody")
    assert "model-format" not in _rules("---\ndescription: d\nmodel: openai/gpt-4\n---\n# Hi\nbody")


def test_temperature_range():
    assert "temperature-range" in _rules("---\ndescription: d\ntemperature: 1.5\n---\n# Hi\nbody")


def test_unknown_tool():
    rules = _rules('---\ndescription: d\ntools:\n  frobnicate: false\n  "mcp_*": false\n---\n# Hi\nb')
    assert rules.count("unknown-tool") == 1


def test_unknown_tool_respects_known_tools():
    text = "---\ndescription: d\ntools:\n  frobnicate: false\n---\n# Hi\nb"
    assert "unknown-tool" not in _rules(text, known_tools=["frobnicate"])


def test_unknown_permission():
    assert "unknown-permission" in _rules("---\ndescription: d\npermission:\n  teleport: deny\n---\n# Hi\nb")


def test_unreachable_pattern():
    text = '---\ndescription: d\npermission:\n  bash:\n    "git status*": allow\n    "git *": deny\n---\n# Hi\nb'
    report = Linter().lint_document(make_doc(text))
    issues = report.for_rule("unreachable-pattern")
    assert len(issues) == 1
    assert "git status*" in issues[0].message


def test_unreachable_pattern_ignores_spacing():
    text = '---\ndescription: d\npermission:\n  bash:\n    "git  push*": allow\n    "git push*": deny\n---\n# Hi\nb'
    report = Linter().lint_document(make_doc(text))
    issues = report.for_rule("unreachable-pattern")
    assert len(issues) == 1
    assert "git  push*" in issues[0].message


def test_wildcard_first_is_fine():
    text = '---\ndescription: d\npermission:\n  bash:\n    "*": deny\n    "git *": allow\n---\n# Hi\nb'
    assert "unreachable-pattern" not in _rules(text)


def test_permission_without_tool():
    text = "---\ndescription: d\ntools:\n  bash: false\npermission:\n  bash: allow\n---\n# Hi\nb"
    assert "permission-without-tool" in _rules(text)


def test_name_mismatch(tmp_path):
    from agentdocs.document.parser import load_document

    path = tmp_path / "scout.md"
    path.write_text("---\nname: ranger\ndescription: d\n---\n# Hi\nb", encoding="utf-8")
    report = Linter().lint_document(load_document(path))
    assert report.for_rule("name-mismatch")


@pytest.mark.parametrize("color,bad", [("#ff00aa", False), ("accent", False), ("red", True), ("#fff", True)])
def test_color_format(color, bad):
    text = f"---\ndescription: d\ncolor: '{color}'\n---\n# Hi\nb"
    assert ("color-format" in _rules(text)) is bad


def test_empty_body():
    assert "empty-body" in _rules("---\ndescription: d\n---\n\n   \n")
    assert "empty-body" not in _rules("---\ndescription: d\nprompt: Be helpful.\n---\n")


def test_no_headings():
    assert "no-headings" in _rules("---\ndescription: d\n---\nJust prose.")


def test_unterminated_fence_points_at_file_line():
    report = Linter().lint_document(make_doc("---\ndescription: d\n---\n# Hi\n```\ncode\n"))
    issue = report.for_rule("unterminated-fence")[0]
    assert issue.line == 5


def test_command_denied_line(reviewer_doc):
    issue = Linter().lint_document(reviewer_doc).for_rule("command-denied")[0]
    assert "git push origin main" in issue.message
    assert issue.line == 28
    assert issue.agent == "reviewer"


def test_command_denied_when_bash_disabled():
    text = (
        "---\ndescription: d\ntools:\n  bash: false\n---\n# Hi\n"
        "| Command | Purpose |\n|---|---|\n| `ls` | list |\n"
    )
    assert "command-denied" in _rules(text)


def test_disabled_rules_are_skipped():
    text = "---\nmode: primary\n---\n# Hi\nbody"
    assert "description-required" not in _rules(text, disabled=["description-required"])
