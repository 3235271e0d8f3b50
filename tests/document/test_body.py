"""Tests for Markdown body analysis."""

import textwrap

from agentdocs.document.body import (
    extract_code_blocks,
    extract_command_tables,
    extract_mentions,
    extract_sections,
    outline,
)
from tests.conftest import make_doc, REVIEWER


def test_reviewer_outline():
    doc = make_doc(REVIEWER, name="reviewer")
    out = doc.outline

    assert [(s.level, s.title, s.line) for s in out.sections] == [
        (1, "The Oracle", 2),
        (2, "Commands", 6),
        (2, "Example", 14),
    ]
    assert [c.command for c in out.commands] == [
        "git diff", "git log --oneline", "git push origin main",
    ]
    assert out.commands[0].purpose == "See pending changes"
    assert out.commands[0].section == "Commands"
    assert out.commands[0].line == 10
    assert out.mentioned_names == ["scout"]
    assert len(out.code_blocks) == 1
    assert out.code_blocks[0].language == "python"
    assert out.code_blocks[0].terminated


def test_headings_inside_fences_are_ignored():
    body = "# Real\n```\n# not a heading\n```\n## Also real\n"
    assert [s.title for s in extract_sections(body)] == ["Real", "Also real"]


def test_tilde_fences():
    body = "~~~bash\nls\n~~~\n# After\n"
    blocks = extract_code_blocks(body)
    assert blocks[0].language == "bash"
    assert blocks[0].content == "ls"
    assert [s.title for s in extract_sections(body)] == ["After"]


def test_closing_fence_needs_same_marker():
    body = "````\n```\nstill code\n````\n"
    blocks = extract_code_blocks(body)
    assert len(blocks) == 1
    assert blocks[0].content == "```\nstill code"


def test_unterminated_fence():
    blocks = extract_code_blocks("text\n```js\nconsole.log(1)\n")
    assert len(blocks) == 1
    assert not blocks[0].terminated
    assert blocks[0].line == 2


def test_closing_hashes_are_trimmed():
    assert extract_sections("## Title ##\n")[0].title == "Title"


def test_command_table_with_other_headers():
    body = textwrap.dedent("""\
        | Cmd | When to use | Notes |
        | :-- | :---------- | ----- |
        | `make test` | Before commit | fast |
        """)
    entries = extract_command_tables(body)
    assert len(entries) == 1
    assert entries[0].command == "make test"
    assert entries[0].purpose == "Before commit"


def test_command_table_escaped_pipe():
    body = "| Command | Purpose |\n|---|---|\n| `ps aux \\| grep x` | find x |\n"
    entries = extract_command_tables(body)
    assert entries[0].command == "ps aux | grep x"


def test_table_without_command_column_is_skipped():
    body = "| Name | Role |\n|---|---|\n| scout | explorer |\n"
    assert extract_command_tables(body) == []


def test_table_stops_at_blank_line():
    body = "| Command | Purpose |\n|---|---|\n| `ls` | list |\n\n| not | a row |\n"
    assert [e.command for e in extract_command_tables(body)] == ["ls"]


def test_tables_inside_fences_are_ignored():
    body = "```\n| Command | Purpose |\n|---|---|\n| `rm -rf /` | no |\n```\n"
    assert extract_command_tables(body) == []


def test_mentions():
    body = "Ask @scout, then @champion-2.\nMail me@example.com\nUse `@inline` code.\n"
    mentions = extract_mentions(body)
    assert [(m.name, m.line) for m in mentions] == [("scout", 1), ("champion-2", 1)]


def test_mentions_in_fences_are_ignored():
    assert extract_mentions("```\n@decorator\n```\n") == []


def test_outline_of_empty_body():
    out = outline("")
    assert out.sections == []
    assert out.commands == []
    assert out.mentions == []
    assert out.code_blocks == []
