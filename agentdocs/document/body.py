"""Markdown body analysis — sections, code blocks, command tables, mentions.

The body of an agent document is free-form prose, but authors lean on a
handful of recurring structures: headings to split the persona into
parts, pipe tables that map shell commands to their purpose, fenced code
examples, and `@name` references to other agents. This module pulls
those structures out so the linter and the CLI can reason about them.

All scanners are line-oriented and skip the inside of fenced code blocks.
Line numbers are 1-based and relative to the body.
"""

from __future__ import annotations

import re
from typing import Iterator

from pydantic import BaseModel, Field

_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})\s*([^`\s]*)")
_HEADING = re.compile(r"^ {0,3}(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_TABLE_DELIMITER = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")
_INLINE_CODE = re.compile(r"(`+)(.+?)\1")
_MENTION = re.compile(r"(?<![\w@./\\])@([A-Za-z][\w-]*)")

_COMMAND_HEADERS = ("command", "cmd", "invocation", "usage", "tool call")
_PURPOSE_HEADERS = ("purpose", "description", "use", "when", "what", "meaning", "notes", "effect")


class Section(BaseModel):
    level: int
    title: str
    line: int


class CodeBlock(BaseModel):
    language: str = ""
    content: str = ""
    line: int
    terminated: bool = True


class CommandEntry(BaseModel):
    """One row of a command reference table."""

    command: str
    purpose: str = ""
    section: str = ""
    line: int = 0


class Mention(BaseModel):
    name: str
    line: int


class BodyOutline(BaseModel):
    sections: list[Section] = Field(default_factory=list)
    code_blocks: list[CodeBlock] = Field(default_factory=list)
    commands: list[CommandEntry] = Field(default_factory=list)
    mentions: list[Mention] = Field(default_factory=list)

    @property
    def mentioned_names(self) -> list[str]:
        """Distinct mentioned agent names, in order of first appearance."""
        seen: dict[str, None] = {}
        for m in self.mentions:
            seen.setdefault(m.name, None)
        return list(seen)


# ── Line scanning ────────────────────────────────────────────────────────────


def _closes(line: str, fence: str) -> bool:
    """A closing fence uses the same character, at least as many, and no info string."""
    match = _FENCE.match(line)
    if match is None:
        return False
    marker = match.group(1)
    return (
        marker[0] == fence[0]
        and len(marker) >= len(fence)
        and not line.strip()[len(marker):].strip()
    )


def _prose_lines(body: str) -> Iterator[tuple[int, str]]:
    """Yield (line_no, text) for every line outside fenced code blocks."""
    fence: str | None = None
    for number, line in enumerate(body.splitlines(), start=1):
        if fence is None:
            match = _FENCE.match(line)
            if match:
                fence = match.group(1)
                continue
            yield number, line
        elif _closes(line, fence):
            fence = None


def extract_code_blocks(body: str) -> list[CodeBlock]:
    blocks: list[CodeBlock] = []
    fence: str | None = None
    current: CodeBlock | None = None
    content: list[str] = []

    for number, line in enumerate(body.splitlines(), start=1):
        if fence is None:
            match = _FENCE.match(line)
            if match:
                fence = match.group(1)
                current = CodeBlock(language=match.group(2), line=number)
                content = []
            continue
        if _closes(line, fence):
            current.content = "\n".join(content)
            blocks.append(current)
            fence, current = None, None
        else:
            content.append(line)

    if current is not None:
        current.content = "\n".join(content)
        current.terminated = False
        blocks.append(current)
    return blocks


def extract_sections(body: str) -> list[Section]:
    sections = []
    for number, line in _prose_lines(body):
        match = _HEADING.match(line)
        if match:
            sections.append(Section(
                level=len(match.group(1)),
                title=match.group(2),
                line=number,
            ))
    return sections


# ── Command tables ───────────────────────────────────────────────────────────


def _split_row(line: str) -> list[str]:
    """Split a pipe-table row into stripped cells, honouring `\\|` escapes."""
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not text.endswith("\\|"):
        text = text[:-1]
    cells = re.split(r"(?<!\\)\|", text)
    return [c.strip().replace("\\|", "|") for c in cells]


def _header_key(cell: str) -> str:
    return cell.strip("*_` ").lower()


def _find_column(headers: list[str], candidates: tuple[str, ...]) -> int | None:
    for i, header in enumerate(headers):
        key = _header_key(header)
        if any(key == c or key.startswith(c) for c in candidates):
            return i
    return None


def _strip_code(cell: str) -> str:
    cell = cell.strip()
    match = re.fullmatch(r"(`+)\s?(.*?)\s?\1", cell)
    if match:
        return match.group(2)
    return cell


def extract_command_tables(body: str) -> list[CommandEntry]:
    entries: list[CommandEntry] = []
    lines = list(_prose_lines(body))
    section = ""
    i = 0

    while i < len(lines):
        number, line = lines[i]
        heading = _HEADING.match(line)
        if heading:
            section = heading.group(2)
            i += 1
            continue

        is_table_start = (
            "|" in line
            and i + 1 < len(lines)
            and lines[i + 1][0] == number + 1
            and _TABLE_DELIMITER.match(lines[i + 1][1])
        )
        if not is_table_start:
            i += 1
            continue

        headers = _split_row(line)
        cmd_col = _find_column(headers, _COMMAND_HEADERS)
        purpose_col = _find_column(headers, _PURPOSE_HEADERS)
        i += 2

        # Consume rows until the table ends
        while i < len(lines) and "|" in lines[i][1] and lines[i][1].strip():
            row_number, row = lines[i]
            if cmd_col is not None:
                cells = _split_row(row)
                command = _strip_code(cells[cmd_col]) if cmd_col < len(cells) else ""
                purpose = ""
                if purpose_col is not None and purpose_col < len(cells):
                    purpose = cells[purpose_col]
                if command:
                    entries.append(CommandEntry(
                        command=command,
                        purpose=purpose,
                        section=section,
                        line=row_number,
                    ))
            i += 1

    return entries


# ── Mentions ─────────────────────────────────────────────────────────────────


def extract_mentions(body: str) -> list[Mention]:
    mentions = []
    for number, line in _prose_lines(body):
        # Blank out inline code so `@decorator` examples are not mentions
        scrubbed = _INLINE_CODE.sub(lambda m: " " * len(m.group(0)), line)
        for match in _MENTION.finditer(scrubbed):
            name = match.group(1).rstrip("-_")
            if name:
                mentions.append(Mention(name=name, line=number))
    return mentions


def outline(body: str) -> BodyOutline:
    """Run every scanner over the body."""
    return BodyOutline(
        sections=extract_sections(body),
        code_blocks=extract_code_blocks(body),
        commands=extract_command_tables(body),
        mentions=extract_mentions(body),
    )
