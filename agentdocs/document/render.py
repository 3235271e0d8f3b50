"""Write agent documents back out as frontmatter + Markdown."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from agentdocs.document.parser import AgentDocument

_logger = logging.getLogger(__name__)


def render_frontmatter(data: dict[str, Any]) -> str:
    """Dump a frontmatter mapping as block-style YAML, keeping key order."""
    if not data:
        return ""
    return yaml.safe_dump(
        data,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=10_000,
    )


def render_document(doc: AgentDocument) -> str:
    """Render a document so that parsing the result gives back the same config and body."""
    data = doc.config.to_frontmatter()
    return f"---\n{render_frontmatter(data)}---\n{doc.body}"


def write_document(doc: AgentDocument, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_document(doc), encoding="utf-8")
    _logger.debug("Wrote agent document %s", path)
    return path
