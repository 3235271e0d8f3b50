"""Agent definition documents — schema, parsing, body analysis, rendering."""

from agentdocs.document.schema import AgentConfig
from agentdocs.document.parser import (
    AgentDocument,
    load_document,
    parse_document,
    split_frontmatter,
)
from agentdocs.document.render import render_document, write_document

__all__ = [
    "AgentConfig",
    "AgentDocument",
    "load_document",
    "parse_document",
    "split_frontmatter",
    "render_document",
    "write_document",
]
