"""Host configuration export — agent documents as one JSON config.

Produces the `agent` section of an opencode.json-style file, so a set of
Markdown agents can be shipped as a single config:

    {
      "$schema": "https://opencode.ai/config.json",
      "agent": {
        "review": {"description": "...", "mode": "subagent", "prompt": "..."}
      }
    }
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import orjson

from agentdocs.catalog import AgentCatalog
from agentdocs.config import settings
from agentdocs.document.parser import AgentDocument
from agentdocs.exceptions import ExportError

_logger = logging.getLogger(__name__)


def agent_entry(doc: AgentDocument, include_prompt: bool = True) -> dict[str, Any]:
    entry = doc.config.to_frontmatter()
    entry.pop("name", None)
    if not include_prompt:
        entry.pop("prompt", None)
    elif doc.prompt_text:
        entry["prompt"] = doc.prompt_text
    return entry


def to_host_config(
    catalog: AgentCatalog,
    include_prompt: bool = True,
    include_disabled: bool = True,
) -> dict[str, Any]:
    agents: dict[str, Any] = {}
    for doc in catalog:
        if doc.config.disable and not include_disabled:
            continue
        agents[doc.name] = agent_entry(doc, include_prompt)
    return {"$schema": settings.schema_url, "agent": agents}


def dump_json(data: dict[str, Any]) -> bytes:
    # Key order is meaningful (last matching permission pattern wins), so no sorting
    return orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


def write_host_config(
    catalog: AgentCatalog,
    path: str | Path,
    include_prompt: bool = True,
    include_disabled: bool = True,
) -> Path:
    path = Path(path)
    data = to_host_config(catalog, include_prompt, include_disabled)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(dump_json(data))
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e
    _logger.debug("Exported %d agents to %s", len(data["agent"]), path)
    return path
