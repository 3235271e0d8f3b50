"""Agent Catalog — every agent document in a directory, indexed by name.

Loading is total: each matching file ends up either as a document or as
a recorded LoadFailure, so one broken file never hides the rest.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel

from agentdocs.config import settings
from agentdocs.document.parser import AgentDocument, load_document
from agentdocs.exceptions import AgentdocsError, AgentNotFoundError, DuplicateAgentError
from agentdocs.types import AgentMode

_logger = logging.getLogger(__name__)


class LoadFailure(BaseModel):
    path: str
    error: str
    kind: str = "parse"  # "parse" or "duplicate"


class AgentCatalog:
    """A named collection of agent documents.

    Mentions between documents (`@scout`) are informal prose, so the
    catalog reports them but never requires them to resolve.
    """

    def __init__(self, documents: list[AgentDocument] | None = None) -> None:
        self._agents: dict[str, AgentDocument] = {}
        self.failures: list[LoadFailure] = []
        self.root: Path | None = None
        for doc in documents or []:
            self.add(doc)

    @classmethod
    def load(
        cls,
        directory: str | Path | None = None,
        pattern: str | None = None,
        recursive: bool | None = None,
    ) -> AgentCatalog:
        """Load every document under a directory (sorted by path)."""
        root = Path(directory) if directory is not None else settings.agents_dir
        pattern = pattern or settings.file_glob
        recursive = settings.recursive if recursive is None else recursive

        catalog = cls()
        catalog.root = root
        if not root.is_dir():
            _logger.warning("Agents directory %s does not exist", root)
            return catalog

        files = root.rglob(pattern) if recursive else root.glob(pattern)
        for path in sorted(p for p in files if p.is_file()):
            catalog.load_file(path)

        _logger.debug(
            "Loaded %d agents from %s (%d failures)",
            len(catalog), root, len(catalog.failures),
        )
        return catalog

    @classmethod
    def from_paths(cls, paths: list[str | Path]) -> AgentCatalog:
        """Build a catalog from explicit files and/or directories."""
        catalog = cls()
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                sub = cls.load(path)
                for doc in sub:
                    catalog._add_or_fail(doc)
                catalog.failures.extend(sub.failures)
            else:
                catalog.load_file(path)
        return catalog

    def load_file(self, path: Path) -> AgentDocument | None:
        try:
            doc = load_document(path)
        except AgentdocsError as e:
            _logger.warning("Skipping %s: %s", path, e)
            self.failures.append(LoadFailure(path=str(path), error=str(e)))
            return None
        return self._add_or_fail(doc)

    def _add_or_fail(self, doc: AgentDocument) -> AgentDocument | None:
        try:
            self.add(doc)
        except DuplicateAgentError as e:
            _logger.warning("Skipping %s: %s", doc.path, e)
            self.failures.append(LoadFailure(
                path=str(doc.path or doc.name), error=str(e), kind="duplicate",
            ))
            return None
        return doc

    # ── Collection API ──

    def add(self, doc: AgentDocument) -> None:
        if doc.name in self._agents:
            existing = self._agents[doc.name]
            raise DuplicateAgentError(
                f"Agent '{doc.name}' already defined"
                + (f" by {existing.path}" if existing.path else "")
            )
        self._agents[doc.name] = doc

    def remove(self, name: str) -> None:
        self._agents.pop(name, None)

    def get(self, name: str) -> AgentDocument:
        doc = self._agents.get(name.lstrip("@"))
        if doc is None:
            raise AgentNotFoundError(f"Agent '{name}' not found")
        return doc

    def names(self) -> list[str]:
        return sorted(self._agents)

    def filter(self, mode: AgentMode | str | None = None) -> list[AgentDocument]:
        docs = [self._agents[n] for n in self.names()]
        if mode is not None:
            docs = [d for d in docs if d.mode == AgentMode(mode)]
        return docs

    def primaries(self) -> list[AgentDocument]:
        return [d for d in self if d.is_primary]

    def subagents(self) -> list[AgentDocument]:
        return [d for d in self if d.is_subagent]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lstrip("@") in self._agents

    def __iter__(self) -> Iterator[AgentDocument]:
        return iter(self.filter())

    def __len__(self) -> int:
        return len(self._agents)

    # ── Mentions ──

    def mention_graph(self) -> dict[str, set[str]]:
        """Agent -> set of other catalog agents it mentions."""
        graph: dict[str, set[str]] = {}
        for doc in self:
            graph[doc.name] = {
                n for n in doc.outline.mentioned_names
                if n in self._agents and n != doc.name
            }
        return graph

    def referenced_by(self, name: str) -> list[str]:
        return sorted(src for src, targets in self.mention_graph().items() if name in targets)

    def unresolved_mentions(self) -> dict[str, list[str]]:
        """Agent -> mentioned names that are not in the catalog."""
        out: dict[str, list[str]] = {}
        for doc in self:
            missing = [n for n in doc.outline.mentioned_names if n not in self._agents]
            if missing:
                out[doc.name] = missing
        return out

    def __repr__(self) -> str:
        return f"AgentCatalog(agents={len(self)}, failures={len(self.failures)})"
