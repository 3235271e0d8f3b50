"""Tests for the agent catalog."""

import pytest

from agentdocs.catalog import AgentCatalog
from agentdocs.exceptions import AgentNotFoundError, DuplicateAgentError
from agentdocs.types import AgentMode
from tests.conftest import SCOUT, make_doc, write_agent


def test_load_directory(agents_dir):
    catalog = AgentCatalog.load(agents_dir)
    assert catalog.names() == ["build", "reviewer", "scout"]
    assert len(catalog) == 3
    assert catalog.failures == []
    assert catalog.root == agents_dir


def test_load_missing_directory(tmp_path):
    catalog = AgentCatalog.load(tmp_path / "nope")
    assert len(catalog) == 0


def test_load_records_failures(agents_dir):
    write_agent(agents_dir, "broken", "---\ndescription: [oops\n---\n")
    catalog = AgentCatalog.load(agents_dir)
    assert len(catalog) == 3
    assert len(catalog.failures) == 1
    assert catalog.failures[0].kind == "parse"
    assert "Invalid YAML" in catalog.failures[0].error


def test_load_ignores_other_files(agents_dir):
    (agents_dir / "notes.txt").write_text("not an agent")
    assert len(AgentCatalog.load(agents_dir)) == 3


def test_recursive_load(agents_dir):
    nested = agents_dir / "team"
    nested.mkdir()
    write_agent(nested, "ranger", SCOUT)
    assert "ranger" not in AgentCatalog.load(agents_dir)
    assert "ranger" in AgentCatalog.load(agents_dir, recursive=True)


def test_from_paths(agents_dir, tmp_path):
    extra = write_agent(tmp_path, "solo", SCOUT)
    catalog = AgentCatalog.from_paths([agents_dir, extra])
    assert catalog.names() == ["build", "reviewer", "scout", "solo"]


def test_get_and_contains(agents_dir):
    catalog = AgentCatalog.load(agents_dir)
    assert catalog.get("scout").name == "scout"
    assert catalog.get("@scout").name == "scout"
    assert "@build" in catalog
    with pytest.raises(AgentNotFoundError):
        catalog.get("ghost")


def test_add_duplicate():
    catalog = AgentCatalog([make_doc(SCOUT, name="scout")])
    with pytest.raises(DuplicateAgentError):
        catalog.add(make_doc(SCOUT, name="scout"))


def test_remove(agents_dir):
    catalog = AgentCatalog.load(agents_dir)
    catalog.remove("scout")
    catalog.remove("never-there")
    assert "scout" not in catalog


def test_filter_by_mode(agents_dir):
    catalog = AgentCatalog.load(agents_dir)
    assert [d.name for d in catalog.filter(AgentMode.PRIMARY)] == ["build"]
    assert [d.name for d in catalog.filter("subagent")] == ["reviewer", "scout"]
    assert [d.name for d in catalog.primaries()] == ["build"]
    assert [d.name for d in catalog.subagents()] == ["reviewer", "scout"]


def test_mention_graph(agents_dir):
    catalog = AgentCatalog.load(agents_dir)
    assert catalog.mention_graph() == {
        "build": {"reviewer"},
        "reviewer": {"scout"},
        "scout": {"build"},
    }
    assert catalog.referenced_by("scout") == ["reviewer"]
    assert catalog.unresolved_mentions() == {"scout": ["ghost"]}
