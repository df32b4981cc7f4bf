"""Shared pytest fixtures for linkstrength tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from linkstrength.config.settings import LinkSettings
from linkstrength.domain.graph import HyperlinkGraph
from linkstrength.infrastructure.graph.engine import GraphEngine
from linkstrength.services.telemetry import disable_telemetry

# Demonstration graph of eleven news, university and state domains.
SAMPLE_EDGES: list[tuple[str, str]] = [
    ("usnews.com", "umd.edu"),
    ("umd.edu", "cs.umd.edu"),
    ("thediamondback.com", "umd.edu"),
    ("thediamondback.com", "visitmaryland.org"),
    ("cs.umd.edu", "umd.edu"),
    ("en.wikipedia.org", "visitmaryland.org"),
    ("en.wikipedia.org", "baltimoresun.com"),
    ("en.wikipedia.org", "umd.edu"),
    ("en.wikipedia.org", "cs.umd.edu"),
    ("visitmaryland.org", "marylandpublicschools.org"),
    ("twitter.com", "usnews.com"),
    ("twitter.com", "thediamondback.com"),
    ("twitter.com", "baltimoresun.com"),
    ("bloomberg.com", "usnews.com"),
    ("bloomberg.com", "umd.edu"),
    ("marylandpublicschools.org", "visitmaryland.org"),
    ("news.maryland.gov", "visitmaryland.org"),
    ("news.maryland.gov", "marylandpublicschools.org"),
    ("baltimoresun.com", "usnews.com"),
    ("baltimoresun.com", "bloomberg.com"),
    ("baltimoresun.com", "thediamondback.com"),
]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def chain_graph() -> HyperlinkGraph:
    """A -> B -> C."""
    return HyperlinkGraph.from_edges([("A", "B"), ("B", "C")])


@pytest.fixture
def diamond_graph() -> HyperlinkGraph:
    """A -> B, A -> C, B -> D, C -> D."""
    return HyperlinkGraph.from_edges([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])


@pytest.fixture
def cycle_graph() -> HyperlinkGraph:
    """A -> B -> A, plus B -> C."""
    return HyperlinkGraph.from_edges([("A", "B"), ("B", "A"), ("B", "C")])


@pytest.fixture
def sample_edges() -> list[tuple[str, str]]:
    return list(SAMPLE_EDGES)


@pytest.fixture
def sample_graph() -> HyperlinkGraph:
    """The eleven-domain demonstration graph (21 edges)."""
    return HyperlinkGraph.from_edges(SAMPLE_EDGES)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> LinkSettings:
    """Default settings rooted at an empty temp workspace."""
    monkeypatch.delenv("LINKSTRENGTH_CONFIG", raising=False)
    return LinkSettings.from_cli(workspace_root=tmp_path)


@pytest.fixture
def make_engine(settings: LinkSettings) -> Callable[[HyperlinkGraph], GraphEngine]:
    """Wrap a graph in an engine with default settings."""

    def _make(graph: HyperlinkGraph) -> GraphEngine:
        return GraphEngine.from_graph(graph, settings)

    return _make


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temp workspace whose linkstrength.toml declares the sample graph.

    CWD is switched to the workspace so CLI config discovery finds it.
    """
    monkeypatch.delenv("LINKSTRENGTH_CONFIG", raising=False)
    edges = ",\n".join(f'  ["{s}", "{t}"]' for s, t in SAMPLE_EDGES)
    (tmp_path / "linkstrength.toml").write_text(f"[graph]\nedges = [\n{edges},\n]\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _telemetry_off() -> Generator[None]:
    """``-v`` runs switch telemetry on for the whole context; switch it back."""
    yield
    disable_telemetry()
