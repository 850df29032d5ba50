from __future__ import annotations

import logging
import pathlib
import sys
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING, Any

import pytest

from lexigraph import metrics
from lexigraph.config import io as config_io
from lexigraph.graph import Edge, Graph, VertexBuilder

# Add tests directory to sys.path so helpers.py can be imported
_tests_dir = pathlib.Path(__file__).parent
if str(_tests_dir) not in sys.path:
    sys.path.insert(0, str(_tests_dir))

import helpers  # noqa: E402

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

_LEXIGRAPH_LOGGERS = ("lexigraph",)


@pytest.fixture(autouse=True)
def reset_lexigraph_state(
    mocker: MockerFixture, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None]:
    """Isolate every test from the user's config and from global metrics state.

    The global config path points to a file inside tmp_path that does not exist
    unless a test writes it, and LEXIGRAPH_CONFIG is unset.
    """
    mocker.patch.object(
        config_io, "get_global_config_path", return_value=tmp_path / "global-config.yaml"
    )
    monkeypatch.delenv(config_io.CONFIG_ENV_VAR, raising=False)
    config_io.clear_config_cache()
    metrics.disable()
    metrics.clear()
    for name in _LEXIGRAPH_LOGGERS:
        logging.getLogger(name).handlers.clear()
    yield
    config_io.clear_config_cache()
    metrics.disable()
    metrics.clear()


@pytest.fixture
def scenario_graph() -> Graph:
    """Vertices 1..4 with 1->2, 1->3, 2->4, 4->3, two parallel 3->2 and a loop on 4."""
    v1, v2, v3, v4 = VertexBuilder().build_many(4)
    graph = Graph([v1, v2, v3, v4])
    for x, y in [(v1, v2), (v1, v3), (v2, v4), (v4, v3), (v3, v2), (v3, v2), (v4, v4)]:
        graph.add_edge(Edge[Any](x, y))
    return graph


@pytest.fixture
def traversal_graph() -> Graph:
    """Nine-vertex digraph a..i with known BFS and DFS visiting orders from a."""
    return helpers.build_graph(
        "abcdefghi",
        [
            ("a", "f"),
            ("a", "i"),
            ("i", "c"),
            ("c", "a"),
            ("h", "c"),
            ("f", "h"),
            ("d", "f"),
            ("d", "h"),
            ("i", "g"),
            ("e", "c"),
            ("h", "e"),
            ("d", "b"),
            ("g", "e"),
            ("e", "b"),
            ("g", "b"),
        ],
    )


_PATH_EDGES = [
    ("a", "b"),
    ("b", "c"),
    ("c", "d"),
    ("d", "e"),
    ("e", "f"),
    ("f", "g"),
    ("g", "c"),
    ("d", "f"),
    ("a", "c"),
    ("a", "g"),
    ("e", "l"),
    ("a", "h"),
    ("h", "g"),
    ("h", "e"),
    ("k", "i"),
    ("i", "k"),
    ("i", "j"),
    ("k", "j"),
]


@pytest.fixture
def path_graph() -> Graph:
    """Twelve-vertex digraph a..l; i, j and k are unreachable from a."""
    return helpers.build_graph("abcdefghijkl", _PATH_EDGES)


@pytest.fixture
def undirected_path_graph() -> Graph:
    return helpers.build_graph("abcdefghijkl", _PATH_EDGES, oriented=False)


@pytest.fixture
def triangle() -> Graph:
    return helpers.build_graph("xyz", [("x", "y"), ("y", "z"), ("z", "x")], oriented=False)


@pytest.fixture
def write_config(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[[str], pathlib.Path]:
    """Write YAML to a file and point LEXIGRAPH_CONFIG at it."""

    def _write(content: str) -> pathlib.Path:
        path = tmp_path / "lexigraph.yaml"
        path.write_text(content)
        monkeypatch.setenv(config_io.CONFIG_ENV_VAR, str(path))
        config_io.clear_config_cache()
        return path

    return _write
