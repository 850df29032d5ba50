from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Public API. Submodules (lexigraph.algorithms.coloring, lexigraph.config, ...)
# stay importable by their full paths for everything else.

if TYPE_CHECKING:
    from lexigraph.algorithms.coloring import color as color
    from lexigraph.algorithms.dijkstra import get_path as get_path
    from lexigraph.algorithms.dijkstra import shortest_paths as shortest_paths
    from lexigraph.graph.graph import Graph as Graph
    from lexigraph.graph.model import Color as Color
    from lexigraph.graph.model import Edge as Edge
    from lexigraph.graph.model import Vertex as Vertex
    from lexigraph.graph.path import Path as Path
    from lexigraph.lexicon import Lexicon as Lexicon

# Lazy import mapping for runtime
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Color": ("lexigraph.graph.model", "Color"),
    "Edge": ("lexigraph.graph.model", "Edge"),
    "Graph": ("lexigraph.graph.graph", "Graph"),
    "Lexicon": ("lexigraph.lexicon", "Lexicon"),
    "Path": ("lexigraph.graph.path", "Path"),
    "Vertex": ("lexigraph.graph.model", "Vertex"),
    "color": ("lexigraph.algorithms.coloring", "color"),
    "get_path": ("lexigraph.algorithms.dijkstra", "get_path"),
    "shortest_paths": ("lexigraph.algorithms.dijkstra", "shortest_paths"),
}


def __getattr__(name: str) -> object:
    """Lazily import public API members on first access."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        import importlib

        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        # Cache in module globals for subsequent access
        globals()[name] = value
        return value
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


def __dir__() -> list[str]:
    """List available attributes including lazy imports."""
    return list(globals().keys()) + list(_LAZY_IMPORTS.keys())
