"""
yedgraph - Typed state graphs from yEd .xgml documents

yedgraph decodes the section tree of an .xgml file into a StateGraph with
dense node indices, resolved edges and group containment, edge colors, and
``key: value`` tags parsed out of node and edge labels.

    >>> from yedgraph import parse_file
    >>> doc = parse_file("state.xgml")
    >>> for edge in doc.graph.iter_edges():
    ...     print(edge.source().label, "->", edge.target().label)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yedgraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from yedgraph.errors import XGMLError
from yedgraph.graph import (
    BuildOptions,
    Color,
    Document,
    Edge,
    GraphNode,
    Labeler,
    StateGraph,
)
from yedgraph.graph.factory import parse, parse_bytes, parse_file, parse_stream
from yedgraph.sections import Attribute, AttributeType, Section

__all__ = [
    "__version__",
    "Attribute",
    "AttributeType",
    "BuildOptions",
    "Color",
    "Document",
    "Edge",
    "GraphNode",
    "Labeler",
    "Section",
    "StateGraph",
    "XGMLError",
    "parse",
    "parse_bytes",
    "parse_file",
    "parse_stream",
]
