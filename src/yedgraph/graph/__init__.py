"""Graph module - State graph data structures and construction.

Exports:
- GraphNode: A state or group of states
- Edge: A labeled, colored transition between two nodes
- Color: RGB color decoded from a '#RRGGBB' fill
- Labeler: Label text split into lines and ``key: value`` tags
- StateGraph: Dense node array plus ordered edge list
- Document: Creator, version and graph of an .xgml file
- BuildOptions: Policies for duplicate ids and non-group parents
- GraphBuilder / DocumentBuilder: Section tree to graph construction

Note: use yedgraph.graph.factory.parse() / parse_file() to build Documents.
"""

from yedgraph.graph.builder import (
    BuildOptions,
    Document,
    DocumentBuilder,
    GraphBuilder,
    StateGraph,
    build_document,
    build_graph,
)
from yedgraph.graph.GraphNode import NO_GROUP, GraphNode
from yedgraph.graph.labeler import Labeler
from yedgraph.graph.relations import Color, Edge

__all__ = [
    "NO_GROUP",
    "GraphNode",
    "Edge",
    "Color",
    "Labeler",
    "StateGraph",
    "Document",
    "BuildOptions",
    "GraphBuilder",
    "DocumentBuilder",
    "build_graph",
    "build_document",
]
