"""Graph Builder - Constructs StateGraph from a section tree.

This module provides the builder pattern for turning the decoded
``xgml`` section tree into a Document holding an immutable StateGraph.

Construction runs in four passes over the ``graph`` section:

1. Node pass: one GraphNode per ``node`` child, keyed by original id.
2. Group-linking pass: every grouped node is listed under its group.
3. Edge pass: one Edge per ``edge`` child, wired to its endpoints.
4. Id remap pass: original ids are replaced with dense indices.

Any failure aborts the build; nothing partial is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from yedgraph.errors import (
    DanglingEdgeReference,
    DanglingGroupReference,
    DuplicateNodeId,
    GroupCycle,
    GroupReferenceNotAGroup,
    InvalidEdgeSection,
    InvalidGraphSection,
    InvalidNodeSection,
    InvalidRoot,
    MissingGraphSection,
)
from yedgraph.graph.GraphNode import NO_GROUP, GraphNode
from yedgraph.graph.labeler import Labeler
from yedgraph.graph.relations import BLACK, Color, Edge
from yedgraph.sections import Section

logger = logging.getLogger(__name__)

ROOT_SECTION = "xgml"
GRAPH_SECTION = "graph"
NODE_SECTION = "node"
EDGE_SECTION = "edge"
GRAPHICS_SECTION = "graphics"


@dataclass(eq=False)
class StateGraph:
    """Container for a complete state graph.

    Owns every node and edge. Nodes are stored densely so that
    ``node(i).id == i``; edges keep document order.

    Attributes:
        hierarchic: The graph's ``hierarchic`` flag.
        label: The graph's label.
        directed: The graph's ``directed`` flag.
    """

    hierarchic: int = 0
    label: str = ""
    directed: int = 0

    # Internal storage (prefixed) - excluded from constructor
    _nodes: list[GraphNode] = field(default_factory=list, init=False, repr=False)
    _edges: list[Edge] = field(default_factory=list, init=False, repr=False)
    _original_index: dict[int, int] = field(default_factory=dict, init=False, repr=False)

    @property
    def is_directed(self) -> bool:
        return self.directed != 0

    @property
    def is_hierarchic(self) -> bool:
        return self.hierarchic != 0

    def node_count(self) -> int:
        """Return total number of nodes in the graph."""
        return len(self._nodes)

    def node(self, index: int) -> GraphNode:
        """Return the node with the given dense index.

        Raises:
            IndexError: If index is outside [0, node_count()).
        """
        if not 0 <= index < len(self._nodes):
            raise IndexError(f"Node {index} out of range (graph has {len(self._nodes)} nodes)")
        return self._nodes[index]

    def iter_nodes(self) -> Iterator[GraphNode]:
        """Iterate nodes in dense index order."""
        yield from self._nodes

    def edge_count(self) -> int:
        """Return total number of edges in the graph."""
        return len(self._edges)

    def edge(self, index: int) -> Edge:
        """Return the index-th edge in document order.

        Raises:
            IndexError: If index is outside [0, edge_count()).
        """
        if not 0 <= index < len(self._edges):
            raise IndexError(f"Edge {index} out of range (graph has {len(self._edges)} edges)")
        return self._edges[index]

    def iter_edges(self) -> Iterator[Edge]:
        """Iterate edges in document order."""
        yield from self._edges

    def iter_groups(self) -> Iterator[GraphNode]:
        """Iterate group nodes."""
        for node in self._nodes:
            if node.is_group:
                yield node

    def iter_top_level(self) -> Iterator[GraphNode]:
        """Iterate nodes that do not belong to any group."""
        for node in self._nodes:
            if not node.is_grouped:
                yield node

    def find_by_original_id(self, original_id: int) -> GraphNode:
        """Find a node by the id it had in the input document.

        Raises:
            KeyError: If no node had that id.
        """
        try:
            return self._nodes[self._original_index[original_id]]
        except KeyError:
            raise KeyError(f"No node with original id {original_id}") from None

    def original_id(self, index: int) -> int:
        """Return the input document's id for the node at a dense index.

        Raises:
            IndexError: If index is outside [0, node_count()).
        """
        return self.node(index).original_id

    def has_original_id(self, original_id: int) -> bool:
        return original_id in self._original_index

    def find_by_tag(self, key: str, value: str | None = None) -> Iterator[GraphNode]:
        """Iterate nodes whose label carries a tag (optionally with a given value)."""
        for node in self._nodes:
            if node.has_tag(key) and (value is None or node.tag(key) == value):
                yield node


@dataclass(frozen=True)
class Document:
    """A decoded .xgml document.

    Attributes:
        creator: The tool that wrote the file.
        version: The writer's version string.
        graph: The document's state graph.
    """

    creator: str
    version: str
    graph: StateGraph


@dataclass(frozen=True)
class BuildOptions:
    """Policies for inputs the file format does not rule out.

    Attributes:
        strict_groups: Reject a ``gid`` naming a node without ``isGroup``.
            When False such nodes are linked anyway and a warning is logged.
        allow_duplicate_ids: Let a later node replace an earlier one with
            the same id (logged). When False duplicates are an error.
    """

    strict_groups: bool = True
    allow_duplicate_ids: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BuildOptions:
        """Create BuildOptions from the ``[build]`` configuration table."""
        return cls(
            strict_groups=bool(data.get("strict_groups", True)),
            allow_duplicate_ids=bool(data.get("allow_duplicate_ids", False)),
        )


def _string_or_default(section: Section, key: str, default: str = "") -> str:
    attr = section.get_attribute(key)
    return attr.as_str() if attr is not None else default


class GraphBuilder:
    """Builder for constructing a StateGraph from a ``graph`` section.

    Usage:
        builder = GraphBuilder()
        graph = builder.build(graph_section)

    A builder holds no state between calls, so one instance can build any
    number of graphs.

    Note on Privileged Access:
        GraphBuilder fills GraphNode and Edge internals (``_inputs``,
        ``_children``, ``_graph``, ...) directly. Nothing else writes them,
        and after build() returns they are only read.
    """

    def __init__(self, options: BuildOptions | None = None) -> None:
        """Initialize the graph builder.

        Args:
            options: Build policies (defaults to BuildOptions()).
        """
        self.options = options or BuildOptions()

    def build(self, section: Section) -> StateGraph:
        """Build the graph described by a ``graph`` section.

        Raises:
            InvalidGraphSection: If section is not named "graph".
            XGMLError: For any attribute, reference or color failure.
        """
        if section.name != GRAPH_SECTION:
            raise InvalidGraphSection(section.name)

        graph = StateGraph(
            hierarchic=section.require_attribute("hierarchic").as_int(),
            label=section.require_attribute("label").as_str(),
            directed=section.require_attribute("directed").as_int(),
        )

        nodes = self._node_pass(section)
        self._link_groups(nodes)
        self._check_group_cycles(nodes)
        edges = self._edge_pass(section, nodes)
        self._remap_ids(graph, nodes, edges)

        logger.debug(
            "Built graph '%s': %d nodes, %d edges",
            graph.label,
            graph.node_count(),
            graph.edge_count(),
        )
        return graph

    def build_node(self, section: Section) -> GraphNode:
        """Build one node; ids are still the document's original ids.

        Raises:
            InvalidNodeSection: If section is not named "node".
        """
        if section.name != NODE_SECTION:
            raise InvalidNodeSection(section.name)

        node_id = section.require_attribute("id").as_int()
        gid = section.get_attribute("gid")
        group_id = gid.as_int() if gid is not None else NO_GROUP
        return GraphNode(
            id=node_id,
            original_id=node_id,
            labeler=Labeler(section.require_attribute("label").as_str()),
            # isGroup is presence-only; its value is never read
            is_group=section.has_attribute("isGroup"),
            group_id=group_id if group_id >= 0 else NO_GROUP,
        )

    def build_edge(self, section: Section, index: int = 0) -> Edge:
        """Build one edge; endpoints are still the document's original ids.

        Raises:
            InvalidEdgeSection: If section is not named "edge".
            MalformedColor: If a '#RRGGBB' fill holds non-hex digits.
        """
        if section.name != EDGE_SECTION:
            raise InvalidEdgeSection(section.name)

        src = section.require_attribute("source").as_int()
        dst = section.require_attribute("target").as_int()
        label = _string_or_default(section, "label")

        color = BLACK
        for graphics in section.iter_children(GRAPHICS_SECTION):
            fill = graphics.get_attribute("fill")
            if fill is None:
                continue
            text = fill.as_str()
            decoded = Color.from_fill(text)
            if decoded is None:
                logger.debug("Ignoring fill %r on edge %d -> %d", text, src, dst)
                continue
            color = decoded

        return Edge(index=index, src=src, dst=dst, labeler=Labeler(label), color=color)

    def _node_pass(self, section: Section) -> dict[int, GraphNode]:
        nodes: dict[int, GraphNode] = {}
        for child in section.iter_children(NODE_SECTION):
            node = self.build_node(child)
            if node.original_id in nodes:
                if not self.options.allow_duplicate_ids:
                    raise DuplicateNodeId(node.original_id)
                logger.warning("Duplicate node id %d; keeping the later node", node.original_id)
            nodes[node.original_id] = node
        logger.debug("Node pass: %d nodes", len(nodes))
        return nodes

    def _link_groups(self, nodes: dict[int, GraphNode]) -> None:
        for node in nodes.values():
            if node.group_id < 0:
                continue
            parent = nodes.get(node.group_id)
            if parent is None:
                raise DanglingGroupReference(node.original_id, node.group_id)
            if not parent.is_group:
                if self.options.strict_groups:
                    raise GroupReferenceNotAGroup(node.original_id, node.group_id)
                logger.warning(
                    "Node %d is grouped under node %d, which is not a group",
                    node.original_id,
                    node.group_id,
                )
            parent._children.append(node.original_id)

    def _check_group_cycles(self, nodes: dict[int, GraphNode]) -> None:
        """Ensure every chain of group ids ends at an ungrouped node."""
        settled: set[int] = set()
        for start in nodes:
            chain: list[int] = []
            seen: set[int] = set()
            current = start
            while current >= 0 and current not in settled:
                if current in seen:
                    raise GroupCycle(current)
                seen.add(current)
                chain.append(current)
                current = nodes[current].group_id
            settled.update(chain)

    def _edge_pass(self, section: Section, nodes: dict[int, GraphNode]) -> list[Edge]:
        edges: list[Edge] = []
        for child in section.iter_children(EDGE_SECTION):
            edge = self.build_edge(child, index=len(edges))
            src = nodes.get(edge.src)
            if src is None:
                raise DanglingEdgeReference(edge.src)
            dst = nodes.get(edge.dst)
            if dst is None:
                raise DanglingEdgeReference(edge.dst)
            edges.append(edge)
            src._outputs.append(edge.index)
            dst._inputs.append(edge.index)
        logger.debug("Edge pass: %d edges", len(edges))
        return edges

    def _remap_ids(
        self,
        graph: StateGraph,
        nodes: dict[int, GraphNode],
        edges: list[Edge],
    ) -> None:
        """Assign dense indices in ascending original-id order and rewrite references."""
        dense = {original: index for index, original in enumerate(sorted(nodes))}

        ordered: list[GraphNode] = []
        for original in sorted(nodes):
            node = nodes[original]
            node.id = dense[original]
            if node.group_id >= 0:
                node.group_id = dense[node.group_id]
            node._children = [dense[c] for c in node._children]
            node._graph = graph
            ordered.append(node)

        for edge in edges:
            edge.src = dense[edge.src]
            edge.dst = dense[edge.dst]
            edge._graph = graph

        graph._nodes = ordered
        graph._edges = edges
        graph._original_index = dense


class DocumentBuilder:
    """Builder for constructing a Document from the root ``xgml`` section."""

    def __init__(self, options: BuildOptions | None = None) -> None:
        self.graph_builder = GraphBuilder(options)

    def build(self, root: Section) -> Document:
        """Build a Document from the root section.

        Only the first ``graph`` child is built; later ones are ignored.

        Raises:
            InvalidRoot: If root is not named "xgml".
            MissingGraphSection: If root has no "graph" child.
        """
        if root.name != ROOT_SECTION:
            raise InvalidRoot(root.name)

        creator = root.require_attribute("Creator").as_str()
        version = root.require_attribute("Version").as_str()

        graph_section = root.first_child(GRAPH_SECTION)
        if graph_section is None:
            raise MissingGraphSection()

        graph = self.graph_builder.build(graph_section)
        return Document(creator=creator, version=version, graph=graph)


def build_graph(section: Section, options: BuildOptions | None = None) -> StateGraph:
    """Build a StateGraph from a ``graph`` section."""
    return GraphBuilder(options).build(section)


def build_document(root: Section, options: BuildOptions | None = None) -> Document:
    """Build a Document from a root ``xgml`` section."""
    return DocumentBuilder(options).build(root)


__all__ = [
    "BuildOptions",
    "Document",
    "DocumentBuilder",
    "GraphBuilder",
    "StateGraph",
    "build_document",
    "build_graph",
]
