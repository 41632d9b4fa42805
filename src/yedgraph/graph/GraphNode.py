"""GraphNode - Node representation for state graphs.

This module provides the node type of the graph model:
- GraphNode: A state (or group of states) with labeled, indexed edge lists

Nodes never own other nodes or edges. Inputs, outputs and group children
are stored as dense indices and resolved through the owning StateGraph.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from yedgraph.graph.labeler import Labeled, Labeler

if TYPE_CHECKING:
    from yedgraph.graph.builder import StateGraph
    from yedgraph.graph.relations import Edge

NO_GROUP = -1


def _check_index(index: int, count: int, what: str) -> None:
    if not 0 <= index < count:
        raise IndexError(f"{what} {index} out of range (have {count})")


class GraphMember:
    """Public fields of a node or edge become read-only once it joins a graph.

    GraphBuilder sets ``_graph`` last, after the id remap; from then on only
    ``_``-prefixed internals can be assigned.
    """

    def __setattr__(self, name: str, value: object) -> None:
        if not name.startswith("_") and getattr(self, "_graph", None) is not None:
            raise AttributeError(
                f"{type(self).__name__}.{name} is read-only once attached to a graph"
            )
        super().__setattr__(name, value)


@dataclass(eq=False)
class GraphNode(GraphMember, Labeled):
    """A node in a state graph.

    Attributes:
        id: Dense index of this node in its graph.
        original_id: The id the node had in the input document.
        labeler: Label text with its lines and tags.
        group_id: Dense index of the enclosing group node, or -1.
        is_group: True if the node is a group container.
    """

    id: int
    original_id: int
    labeler: Labeler = field(default_factory=Labeler)
    group_id: int = NO_GROUP
    is_group: bool = False

    # Internal storage (prefixed); populated by GraphBuilder
    _inputs: list[int] = field(default_factory=list, repr=False)
    _outputs: list[int] = field(default_factory=list, repr=False)
    _children: list[int] = field(default_factory=list, repr=False)
    _graph: StateGraph | None = field(default=None, repr=False)

    @property
    def graph(self) -> StateGraph:
        """The graph that owns this node."""
        if self._graph is None:
            raise RuntimeError(f"Node {self.id} is not attached to a graph")
        return self._graph

    # Inputs
    def input_count(self) -> int:
        return len(self._inputs)

    def input(self, index: int) -> Edge:
        """Return the index-th incoming edge, in edge-encounter order."""
        _check_index(index, len(self._inputs), "Input")
        return self.graph.edge(self._inputs[index])

    def iter_inputs(self) -> Iterator[Edge]:
        for edge_index in self._inputs:
            yield self.graph.edge(edge_index)

    # Outputs
    def output_count(self) -> int:
        return len(self._outputs)

    def output(self, index: int) -> Edge:
        """Return the index-th outgoing edge, in edge-encounter order."""
        _check_index(index, len(self._outputs), "Output")
        return self.graph.edge(self._outputs[index])

    def iter_outputs(self) -> Iterator[Edge]:
        for edge_index in self._outputs:
            yield self.graph.edge(edge_index)

    # Group members
    def child_count(self) -> int:
        return len(self._children)

    def child(self, index: int) -> GraphNode:
        _check_index(index, len(self._children), "Child")
        return self.graph.node(self._children[index])

    def iter_children(self) -> Iterator[GraphNode]:
        for node_index in self._children:
            yield self.graph.node(node_index)

    def has_child(self, node: GraphNode) -> bool:
        return node.id in self._children

    @property
    def is_grouped(self) -> bool:
        """True if this node belongs to a group."""
        return self.group_id >= 0

    def group(self) -> GraphNode | None:
        """Return the group node this node belongs to, or None."""
        if self.group_id < 0:
            return None
        return self.graph.node(self.group_id)

    def ancestors(self) -> Iterator[GraphNode]:
        """Iterate enclosing groups, nearest first.

        The builder rejects containment cycles, so the walk always reaches
        an ungrouped node.
        """
        group = self.group()
        while group is not None:
            yield group
            group = group.group()

    def depth(self) -> int:
        """Number of enclosing groups (0 for ungrouped nodes)."""
        return sum(1 for _ in self.ancestors())

    def group_inputs(self) -> list[Edge]:
        """Incoming edges of this node followed by those of every ancestor group.

        An edge entering an enclosing group counts as entering the node.
        """
        edges = list(self.iter_inputs())
        for ancestor in self.ancestors():
            edges.extend(ancestor.iter_inputs())
        return edges

    def group_outputs(self) -> list[Edge]:
        """Outgoing edges of this node followed by those of every ancestor group."""
        edges = list(self.iter_outputs())
        for ancestor in self.ancestors():
            edges.extend(ancestor.iter_outputs())
        return edges

    def __str__(self) -> str:
        first = self.labeler.lines[0] if self.labeler.lines else ""
        return f"{self.id} ({first})" if first else str(self.id)
