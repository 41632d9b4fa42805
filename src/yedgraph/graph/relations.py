"""Relations - Transitions between state nodes.

This module defines the edge side of the graph model:
- Color: An opaque RGB edge color decoded from a '#RRGGBB' fill
- Edge: A labeled, colored transition between two nodes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from yedgraph.errors import MalformedColor
from yedgraph.graph.GraphNode import GraphMember, GraphNode
from yedgraph.graph.labeler import Labeled, Labeler

if TYPE_CHECKING:
    from yedgraph.graph.builder import StateGraph

HEX_DIGITS = "0123456789abcdefABCDEF"


def hex_pair_to_int(pair: str) -> int:
    """Decode exactly two hex digits (case-insensitive) to 0..255.

    Raises:
        MalformedColor: If pair is not two hex digits.
    """
    if len(pair) != 2 or any(c not in HEX_DIGITS for c in pair):
        raise MalformedColor(pair)
    return int(pair, 16)


class Color(NamedTuple):
    """An RGB color; the source format has no alpha channel."""

    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def from_fill(cls, fill: str) -> Color | None:
        """Decode a '#RRGGBB' fill string.

        Returns:
            The Color, or None if fill is not shaped like '#RRGGBB'.

        Raises:
            MalformedColor: If fill is '#RRGGBB'-shaped but holds non-hex digits.
        """
        if len(fill) != 7 or not fill.startswith("#"):
            return None
        try:
            return cls(
                hex_pair_to_int(fill[1:3]),
                hex_pair_to_int(fill[3:5]),
                hex_pair_to_int(fill[5:7]),
            )
        except MalformedColor:
            raise MalformedColor(fill) from None

    def rgba(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, 255)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


BLACK = Color()


@dataclass(eq=False)
class Edge(GraphMember, Labeled):
    """A directed edge between two graph nodes.

    Attributes:
        index: Position of this edge in its graph's edge list.
        src: Dense index of the source node.
        dst: Dense index of the destination node.
        labeler: Label text with its lines and tags.
        color: Stroke color, black when the file gives none.
    """

    index: int
    src: int
    dst: int
    labeler: Labeler = field(default_factory=Labeler)
    color: Color = BLACK

    _graph: StateGraph | None = field(default=None, repr=False)

    @property
    def graph(self) -> StateGraph:
        if self._graph is None:
            raise RuntimeError(f"Edge {self.index} is not attached to a graph")
        return self._graph

    def source(self) -> GraphNode:
        """Resolve the source node."""
        return self.graph.node(self.src)

    def target(self) -> GraphNode:
        """Resolve the destination node."""
        return self.graph.node(self.dst)

    @property
    def r(self) -> int:
        return self.color.r

    @property
    def g(self) -> int:
        return self.color.g

    @property
    def b(self) -> int:
        return self.color.b

    def rgba(self) -> tuple[int, int, int, int]:
        """Return (r, g, b, 255); edges are always fully opaque."""
        return self.color.rgba()

    def __str__(self) -> str:
        return f"{self.src} -> {self.dst}"
