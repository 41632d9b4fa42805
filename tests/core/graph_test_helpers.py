"""Test helpers for black-box graph testing.

This module provides section-tree factories and string conversion helpers
for testing the graph through observable output rather than internal state.
"""

from __future__ import annotations

from collections.abc import Iterable

from yedgraph.graph import BuildOptions, Document, StateGraph, build_document, build_graph
from yedgraph.sections import Attribute, Section


# === Attribute Factory ===


def attr(key: str, value: int | float | str, declared_type: str | None = None) -> Attribute:
    """Create an attribute, inferring the declared type from the Python value.

    Args:
        key: Attribute key
        value: Value; int -> "int", float -> "double", str -> "String"
        declared_type: Force a declared type (e.g., to provoke a mismatch)
    """
    if declared_type is None:
        if isinstance(value, bool):
            declared_type = "int"
            value = int(value)
        elif isinstance(value, int):
            declared_type = "int"
        elif isinstance(value, float):
            declared_type = "double"
        else:
            declared_type = "String"
    return Attribute(key=key, declared_type=declared_type, raw_text=str(value))


# === Section Factories ===


def make_node(
    node_id: int,
    label: str = "",
    gid: int | None = None,
    is_group: bool = False,
    extra: Iterable[Attribute] = (),
) -> Section:
    """Factory for a ``node`` section.

    Args:
        node_id: Original node id
        label: Node label text
        gid: Original id of the enclosing group (optional)
        is_group: Add a presence-only ``isGroup`` attribute
        extra: Additional attributes appended after the standard ones
    """
    attributes = [attr("id", node_id), attr("label", label)]
    if is_group:
        attributes.append(attr("isGroup", 1))
    if gid is not None:
        attributes.append(attr("gid", gid))
    attributes.extend(extra)
    return Section(name="node", attributes=attributes)


def make_edge(
    source: int,
    target: int,
    label: str | None = None,
    fill: str | None = None,
    extra: Iterable[Attribute] = (),
) -> Section:
    """Factory for an ``edge`` section.

    Args:
        source: Original id of the source node
        target: Original id of the target node
        label: Edge label (omitted when None)
        fill: ``fill`` value for a ``graphics`` child (omitted when None)
        extra: Additional attributes
    """
    attributes = [attr("source", source), attr("target", target)]
    if label is not None:
        attributes.append(attr("label", label))
    attributes.extend(extra)
    children = []
    if fill is not None:
        children.append(
            Section(name="graphics", attributes=[attr("fill", fill), attr("width", 1)])
        )
    return Section(name="edge", attributes=attributes, children=children)


def make_graph(
    nodes: Iterable[Section] = (),
    edges: Iterable[Section] = (),
    label: str = "",
    hierarchic: int = 1,
    directed: int = 1,
) -> Section:
    """Factory for a ``graph`` section; nodes come before edges."""
    return Section(
        name="graph",
        attributes=[
            attr("hierarchic", hierarchic),
            attr("label", label),
            attr("directed", directed),
        ],
        children=[*nodes, *edges],
    )


def make_document(
    *graphs: Section,
    creator: str = "yFiles",
    version: str = "2.8",
) -> Section:
    """Factory for the root ``xgml`` section."""
    return Section(
        name="xgml",
        attributes=[attr("Creator", creator), attr("Version", version)],
        children=list(graphs),
    )


# === Build Shortcuts ===


def build(
    nodes: Iterable[Section] = (),
    edges: Iterable[Section] = (),
    options: BuildOptions | None = None,
    **graph_kwargs,
) -> StateGraph:
    """Build a StateGraph straight from node/edge sections."""
    return build_graph(make_graph(nodes, edges, **graph_kwargs), options)


def build_doc(*graphs: Section, options: BuildOptions | None = None, **kwargs) -> Document:
    """Build a Document from graph sections."""
    return build_document(make_document(*graphs, **kwargs), options)


# === XML Rendering ===


def section_to_xml(section: Section, indent: int = 0) -> str:
    """Render a Section the way yEd writes .xgml markup."""
    from xml.sax.saxutils import escape, quoteattr

    pad = "\t" * indent
    lines = [f"{pad}<section name={quoteattr(section.name)}>"]
    for a in section.attributes:
        lines.append(
            f"{pad}\t<attribute key={quoteattr(a.key)} type={quoteattr(a.declared_type)}>"
            f"{escape(a.raw_text)}</attribute>"
        )
    for child in section.children:
        lines.append(section_to_xml(child, indent + 1))
    lines.append(f"{pad}</section>")
    return "\n".join(lines)


def to_xgml(root: Section, declaration: str = '<?xml version="1.0" encoding="Cp1252"?>') -> str:
    """Render a complete .xgml document, with an XML declaration."""
    return f"{declaration}\n{section_to_xml(root)}\n"


# === String Helpers ===


def node_labels(graph: StateGraph) -> list[str]:
    """Labels of all nodes in dense index order."""
    return [node.label for node in graph.iter_nodes()]


def edge_string(graph: StateGraph) -> str:
    """Edges as 'src_label->dst_label' joined by commas, in document order."""
    return ",".join(
        f"{edge.source().label}->{edge.target().label}" for edge in graph.iter_edges()
    )


def children_string(graph: StateGraph, label: str) -> str:
    """Labels of a group's members, comma-joined."""
    node = find_by_label(graph, label)
    return ",".join(child.label for child in node.iter_children())


def find_by_label(graph: StateGraph, label: str):
    """Return the single node with the given label."""
    matches = [node for node in graph.iter_nodes() if node.label == label]
    assert len(matches) == 1, f"expected one node labeled {label!r}, found {len(matches)}"
    return matches[0]
