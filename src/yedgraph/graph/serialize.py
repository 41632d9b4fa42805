"""Graph Serialization - Export StateGraph to various formats.

This module provides functions to serialize a Document, StateGraph,
GraphNode and Edge to JSON-compatible dicts, markdown, and CSV formats.
"""

from __future__ import annotations

import csv
import io
import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from yedgraph.graph.builder import Document, StateGraph
    from yedgraph.graph.GraphNode import GraphNode
    from yedgraph.graph.relations import Edge


def serialize_node(node: GraphNode) -> dict[str, Any]:
    """Serialize a GraphNode to a JSON-compatible dict.

    Args:
        node: The node to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {
        "id": node.id,
        "original_id": node.original_id,
        "label": node.label,
        "is_group": node.is_group,
        "group": node.group_id if node.is_grouped else None,
        "inputs": [edge.index for edge in node.iter_inputs()],
        "outputs": [edge.index for edge in node.iter_outputs()],
    }

    if node.tags:
        result["tags"] = dict(node.tags)

    children = [child.id for child in node.iter_children()]
    if children:
        result["children"] = children

    return result


def serialize_edge(edge: Edge) -> dict[str, Any]:
    """Serialize an Edge to a JSON-compatible dict."""
    result: dict[str, Any] = {
        "index": edge.index,
        "src": edge.src,
        "dst": edge.dst,
        "label": edge.label,
        "color": edge.color.to_hex(),
    }
    if edge.tags:
        result["tags"] = dict(edge.tags)
    return result


def serialize_graph(graph: StateGraph) -> dict[str, Any]:
    """Serialize a StateGraph to a JSON-compatible dict.

    Args:
        graph: The graph to serialize.

    Returns:
        Dict with nodes, edges, and metadata.
    """
    nodes = [serialize_node(node) for node in graph.iter_nodes()]
    edges = [serialize_edge(edge) for edge in graph.iter_edges()]
    group_count = sum(1 for _ in graph.iter_groups())

    return {
        "label": graph.label,
        "hierarchic": graph.hierarchic,
        "directed": graph.directed,
        "nodes": nodes,
        "edges": edges,
        "metadata": {
            "node_count": len(nodes),
            "edge_count": len(edges),
            "group_count": group_count,
        },
    }


def serialize_document(document: Document) -> dict[str, Any]:
    """Serialize a Document (creator, version and graph)."""
    return {
        "creator": document.creator,
        "version": document.version,
        "graph": serialize_graph(document.graph),
    }


def to_json(document: Document, indent: int | None = 2) -> str:
    """Render a Document as a JSON string."""
    return json.dumps(serialize_document(document), indent=indent, ensure_ascii=False)


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def _cell(text: str) -> str:
    return text.replace("|", "\\|")


def to_markdown(document: Document) -> str:
    """Generate a markdown transition table from a Document.

    Args:
        document: The Document to render.

    Returns:
        Markdown string listing states and transitions.
    """
    graph = document.graph
    title = _first_line(graph.label) or "State Graph"
    lines = [
        f"# {title}",
        "",
        "## States",
        "",
        "| ID | Label | Group |",
        "|----|-------|-------|",
    ]

    for node in graph.iter_nodes():
        group = node.group()
        group_str = _cell(_first_line(group.label)) if group is not None else "-"
        name = _cell(_first_line(node.label))
        if node.is_group:
            name = f"**{name}**"
        lines.append(f"| {node.id} | {name} | {group_str} |")

    lines.extend(
        [
            "",
            "## Transitions",
            "",
            "| From | To | Label | Color |",
            "|------|----|-------|-------|",
        ]
    )

    for edge in graph.iter_edges():
        src = _cell(_first_line(edge.source().label))
        dst = _cell(_first_line(edge.target().label))
        label = _cell(_first_line(edge.label)) or "-"
        lines.append(f"| {src} | {dst} | {label} | {edge.color.to_hex()} |")

    lines.append("")
    return "\n".join(lines)


def to_csv(document: Document) -> str:
    """Generate a CSV export of a Document's edges.

    Args:
        document: The Document to export.

    Returns:
        CSV string with one row per edge.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL)

    writer.writerow(["index", "src", "dst", "src_label", "dst_label", "label", "color"])

    for edge in document.graph.iter_edges():
        writer.writerow(
            [
                edge.index,
                edge.src,
                edge.dst,
                edge.source().label,
                edge.target().label,
                edge.label,
                edge.color.to_hex(),
            ]
        )

    return output.getvalue()


__all__ = [
    "serialize_node",
    "serialize_edge",
    "serialize_graph",
    "serialize_document",
    "to_json",
    "to_markdown",
    "to_csv",
]
