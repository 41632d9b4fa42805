"""
yedgraph.commands.summary - Print an overview of an .xgml graph.
"""

from __future__ import annotations

import argparse
import json

from yedgraph.graph import Document, GraphNode


def run(args: argparse.Namespace) -> int:
    """Run the summary command."""
    from yedgraph.graph.factory import load_document

    doc = load_document(args.file, config_path=getattr(args, "config", None))

    if getattr(args, "json", False):
        print(json.dumps(summarize(doc), indent=2))
        return 0

    graph = doc.graph
    print(f"File:     {args.file}")
    print(f"Creator:  {doc.creator} {doc.version}")
    if graph.label:
        print(f"Label:    {graph.label}")
    print(f"Directed: {'yes' if graph.is_directed else 'no'}")
    print(f"Nodes:    {graph.node_count()}")
    print(f"Edges:    {graph.edge_count()}")

    groups = list(graph.iter_groups())
    if groups:
        print(f"Groups:   {len(groups)}")
        for node in graph.iter_top_level():
            if node.is_group:
                _print_group(node, indent=1)
    return 0


def _print_group(node: GraphNode, indent: int) -> None:
    pad = "  " * indent
    print(f"{pad}{_name(node)} ({node.child_count()} members)")
    for child in node.iter_children():
        if child.is_group:
            _print_group(child, indent + 1)


def _name(node: GraphNode) -> str:
    return node.lines[0] if node.lines[0] else f"#{node.id}"


def summarize(doc: Document) -> dict:
    """Return the summary as a JSON-compatible dict."""
    graph = doc.graph
    return {
        "creator": doc.creator,
        "version": doc.version,
        "label": graph.label,
        "directed": graph.is_directed,
        "hierarchic": graph.is_hierarchic,
        "node_count": graph.node_count(),
        "edge_count": graph.edge_count(),
        "group_count": sum(1 for _ in graph.iter_groups()),
    }
