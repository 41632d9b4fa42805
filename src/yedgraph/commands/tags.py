"""
yedgraph.commands.tags - List ``key: value`` tags found in labels.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from yedgraph.graph import StateGraph


def run(args: argparse.Namespace) -> int:
    """Run the tags command."""
    from yedgraph.graph.factory import load_document

    doc = load_document(args.file, config_path=getattr(args, "config", None))
    rows = collect_tags(doc.graph, key=getattr(args, "key", None))

    if getattr(args, "json", False):
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return 0

    if not rows:
        if not getattr(args, "quiet", False):
            print("No tags found")
        return 0

    for row in rows:
        print(f"{row['kind']} {row['ref']}: {row['key']} = {row['value']}")
    return 0


def collect_tags(graph: StateGraph, key: str | None = None) -> list[dict[str, Any]]:
    """Gather node tags, then edge tags, in graph order.

    Args:
        graph: The graph to scan.
        key: Only report this tag key (optional).

    Returns:
        One dict per tag with kind ("node"/"edge"), ref, key and value.
    """
    rows: list[dict[str, Any]] = []
    for node in graph.iter_nodes():
        for tag_key, value in node.tags.items():
            if key is None or tag_key == key:
                rows.append({"kind": "node", "ref": str(node.id), "key": tag_key, "value": value})
    for edge in graph.iter_edges():
        for tag_key, value in edge.tags.items():
            if key is None or tag_key == key:
                rows.append({"kind": "edge", "ref": str(edge), "key": tag_key, "value": value})
    return rows
