"""
yedgraph.commands.export - Export an .xgml graph as JSON, CSV or Markdown.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from yedgraph.config import get_config
from yedgraph.graph.serialize import to_csv, to_json, to_markdown


def run(args: argparse.Namespace) -> int:
    """Run the export command.

    The format comes from --format, falling back to ``export.format`` in
    the configuration.
    """
    from yedgraph.graph.factory import load_document

    config = get_config(getattr(args, "config", None))
    doc = load_document(args.file, config=config)

    export_config = config.get("export", {})
    fmt = args.format or export_config.get("format", "json")

    if fmt == "json":
        content = to_json(doc, indent=export_config.get("indent", 2))
    elif fmt == "csv":
        content = to_csv(doc)
    elif fmt == "markdown":
        content = to_markdown(doc)
    else:
        print(f"Unknown export format: {fmt}", file=sys.stderr)
        return 1

    output: Path | None = getattr(args, "output", None)
    if output:
        output.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
        if not getattr(args, "quiet", False):
            print(f"Wrote {fmt} export to {output}")
    else:
        print(content)
    return 0
