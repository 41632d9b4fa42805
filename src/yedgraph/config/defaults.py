"""Default configuration values."""

from __future__ import annotations

from typing import Any

CONFIG_FILENAME = ".yedgraph.toml"

ENV_PREFIX = "YEDGRAPH_"

EXPORT_FORMATS = ("json", "csv", "markdown")

DEFAULT_CONFIG: dict[str, Any] = {
    "build": {
        # Reject a gid that names a node without isGroup
        "strict_groups": True,
        # Let a later node replace an earlier one with the same id
        "allow_duplicate_ids": False,
    },
    "export": {
        "format": "json",
        "indent": 2,
    },
}
