"""
yedgraph.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "export",
    "summary",
    "tags",
]
