"""
yedgraph.commands.config_cmd - Show the effective configuration.
"""

from __future__ import annotations

import argparse
import sys

import tomlkit

from yedgraph.config import find_config_file, get_config


def run(args: argparse.Namespace) -> int:
    """Run the config command.

    Subcommands:
    - show: Print the merged configuration as TOML
    - path: Print the config file in use
    """
    action = getattr(args, "config_action", None)
    config_path = getattr(args, "config", None)

    if action == "path":
        path = config_path or find_config_file()
        if path is None:
            print("No .yedgraph.toml found (using defaults)")
            return 1
        print(path)
        return 0
    elif action == "show":
        config = get_config(config_path)
        print(tomlkit.dumps(config), end="")
        return 0
    else:
        print("Usage: yedgraph config <show|path>", file=sys.stderr)
        return 1
