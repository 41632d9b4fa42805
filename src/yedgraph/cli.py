"""
yedgraph.cli - Command-line interface.

Main entry point for the yedgraph CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from yedgraph import __version__
from yedgraph.commands import config_cmd, export, summary, tags
from yedgraph.config.defaults import EXPORT_FORMATS


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="yedgraph",
        description="Typed state graphs from yEd .xgml documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  yedgraph summary state.xgml             # Counts, groups, creator
  yedgraph export state.xgml              # JSON export to stdout
  yedgraph export state.xgml -f csv -o edges.csv
  yedgraph tags state.xgml --key event    # Label tags named 'event'

Configuration:
  yedgraph config path                    # Show config file location
  yedgraph config show                    # View effective settings

For detailed command help: yedgraph <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"yedgraph {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging, full tracebacks)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Show creator, node/edge counts and group structure",
    )
    summary_parser.add_argument("file", type=Path, help="The .xgml file", metavar="FILE")
    summary_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output the summary as JSON",
    )

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export the graph as JSON, CSV or Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Formats:
  json       Full document: nodes, edges, tags, colors
  csv        One row per edge
  markdown   State and transition tables
""",
    )
    export_parser.add_argument("file", type=Path, help="The .xgml file", metavar="FILE")
    export_parser.add_argument(
        "-f",
        "--format",
        choices=EXPORT_FORMATS,
        help="Output format (default: export.format from config, else json)",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write to file instead of stdout",
        metavar="PATH",
    )

    # tags command
    tags_parser = subparsers.add_parser(
        "tags",
        help="List 'key: value' tags from node and edge labels",
    )
    tags_parser.add_argument("file", type=Path, help="The .xgml file", metavar="FILE")
    tags_parser.add_argument(
        "-k",
        "--key",
        help="Only show tags with this key",
        metavar="KEY",
    )
    tags_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output tags as JSON",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("show", help="Show the effective configuration")
    config_subparsers.add_parser("path", help="Show the config file in use")

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library log records to stderr at the requested level."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install yedgraph[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "summary":
            return summary.run(args)
        elif args.command == "export":
            return export.run(args)
        elif args.command == "tags":
            return tags.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
