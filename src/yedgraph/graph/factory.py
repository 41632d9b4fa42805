"""Graph Factory - Entry points for building Documents.

This module provides the standard ways to obtain a Document, from an
already-decoded section tree or from raw .xgml input. Commands should use
these instead of wiring the decoder and builder together themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO

from yedgraph.graph.builder import BuildOptions, Document, DocumentBuilder
from yedgraph.sections import Section
from yedgraph.sections.xml_reader import read_sections

logger = logging.getLogger(__name__)


def _resolve_options(
    options: BuildOptions | None,
    config: dict[str, Any] | None,
) -> BuildOptions:
    """Pick build options; explicit options win over configuration."""
    if options is not None:
        return options
    if config is not None:
        return BuildOptions.from_dict(config.get("build", {}))
    return BuildOptions()


def parse(
    root: Section,
    options: BuildOptions | None = None,
    config: dict[str, Any] | None = None,
) -> Document:
    """Build a Document from a decoded section tree.

    Args:
        root: The root section (must be named "xgml").
        options: Build policies (optional).
        config: Configuration dict whose ``build`` table supplies the
            policies when options is not given (optional).

    Returns:
        The complete Document.

    Raises:
        XGMLError: If the tree does not describe a valid graph.
    """
    return DocumentBuilder(_resolve_options(options, config)).build(root)


def parse_bytes(
    data: bytes | str,
    options: BuildOptions | None = None,
    config: dict[str, Any] | None = None,
) -> Document:
    """Decode raw .xgml content and build its Document."""
    return parse(read_sections(data), options=options, config=config)


def parse_stream(
    stream: BinaryIO,
    options: BuildOptions | None = None,
    config: dict[str, Any] | None = None,
) -> Document:
    """Read a binary stream to the end and build its Document."""
    return parse_bytes(stream.read(), options=options, config=config)


def parse_file(
    path: str | Path,
    options: BuildOptions | None = None,
    config: dict[str, Any] | None = None,
) -> Document:
    """Open an .xgml file and build its Document.

    Raises:
        OSError: If the file cannot be read.
        XGMLError: If the file is not a valid .xgml graph.
    """
    path = Path(path)
    logger.debug("Reading %s", path)
    with path.open("rb") as f:
        return parse_stream(f, options=options, config=config)


def load_document(
    path: str | Path,
    config: dict[str, Any] | None = None,
    config_path: Path | None = None,
) -> Document:
    """Build a Document from a file using the project configuration.

    This is the standard way for commands to obtain a Document.

    Args:
        path: The .xgml file.
        config: Pre-loaded config dict (optional).
        config_path: Path to config file (optional; auto-discovered otherwise).

    Priority:
        config > config_path > discovered .yedgraph.toml > defaults
    """
    if config is None:
        from yedgraph.config import get_config

        config = get_config(config_path)
    return parse_file(path, config=config)


__all__ = ["parse", "parse_bytes", "parse_stream", "parse_file", "load_document"]
