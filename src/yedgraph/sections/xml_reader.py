"""Decode .xgml markup into a section tree.

yEd writes graphs as nested ``<section name="...">`` elements holding
``<attribute key="..." type="...">text</attribute>`` leaves::

    <section name="xgml">
      <attribute key="Creator" type="String">yFiles</attribute>
      <section name="graph">
        <attribute key="hierarchic" type="int">1</attribute>
        ...
      </section>
    </section>

Any other element is ignored, as is the tag name of the root element.
"""

from __future__ import annotations

import codecs
import logging
import re
import xml.etree.ElementTree as ET
from typing import BinaryIO

from yedgraph.errors import XGMLSyntaxError
from yedgraph.sections import Attribute, Section

logger = logging.getLogger(__name__)

SECTION_TAG = "section"
ATTRIBUTE_TAG = "attribute"
DEFAULT_ENCODING = "utf-8"

_ENCODING_RE = re.compile(rb"""encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")


def split_declaration(data: bytes) -> tuple[bytes, bytes]:
    """Split data after the first ``?>``.

    Everything up to and including the first ``?>`` is treated as the
    declaration, whatever precedes it.

    Returns:
        (declaration, body); the declaration is empty when data has no ``?>``.
    """
    end = data.find(b"?>")
    if end < 0:
        return b"", data
    return data[: end + 2], data[end + 2 :]


def strip_declaration(data: bytes) -> bytes:
    """Drop everything up to and including the first ``?>``."""
    return split_declaration(data)[1]


def declared_encoding(declaration: bytes) -> str:
    """Return the codec named by a declaration's ``encoding`` pseudo-attribute.

    yEd writes ``encoding="Cp1252"``. A declaration without an encoding, or
    with one Python has no codec for, reads as UTF-8.
    """
    match = _ENCODING_RE.search(declaration)
    if match is None:
        return DEFAULT_ENCODING
    name = match.group(1).decode("ascii")
    try:
        return codecs.lookup(name).name
    except LookupError:
        logger.warning("Unknown declared encoding %r; reading as %s", name, DEFAULT_ENCODING)
        return DEFAULT_ENCODING


def section_from_element(element: ET.Element) -> Section:
    """Convert one ``<section>`` element (and its subtree) to a Section."""
    attributes: list[Attribute] = []
    children: list[Section] = []
    for child in element:
        if child.tag == ATTRIBUTE_TAG:
            attributes.append(
                Attribute(
                    key=child.get("key", ""),
                    declared_type=child.get("type", ""),
                    raw_text=child.text or "",
                )
            )
        elif child.tag == SECTION_TAG:
            children.append(section_from_element(child))
    return Section(
        name=element.get("name", ""),
        attributes=tuple(attributes),
        children=tuple(children),
    )


def read_sections(data: bytes | str) -> Section:
    """Decode a complete .xgml document into its root Section.

    Bytes are decoded with the encoding the declaration names (UTF-8 when
    it names none). Text is taken as already decoded; only its declaration
    is dropped.

    Args:
        data: Raw document bytes, or already-decoded text.

    Returns:
        The root Section (normally named "xgml").

    Raises:
        XGMLSyntaxError: If the document is not well-formed XML.
    """
    if isinstance(data, str):
        _, sep, rest = data.partition("?>")
        text = rest if sep else data
    else:
        declaration, body = split_declaration(data)
        encoding = declared_encoding(declaration)
        try:
            text = body.decode(encoding)
        except UnicodeDecodeError as e:
            raise XGMLSyntaxError(f"Document is not valid {encoding}: {e}") from e

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise XGMLSyntaxError(f"Malformed XML: {e}") from e

    section = section_from_element(root)
    logger.debug(
        "Decoded root section '%s' with %d attributes and %d children",
        section.name,
        len(section.attributes),
        len(section.children),
    )
    return section


def read_sections_from_stream(stream: BinaryIO) -> Section:
    """Read a binary stream to the end and decode it."""
    return read_sections(stream.read())


__all__ = [
    "declared_encoding",
    "read_sections",
    "read_sections_from_stream",
    "section_from_element",
    "split_declaration",
    "strip_declaration",
]
