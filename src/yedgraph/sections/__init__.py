"""Generic section tree consumed by the graph builder.

A section tree is the decoded form of an .xgml document:

- Attribute: a (key, declared type, raw text) triple with type-checked access
- Section: a named node holding ordered attributes and ordered child sections

Sections carry no graph semantics; see yedgraph.graph.builder for that.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from yedgraph.errors import MalformedValue, MissingAttribute, TypeMismatch


class AttributeType(Enum):
    """Declared attribute types, spelled as they appear in .xgml files."""

    INT = "int"
    DOUBLE = "double"
    STRING = "String"


# ASCII decimal digits with an optional sign, and nothing else
_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Attribute:
    """A typed key/value pair inside a section.

    The declared type is kept as the raw string from the input so that an
    unexpected type is still reported verbatim by TypeMismatch.

    Attributes:
        key: Attribute name, unique within its section.
        declared_type: Type name from the input ("int", "double", "String").
        raw_text: Undecoded value text.
    """

    key: str
    declared_type: str
    raw_text: str = ""

    def _require(self, expected: AttributeType) -> None:
        if self.declared_type != expected.value:
            raise TypeMismatch(self.key, expected.value, self.declared_type)

    def as_int(self) -> int:
        """Return the value of an "int" attribute.

        Raises:
            TypeMismatch: If the attribute is not declared "int".
            MalformedValue: If the text is not a plain decimal integer.
        """
        self._require(AttributeType.INT)
        if _INT_RE.fullmatch(self.raw_text) is None:
            raise MalformedValue(self.key, self.raw_text)
        return int(self.raw_text)

    def as_float(self) -> float:
        """Return the value of a "double" attribute.

        Raises:
            TypeMismatch: If the attribute is not declared "double".
            MalformedValue: If the text is not a number. Surrounding
                whitespace and digit-group underscores are rejected.
        """
        self._require(AttributeType.DOUBLE)
        if "_" in self.raw_text or self.raw_text != self.raw_text.strip():
            raise MalformedValue(self.key, self.raw_text)
        try:
            return float(self.raw_text)
        except ValueError:
            raise MalformedValue(self.key, self.raw_text) from None

    def as_str(self) -> str:
        """Return the value of a "String" attribute.

        Raises:
            TypeMismatch: If the attribute is not declared "String".
        """
        self._require(AttributeType.STRING)
        return self.raw_text

    def value(self) -> Any:
        """Return the value decoded according to its declared type."""
        if self.declared_type == AttributeType.INT.value:
            return self.as_int()
        if self.declared_type == AttributeType.DOUBLE.value:
            return self.as_float()
        return self.raw_text


@dataclass(frozen=True)
class Section:
    """A named node in the section tree.

    The key lookup table is built once at construction; sections are never
    modified afterwards.

    Attributes:
        name: Section name ("xgml", "graph", "node", "edge", "graphics", ...).
        attributes: Attributes in document order.
        children: Child sections in document order.
    """

    name: str
    attributes: tuple[Attribute, ...] = ()
    children: tuple[Section, ...] = ()
    _by_key: dict[str, Attribute] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # Accept any iterable from callers but store tuples
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "_by_key", {a.key: a for a in self.attributes})

    def get_attribute(self, key: str) -> Attribute | None:
        """Find an attribute by key.

        Returns:
            The Attribute, or None if the section has no such key.
        """
        return self._by_key.get(key)

    def require_attribute(self, key: str) -> Attribute:
        """Find an attribute that must be present.

        Raises:
            MissingAttribute: If the section has no such key.
        """
        attr = self._by_key.get(key)
        if attr is None:
            raise MissingAttribute(self.name, key)
        return attr

    def has_attribute(self, key: str) -> bool:
        return key in self._by_key

    def iter_children(self, name: str | None = None) -> Iterator[Section]:
        """Iterate child sections, optionally only those with a given name."""
        for child in self.children:
            if name is None or child.name == name:
                yield child

    def first_child(self, name: str) -> Section | None:
        """Return the first child section with the given name, or None."""
        return next(self.iter_children(name), None)


__all__ = [
    "Attribute",
    "AttributeType",
    "Section",
]
