"""Labeler - line and tag decomposition of free-text labels.

State diagrams keep metadata in their labels, one ``key: value`` per line::

    Edge Foo
    tag1: monkey
    tag2: chimp

Nodes and edges both carry a Labeler built from their label text.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def split_lines(text: str) -> list[str]:
    """Split label text on newlines; empty text yields one empty line."""
    return text.split("\n")


def extract_tags(lines: list[str]) -> dict[str, str]:
    """Collect ``key: value`` pairs from label lines.

    Each line is split at its first colon and both halves are stripped.
    Lines without a colon are skipped; a later duplicate key wins.
    """
    tags: dict[str, str] = {}
    for line in lines:
        if ":" in line:
            key, value = line.split(":", 1)
            tags[key.strip()] = value.strip()
    return tags


@dataclass(frozen=True)
class Labeler:
    """A label split into lines and tags.

    Attributes:
        label: The label text as it appears in the file.
    """

    label: str = ""
    _lines: tuple[str, ...] = field(init=False, repr=False, compare=False)
    _tags: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lines = split_lines(self.label)
        object.__setattr__(self, "_lines", tuple(lines))
        object.__setattr__(self, "_tags", extract_tags(lines))

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def tags(self) -> Mapping[str, str]:
        """Read-only view of the label's tags."""
        return MappingProxyType(self._tags)

    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str:
        """Return one line of the label.

        Raises:
            IndexError: If index is outside [0, line_count()).
        """
        if not 0 <= index < len(self._lines):
            raise IndexError(f"Line {index} out of range (label has {len(self._lines)} lines)")
        return self._lines[index]

    def iter_lines(self) -> Iterator[str]:
        yield from self._lines

    def has_tag(self, key: str) -> bool:
        return key in self._tags

    def tag(self, key: str) -> str:
        """Return the value of a tag.

        Raises:
            KeyError: If the label has no such tag.
        """
        try:
            return self._tags[key]
        except KeyError:
            raise KeyError(f"Label has no tag '{key}'") from None

    def get_tag(self, key: str, default: str | None = None) -> str | None:
        """Return the value of a tag, or default if absent."""
        return self._tags.get(key, default)

    def __str__(self) -> str:
        return self.label


class Labeled:
    """Mixin giving nodes and edges direct access to their Labeler."""

    labeler: Labeler

    @property
    def label(self) -> str:
        return self.labeler.label

    @property
    def lines(self) -> tuple[str, ...]:
        return self.labeler.lines

    @property
    def tags(self) -> Mapping[str, str]:
        return self.labeler.tags

    def line_count(self) -> int:
        return self.labeler.line_count()

    def line(self, index: int) -> str:
        return self.labeler.line(index)

    def has_tag(self, key: str) -> bool:
        return self.labeler.has_tag(key)

    def tag(self, key: str) -> str:
        return self.labeler.tag(key)

    def get_tag(self, key: str, default: str | None = None) -> str | None:
        return self.labeler.get_tag(key, default)
