"""Errors raised while decoding sections and building graphs.

Every failure in this package derives from XGMLError, so callers can catch
one type to reject a document. Each subclass also derives from the builtin
that best matches its meaning (KeyError for missing lookups, TypeError for
attribute type mismatches, ValueError for bad values) and carries its
details as attributes.
"""

from __future__ import annotations


class XGMLError(Exception):
    """Base class for all yedgraph errors."""


class XGMLSyntaxError(XGMLError, ValueError):
    """The input could not be decoded into a section tree."""


class InvalidRoot(XGMLError, ValueError):
    """Documents can only be made out of 'xgml' sections."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Documents can only be made out of 'xgml' sections, got '{name}'")


class InvalidGraphSection(XGMLError, ValueError):
    """Graphs can only be made out of 'graph' sections."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Graphs can only be made out of 'graph' sections, got '{name}'")


class InvalidNodeSection(XGMLError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Nodes can only be made out of 'node' sections, got '{name}'")


class InvalidEdgeSection(XGMLError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Edges can only be made out of 'edge' sections, got '{name}'")


class MissingGraphSection(XGMLError, ValueError):
    """The document root has no 'graph' child."""

    def __init__(self) -> None:
        super().__init__("Document has no 'graph' section")


class MissingAttribute(XGMLError, KeyError):
    """A required attribute is absent from a section.

    Attributes:
        section: Name of the section that was searched.
        key: The attribute key that was required.
    """

    def __init__(self, section: str, key: str) -> None:
        self.section = section
        self.key = key
        super().__init__(f"Section '{section}' has no attribute '{key}'")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class TypeMismatch(XGMLError, TypeError):
    """An attribute was read as a type other than the one it declares.

    Attributes:
        key: Attribute key.
        expected: Declared type the accessor requires ("int", "double", "String").
        actual: Declared type found on the attribute.
    """

    def __init__(self, key: str, expected: str, actual: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Tried to get attribute '{key}' of type {actual} as {expected}"
        )


class MalformedValue(XGMLError, ValueError):
    """A numeric attribute's text could not be parsed."""

    def __init__(self, key: str, raw_text: str) -> None:
        self.key = key
        self.raw_text = raw_text
        super().__init__(f"Attribute '{key}' has malformed value {raw_text!r}")


class MalformedColor(XGMLError, ValueError):
    """A '#RRGGBB' fill contains something other than hex digits."""

    def __init__(self, raw_text: str) -> None:
        self.raw_text = raw_text
        super().__init__(f"Malformed color {raw_text!r}")


class DanglingGroupReference(XGMLError, KeyError):
    """A node's gid names a node that does not exist."""

    def __init__(self, node_id: int, group_id: int) -> None:
        self.node_id = node_id
        self.group_id = group_id
        super().__init__(f"Node {node_id} references missing group {group_id}")

    def __str__(self) -> str:
        return str(self.args[0])


class DanglingEdgeReference(XGMLError, KeyError):
    """An edge endpoint names a node that does not exist."""

    def __init__(self, edge_endpoint_id: int) -> None:
        self.edge_endpoint_id = edge_endpoint_id
        super().__init__(f"Edge references missing node {edge_endpoint_id}")

    def __str__(self) -> str:
        return str(self.args[0])


class GroupReferenceNotAGroup(XGMLError, ValueError):
    """A node's gid names a node that is not flagged isGroup."""

    def __init__(self, node_id: int, group_id: int) -> None:
        self.node_id = node_id
        self.group_id = group_id
        super().__init__(f"Node {node_id} references node {group_id}, which is not a group")


class GroupCycle(XGMLError, ValueError):
    """Group containment loops back onto itself."""

    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"Group containment of node {node_id} forms a cycle")


class DuplicateNodeId(XGMLError, ValueError):
    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"Duplicate node id {node_id}")


__all__ = [
    "XGMLError",
    "XGMLSyntaxError",
    "InvalidRoot",
    "InvalidGraphSection",
    "InvalidNodeSection",
    "InvalidEdgeSection",
    "MissingGraphSection",
    "MissingAttribute",
    "TypeMismatch",
    "MalformedValue",
    "MalformedColor",
    "DanglingGroupReference",
    "DanglingEdgeReference",
    "GroupReferenceNotAGroup",
    "GroupCycle",
    "DuplicateNodeId",
]
