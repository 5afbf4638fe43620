from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree import ElementTree

from s3lite.errors import MarkupParseError

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

__all__ = [
    "Node",
    "parse_xml",
]


def _qualified_name(name: str, ns: str | None) -> str:
    if ns is None:
        return name
    return f"{{{ns}}}{name}"


class Node:
    """A read-only view over a parsed XML element."""

    __slots__ = ("_element", )

    def __init__(self, element: Element):
        self._element = element

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tag={self.tag!r})"

    @property
    def tag(self) -> str:
        return self._element.tag

    @property
    def text(self) -> str:
        """Text directly inside the node, excluding text of nested elements."""
        element = self._element
        return (element.text or "") + "".join(child.tail or "" for child in element)

    def child(self, name: str, ns: str | None = None) -> Node | None:
        """Returns the first direct child with a given local name, if any."""
        element = self._element.find(_qualified_name(name, ns))
        if element is None:
            return None
        return self.__class__(element)

    def children(self, name: str, ns: str | None = None) -> list[Node]:
        """Returns all direct children with a given local name in document order."""
        return [
            self.__class__(element)
            for element in self._element.findall(_qualified_name(name, ns))
        ]


def parse_xml(text: str) -> Node:
    """
    Parses XML document and returns its root node.

    Raises:
        MarkupParseError: If document is malformed.
    """
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        line, column = exc.position
        raise MarkupParseError(line, column, str(exc)) from exc
    return Node(root)
