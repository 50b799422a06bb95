"""Bookmark tree model shared by the parsers, merge and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from attrs import Factory, define

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable
    from datetime import datetime


class BookmarkParseError(ValueError):
    """Raised when an input stream cannot be read as a bookmark document."""


def _empty_str_list() -> list[str]:
    return []


@dataclass(slots=True)
class Bookmark:
    """Leaf entry pointing at a URL."""

    url: str
    title: str = ""
    tags: list[str] = field(default_factory=_empty_str_list)
    shortcut_url: str = ""
    add_date: datetime | None = None
    last_modified: datetime | None = None
    # Free text kept below the link; only the Org format carries it.
    description: str = ""

    def is_folder(self) -> bool:
        """Bookmarks are leaves."""
        return False


@define(slots=True)
class Folder:
    """Folder holding bookmarks and nested folders in document order."""

    title: str
    children: list[Node] = Factory(list)
    add_date: datetime | None = None
    last_modified: datetime | None = None

    def is_folder(self) -> bool:
        """Folders may hold children."""
        return True

    def add_child(self, node: Node) -> None:
        """Append a node to the folder's children."""
        self.children.append(node)

    def bookmarks(self) -> list[Bookmark]:
        """Direct child bookmarks, in order."""
        return [child for child in self.children if isinstance(child, Bookmark)]

    def subfolders(self) -> list[Folder]:
        """Direct child folders, in order."""
        return [child for child in self.children if isinstance(child, Folder)]


Node = Bookmark | Folder


def walk(node: Node, visitor: Callable[[Node, int], None], depth: int = 0) -> None:
    """Visit ``node`` and its descendants depth-first, pre-order.

    The visitor receives each node together with its depth, the starting node
    being reported at ``depth``. Children are visited left to right after their
    parent. Nesting depth is not bounded by the recursion limit.
    """
    stack: list[tuple[Node, int]] = [(node, depth)]
    while stack:
        current, level = stack.pop()
        visitor(current, level)
        if isinstance(current, Folder):
            stack.extend((child, level + 1) for child in reversed(current.children))


def count_nodes(node: Node) -> int:
    """Return the number of folders and bookmarks in the tree, root included."""
    total = 0
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        total += 1
        if isinstance(current, Folder):
            stack.extend(current.children)
    return total
