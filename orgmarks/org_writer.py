"""Functions for rendering a bookmark tree as an Org-mode outline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

from .config import ORG_TAG_COLUMN
from .models import Bookmark, Folder, Node


def render_org(root: Folder) -> str:
    """Render the children of ``root`` as Org headlines; the root is implicit."""
    lines: list[str] = []
    _render_children(root, lines)
    return "\n".join(lines)


def headline_title(title: str) -> str:
    """Collapse runs of whitespace, newlines included, so a title stays on its headline."""
    return " ".join(title.split())


def _render_children(folder: Folder, output: list[str]) -> None:
    stack: list[tuple[Node, int]] = [(child, 1) for child in reversed(folder.children)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Folder):
            output.append(f"{'*' * depth} {headline_title(node.title)}")
            if not node.children:
                output.append("")
            stack.extend((child, depth + 1) for child in reversed(node.children))
        else:
            _render_bookmark(node, output, depth)


def _render_bookmark(bookmark: Bookmark, output: list[str], depth: int) -> None:
    output.append(bookmark_headline(bookmark, depth))
    if bookmark.shortcut_url:
        output.append(f"#+SHORTCUTURL: {bookmark.shortcut_url}")
    output.append(f"[[{bookmark.url}]]")
    if bookmark.description:
        output.append(bookmark.description)
    output.append("")


def bookmark_headline(bookmark: Bookmark, depth: int) -> str:
    """Headline for a bookmark, tags right-aligned toward the tag column."""
    headline = f"{'*' * depth} {headline_title(bookmark.title)}"
    if not bookmark.tags:
        return headline
    joined = ":".join(bookmark.tags)
    padding = max(1, ORG_TAG_COLUMN - len(headline) - len(joined) - 2)
    return f"{headline}{' ' * padding}:{joined}:"


def write_bookmark_org(root: Folder, output_path: Path) -> None:
    """Write the bookmark tree to an Org file."""
    text = render_org(root)
    output_path.write_text(text + "\n" if text else "", encoding="utf-8")
