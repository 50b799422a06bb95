"""Functions for rendering a bookmark tree as Netscape bookmark HTML."""

from __future__ import annotations

import html
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from datetime import datetime
    from pathlib import Path

from .models import Bookmark, Folder, Node

HTML_HEADER = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
"""


def escape_html(text: str) -> str:
    """Escape ``& < > "``, ampersand first so nothing is escaped twice."""
    return html.escape(text, quote=False).replace('"', "&quot;")


def render_html(root: Folder) -> str:
    """Render the bookmark tree as HTML; the root becomes the outer list."""
    lines: list[str] = [HTML_HEADER.strip(), "<DL><p>"]
    _render_children(root, lines)
    lines.append("</DL><p>")
    return "\n".join(lines)


def _render_children(folder: Folder, output: list[str]) -> None:
    # A ``None`` entry closes the list of the folder opened at that depth.
    stack: list[tuple[Node | None, int]] = [(child, 1) for child in reversed(folder.children)]
    while stack:
        node, depth = stack.pop()
        indent = "    " * depth
        if node is None:
            output.append(f"{indent}</DL><p>")
        elif isinstance(node, Folder):
            output.append(
                f'{indent}<DT><H3 ADD_DATE="{_timestamp(node.add_date)}" '
                f'LAST_MODIFIED="{_timestamp(node.last_modified)}">'
                f"{escape_html(node.title)}</H3>",
            )
            output.append(f"{indent}<DL><p>")
            stack.append((None, depth))
            stack.extend((child, depth + 1) for child in reversed(node.children))
        else:
            output.append(f"{indent}<DT><A {_anchor_attrs(node)}>{escape_html(node.title)}</A>")


def _anchor_attrs(bookmark: Bookmark) -> str:
    attrs = [
        f'HREF="{escape_html(bookmark.url)}"',
        f'ADD_DATE="{_timestamp(bookmark.add_date)}"',
        f'LAST_MODIFIED="{_timestamp(bookmark.last_modified)}"',
    ]
    if bookmark.tags:
        attrs.append(f'TAGS="{escape_html(",".join(bookmark.tags))}"')
    if bookmark.shortcut_url:
        attrs.append(f'SHORTCUTURL="{escape_html(bookmark.shortcut_url)}"')
    return " ".join(attrs)


def _timestamp(value: datetime | None) -> int:
    # Browsers expect a date on every entry; unknown dates become "now".
    if value is None:
        return int(time.time())
    return int(value.timestamp())


def write_bookmark_html(root: Folder, output_path: Path) -> None:
    """Write the bookmark tree to an HTML file."""
    output_path.write_text(render_html(root) + "\n", encoding="utf-8")
