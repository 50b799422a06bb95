"""Duplicate removal and empty-folder pruning for bookmark trees."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import Folder

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator

    from .models import Node

LOGGER = logging.getLogger(__name__)


def deduplicate(root: Folder) -> int:
    """Drop every bookmark whose URL already appeared earlier in the tree.

    The tree is scanned depth-first, pre-order, with a single set of seen URLs
    shared across all folders, so the first occurrence anywhere wins. Folders
    are always kept, even when this leaves them empty.

    Returns the number of bookmarks removed.
    """
    seen: set[str] = set()
    removed = 0
    # Each entry: folder, iterator over its original children, children kept so far.
    stack: list[tuple[Folder, Iterator[Node], list[Node]]] = [(root, iter(root.children), [])]
    while stack:
        folder, children, kept = stack[-1]
        child = next(children, None)
        if child is None:
            folder.children = kept
            stack.pop()
        elif isinstance(child, Folder):
            kept.append(child)
            stack.append((child, iter(child.children), []))
        elif child.url in seen:
            LOGGER.debug("Dropping duplicate %s (%r)", child.url, child.title)
            removed += 1
        else:
            seen.add(child.url)
            kept.append(child)

    if removed:
        LOGGER.info("Removed %d duplicate bookmarks", removed)
    return removed


def remove_empty_folders(root: Folder) -> int:
    """Remove folders left without children, innermost first.

    Nested folders are cleaned before their parent is inspected, so a chain of
    folders that only contain empty folders disappears in one call. The root
    itself is never removed. Returns the number of folders removed.
    """
    removed = 0
    stack: list[tuple[Folder, Iterator[Node]]] = [(root, iter(root.children))]
    while stack:
        folder, children = stack[-1]
        child = next(children, None)
        if isinstance(child, Folder):
            stack.append((child, iter(child.children)))
            continue
        if child is not None:
            continue

        # Every subfolder of ``folder`` is final by now.
        stack.pop()
        kept: list[Node] = []
        for node in folder.children:
            if isinstance(node, Folder) and not node.children:
                LOGGER.debug("Removing empty folder %r", node.title)
                removed += 1
            else:
                kept.append(node)
        folder.children = kept
    return removed
