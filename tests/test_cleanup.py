"""Tests for duplicate removal and empty-folder pruning."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from orgmarks.cleanup import deduplicate, remove_empty_folders
from orgmarks.merge import merge_folders
from orgmarks.models import Bookmark, Folder, Node, walk

if TYPE_CHECKING:
    from collections.abc import Callable


def _urls(root: Folder) -> list[str]:
    found: list[str] = []

    def _collect(node: Node, _depth: int) -> None:
        if isinstance(node, Bookmark):
            found.append(node.url)

    walk(root, _collect)
    return found


def _dup_tree() -> Folder:
    return Folder(
        title="Root",
        children=[
            Bookmark(url="https://a.example", title="A first"),
            Folder(
                title="Nested",
                children=[
                    Bookmark(url="https://b.example", title="B first"),
                    Bookmark(url="https://a.example", title="A again"),
                ],
            ),
            Bookmark(url="https://b.example", title="B again"),
            Folder(title="Only dupes", children=[Bookmark(url="https://a.example", title="A 3")]),
            Bookmark(url="https://c.example", title="C"),
        ],
    )


def test_deduplicate_keeps_first_occurrence_across_folders() -> None:
    root = _dup_tree()
    removed = deduplicate(root)

    if removed != 3:  # noqa: PLR2004
        msg = f"Expected 3 removals, got {removed}"
        raise AssertionError(msg)
    if _urls(root) != ["https://a.example", "https://b.example", "https://c.example"]:
        msg = f"Unexpected survivors {_urls(root)}"
        raise AssertionError(msg)
    titles = [child.title for child in root.children]
    if titles != ["A first", "Nested", "Only dupes", "C"]:
        msg = f"Folders must be kept even when emptied: {titles}"
        raise AssertionError(msg)
    nested = root.children[1]
    if not isinstance(nested, Folder) or [c.title for c in nested.children] != ["B first"]:
        raise AssertionError("Earlier bookmark inside a folder should win over a later root one")


def test_deduplicate_is_idempotent() -> None:
    root = _dup_tree()
    deduplicate(root)
    once = copy.deepcopy(root)
    if deduplicate(root) != 0:
        raise AssertionError("Second pass should remove nothing")
    if root != once:
        raise AssertionError("Second pass changed the tree")


def test_merge_then_deduplicate_prefers_first_input() -> None:
    first = Folder(title="Root", children=[Bookmark(url="https://same.example", title="Mine")])
    second = Folder(title="Root", children=[Bookmark(url="https://same.example", title="Theirs")])
    merged = merge_folders(first, second)
    deduplicate(merged)
    if [child.title for child in merged.children] != ["Mine"]:
        msg = f"First input should win, got {merged.children}"
        raise AssertionError(msg)


def test_remove_empty_folders_collapses_chains() -> None:
    root = Folder(
        title="Root",
        children=[
            Folder(title="Outer", children=[Folder(title="Middle", children=[Folder(title="Inner")])]),
            Folder(title="Keep", children=[Folder(title="Gone"), Bookmark(url="https://k.example")]),
            Bookmark(url="https://root.example", title="Root bookmark"),
        ],
    )
    removed = remove_empty_folders(root)

    if removed != 4:  # noqa: PLR2004
        msg = f"Expected 4 folders removed, got {removed}"
        raise AssertionError(msg)
    if [child.title for child in root.children] != ["Keep", "Root bookmark"]:
        msg = f"Unexpected root children {root.children}"
        raise AssertionError(msg)
    keep = root.children[0]
    if not isinstance(keep, Folder) or len(keep.children) != 1:
        raise AssertionError("Empty child of Keep should be gone, bookmark kept")


def test_cleanup_after_dedupe_leaves_no_empty_folder() -> None:
    root = _dup_tree()
    deduplicate(root)
    remove_empty_folders(root)

    empties: list[str] = []

    def _check(node: Node, depth: int) -> None:
        if isinstance(node, Folder) and depth > 0 and not node.children:
            empties.append(node.title)

    walk(root, _check)
    if empties:
        msg = f"Empty folders left behind: {empties}"
        raise AssertionError(msg)


def test_empty_root_is_kept() -> None:
    root = Folder(title="Root", children=[Folder(title="Empty")])
    remove_empty_folders(root)
    if root.children:
        raise AssertionError("Empty child should be removed")
    if root.title != "Root":
        raise AssertionError("Root itself is never removed")


def test_cleanup_handles_deep_trees(folder_chain: Callable[..., Folder]) -> None:
    depth = 3000
    root = folder_chain(depth, Bookmark(url="https://leaf.example", title="Leaf"))
    root.add_child(Bookmark(url="https://leaf.example", title="Later copy"))
    root.add_child(folder_chain(depth))

    if deduplicate(root) != 1:
        raise AssertionError("The later copy should be the only duplicate")
    if remove_empty_folders(root) != depth + 1:
        msg = "The empty chain and its root should be removed"
        raise AssertionError(msg)
    if len(root.children) != 1:
        msg = f"Only the chain holding the leaf should remain, got {len(root.children)}"
        raise AssertionError(msg)
