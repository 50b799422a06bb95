"""Combine two bookmark trees into one."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import Folder

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


def normalise_title(title: str) -> str:
    """Key used to decide whether two folders are the same folder."""
    return title.strip().lower()


def merge_folders(first: Folder, second: Folder) -> Folder:
    """Merge ``second`` into ``first`` and return a new folder.

    The result takes its title and dates from ``first``. Its children are, in
    order: the bookmarks of ``first``, the bookmarks of ``second``, the folders
    of ``first`` (merged with any folder of ``second`` whose title matches
    ignoring case and surrounding whitespace), then the unmatched folders of
    ``second``. Matched folder pairs are merged the same way, at any depth.

    Bookmarks therefore end up ahead of folders even if the inputs interleaved
    them. Keeping every bookmark of ``first`` ahead of ``second`` means a later
    :func:`orgmarks.cleanup.deduplicate` pass keeps the copy from ``first``.

    Child nodes are shared with the inputs, not copied.
    """
    merged = _empty_copy(first)
    pending: list[tuple[Folder, Folder, Folder]] = [(merged, first, second)]
    while pending:
        target, left, right = pending.pop()
        target.children.extend(left.bookmarks())
        target.children.extend(right.bookmarks())

        right_folders = right.subfolders()
        matched: set[str] = set()
        for folder in left.subfolders():
            key = normalise_title(folder.title)
            counterpart = _find_folder(right_folders, key)
            if counterpart is None:
                target.add_child(folder)
            else:
                LOGGER.debug("Merging folder %r with %r", folder.title, counterpart.title)
                combined = _empty_copy(folder)
                target.add_child(combined)
                pending.append((combined, folder, counterpart))
            matched.add(key)

        for folder in right_folders:
            if normalise_title(folder.title) not in matched:
                target.add_child(folder)

    return merged


def _empty_copy(folder: Folder) -> Folder:
    return Folder(
        title=folder.title,
        add_date=folder.add_date,
        last_modified=folder.last_modified,
    )


def _find_folder(folders: Sequence[Folder], key: str) -> Folder | None:
    for folder in folders:
        if normalise_title(folder.title) == key:
            return folder
    return None
