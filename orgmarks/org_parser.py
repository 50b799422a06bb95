"""Parse Org-mode bookmark outlines into a bookmark tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .config import ROOT_TITLE
from .models import Bookmark, BookmarkParseError, Folder, count_nodes

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

LOGGER = logging.getLogger(__name__)

# Left in place when a UTF-8 file with a byte order mark is read as plain "utf-8".
_BOM = "\ufeff"


def _empty_str_list() -> list[str]:
    return []


@dataclass(slots=True)
class Headline:
    """A ``*`` line split into nesting level, title and trailing tags."""

    level: int
    title: str
    tags: list[str] = field(default_factory=_empty_str_list)


@dataclass(slots=True)
class ContentBlock:
    """What the lines between two headlines contribute to a node."""

    url: str = ""
    shortcut_url: str = ""
    description_lines: list[str] = field(default_factory=_empty_str_list)

    @property
    def description(self) -> str:
        return "\n".join(self.description_lines)


def parse_headline(line: str) -> Headline | None:
    """Return the headline on ``line``, or ``None`` if it is not one."""
    if not line.startswith("*"):
        return None

    level = len(line) - len(line.lstrip("*"))
    rest = line[level:].lstrip(" ").strip()

    first_colon = rest.find(":")
    last_colon = rest.rfind(":")
    if first_colon == -1 or last_colon <= 0 or first_colon >= last_colon:
        return Headline(level=level, title=rest)

    tag_text = rest[first_colon + 1 : last_colon]
    tags = [tag for tag in tag_text.split(":") if tag]
    return Headline(level=level, title=rest[:first_colon].strip(), tags=tags)


def parse_property(line: str) -> tuple[str, str] | None:
    """Parse ``#+KEY: value`` into an upper-cased key and its value."""
    stripped = line.strip()
    if not stripped.startswith("#+"):
        return None
    key, sep, value = stripped[2:].partition(":")
    if not sep:
        return None
    return key.strip().upper(), value.strip()


def parse_link(line: str) -> tuple[str, str] | None:
    """Parse the first ``[[URL]]`` or ``[[URL][Title]]`` link on ``line``.

    Returns ``(url, title)``; the title is empty for the simple form.
    """
    start = line.find("[[")
    if start == -1:
        return None
    end = line.find("]]", start)
    if end == -1:
        return None

    content = line[start + 2 : end]
    parts = content.split("][")
    if len(parts) == 2:  # noqa: PLR2004
        return parts[0].strip(), parts[1].strip()
    return content.strip(), ""


def is_description_line(line: str) -> bool:
    """Plain text that is neither a headline, a property nor a link."""
    stripped = line.strip()
    if not stripped:
        return False
    return not stripped.startswith(("*", "#+", "[["))


def scan_content(lines: Iterable[str]) -> ContentBlock:
    """Collect link, shortcut and description from a headline's content lines."""
    block = ContentBlock()
    for line in lines:
        link = parse_link(line)
        if link is not None and not block.url:
            # Only the URL is kept; the headline title always wins over the link's.
            block.url = link[0]

        prop = parse_property(line)
        if prop is not None and prop[0] == "SHORTCUTURL":
            block.shortcut_url = prop[1]

        if is_description_line(line):
            block.description_lines.append(line.strip())
    return block


class _OutlineBuilder:
    """Place headlines under the right ancestor using paired folder/level stacks."""

    def __init__(self) -> None:
        self.root = Folder(title=ROOT_TITLE)
        self._folders: list[Folder] = [self.root]
        self._levels: list[int] = [0]

    def add(self, headline: Headline, content: list[str]) -> None:
        if not headline.title:
            LOGGER.debug("Skipping level %d headline without a title", headline.level)
            return

        block = scan_content(content)

        while len(self._levels) > 1 and self._levels[-1] >= headline.level:
            self._folders.pop()
            self._levels.pop()

        if not self._folders:
            self._folders = [Folder(title=ROOT_TITLE)]
            self._levels = [0]

        parent = self._folders[-1]
        if block.url:
            parent.add_child(
                Bookmark(
                    url=block.url,
                    title=headline.title,
                    tags=headline.tags,
                    shortcut_url=block.shortcut_url,
                    description=block.description,
                ),
            )
            return

        folder = Folder(title=headline.title)
        parent.add_child(folder)
        self._folders.append(folder)
        self._levels.append(headline.level)


def parse_bookmark_org(source: Iterable[str]) -> Folder:
    """Parse an Org outline into a folder tree.

    ``source`` is a text stream or any iterable of lines. A headline becomes a
    bookmark when its content block contains a link, otherwise a folder. Text
    before the first headline is ignored.
    """
    builder = _OutlineBuilder()
    current: Headline | None = None
    content: list[str] = []

    try:
        for line_number, raw_line in enumerate(source):
            line = raw_line.rstrip("\r\n")
            if line_number == 0:
                line = line.removeprefix(_BOM)
            headline = parse_headline(line)
            if headline is None:
                content.append(line)
                continue
            if current is not None:
                builder.add(current, content)
            current = headline
            content = []
    except UnicodeDecodeError as exc:
        msg = f"Org input is not valid text: {exc}"
        raise BookmarkParseError(msg) from exc

    if current is not None:
        builder.add(current, content)

    LOGGER.info("Parsed %d nodes from Org outline", count_nodes(builder.root) - 1)
    return builder.root
