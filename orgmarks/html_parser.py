"""Parse a Netscape bookmark HTML export into a bookmark tree.

Browser exports are not well-formed HTML (``<DT>`` and ``<p>`` are never
closed), so the file is read as a flat stream of tokens rather than a document
tree. Folder nesting is tracked with an explicit stack: an ``<H3>`` pushes a new
folder and the next ``</DL>`` pops it.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from html.parser import HTMLParser
from typing import IO, TYPE_CHECKING

from bs4 import UnicodeDammit

from .config import PLACE_URL_PREFIX, ROOT_TITLE
from .models import Bookmark, BookmarkParseError, Folder, count_nodes

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping

LOGGER = logging.getLogger(__name__)


class TokenKind(Enum):
    """Kinds of tokens produced by the bookmark tokenizer."""

    START_TAG = "start"
    END_TAG = "end"
    TEXT = "text"
    EOF = "eof"


@dataclass(slots=True)
class Token:
    """Single lexical unit of the bookmark file."""

    kind: TokenKind
    data: str = ""
    attrs: dict[str, str] = field(default_factory=dict)


class _TokenCollector(HTMLParser):
    """Record tokenizer events in document order.

    Tag and attribute names arrive lower-cased; character references are
    already resolved in both text and attribute values.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: deque[Token] = deque()

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        values = {name: value or "" for name, value in attrs}
        self.tokens.append(Token(TokenKind.START_TAG, tag, values))

    def handle_endtag(self, tag: str) -> None:
        self.tokens.append(Token(TokenKind.END_TAG, tag))

    def handle_data(self, data: str) -> None:
        self.tokens.append(Token(TokenKind.TEXT, data))


class TokenStream:
    """Pull-style access to the tokens of a bookmark file."""

    def __init__(self, markup: str) -> None:
        collector = _TokenCollector()
        collector.feed(markup)
        collector.close()
        self._tokens = collector.tokens

    def next(self) -> Token:
        """Return the next token, or an EOF token once the input is exhausted."""
        if self._tokens:
            return self._tokens.popleft()
        return Token(TokenKind.EOF)

    def read_text(self) -> str:
        """Consume the text run following a start tag.

        Text is collected up to the next end tag, whichever element it closes,
        or the end of input. Start tags in between are skipped.
        """
        parts: list[str] = []
        while True:
            token = self.next()
            if token.kind is TokenKind.TEXT:
                parts.append(token.data)
            elif token.kind in {TokenKind.END_TAG, TokenKind.EOF}:
                break
        return "".join(parts)


def parse_bookmark_html(source: IO[bytes] | IO[str]) -> Folder:
    """Parse a Netscape bookmark export into a folder tree.

    Raw bytes are decoded using the charset the file declares, falling back to
    UTF-8. Errors raised while reading ``source`` propagate to the caller.
    """
    stream = TokenStream(_decode(source.read()))
    root = Folder(title=ROOT_TITLE)
    folder_stack: list[Folder] = [root]

    while True:
        token = stream.next()
        if token.kind is TokenKind.EOF:
            break

        if token.kind is TokenKind.START_TAG and token.data == "h3":
            folder = _folder_from_attrs(token.attrs)
            folder.title = stream.read_text().strip()
            if not folder_stack:
                folder_stack.append(root)
            folder_stack[-1].add_child(folder)
            folder_stack.append(folder)
        elif token.kind is TokenKind.START_TAG and token.data == "a":
            bookmark = _bookmark_from_attrs(token.attrs)
            # The title run is consumed even for skipped entries to stay in sync.
            bookmark.title = stream.read_text().strip()
            if bookmark.url.startswith(PLACE_URL_PREFIX):
                LOGGER.debug("Skipping place query %s", bookmark.url)
                continue
            if not bookmark.url:
                LOGGER.debug("Skipping anchor with empty href (%r)", bookmark.title)
                continue
            if not folder_stack:
                folder_stack.append(root)
            folder_stack[-1].add_child(bookmark)
        elif token.kind is TokenKind.END_TAG and token.data == "dl":
            if len(folder_stack) > 1:
                folder_stack.pop()

    LOGGER.info("Parsed %d nodes from bookmark HTML", count_nodes(root) - 1)
    return root


def _decode(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    dammit = UnicodeDammit(data, user_encodings=["utf-8"], is_html=True)
    if dammit.unicode_markup is None:
        msg = "Unable to determine the character encoding of the bookmark HTML"
        raise BookmarkParseError(msg)
    LOGGER.debug("Decoded bookmark HTML as %s", dammit.original_encoding)
    return dammit.unicode_markup


def _folder_from_attrs(attrs: Mapping[str, str]) -> Folder:
    return Folder(
        title="",
        add_date=_parse_timestamp(attrs.get("add_date")),
        last_modified=_parse_timestamp(attrs.get("last_modified")),
    )


def _bookmark_from_attrs(attrs: Mapping[str, str]) -> Bookmark:
    # ICON / ICON_URI are deliberately not read.
    raw_tags = attrs.get("tags", "")
    return Bookmark(
        url=attrs.get("href", ""),
        tags=[tag.strip() for tag in raw_tags.split(",") if tag.strip()],
        shortcut_url=attrs.get("shortcuturl", ""),
        add_date=_parse_timestamp(attrs.get("add_date")),
        last_modified=_parse_timestamp(attrs.get("last_modified")),
    )


def _parse_timestamp(value: str | None) -> datetime | None:
    """Convert Unix epoch seconds to an aware datetime; junk becomes ``None``."""
    if not value:
        return None
    try:
        seconds = int(value.strip())
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
