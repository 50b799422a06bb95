"""Global configuration constants for orgmarks."""

from __future__ import annotations

VERSION: str = "1.0.0"

# Title given to the synthetic root folder created by both parsers.
ROOT_TITLE: str = "Bookmarks"

# Org headlines right-align their tag suffix toward this column.
ORG_TAG_COLUMN: int = 80

# Firefox live-query bookmarks; they point nowhere and are never converted.
PLACE_URL_PREFIX: str = "place:"

HTML_EXTENSIONS: frozenset[str] = frozenset({".html", ".htm"})
ORG_EXTENSION: str = ".org"

# Environment variable switching on debug logging (also read from .env).
VERBOSE_ENV_VAR: str = "ORGMARKS_VERBOSE"
