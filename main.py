"""CLI entry point for orgmarks.

Converts browser bookmark HTML exports to Org-mode outlines and back, and merges
several bookmark files into a single Org outline.
"""

from __future__ import annotations

# Standard library imports (alphabetical within groups)
import argparse
import logging
import os
import sys
from typing import TYPE_CHECKING

# Third-party imports
from dotenv import load_dotenv

# Internal imports
from orgmarks.cleanup import deduplicate, remove_empty_folders
from orgmarks.config import VERBOSE_ENV_VAR, VERSION
from orgmarks.html_parser import parse_bookmark_html
from orgmarks.html_writer import write_bookmark_html
from orgmarks.merge import merge_folders
from orgmarks.models import BookmarkParseError
from orgmarks.org_parser import parse_bookmark_org
from orgmarks.org_writer import write_bookmark_org
from orgmarks.validator import (
    BookmarkFormat,
    ConversionRequest,
    UnsupportedFormatError,
    validate_request,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence
    from pathlib import Path

    from orgmarks.models import Folder

LOGGER = logging.getLogger("orgmarks")

USAGE = """Usage: orgmarks -i <input-file> [-i <input-file2> ...] -o <output-file>

Examples:
  orgmarks -i bookmarks.html -o bookmarks.org
  orgmarks -i bookmarks.org -o bookmarks.html
  orgmarks -i file1.org -i file2.org -o merged.org    # Merge multiple files
  orgmarks -i organized.org -i new.html -o final.org  # Merge different formats"""


def configure_logging(*, verbose: bool) -> None:
    """Configure root logging (debug when verbose)."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgmarks",
        description="Convert bookmarks between Netscape HTML and Org-mode",
        usage="orgmarks -i <input-file> [-i <input-file2> ...] -o <output-file> [options]",
    )
    parser.add_argument(
        "-i",
        dest="inputs",
        action="append",
        default=[],
        metavar="FILE",
        help="Input file (can be specified multiple times for merging)",
    )
    parser.add_argument("-o", dest="output", metavar="FILE", help="Output file (required)")
    parser.add_argument(
        "-deduplicate",
        dest="deduplicate",
        action="store_true",
        help="Remove duplicate bookmarks (keep first occurrence)",
    )
    parser.add_argument(
        "-delete-empty",
        dest="delete_empty",
        action="store_true",
        help="Remove empty folders after processing",
    )
    parser.add_argument(
        "-version", dest="version", action="store_true", help="Show version information",
    )
    parser.add_argument(
        "-verbose",
        dest="verbose",
        action="store_true",
        help=f"Enable debug logging (or set {VERBOSE_ENV_VAR}=1)",
    )
    return parser


def parse_file(path: Path) -> Folder:
    """Parse an HTML or Org bookmark file, chosen by extension."""
    file_format = BookmarkFormat.from_path(path)
    if file_format is BookmarkFormat.HTML:
        with path.open("rb") as fh:
            return parse_bookmark_html(fh)
    if file_format is BookmarkFormat.ORG:
        with path.open(encoding="utf-8-sig") as fh:
            return parse_bookmark_org(fh)
    msg = f"Unsupported file format: {path.suffix}"
    raise UnsupportedFormatError(msg)


def _load(path: Path) -> Folder:
    try:
        return parse_file(path)
    except BookmarkParseError as exc:
        msg = f"failed to parse {path}: {exc}"
        raise BookmarkParseError(msg) from exc


def build_tree(request: ConversionRequest) -> Folder:
    """Parse every input and merge them left to right."""
    root = _load(request.inputs[0])
    for path in request.inputs[1:]:
        LOGGER.debug("Merging %s", path)
        root = merge_folders(root, _load(path))
    return root


def apply_cleanup(root: Folder, *, dedupe: bool, delete_empty: bool) -> None:
    """Run the optional cleanup passes; deduplication goes first."""
    if dedupe:
        deduplicate(root)
    if delete_empty:
        remove_empty_folders(root)


def write_tree(root: Folder, request: ConversionRequest) -> None:
    """Render the tree in the output file's format."""
    if request.output_format is BookmarkFormat.HTML:
        write_bookmark_html(root, request.output)
    else:
        write_bookmark_org(root, request.output)


def confirm_overwrite(path: Path) -> bool:
    """Ask on stderr whether an existing file may be replaced.

    Raises EOFError when stdin is closed before an answer arrives.
    """
    sys.stderr.write(f"orgmarks: overwrite '{path}'? ")
    sys.stderr.flush()
    response = sys.stdin.readline()
    if not response:
        msg = "no answer on standard input"
        raise EOFError(msg)
    return response.strip().lower() in {"y", "yes"}


def run(request: ConversionRequest, *, dedupe: bool, delete_empty: bool) -> None:
    """Parse, optionally merge and clean, then write the output file."""
    root = build_tree(request)
    apply_cleanup(root, dedupe=dedupe, delete_empty=delete_empty)
    write_tree(root, request)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the orgmarks CLI; returns the process exit code."""
    load_dotenv()
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1

    if args.version:
        print(f"orgmarks version {VERSION}")  # noqa: T201
        return 0

    configure_logging(verbose=args.verbose or _env_flag(VERBOSE_ENV_VAR))

    if not args.inputs or not args.output:
        print(USAGE, file=sys.stderr)  # noqa: T201
        return 1

    try:
        request = validate_request(args.inputs, args.output)
    except UnsupportedFormatError as exc:
        LOGGER.error("Error: %s", exc)  # noqa: TRY400
        return 1

    for path in request.inputs:
        if not path.exists():
            LOGGER.error("Error: Input file '%s' does not exist", path)
            return 1

    if request.output.exists():
        try:
            proceed = confirm_overwrite(request.output)
        except EOFError as exc:
            LOGGER.error("Error reading input: %s", exc)  # noqa: TRY400
            return 1
        if not proceed:
            print("Operation cancelled", file=sys.stderr)  # noqa: T201
            return 0

    try:
        run(request, dedupe=args.deduplicate, delete_empty=args.delete_empty)
    except (OSError, BookmarkParseError, UnsupportedFormatError) as exc:
        LOGGER.error("Error: %s", exc)  # noqa: TRY400
        return 1

    if request.is_merge:
        LOGGER.info("Successfully merged %d files → %s", len(request.inputs), request.output)
    else:
        LOGGER.info("Successfully converted %s → %s", request.inputs[0], request.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
