"""Validation of requested conversions before any file is touched."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from .config import HTML_EXTENSIONS, ORG_EXTENSION


class UnsupportedFormatError(ValueError):
    """Raised when the input/output file types cannot be converted."""


class BookmarkFormat(str, Enum):
    """File formats orgmarks reads and writes."""

    HTML = "html"
    ORG = "org"

    @classmethod
    def from_path(cls, path: Path) -> BookmarkFormat | None:
        """Detect the format from the file extension, ignoring case."""
        suffix = path.suffix.lower()
        if suffix in HTML_EXTENSIONS:
            return cls.HTML
        if suffix == ORG_EXTENSION:
            return cls.ORG
        return None


class ConversionRequest(BaseModel):
    """Input and output files for a single run.

    One input means a format conversion (HTML to Org or Org to HTML); several
    inputs mean a merge, which always produces Org.
    """

    inputs: list[Path]
    output: Path

    @field_validator("inputs")
    @classmethod
    def _require_inputs(cls, value: list[Path]) -> list[Path]:
        if not value:
            msg = "At least one input file is required"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _check_formats(self) -> ConversionRequest:
        output_suffix = self.output.suffix.lower()
        if self.is_merge:
            if output_suffix != ORG_EXTENSION:
                msg = "When merging multiple files, output must be .org format"
                raise ValueError(msg)
            for path in self.inputs:
                if BookmarkFormat.from_path(path) is None:
                    msg = f"Unsupported file format: {path.suffix or path.name}"
                    raise ValueError(msg)
            return self

        input_suffix = self.inputs[0].suffix.lower()
        if input_suffix == output_suffix:
            msg = "Input and output must have different formats"
            raise ValueError(msg)
        source = BookmarkFormat.from_path(self.inputs[0])
        target = BookmarkFormat.from_path(self.output)
        if source is None or target is None or source is target:
            msg = "Unsupported file format combination (supported: .html → .org, .org → .html)"
            raise ValueError(msg)
        return self

    @property
    def is_merge(self) -> bool:
        """Whether several inputs are merged into one outline."""
        return len(self.inputs) > 1

    @property
    def output_format(self) -> BookmarkFormat:
        """Format of the file to write."""
        target = BookmarkFormat.from_path(self.output)
        if target is None:  # pragma: no cover - rejected during validation
            msg = f"Unsupported output format: {self.output}"
            raise UnsupportedFormatError(msg)
        return target


def validate_request(inputs: list[str] | list[Path], output: str | Path) -> ConversionRequest:
    """Build a :class:`ConversionRequest`, raising :class:`UnsupportedFormatError`."""
    try:
        return ConversionRequest.model_validate({"inputs": inputs, "output": output})
    except ValidationError as exc:
        messages = "; ".join(_clean_message(error["msg"]) for error in exc.errors())
        raise UnsupportedFormatError(messages) from exc


def _clean_message(message: str) -> str:
    # pydantic prefixes errors raised inside validators with "Value error, ".
    prefix = "Value error, "
    return message[len(prefix) :] if message.startswith(prefix) else message
