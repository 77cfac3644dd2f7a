"""Exception classes for Folio.

Rendering a document can fail in exactly two ways: the front matter is
malformed, or the layout it asks for does not exist. Both are terminal for
the document being rendered.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base exception for all Folio errors."""


class ParseError(FolioError, ValueError):
    """Malformed or unterminated front-matter block.

    Attributes:
        message: Human-readable error message.
        lineno: 1-indexed line where the problem was detected, if known.
        source_file: Path to the document that failed, if known.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        source_file: Path | str | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.source_file = source_file

        location = ""
        if source_file is not None:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
        if location:
            location = location.rstrip(":") + ": "
        super().__init__(f"{location}{message}")


class LayoutNotFoundError(FolioError, LookupError):
    """A document refers to a layout that does not exist.

    Attributes:
        name: The layout name that could not be resolved.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Layout not found: {name!r}")
