"""Front-matter parsing for Folio.

A document may open with a metadata block delimited by ``---`` lines::

    ---
    layout: post
    title: Cohesion and coupling
    ---
    Body text...

The block is YAML made of ``key: value`` lines. It is loaded with PyYAML's
base loader, so every value stays the exact string the author wrote
(``draft: true`` gives ``"true"``, not ``True``).

Key functions:
- parse_document: Split raw text into a Document.
- dump_document: Serialize a Document back to front-matter text.
- load_document: Read and parse a UTF-8 file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .document import Document
from .errors import ParseError
from .log import get_logger

logger = get_logger(__name__)

MARKER = "---"
BOM = "\ufeff"


def _is_marker(line: str) -> bool:
    """Check whether a line is a front-matter delimiter."""
    return line.rstrip(" \t\r\n") == MARKER


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping the separators."""
    lines = [f"{line}\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    return lines if lines[-1] else lines[:-1]


def _starts_with_marker(text: str) -> bool:
    if text.startswith(BOM):
        text = text[len(BOM) :]
    first_line = text.split("\n", 1)[0]
    return _is_marker(first_line)


def parse_document(text: str, source: Path | None = None) -> Document:
    """Split raw document text into metadata and body.

    Args:
        text: Raw file content.
        source: Path the text was read from, used in error messages.

    Returns:
        Document with the parsed metadata and the remaining body. Without a
        leading marker line the metadata is empty and the body is ``text``.

    Raises:
        ParseError: If the opening marker has no matching closing marker, or
            the block is not a mapping of string values.
    """
    stripped = text[len(BOM) :] if text.startswith(BOM) else text
    lines = _split_lines(stripped)
    if not lines or not _is_marker(lines[0]):
        return Document(metadata={}, body=text, source=source)

    for index in range(1, len(lines)):
        if _is_marker(lines[index]):
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            metadata = _parse_metadata(block, source)
            logger.debug(
                "Parsed front matter with keys %s from %s",
                sorted(metadata),
                source or "<string>",
            )
            return Document(metadata=metadata, body=body, source=source)

    raise ParseError(
        f"Unterminated front matter: no closing {MARKER!r} line",
        lineno=1,
        source_file=source,
    )


def _parse_metadata(block: str, source: Path | None) -> dict[str, str]:
    """Parse the text between the markers into a string mapping.

    Args:
        block: YAML text of the metadata block.
        source: Path of the document, for error messages.

    Returns:
        Mapping of metadata keys to string values.
    """
    try:
        data: Any = yaml.load(block, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        # +2: one for 1-indexing, one for the opening marker line.
        lineno = mark.line + 2 if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc)
        raise ParseError(
            f"Invalid front matter: {problem}", lineno, source
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(
            "Front matter must be a block of 'key: value' lines", 2, source
        )
    for key, value in data.items():
        if not isinstance(value, str):
            raise ParseError(
                f"Front matter value for {key!r} must be a single value, "
                f"not a {'list' if isinstance(value, list) else 'mapping'}",
                None,
                source,
            )
    return dict(data)


def dump_document(document: Document) -> str:
    """Serialize a document back into front-matter text.

    ``parse_document(dump_document(doc))`` reproduces ``doc``.

    Args:
        document: Document to serialize.

    Returns:
        Text with a front-matter block (when needed) followed by the body.
    """
    if not document.metadata:
        if _starts_with_marker(document.body):
            return f"{MARKER}\n{MARKER}\n{document.body}"
        return document.body
    block = yaml.safe_dump(
        dict(document.metadata),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )
    return f"{MARKER}\n{block}{MARKER}\n{document.body}"


def load_document(path: Path) -> Document:
    """Read a UTF-8 file and parse it.

    Args:
        path: Path to the source document.

    Returns:
        Parsed Document with ``source`` set to ``path``.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return parse_document(text, source=path)
