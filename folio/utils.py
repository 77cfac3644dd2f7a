"""Utility functions for Folio.

Key functions:
    slugify: Convert filenames to URL slugs.
    output_name: Derive the output file path for a document.
"""

from __future__ import annotations

import re
from pathlib import Path


def slugify(name: str) -> str:
    """Convert filename (without extension) to slug, dropping date prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("2024-01-15-cohesion-and-coupling")
        'cohesion-and-coupling'
    """
    cleaned = name
    if "-" in cleaned:
        parts = cleaned.split("-")
        if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
            cleaned = "-".join(parts[3:])
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def output_name(source: Path, permalink: str | None = None) -> Path:
    """Derive the relative output path for a document.

    A ``permalink`` ending in ``/`` becomes ``<permalink>/index.html``; any
    other permalink is used as given. Without one, the slugified file stem
    becomes ``<slug>.html``.

    Args:
        source: Path to the source document.
        permalink: Permalink from the document's metadata, if any.

    Returns:
        Relative path under the output directory.
    """
    if permalink:
        cleaned = permalink.strip().lstrip("/")
        parts = [p for p in cleaned.split("/") if p not in ("", ".", "..")]
        if not parts or permalink.rstrip().endswith("/"):
            return Path(*parts, "index.html")
        return Path(*parts)
    return Path(f"{slugify(source.stem)}.html")
