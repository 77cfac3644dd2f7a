"""Document model for Folio.

Key classes:
- Document: A parsed source file, split into front-matter metadata and body.
- RenderedPage: The body rendered to HTML, with the metadata carried along.
- Heading: A heading encountered while rendering, used for the TOC.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Heading:
    """Represents a heading extracted from markdown content for TOC generation.

    Attributes:
        id: Anchor ID for the heading (URL-friendly slug).
        text: The text content of the heading.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


@dataclass(frozen=True)
class Document:
    """A source document split into metadata and body.

    Attributes:
        metadata: Front-matter key/value pairs. Empty when the document has
            no front-matter block.
        body: Raw text following the front-matter block.
        source: Path the document was read from, if any.
    """

    metadata: dict[str, str] = field(default_factory=dict)
    body: str = ""
    source: Path | None = field(default=None, compare=False)

    @property
    def layout(self) -> str | None:
        """Layout named in the metadata, or None."""
        return self.metadata.get("layout") or None


@dataclass(frozen=True)
class RenderedPage:
    """A document whose body has been rendered to HTML.

    Attributes:
        html: Rendered body markup.
        metadata: Copy of the source document's metadata.
        toc: Headings in document order.
        source: Path of the source document, if any.
    """

    html: str
    metadata: dict[str, str] = field(default_factory=dict)
    toc: list[Heading] = field(default_factory=list)
    source: Path | None = field(default=None, compare=False)

    @property
    def title(self) -> str:
        """Title from the metadata, else the first heading, else empty."""
        title = self.metadata.get("title")
        if title:
            return title
        if self.toc:
            return self.toc[0].text
        return ""
