"""Folio renders a single Markdown document with front matter into a layout.

The pipeline has three stages, each a pure transformation:

- frontmatter: split the source into metadata and body.
- markup: render the Markdown body to HTML. Fenced code is copied verbatim.
- layouts: insert the HTML into the Jinja2 layout the metadata names.

The CLI module wires them to the filesystem.
"""

__version__ = "0.1.0"

from .build import build_page, render_file, render_text
from .document import Document, Heading, RenderedPage
from .errors import FolioError, LayoutNotFoundError, ParseError
from .frontmatter import dump_document, load_document, parse_document
from .layouts import LayoutComposer, compose_page
from .markup import BodyRenderer, render_body, render_document

__all__ = [
    "BodyRenderer",
    "Document",
    "FolioError",
    "Heading",
    "LayoutComposer",
    "LayoutNotFoundError",
    "ParseError",
    "RenderedPage",
    "__version__",
    "build_page",
    "compose_page",
    "dump_document",
    "load_document",
    "parse_document",
    "render_body",
    "render_document",
    "render_file",
    "render_text",
]
