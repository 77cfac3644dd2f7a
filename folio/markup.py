"""Body rendering for Folio.

Converts the Markdown body of a document to HTML with mistune. Fenced code
blocks are treated as opaque text: their content is copied into the output
and never interpreted, whatever language the fence declares.

Key classes:
- BodyRenderer: Renders a body (or a whole Document) to HTML.
"""

from __future__ import annotations

import html as html_lib
from collections.abc import Sequence

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .document import Document, Heading, RenderedPage
from .html_utils import escape_code, escape_html, heading_id, strip_tags
from .log import get_logger

logger = get_logger(__name__)

DEFAULT_PLUGINS = ("strikethrough", "footnotes", "table", "url")


class _FolioHTMLRenderer(mistune.HTMLRenderer):
    """mistune renderer with heading anchors and verbatim code blocks.

    Attributes:
        highlight: Whether to run fenced code through Pygments.
        newline: Line ending of the source body, restored inside code blocks.
        headings: Headings seen so far, in document order.
    """

    def __init__(self, highlight: bool = False, newline: str = "\n"):
        super().__init__(escape=False)
        self.highlight = highlight
        self.newline = newline
        self.headings: list[Heading] = []
        self._heading_id_counts: dict[str, int] = {}
        self._used_ids: set[str] = set()

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an auto-generated, page-unique ID."""
        base_id = heading_id(text)

        count = self._heading_id_counts.get(base_id, 0)
        anchor = base_id
        while anchor in self._used_ids:
            count += 1
            anchor = f"{base_id}-{count}"
        self._heading_id_counts[base_id] = count
        self._used_ids.add(anchor)

        plain = html_lib.unescape(strip_tags(text)).strip()
        self.headings.append(Heading(id=anchor, text=plain, level=level))

        return f'<h{level} id="{anchor}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block.

        Args:
            code: The fenced content, exactly as written.
            info: Fence info string; its first word is the language tag.

        Returns:
            HTML string for the block.
        """
        # mistune normalizes line endings before handing over the code.
        if self.newline != "\n":
            code = code.replace("\r\n", "\n").replace("\n", self.newline)
        lang = info.split()[0] if info and info.strip() else ""
        if lang and self.highlight:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                logger.debug("No Pygments lexer for %r; rendering plain", lang)
            else:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        lang_class = f' class="language-{escape_html(lang)}"' if lang else ""
        return f"<pre><code{lang_class}>{escape_code(code)}</code></pre>\n"


class BodyRenderer:
    """Renders Markdown bodies to HTML.

    Attributes:
        highlight: Whether fenced code is syntax highlighted.
        plugins: mistune plugin names enabled for rendering.
    """

    def __init__(
        self,
        highlight: bool = False,
        plugins: Sequence[str] | None = None,
    ):
        self.highlight = highlight
        self.plugins = list(DEFAULT_PLUGINS if plugins is None else plugins)

    def render(self, body: str) -> tuple[str, list[Heading]]:
        """Render Markdown to HTML.

        Args:
            body: Markdown source.

        Returns:
            Tuple of (rendered HTML without trailing newline, headings).
        """
        newline = "\r\n" if "\r\n" in body else "\n"
        renderer = _FolioHTMLRenderer(highlight=self.highlight, newline=newline)
        markdown = mistune.create_markdown(renderer=renderer, plugins=self.plugins)
        html = markdown(body)
        return html.rstrip("\n"), renderer.headings

    def render_document(self, document: Document) -> RenderedPage:
        """Render a document's body, carrying its metadata along."""
        html, toc = self.render(document.body)
        return RenderedPage(
            html=html,
            metadata=dict(document.metadata),
            toc=toc,
            source=document.source,
        )


def render_body(body: str) -> str:
    """Render a Markdown body with default settings and return the HTML."""
    html, _ = BodyRenderer().render(body)
    return html


def render_document(
    document: Document, renderer: BodyRenderer | None = None
) -> RenderedPage:
    """Render a document to a RenderedPage.

    Args:
        document: Parsed document.
        renderer: Optional configured renderer; defaults are used otherwise.

    Returns:
        RenderedPage with the HTML, a copy of the metadata and the TOC.
    """
    return (renderer or BodyRenderer()).render_document(document)


def pygments_css(style: str = "default") -> str:
    """Return Pygments CSS rules for the ``.highlight`` class."""
    return HtmlFormatter(style=style).get_style_defs(".highlight")
