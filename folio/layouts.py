"""Layout composition for Folio.

Layouts are Jinja2 templates. The rendered body is bound to ``content``, so
the simplest layout is ``<body>{{content}}</body>``. Layouts can come from an
in-memory mapping, from a directory of files, or both.

Key class:
- LayoutComposer: Looks up the layout a page names and renders the page into it.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFound,
    select_autoescape,
)
from markupsafe import Markup

from .document import Heading, RenderedPage
from .errors import LayoutNotFoundError
from .log import get_logger
from .markup import pygments_css

logger = get_logger(__name__)

__all__ = ["LayoutComposer", "compose_page", "render_toc"]

LAYOUT_SUFFIXES = (".html.jinja", ".jinja", ".html", "")


def render_toc(headings: list[Heading]) -> Markup:
    """Render headings as nested ``<ul>`` lists of anchor links.

    Args:
        headings: Headings in document order.

    Returns:
        Markup-safe HTML string of the nested TOC, or empty Markup if no headings.
    """
    if not headings:
        return Markup("")

    parts: list[str] = []
    level_stack: list[int] = []

    for heading in headings:
        level = heading.level

        while level_stack and level_stack[-1] > level:
            level_stack.pop()
            parts.append("</li></ul>")

        if level_stack and level_stack[-1] == level:
            parts.append("</li>")
        elif not level_stack or level > level_stack[-1]:  # pragma: no branch
            parts.append("<ul>")
            level_stack.append(level)

        parts.append(
            Markup('<li><a href="#{}">{}</a>').format(heading.id, heading.text)
        )

    while level_stack:
        level_stack.pop()
        parts.append("</li></ul>")

    return Markup("".join(parts))


class LayoutComposer:
    """Composes rendered pages into named layouts.

    Attributes:
        layouts: In-memory layouts by name.
        layouts_dir: Directory holding layout files, if any.
        default_layout: Layout used when a page names none.
        env: Jinja2 environment used to load and render layouts.
    """

    def __init__(
        self,
        layouts: Mapping[str, str] | None = None,
        layouts_dir: Path | None = None,
        default_layout: str | None = None,
    ):
        """Initialize the composer.

        Args:
            layouts: Mapping of layout name to template source.
            layouts_dir: Directory of layout files. Missing directories are
                treated as empty.
            default_layout: Layout for pages whose metadata names none.
        """
        self.layouts = dict(layouts or {})
        self.layouts_dir = Path(layouts_dir) if layouts_dir is not None else None
        self.default_layout = default_layout

        loaders: list = [DictLoader(self.layouts)]
        if self.layouts_dir is not None:
            loaders.append(FileSystemLoader(self.layouts_dir))
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(
                ["html", "xml"], default_for_string=True, default=True
            ),
        )
        self.env.globals["render_toc"] = render_toc
        self.env.globals["pygments_css"] = pygments_css

    def layout_name(self, page: RenderedPage) -> str | None:
        """Return the layout a page should use, or None for no layout."""
        return page.metadata.get("layout") or self.default_layout

    def resolve(self, name: str) -> Template:
        """Resolve a layout name to a template.

        Tries ``NAME.html.jinja``, ``NAME.jinja``, ``NAME.html`` and ``NAME``.

        Raises:
            LayoutNotFoundError: If no candidate exists.
        """
        for suffix in LAYOUT_SUFFIXES:
            try:
                return self.env.get_template(f"{name}{suffix}")
            except TemplateNotFound:
                continue
        raise LayoutNotFoundError(name)

    def has_layout(self, name: str) -> bool:
        """Check whether a layout name resolves."""
        try:
            self.resolve(name)
        except LayoutNotFoundError:
            return False
        return True

    def compose(self, page: RenderedPage) -> str:
        """Render a page into its layout.

        Args:
            page: Rendered page whose metadata may name a layout.

        Returns:
            Final output. The page HTML unchanged when no layout applies.

        Raises:
            LayoutNotFoundError: If the named layout, or a template it
                extends or includes, does not exist.
        """
        name = self.layout_name(page)
        if not name:
            logger.debug("No layout for %s; returning body", page.source or "page")
            return page.html

        template = self.resolve(name)
        logger.debug("Composing %s with layout %r", page.source or "page", name)
        try:
            return template.render(**self._context(page))
        except TemplateNotFound as exc:
            raise LayoutNotFoundError(exc.name or name) from exc

    def _context(self, page: RenderedPage) -> dict[str, Any]:
        return {
            "content": Markup(page.html),
            "page": page.metadata,
            "metadata": page.metadata,
            "title": page.title,
            "toc": page.toc,
        }


def compose_page(page: RenderedPage, layouts: Mapping[str, str]) -> str:
    """Compose a page using an in-memory mapping of layouts.

    Raises:
        LayoutNotFoundError: If the layout the page names is not in ``layouts``.
    """
    return LayoutComposer(layouts).compose(page)
