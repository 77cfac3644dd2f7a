"""Render pipeline for Folio.

This module glues the three stages together: parse the front matter, render
the body, compose the result into its layout. Each stage is pure; the only
I/O is reading the source document and writing the finished page.

Key functions:
- render_text: Render a document given as a string.
- render_file: Render a document file.
- build_page: Render a document file and write the output file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import DEFAULT_CONFIG, load_config, resolve_path
from .document import Document, RenderedPage
from .frontmatter import load_document, parse_document
from .layouts import LayoutComposer
from .log import get_logger
from .markup import BodyRenderer
from .utils import output_name

logger = get_logger(__name__)


@dataclass
class BuildResult:
    """Result of building one page.

    Attributes:
        page: The rendered page, before layout composition.
        output_path: Where the final HTML was written.
        html: The final HTML.
    """

    page: RenderedPage
    output_path: Path
    html: str


class PagePipeline:
    """Parses, renders and composes documents.

    Attributes:
        renderer: Body renderer.
        composer: Layout composer.
    """

    def __init__(
        self,
        renderer: BodyRenderer | None = None,
        composer: LayoutComposer | None = None,
    ):
        self.renderer = renderer or BodyRenderer()
        self.composer = composer or LayoutComposer()

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any] | None = None,
        project_root: Path | None = None,
        layouts: Mapping[str, str] | None = None,
    ) -> PagePipeline:
        """Build a pipeline from configuration values.

        Args:
            config: Configuration mapping; DEFAULT_CONFIG fills any gaps.
            project_root: Base for relative paths in the configuration.
            layouts: Extra in-memory layouts, taking precedence over files.

        Returns:
            Configured pipeline.
        """
        settings = {**DEFAULT_CONFIG, **(config or {})}
        layouts_dir = None
        if settings.get("layouts_dir"):
            layouts_dir = resolve_path(project_root or Path.cwd(), settings["layouts_dir"])
        renderer = BodyRenderer(
            highlight=bool(settings.get("highlight")),
            plugins=settings.get("markdown_plugins"),
        )
        composer = LayoutComposer(
            layouts=layouts,
            layouts_dir=layouts_dir,
            default_layout=settings.get("default_layout"),
        )
        return cls(renderer, composer)

    def run(self, document: Document) -> tuple[RenderedPage, str]:
        """Render a parsed document and compose it into its layout.

        Returns:
            Tuple of (rendered page, final HTML).
        """
        page = self.renderer.render_document(document)
        return page, self.composer.compose(page)

    def render_text(self, text: str) -> str:
        """Render document text to final HTML."""
        _, html = self.run(parse_document(text))
        return html

    def render_file(self, path: Path) -> str:
        """Render a document file to final HTML."""
        _, html = self.run(load_document(path))
        return html


def render_text(
    text: str,
    layouts: Mapping[str, str] | None = None,
    layouts_dir: Path | None = None,
    config: Mapping[str, Any] | None = None,
) -> str:
    """Render a document string to final HTML.

    Args:
        text: Raw document text, optionally with front matter.
        layouts: In-memory layouts by name.
        layouts_dir: Directory of layout files.
        config: Configuration overrides.

    Returns:
        The composed page.

    Raises:
        ParseError: If the front matter is malformed.
        LayoutNotFoundError: If the named layout does not exist.
    """
    settings = dict(config or {})
    if layouts_dir is not None:
        settings["layouts_dir"] = layouts_dir
    else:
        settings.setdefault("layouts_dir", None)
    return PagePipeline.from_config(settings, layouts=layouts).render_text(text)


def render_file(
    path: Path,
    layouts: Mapping[str, str] | None = None,
    layouts_dir: Path | None = None,
    config: Mapping[str, Any] | None = None,
) -> str:
    """Render a document file to final HTML.

    Without ``config``, folio.yaml next to the file is loaded. Relative
    paths in the configuration are resolved against the file's directory.
    """
    path = Path(path)
    settings = dict(load_config(path.parent) if config is None else config)
    if layouts_dir is not None:
        settings["layouts_dir"] = layouts_dir
    pipeline = PagePipeline.from_config(settings, path.parent, layouts)
    return pipeline.render_file(path)


def build_page(
    source: Path,
    output_dir: Path | None = None,
    output_path: Path | None = None,
    config: Mapping[str, Any] | None = None,
    layouts: Mapping[str, str] | None = None,
) -> BuildResult:
    """Render a document file and write the result.

    The target is ``output_path`` when given. Otherwise it is derived from the
    document's ``permalink`` metadata or its file name, under ``output_dir``
    (or the configured output directory). Nothing is written when parsing or
    composition fails.

    Args:
        source: Path to the source document.
        output_dir: Directory to write into.
        output_path: Exact file to write.
        config: Configuration; folio.yaml next to ``source`` when omitted.
        layouts: Extra in-memory layouts.

    Returns:
        BuildResult with the page, the output path and the HTML.
    """
    source = Path(source)
    project_root = source.parent
    settings = dict(load_config(project_root) if config is None else config)
    pipeline = PagePipeline.from_config(settings, project_root, layouts)

    document = load_document(source)
    page, html = pipeline.run(document)

    if output_path is None:
        base = output_dir or resolve_path(
            project_root, settings.get("output_dir") or DEFAULT_CONFIG["output_dir"]
        )
        output_path = Path(base) / output_name(source, document.metadata.get("permalink"))
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html)
    logger.debug("Wrote %s to %s", source, output_path)
    return BuildResult(page=page, output_path=output_path, html=html)
