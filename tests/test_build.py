from pathlib import Path

import pytest

from folio.build import PagePipeline, build_page, render_file, render_text
from folio.config import DEFAULT_CONFIG, load_config
from folio.errors import LayoutNotFoundError, ParseError
from folio.frontmatter import parse_document

POST = """---
layout: post
title: Cohesion and coupling
---
# Cohesion and coupling

A module should do *one* thing.

```ruby
class Dictionary
  def lookup(word) = @words[word]
end
```
"""


def create_project(tmp_path: Path) -> Path:
    layouts = tmp_path / "_layouts"
    layouts.mkdir()
    (layouts / "post.html.jinja").write_text(
        "<title>{{ title }}</title><article>{{ content }}</article>",
        encoding="utf-8",
    )
    (tmp_path / "2019-04-01-cohesion-and-coupling.md").write_text(POST, encoding="utf-8")
    return tmp_path


def test_render_text_example():
    text = "---\nlayout: default\ntitle: X\n---\nHello"
    layouts = {"default": "<body>{{content}}</body>"}
    assert render_text(text, layouts=layouts) == "<body><p>Hello</p></body>"


def test_render_text_errors():
    with pytest.raises(ParseError):
        render_text("---\nlayout: default\nHello", layouts={"default": "{{ content }}"})
    with pytest.raises(LookupError):
        render_text("---\nlayout: missing\n---\nHello", layouts={})


def test_render_file_uses_layouts_dir(tmp_path):
    project = create_project(tmp_path)
    out = render_file(project / "2019-04-01-cohesion-and-coupling.md")
    assert out.startswith("<title>Cohesion and coupling</title><article>")
    assert "<em>one</em>" in out
    assert "  def lookup(word) = @words[word]\n" in out
    assert '<code class="language-ruby">' in out


def test_build_page_writes_slugged_file(tmp_path):
    project = create_project(tmp_path)
    result = build_page(project / "2019-04-01-cohesion-and-coupling.md")
    assert result.output_path == project / "output" / "cohesion-and-coupling.html"
    assert result.output_path.read_text(encoding="utf-8") == result.html
    assert result.page.metadata["title"] == "Cohesion and coupling"
    assert result.page.toc[0].id == "cohesion-and-coupling"


def test_build_page_honours_permalink_and_output_dir(tmp_path):
    project = create_project(tmp_path)
    source = project / "post.md"
    source.write_text(
        "---\nlayout: post\npermalink: /design/cohesion/\n---\nBody", encoding="utf-8"
    )
    result = build_page(source, output_dir=tmp_path / "site")
    assert result.output_path == tmp_path / "site" / "design" / "cohesion" / "index.html"

    explicit = tmp_path / "out" / "page.html"
    result = build_page(source, output_path=explicit)
    assert result.output_path == explicit
    assert explicit.exists()


def test_build_page_writes_nothing_on_error(tmp_path):
    source = tmp_path / "orphan.md"
    source.write_text("---\nlayout: nowhere\n---\nBody", encoding="utf-8")
    with pytest.raises(LayoutNotFoundError):
        build_page(source)
    assert not (tmp_path / "output").exists()

    source.write_text("---\nlayout: nowhere\nBody", encoding="utf-8")
    with pytest.raises(ParseError):
        build_page(source)
    assert not (tmp_path / "output").exists()


def test_config_file_is_applied(tmp_path):
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "page.html").write_text(
        "<main>{{ content }}</main>", encoding="utf-8"
    )
    (tmp_path / "folio.yaml").write_text(
        "layouts_dir: templates\ndefault_layout: page\noutput_dir: public\nhighlight: true\n",
        encoding="utf-8",
    )
    source = tmp_path / "note.md"
    source.write_text("```python\nx = 1\n```\n", encoding="utf-8")

    result = build_page(source)
    assert result.output_path == tmp_path / "public" / "note.html"
    assert result.html.startswith("<main>")
    assert 'class="highlight"' in result.html


def test_load_config_defaults_and_bad_file(tmp_path):
    assert load_config(tmp_path) == DEFAULT_CONFIG
    (tmp_path / "folio.yaml").write_text("- not\n- a mapping\n", encoding="utf-8")
    assert load_config(tmp_path) == DEFAULT_CONFIG
    (tmp_path / "folio.yaml").write_text("output_dir: dist\n", encoding="utf-8")
    config = load_config(tmp_path)
    assert config["output_dir"] == "dist"
    assert config["layouts_dir"] == "_layouts"


def test_pipeline_run_returns_page_and_html():
    pipeline = PagePipeline.from_config({"layouts_dir": None}, layouts={"x": "[{{ content }}]"})
    page, html = pipeline.run(parse_document("---\nlayout: x\n---\n*hi*"))
    assert page.html == "<p><em>hi</em></p>"
    assert html == "[<p><em>hi</em></p>]"
