from click.testing import CliRunner

from folio import __version__
from folio.cli import cli


def write_post(tmp_path, front="layout: default\ntitle: X\n"):
    layouts = tmp_path / "_layouts"
    layouts.mkdir(exist_ok=True)
    (layouts / "default.html.jinja").write_text(
        "<body>{{content}}</body>", encoding="utf-8"
    )
    source = tmp_path / "post.md"
    source.write_text(f"---\n{front}---\nHello", encoding="utf-8")
    return source


def test_render_to_stdout(tmp_path):
    source = write_post(tmp_path)
    result = CliRunner().invoke(cli, ["render", str(source)])
    assert result.exit_code == 0
    assert result.output == "<body><p>Hello</p></body>\n"


def test_render_to_file(tmp_path):
    source = write_post(tmp_path)
    target = tmp_path / "dist" / "post.html"
    result = CliRunner().invoke(cli, ["render", str(source), "--output", str(target)])
    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "<body><p>Hello</p></body>"
    assert str(target) in result.output


def test_render_with_layout_options(tmp_path):
    source = write_post(tmp_path, front="title: No layout\n")
    other = tmp_path / "themes"
    other.mkdir()
    (other / "page.html").write_text("<main>{{ content }}</main>", encoding="utf-8")

    result = CliRunner().invoke(cli, ["render", str(source)])
    assert result.output == "<p>Hello</p>\n"

    result = CliRunner().invoke(
        cli, ["render", str(source), "--layouts", str(other), "--layout", "page"]
    )
    assert result.exit_code == 0
    assert result.output == "<main><p>Hello</p></main>\n"


def test_render_missing_layout_fails(tmp_path):
    source = write_post(tmp_path, front="layout: absent\n")
    target = tmp_path / "out.html"
    result = CliRunner().invoke(cli, ["render", str(source), "-o", str(target)])
    assert result.exit_code == 1
    assert "Render failed" in result.output
    assert "Layout not found: 'absent'" in result.output
    assert not target.exists()


def test_render_parse_error_fails(tmp_path):
    source = tmp_path / "broken.md"
    source.write_text("---\ntitle: never closed\nHello", encoding="utf-8")
    result = CliRunner().invoke(cli, ["render", str(source)])
    assert result.exit_code == 1
    assert "Unterminated front matter" in result.output
    assert "(line 1)" in result.output


def test_render_layout_syntax_error_fails(tmp_path):
    source = write_post(tmp_path)
    (tmp_path / "_layouts" / "default.html.jinja").write_text(
        "{% if %}", encoding="utf-8"
    )
    result = CliRunner().invoke(cli, ["render", str(source)])
    assert result.exit_code == 1
    assert "Template syntax error on line 1" in result.output


def test_meta_prints_front_matter(tmp_path):
    source = write_post(tmp_path, front="layout: default\ntitle: 'Cohesion: a primer'\n")
    result = CliRunner().invoke(cli, ["meta", str(source)])
    assert result.exit_code == 0
    assert result.output == "layout: default\ntitle: 'Cohesion: a primer'\n"

    plain = tmp_path / "plain.md"
    plain.write_text("No front matter", encoding="utf-8")
    result = CliRunner().invoke(cli, ["meta", str(plain)])
    assert result.exit_code == 0
    assert result.output == ""


def test_verbose_logs_debug(tmp_path):
    source = write_post(tmp_path)
    result = CliRunner().invoke(cli, ["--verbose", "render", str(source)])
    assert result.exit_code == 0
    assert "[DEBUG] folio" in result.output
    assert "layout 'default'" in result.output


def test_version_and_missing_source(tmp_path):
    result = CliRunner().invoke(cli, ["--version"])
    assert __version__ in result.output

    result = CliRunner().invoke(cli, ["render", str(tmp_path / "nope.md")])
    assert result.exit_code == 2


def test_module_main_entrypoint():
    from folio.__main__ import main

    assert callable(main)


def test_invalid_utf8_source_fails(tmp_path):
    source = tmp_path / "latin1.md"
    source.write_bytes("---\ntitle: café\n---\nHello".encode("latin-1"))

    result = CliRunner().invoke(cli, ["render", str(source)])
    assert result.exit_code == 1
    assert "Render failed" in result.output
    assert "not valid UTF-8" in result.output

    result = CliRunner().invoke(cli, ["meta", str(source)])
    assert result.exit_code == 1
    assert "not valid UTF-8" in result.output
