import pytest

from folio.errors import RenderError, UnknownThemeError
from folio.protocols import ContentRenderer
from folio.renderers import MarkdownRenderer
from folio.styles import available_themes, extract_css


@pytest.fixture(scope="module")
def renderer():
    return MarkdownRenderer()


def test_renders_heading_and_paragraph(renderer):
    html = renderer.render(b"# Hello\n\nSome *text*.\n")
    assert "<h1>Hello</h1>" in html
    assert "<em>text</em>" in html


def test_gfm_extensions(renderer):
    source = (
        b"| a | b |\n|---|---|\n| 1 | 2 |\n\n"
        b"~~gone~~\n\n"
        b"Visit https://example.com today.\n\n"
        b"- [x] done\n- [ ] todo\n\n"
        b"Note[^1].\n\n[^1]: The footnote.\n"
    )
    html = renderer.render(source)
    assert "<table>" in html
    assert "<del>gone</del>" in html
    assert '<a href="https://example.com">' in html
    assert 'type="checkbox"' in html
    assert "The footnote." in html


def test_raw_html_passes_through(renderer):
    html = renderer.render(b'<div class="hero"><span>HTML stays</span></div>\n')
    assert '<div class="hero"><span>HTML stays</span></div>' in html


def test_fenced_code_is_highlighted_with_classes(renderer):
    html = renderer.render(b"```python\ndef f():\n    return 1 < 2\n```\n")
    assert '<div class="highlight">' in html
    assert '<span class="k">def</span>' in html
    assert "&lt;" in html


def test_unknown_language_falls_back_to_plain_text(renderer):
    html = renderer.render(b"```not-a-language\n<b>x</b>\n```\n")
    assert '<div class="highlight">' in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html

    html = renderer.render(b"```\nplain\n```\n")
    assert '<div class="highlight">' in html
    assert "plain" in html


def test_invalid_utf8_raises_render_error(renderer):
    with pytest.raises(RenderError):
        renderer.render(b"# Bad \xff\xfe bytes")


def test_renderer_satisfies_protocol(renderer):
    assert isinstance(renderer, ContentRenderer)


def test_extract_css_for_registered_theme():
    css = extract_css("friendly")
    assert ".highlight" in css
    assert "{" in css
    assert extract_css("monokai") != css


def test_extract_css_unknown_theme_raises():
    with pytest.raises(UnknownThemeError) as excinfo:
        extract_css("no-such-theme")
    assert excinfo.value.theme == "no-such-theme"
    assert "no-such-theme" in str(excinfo.value)


def test_available_themes_sorted():
    themes = available_themes()
    assert "friendly" in themes
    assert "monokai" in themes
    assert themes == sorted(themes)
