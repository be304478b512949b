from datetime import datetime
from pathlib import Path

from markupsafe import Markup

from folio.content import ASSETS_PATH, Metadata, assemble_page, default_title


def test_assemble_page_copies_metadata():
    metadata = Metadata(
        title="Hi",
        description="About hi",
        date=datetime(2024, 5, 1),
        published=True,
        js="alert(1)",
        extra={"author": "Sam"},
    )
    page = assemble_page(
        metadata, "<h1>Hello</h1>", ".highlight {}", "alert(1)", Path("src/hi.md")
    )
    assert page.title == "Hi"
    assert page.description == "About hi"
    assert page.date == datetime(2024, 5, 1)
    assert page.content == "<h1>Hello</h1>"
    assert isinstance(page.content, Markup)
    assert isinstance(page.inline_css, Markup)
    assert isinstance(page.inline_js, Markup)
    assert page.inline_js == "alert(1)"
    assert page.assets_path == ASSETS_PATH == "./"
    assert page.frontmatter == {"author": "Sam"}


def test_empty_title_falls_back_to_file_stem():
    page = assemble_page(Metadata(), "", "", "", Path("src/posts/my-first.post.md"))
    assert page.title == "my-first.post"
    assert default_title(Path("notes.md"), "") == "notes"
    assert default_title(Path("notes.md"), "Kept") == "Kept"


def test_page_context_exposes_fields_and_page():
    page = assemble_page(Metadata(title="T"), "<p>x</p>", "", "", Path("a.md"))
    context = page.context()
    assert context["page"] is page
    assert context["title"] == "T"
    assert context["content"] == "<p>x</p>"
    assert context["date"] is None
    assert set(context) >= {
        "description",
        "inline_css",
        "inline_js",
        "assets_path",
        "frontmatter",
    }
