import pytest

from md_to_pdf.assembler import PAGE_BREAK
from md_to_pdf.diagrams import DiagramSegment, TextSegment, extract_diagrams
from md_to_pdf.markup import MarkupRenderer, normalize_lists, render_document, slugify


@pytest.mark.parametrize("text, slug", [
    ("Hello World", "hello-world"),
    ("  Spaced   out  ", "spaced-out"),
    ("Q&A: what's new?", "qa-whats-new"),
    ("<em>Tagged</em> heading", "tagged-heading"),
    ("Step 1 -- Setup", "step-1-setup"),
    ("中文 标题", "中文-标题"),
    ("--edge--", "edge"),
    ("my_var", "my_var"),
    ("The &lt;div&gt; tag", "the-div-tag"),
])
def test_slugify(text, slug):
    assert slugify(text) == slug


def test_slugify_is_deterministic():
    assert slugify("Repeat Me") == slugify("Repeat Me")


def test_headings_get_ids():
    html = MarkupRenderer().render("# Getting Started\n\n## The *Real* Work")
    assert '<h1 id="getting-started">' in html
    assert 'id="the-real-work"' in html


@pytest.mark.parametrize("source, slug", [
    ("## my\\_var", "my_var"),
    ("## The `<div>` tag", "the-div-tag"),
    ("## Use `a && b`", "use-a-b"),
])
def test_heading_id_uses_visible_text(source, slug):
    assert f'id="{slug}"' in MarkupRenderer().render(source)


def test_duplicate_headings_share_an_id():
    html = MarkupRenderer().render("# Notes\n\ntext\n\n# Notes")
    assert html.count('id="notes"') == 2


def test_explicit_id_is_kept():
    html = MarkupRenderer().render("# Title {#custom}")
    assert 'id="custom"' in html
    assert 'id="title"' not in html


def test_body_breaks_every_newline():
    html = MarkupRenderer(breaks=True).render("line one\nline two")
    assert "<br" in html


def test_cover_keeps_authored_lines():
    html = MarkupRenderer(breaks=False, bookmarks=False).render("line one\nline two")
    assert "<br" not in html


def test_no_bookmark_class_only_without_bookmarks():
    assert "no-bookmark" not in MarkupRenderer().render("# Body")
    assert 'class="no-bookmark"' in MarkupRenderer(bookmarks=False).render("# Cover")


def test_raw_page_break_passes_through():
    html = MarkupRenderer().render(f"one\n\n{PAGE_BREAK}\n\ntwo")
    assert PAGE_BREAK in html


def test_render_segments_threads_diagrams_through():
    segments = extract_diagrams("# A\n\n```mermaid\npie\n```\n\ntext")
    parts = MarkupRenderer().render_segments(segments)
    assert len(parts) == 3
    assert parts[1] == DiagramSegment(0, "pie")
    assert "pie" not in parts[0] + parts[2]


def test_blank_text_segments_are_dropped():
    parts = MarkupRenderer().render_segments([TextSegment("\n\n"), DiagramSegment(0, "pie")])
    assert parts == [DiagramSegment(0, "pie")]


def test_normalize_lists_adds_blank_line():
    assert normalize_lists("Intro:\n- a\n- b") == "Intro:\n\n- a\n- b"


def test_normalize_lists_leaves_code_alone():
    text = "```\nIntro:\n- a\n```"
    assert normalize_lists(text) == text


def test_normalize_lists_leaves_indented_code_alone():
    text = "Para\n\n    code line\n    - not a list\n"
    assert normalize_lists(text) == text


def test_normalize_lists_after_indented_code():
    text = "Para\n\n    code\nIntro:\n- a"
    assert normalize_lists(text) == "Para\n\n    code\nIntro:\n\n- a"


def test_render_document_without_cover():
    parts = render_document([TextSegment("# Body")])
    assert len(parts) == 1
    assert "cover-section" not in parts[0]


def test_render_document_with_cover():
    parts = render_document([TextSegment("# Body")], [TextSegment("# Front\nby me\nin 2024")])
    html = "".join(p for p in parts if isinstance(p, str))
    assert html.index("cover-section") < html.index(PAGE_BREAK) < html.index('id="body"')
    front = html[:html.index(PAGE_BREAK)]
    assert 'class="no-bookmark"' in front
    assert "<br" not in front
    assert "no-bookmark" not in html[html.index(PAGE_BREAK):]


def test_cover_heading_named_cover_has_unique_id():
    parts = render_document([TextSegment("# Body")], [TextSegment("# Cover")])
    html = "".join(p for p in parts if isinstance(p, str))
    assert html.count('id="cover"') == 1
