"""Markdown → HTML with stable heading ids and bookmark control."""

import html
import re
from typing import Sequence, Union
from xml.etree.ElementTree import Element

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor, UnescapeTreeprocessor
from markdown.util import ETX, STX

from md_to_pdf.assembler import PAGE_BREAK
from md_to_pdf.diagrams import DiagramSegment, Segment, TextSegment


EXTENSIONS = ["tables", "fenced_code", "sane_lists", "smarty", "attr_list"]
HEADINGS   = {"h1", "h2", "h3", "h4", "h5", "h6"}

Part = Union[str, DiagramSegment]


# ════════════════════════════════════════════════════════════════════════════
#  SLUGIFY
#  Pure and not deduplicated: two headings with the same text share an id.
# ════════════════════════════════════════════════════════════════════════════
_STASHED = re.compile(f"{STX}[^{ETX}]*{ETX}")


def slugify(text: str) -> str:
    s = re.sub(r"<[^>]*>", "", text)            # strip HTML tags
    s = _STASHED.sub("", s)                     # strip stashed raw HTML
    s = html.unescape(s)                        # &lt; in inline code -> <
    s = s.strip().lower()
    s = re.sub(r"\s+", "-", s)
    s = re.sub(r"[^\w\u4e00-\u9fa5-]", "", s, flags=re.ASCII)
    s = re.sub(r"-+", "-", s)
    return s.strip("-")


class HeadingIdProcessor(Treeprocessor):
    def __init__(self, md, bookmarks: bool) -> None:
        super().__init__(md)
        self.bookmarks = bookmarks
        self._unescape = UnescapeTreeprocessor(md).unescape

    def run(self, root: Element) -> None:
        for el in root.iter():
            if el.tag not in HEADINGS:
                continue
            if "id" not in el.attrib:
                el.set("id", slugify(self._unescape("".join(el.itertext()))))
            if not self.bookmarks:
                classes = el.get("class", "").split()
                el.set("class", " ".join(classes + ["no-bookmark"]))


class HeadingIdExtension(Extension):
    def __init__(self, bookmarks: bool = True, **kwargs) -> None:
        self.bookmarks = bookmarks
        super().__init__(**kwargs)

    def extendMarkdown(self, md) -> None:
        # After inline patterns (20) and attr_list (8), so text and ids are final
        md.treeprocessors.register(HeadingIdProcessor(md, self.bookmarks), "heading_ids", 5)


# ════════════════════════════════════════════════════════════════════════════
#  PRE-PROCESSOR
#  Python-Markdown needs a blank line before a list that follows a paragraph.
# ════════════════════════════════════════════════════════════════════════════
_LIST_ITEM = re.compile(r"^\s*[-*+]\s|^\s*\d+\.\s")
_INDENTED  = re.compile(r"^(?: {4}|\t)")


def normalize_lists(text: str) -> str:
    lines, result = text.split("\n"), []
    in_fence = in_code = False
    for i, line in enumerate(lines):
        prev = lines[i - 1].rstrip() if i > 0 else ""
        if not in_fence and line.strip():
            # indented code starts after a blank line and runs until a dedent
            in_code = bool(_INDENTED.match(line)) and (in_code or not prev)
        if not in_code and line.lstrip().startswith("```"):
            in_fence = not in_fence
        elif not (in_code or in_fence) and prev and _LIST_ITEM.match(line):
            if not _LIST_ITEM.match(prev) and not prev.lstrip().startswith(("#", ">", "```")):
                result.append("")
        result.append(line)
    return "\n".join(result)


# ════════════════════════════════════════════════════════════════════════════
#  RENDERER
# ════════════════════════════════════════════════════════════════════════════
class MarkupRenderer:
    """One explicitly configured Markdown converter.

    ``breaks`` turns every single newline into ``<br>``; ``bookmarks=False``
    marks every heading ``no-bookmark`` so it stays out of the PDF outline.
    """

    def __init__(self, breaks: bool = True, bookmarks: bool = True) -> None:
        extensions = EXTENSIONS + [HeadingIdExtension(bookmarks=bookmarks)]
        if breaks:
            extensions.append("nl2br")
        self._md = markdown.Markdown(extensions=extensions, output_format="html5")

    def render(self, text: str) -> str:
        self._md.reset()
        return self._md.convert(normalize_lists(text))

    def render_segments(self, segments: Sequence[Segment]) -> list[Part]:
        parts: list[Part] = []
        for seg in segments:
            if isinstance(seg, TextSegment):
                if seg.text.strip():
                    parts.append(self.render(seg.text))
            else:
                parts.append(seg)
        return parts


def render_document(
    body: Sequence[Segment],
    cover: Sequence[Segment] | None = None,
) -> list[Part]:
    """Render cover and body in two independent passes and merge them."""
    parts = MarkupRenderer(breaks=True, bookmarks=True).render_segments(body)
    if cover is None:
        return parts
    cover_parts = MarkupRenderer(breaks=False, bookmarks=False).render_segments(cover)
    return [
        '<section class="cover-section"><div class="cover-content">',
        *cover_parts,
        "</div></section>",
        PAGE_BREAK,
        *parts,
    ]
