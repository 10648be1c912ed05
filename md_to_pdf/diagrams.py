"""Split Mermaid blocks out of Markdown and put rendered images back in.

Extraction yields an ordered list of segments instead of splicing sentinel
strings into the text: ``TextSegment`` goes through the Markdown renderer,
``DiagramSegment`` is carried through untouched and resolved by ``reinsert``
once the rasterizer has run.  Authored text can therefore never collide with
a placeholder.
"""

import html
import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Union


MERMAID_BLOCK = re.compile(r"```mermaid[ \t]*\r?\n(.*?)```", re.DOTALL)


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class DiagramSegment:
    index: int
    source: str

    @property
    def placeholder(self) -> str:
        return placeholder(self.index)


Segment = Union[TextSegment, DiagramSegment]


def placeholder(index: int) -> str:
    """Literal token left in the document for a diagram that failed to render."""
    return f"%%MERMAID_{index}%%"


def extract_diagrams(text: str, start: int = 0) -> list[Segment]:
    """Cut every fenced ``mermaid`` block out of *text*, numbering from *start*."""
    segments: list[Segment] = []
    index, pos = start, 0
    for m in MERMAID_BLOCK.finditer(text):
        if m.start() > pos:
            segments.append(TextSegment(text[pos:m.start()]))
        segments.append(DiagramSegment(index, m.group(1).strip()))
        index += 1
        pos = m.end()
    if pos < len(text) or not segments:
        segments.append(TextSegment(text[pos:]))
    return segments


def diagram_table(*segment_lists: Iterable[Segment]) -> list[DiagramSegment]:
    found = [s for segs in segment_lists for s in segs if isinstance(s, DiagramSegment)]
    return sorted(found, key=lambda d: d.index)


def diagram_html(index: int, src: str) -> str:
    return (f'<div class="mermaid-diagram">'
            f'<img src="{html.escape(src)}" alt="Mermaid Diagram {index + 1}" />'
            f'</div>')


def reinsert(parts: Sequence[Union[str, DiagramSegment]], images: Mapping[int, str]) -> str:
    """Join rendered HTML, resolving each diagram to its image if it has one.

    *images* maps a diagram index to the image path, relative to the output
    file's directory.  A diagram missing from *images* stays visible as its
    literal placeholder token.
    """
    out = []
    for part in parts:
        if isinstance(part, DiagramSegment):
            src = images.get(part.index)
            if src is None:
                out.append(f'<p class="mermaid-unresolved">{part.placeholder}</p>')
            else:
                out.append(diagram_html(part.index, src))
        else:
            out.append(part)
    return "\n".join(out)
