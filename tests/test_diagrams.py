from md_to_pdf.diagrams import (
    DiagramSegment, TextSegment, diagram_table, extract_diagrams, placeholder, reinsert,
)

DOC = """# Title

```mermaid
graph TD
  A --> B
```

Between.

```mermaid

sequenceDiagram
  A->>B: hi

```

```python
print("not a diagram")
```

```mermaid
pie
```
"""


def test_extracts_in_order_with_trimmed_source():
    segments = extract_diagrams(DOC)
    diagrams = diagram_table(segments)
    assert [d.index for d in diagrams] == [0, 1, 2]
    assert diagrams[0].source == "graph TD\n  A --> B"
    assert diagrams[1].source.startswith("sequenceDiagram")
    assert diagrams[2].source == "pie"


def test_text_between_diagrams_is_kept():
    segments = extract_diagrams(DOC)
    text = "".join(s.text for s in segments if isinstance(s, TextSegment))
    assert "Between." in text
    assert 'print("not a diagram")' in text
    assert "```mermaid" not in text


def test_start_offsets_indices():
    segments = extract_diagrams("```mermaid\npie\n```", start=4)
    assert segments == [DiagramSegment(4, "pie")]


def test_no_diagrams_yields_one_text_segment():
    assert extract_diagrams("plain") == [TextSegment("plain")]


def test_identical_sources_get_distinct_indices():
    block = "```mermaid\npie\n```\n"
    diagrams = diagram_table(extract_diagrams(block * 2))
    assert [d.index for d in diagrams] == [0, 1]


def test_all_rendered_leaves_no_placeholders():
    diagrams = diagram_table(extract_diagrams(DOC))
    parts = ["<h1>Title</h1>", *diagrams]
    out = reinsert(parts, {d.index: f"work/mermaid-{d.index}.png" for d in diagrams})
    assert "%%MERMAID_" not in out
    assert out.count('<div class="mermaid-diagram">') == 3
    assert 'src="work/mermaid-2.png"' in out


def test_failed_diagram_leaves_only_its_placeholder():
    diagrams = diagram_table(extract_diagrams(DOC))
    out = reinsert(diagrams, {0: "a.png", 2: "c.png"})
    assert placeholder(1) in out
    assert placeholder(0) not in out
    assert placeholder(2) not in out


def test_authored_token_is_not_replaced():
    parts = [f"<p>{placeholder(0)}</p>", DiagramSegment(0, "pie")]
    out = reinsert(parts, {0: "mermaid-0.png"})
    assert out.count(placeholder(0)) == 1
    assert 'src="mermaid-0.png"' in out
