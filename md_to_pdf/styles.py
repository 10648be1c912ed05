"""Fixed presentation rules for the exported document."""

from string import Template

# Bookmark properties are spelled differently per layout engine.
_BOOKMARK_PROPS = {
    "weasyprint": ("bookmark-level", "bookmark-label"),
    "prince":     ("prince-bookmark-level", "prince-bookmark-label"),
}

_CSS = Template("""
/* ─── PAGE SETUP ───────────────────────────────────────── */
@page { size: A4; margin: 18mm; }

/* ─── OUTLINE ──────────────────────────────────────────── */
h1 { $level: 1; }
h2 { $level: 2; }
h3 { $level: 3; }
h4 { $level: 4; }
h5, h6 { $level: none; }

/* cover headings stay out of the outline; the section gets one entry */
h1.no-bookmark, h2.no-bookmark, h3.no-bookmark,
h4.no-bookmark, h5.no-bookmark, h6.no-bookmark { $level: none; }
.cover-section { $level: 1; $label: "$cover_label"; }

/* ─── COVER ────────────────────────────────────────────── */
.cover-content h1,
.cover-content h2 { border-bottom: none; padding-bottom: 0; }
.cover-content hr {
  border: none;
  border-top: 1px solid #e0e0e0;
  margin: 15px 0;
  opacity: 0.5;
}

.page-break { page-break-before: always; }

/* ─── BODY ─────────────────────────────────────────────── */
body {
  font-family: "PingFang SC", "Hiragino Sans GB", "Microsoft YaHei", "Noto Sans CJK SC", Arial, sans-serif;
  color: #333;
  font-size: 12pt;
  line-height: 1.6;
}

h1, h2, h3, h4 {
  font-weight: 600;
  margin: 24px 0 16px 0;
  page-break-after: avoid;
}
h1 { font-size: 2em; border-bottom: 2px solid #3498db; padding-bottom: 10px; }
h2 { font-size: 1.5em; border-bottom: 1px solid #ddd; padding-bottom: 8px; }
h3 { font-size: 1.25em; }
h4 { font-size: 1.1em; }

p { margin: 10px 0; }
ul, ol { margin: 10px 0; padding-left: 2em; }
li { margin: 4px 0; }

code { background: #f5f5f5; padding: 2px 6px; border-radius: 3px; font-size: 0.9em; }
pre { background: #f6f8fa; padding: 16px; border-radius: 6px; margin: 16px 0; page-break-inside: avoid; white-space: pre-wrap; }
pre code { background: transparent; padding: 0; }

/* ─── DIAGRAMS ─────────────────────────────────────────── */
.mermaid-diagram {
  margin: 20px 0;
  padding: 20px;
  background: #fff;
  border: 1px solid #ddd;
  border-radius: 6px;
  text-align: center;
  page-break-inside: avoid;
}
.mermaid-diagram img { max-width: 100%; height: auto; }
.mermaid-unresolved { color: #c0392b; font-family: monospace; }

/* ─── MISC ─────────────────────────────────────────────── */
blockquote { border-left: 4px solid #3498db; padding-left: 16px; margin: 16px 0; color: #666; }
hr { border: none; border-top: 2px solid #ddd; margin: 20px 0; }
table { width: 100%; border-collapse: collapse; margin: 16px 0; page-break-inside: avoid; }
th, td { border: 1px solid #ddd; padding: 8px; }
th { background: #f5f5f5; font-weight: 600; }
tr:nth-child(even) { background: #fafafa; }
a { color: #3498db; text-decoration: none; }
strong { font-weight: 600; }
""")


def _css_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", " ")


def stylesheet(engine: str, cover_label: str = "Cover") -> str:
    level, label = _BOOKMARK_PROPS[engine]
    return _CSS.substitute(level=level, label=label, cover_label=_css_string(cover_label))
