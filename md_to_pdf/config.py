"""Defaults for a conversion run. CLI flags override them per run."""

from dataclasses import dataclass


# ── Config ────────────────────────────────────────────────────────────────
KROKI_URL        = "https://kroki.io"
MERMAID_JS_URL   = "https://cdn.jsdelivr.net/npm/mermaid@10.6.1/dist/mermaid.min.js"
RENDER_TIMEOUT   = 10.0          # seconds to wait for a diagram's <svg>
KROKI_TIMEOUT    = 60            # seconds per Kroki request
SETTLE_DELAY     = 1.0           # seconds for Mermaid's layout to finish
VIEWPORT         = {"width": 1400, "height": 1000}
DEFAULT_OUTPUT   = "output.pdf"
OUTPUT_SUFFIX    = ".pdf"
COVER_LABEL      = "Cover"
DEFAULT_TITLE    = "Document"
DEFAULT_ENGINE   = "weasyprint"
DEFAULT_RENDERER = "browser"
WORKDIR_PREFIX   = ".md2pdf-"


@dataclass
class Options:
    title: str | None = None
    cover_label: str = COVER_LABEL
    renderer: str = DEFAULT_RENDERER
    engine: str = DEFAULT_ENGINE
    timeout: float = RENDER_TIMEOUT
    settle: float = SETTLE_DELAY
    mermaid_url: str = MERMAID_JS_URL
    kroki_url: str = KROKI_URL
    keep_temp: bool = False
