"""Mermaid source → PNG, one file per diagram index.

Each rasterizer returns ``{index: png_path}`` for the diagrams it managed to
render.  A diagram that fails is reported and left out of the mapping; it
never stops the others.
"""

import html
from pathlib import Path
from typing import Callable, Sequence

import requests
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from md_to_pdf.config import KROKI_TIMEOUT, VIEWPORT, Options
from md_to_pdf.console import error, say, warn
from md_to_pdf.diagrams import DiagramSegment


def image_name(index: int) -> str:
    return f"mermaid-{index}.png"


def host_page(source: str, mermaid_url: str) -> str:
    """Minimal page that loads Mermaid and renders *source* on load."""
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <script src="{html.escape(mermaid_url)}"></script>
  <style>
    body {{ margin: 0; padding: 20px; background: white; }}
    .mermaid {{ text-align: center; }}
  </style>
</head>
<body>
  <div class="mermaid">{html.escape(source)}</div>
  <script>
    mermaid.initialize({{
      startOnLoad: true,
      theme: 'default',
      fontFamily: 'Arial, sans-serif',
      flowchart: {{ useMaxWidth: false, htmlLabels: true }}
    }});
  </script>
</body>
</html>"""


# ════════════════════════════════════════════════════════════════════════════
#  HEADLESS BROWSER (Playwright / Chromium)
# ════════════════════════════════════════════════════════════════════════════
def _screenshot(browser, diagram: DiagramSegment, path: Path, options: Options) -> bool:
    context = browser.new_context(viewport=VIEWPORT)
    try:
        page = context.new_page()
        page.set_content(host_page(diagram.source, options.mermaid_url), wait_until="networkidle")
        page.wait_for_selector(".mermaid svg", timeout=options.timeout * 1000)
        page.wait_for_timeout(options.settle * 1000)   # let Mermaid finish its layout
        svg = page.query_selector(".mermaid svg")
        if svg is None:
            return False
        svg.screenshot(path=str(path))
        return True
    finally:
        context.close()


def rasterize_with_browser(
    diagrams: Sequence[DiagramSegment], out_dir: Path, options: Options
) -> dict[int, Path]:
    images: dict[int, Path] = {}
    if not diagrams:
        return images

    with sync_playwright() as pw:
        try:
            browser = pw.chromium.launch(headless=True, args=["--no-sandbox"])
        except PlaywrightError as e:
            error(f"Could not launch headless Chromium: {e}")
            warn("Install it with: playwright install chromium")
            return images

        try:
            for diagram in diagrams:
                path = out_dir / image_name(diagram.index)
                try:
                    ok = _screenshot(browser, diagram, path, options)
                except PlaywrightError as e:
                    warn(f"Diagram {diagram.index + 1} failed: {e}")
                    continue
                if not ok:
                    warn(f"Diagram {diagram.index + 1} produced no SVG")
                    continue
                images[diagram.index] = path
                say(f"  ✓ Diagram {diagram.index + 1} → {path.name}")
        finally:
            browser.close()
    return images


# ════════════════════════════════════════════════════════════════════════════
#  KROKI
# ════════════════════════════════════════════════════════════════════════════
def rasterize_with_kroki(
    diagrams: Sequence[DiagramSegment], out_dir: Path, options: Options
) -> dict[int, Path]:
    images: dict[int, Path] = {}
    endpoint = f"{options.kroki_url.rstrip('/')}/mermaid/png"
    for diagram in diagrams:
        try:
            r = requests.post(
                endpoint,
                json={"diagram_source": diagram.source},
                headers={"Content-Type": "application/json"},
                timeout=KROKI_TIMEOUT,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            warn(f"Diagram {diagram.index + 1} failed: {e}")
            continue
        path = out_dir / image_name(diagram.index)
        path.write_bytes(r.content)
        images[diagram.index] = path
        say(f"  ✓ Diagram {diagram.index + 1} → {path.name} ({len(r.content) // 1024} KB)")
    return images


Rasterizer = Callable[[Sequence[DiagramSegment], Path, Options], dict[int, Path]]

RASTERIZERS: dict[str, Rasterizer] = {
    "browser": rasterize_with_browser,
    "kroki":   rasterize_with_kroki,
}
