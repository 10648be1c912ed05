"""Final HTML document and hand-off to the page-layout engine."""

import html
import os
import subprocess
from pathlib import Path
from typing import Callable

from md_to_pdf.config import COVER_LABEL
from md_to_pdf.errors import ExportError
from md_to_pdf.styles import stylesheet


WEASYPRINT_HINT = (
    "Make sure WeasyPrint and its native libraries are installed:\n"
    "   pip install weasyprint\n"
    "   https://doc.courtbouillon.org/weasyprint/stable/first_steps.html"
)
PRINCE_HINT = (
    "Make sure PrinceXML is installed:\n"
    "   brew install prince\n"
    "   Or download from: https://www.princexml.com/"
)


def build_html(body_html: str, *, title: str, engine: str, cover_label: str = COVER_LABEL) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<title>{html.escape(title)}</title>
<style>{stylesheet(engine, cover_label)}</style>
</head>
<body>{body_html}</body>
</html>"""


# ════════════════════════════════════════════════════════════════════════════
#  ENGINES
#  Each writes *pdf_path* or raises ExportError.
# ════════════════════════════════════════════════════════════════════════════
def _weasyprint(html_path: Path, pdf_path: Path, base_url: str) -> None:
    # WeasyPrint loads Pango at import time, which raises OSError when missing
    try:
        from weasyprint import HTML
    except (ImportError, OSError) as e:
        raise ExportError(f"WeasyPrint is unavailable: {e}", WEASYPRINT_HINT) from e
    try:
        HTML(filename=str(html_path), base_url=base_url).write_pdf(str(pdf_path))
    except Exception as e:
        raise ExportError(str(e), WEASYPRINT_HINT) from e


def _prince(html_path: Path, pdf_path: Path, base_url: str) -> None:
    cmd = ["prince", str(html_path), "-o", str(pdf_path), f"--baseurl={base_url}"]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ExportError("prince executable not found", PRINCE_HINT) from e
    if result.returncode != 0:
        message = result.stderr.strip() or f"prince exited with status {result.returncode}"
        raise ExportError(message, PRINCE_HINT)


ENGINES: dict[str, Callable[[Path, Path, str], None]] = {
    "weasyprint": _weasyprint,
    "prince":     _prince,
}


def export_pdf(html_path: Path, output_path: Path, *, engine: str, base_url: str) -> Path:
    """Render *html_path* to *output_path*.

    The engine writes into the working directory first; the finished file is
    moved over *output_path* only once the engine succeeded, so a failed run
    never leaves a partial PDF behind.
    """
    scratch = html_path.with_name("output.pdf")
    ENGINES[engine](html_path, scratch, base_url)
    if not scratch.is_file():
        raise ExportError(f"{engine} produced no output", "")
    os.replace(scratch, output_path)
    return output_path
