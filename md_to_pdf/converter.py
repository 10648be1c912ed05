"""The conversion pipeline, start to finish."""

import os
import re
import shutil
import tempfile
from pathlib import Path

from md_to_pdf.assembler import assemble_files
from md_to_pdf.config import DEFAULT_TITLE, WORKDIR_PREFIX, Options
from md_to_pdf.console import say, warn
from md_to_pdf.diagrams import diagram_table, extract_diagrams, reinsert
from md_to_pdf.errors import ExportError
from md_to_pdf.export import build_html, export_pdf
from md_to_pdf.inputs import InputSet
from md_to_pdf.markup import render_document
from md_to_pdf.rasterize import RASTERIZERS


_FENCED = re.compile(r"^[ \t]*```.*?^[ \t]*```[^\n]*$", re.M | re.S)


def find_title(markdown_text: str) -> str | None:
    prose = _FENCED.sub("", markdown_text)
    m = re.search(r"^#\s+(.+?)\s*#*\s*$", prose, re.M)
    return m.group(1).strip() if m else None


def convert(input_set: InputSet, options: Options) -> Path:
    """Convert *input_set* into one PDF and return its path.

    Inputs are validated before anything is written.  The working directory
    is removed on success, kept on an export failure (``ExportError.workdir``
    tells where) and removed on any other error.
    """
    input_set.validate()

    say("🚀 Markdown to PDF Converter")
    if input_set.cover:
        say(f"📘 Cover: {input_set.cover}")
    say(f"📄 Input files ({len(input_set.inputs)}):")
    for i, path in enumerate(input_set.inputs, 1):
        say(f"   {i}. {path}")
    say(f"📄 Output: {input_set.output}\n")

    doc = assemble_files(input_set)
    say(f"✓ Merged {doc.count} file(s){' + cover' if doc.cover is not None else ''}")

    cover = extract_diagrams(doc.cover) if doc.cover is not None else None
    first = len(diagram_table(cover)) if cover else 0
    body = extract_diagrams(doc.body, start=first)
    diagrams = diagram_table(cover or [], body)
    if diagrams:
        say(f"✓ Found {len(diagrams)} Mermaid diagram(s)")

    parts = render_document(body, cover)
    title = options.title or find_title(doc.body) or DEFAULT_TITLE

    output = input_set.output.resolve()
    output.parent.mkdir(parents=True, exist_ok=True)
    workdir = Path(tempfile.mkdtemp(prefix=WORKDIR_PREFIX, dir=output.parent))
    try:
        if diagrams:
            say("\n🎨 Converting Mermaid diagrams to PNG...")
        images = RASTERIZERS[options.renderer](diagrams, workdir, options)
        missing = len(diagrams) - len(images)
        if missing:
            warn(f"{missing} diagram(s) could not be rendered and are left as placeholders")

        # image paths are relative to the output's directory, which is the base URL
        srcs = {i: Path(os.path.relpath(p, output.parent)).as_posix() for i, p in images.items()}
        page = build_html(reinsert(parts, srcs), title=title, engine=options.engine,
                          cover_label=options.cover_label)
        html_path = workdir / "output.html"
        html_path.write_text(page, encoding="utf-8")
        say(f"✅ HTML created: {html_path}")

        say(f"\n📄 Converting to PDF with {options.engine}...")
        export_pdf(html_path, output, engine=options.engine,
                   base_url=output.parent.as_uri() + "/")
    except ExportError as e:
        e.workdir = workdir
        raise
    except BaseException:
        shutil.rmtree(workdir, ignore_errors=True)
        raise

    if options.keep_temp:
        say(f"🔍 Working files kept in: {workdir}/")
    else:
        shutil.rmtree(workdir, ignore_errors=True)

    kb = output.stat().st_size / 1024
    say(f"\n✅ PDF created: {input_set.output}  ({kb:.0f} KB)\n")
    return output
