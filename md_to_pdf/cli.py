"""Command-line entry point.

Usage:
  md-to-pdf document.md
  md-to-pdf file1.md file2.md file3.md output.pdf
  md-to-pdf --cover cover.md *.md output.pdf
  md-to-pdf --renderer kroki --engine prince notes.md -o notes.pdf
"""

import argparse
import sys
import traceback

from md_to_pdf import __version__
from md_to_pdf.config import (
    COVER_LABEL, DEFAULT_ENGINE, DEFAULT_RENDERER, KROKI_URL, RENDER_TIMEOUT, Options,
)
from md_to_pdf.console import error, set_quiet
from md_to_pdf.converter import convert
from md_to_pdf.errors import ConversionError, ExportError, UsageError
from md_to_pdf.export import ENGINES
from md_to_pdf.inputs import resolve_inputs
from md_to_pdf.rasterize import RASTERIZERS


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="md-to-pdf",
        description="Convert Markdown (+ Mermaid) files into one bookmarked PDF.",
        epilog="If the last file ends in .pdf and there is more than one file, it is the output.",
    )
    p.add_argument("files", nargs="*", metavar="FILE", help="input .md files, optionally followed by OUTPUT.pdf")
    p.add_argument("--cover",       metavar="FILE", help="cover document, rendered without line breaks or bookmarks")
    p.add_argument("-o", "--output", help="output PDF path")
    p.add_argument("--title",       help="document title (default: first level-1 heading)")
    p.add_argument("--cover-label", default=COVER_LABEL, help="outline entry for the cover (default: %(default)s)")
    p.add_argument("--renderer",    choices=sorted(RASTERIZERS), default=DEFAULT_RENDERER,
                   help="how Mermaid diagrams are rendered (default: %(default)s)")
    p.add_argument("--engine",      choices=sorted(ENGINES), default=DEFAULT_ENGINE,
                   help="PDF layout engine (default: %(default)s)")
    p.add_argument("--timeout",     type=float, default=RENDER_TIMEOUT,
                   help="seconds to wait for each diagram (default: %(default)s)")
    p.add_argument("--kroki-url",   default=KROKI_URL, help="Kroki server for --renderer kroki")
    p.add_argument("--keep-temp",   action="store_true", help="keep the working directory after success")
    p.add_argument("-q", "--quiet", action="store_true", help="only print errors")
    p.add_argument("--version",     action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_intermixed_args(argv)
        input_set = resolve_inputs(args.files, cover=args.cover, output=args.output)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        error(f"Error: {e}")
        return 1

    set_quiet(args.quiet)
    options = Options(
        title=args.title,
        cover_label=args.cover_label,
        renderer=args.renderer,
        engine=args.engine,
        timeout=args.timeout,
        kroki_url=args.kroki_url,
        keep_temp=args.keep_temp,
    )

    try:
        convert(input_set, options)
    except ExportError as e:
        error(f"{options.engine} error: {e}")
        if e.hint:
            print(f"\n💡 {e.hint}\n", file=sys.stderr)
        if e.workdir:
            print(f"🔍 Debug files kept in: {e.workdir}/", file=sys.stderr)
        return 1
    except ConversionError as e:
        error(f"Error: {e}")
        return 1
    except Exception as e:
        error(f"Error: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
