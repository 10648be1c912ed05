"""Resolve the command line's positional arguments into an ordered input set."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from md_to_pdf.config import DEFAULT_OUTPUT, OUTPUT_SUFFIX
from md_to_pdf.errors import MissingFileError, UsageError


_DIGITS = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple:
    """Sort key comparing digit runs by value and letters case-insensitively.

    ``re.split`` with a capturing group always alternates text and digits, so
    two keys never compare an ``int`` against a ``str``.  The raw name breaks
    ties so ``File1`` and ``file1`` still order deterministically.
    """
    parts = _DIGITS.split(name)
    key = [int(p) if i % 2 else p.casefold() for i, p in enumerate(parts)]
    return (key, name)


@dataclass
class InputSet:
    inputs: list[Path]
    output: Path
    cover: Path | None = None

    def validate(self) -> None:
        """Fail before any processing if an input or the cover is missing."""
        for path in self.inputs:
            if not path.is_file():
                raise MissingFileError(path)
        if self.cover is not None and not self.cover.is_file():
            raise MissingFileError(self.cover, "Cover file")


def resolve_inputs(
    positional: Sequence[str],
    cover: str | None = None,
    output: str | None = None,
) -> InputSet:
    args = list(positional)
    if not args:
        raise UsageError("at least one input file is required")

    if output is None and len(args) > 1 and args[-1].lower().endswith(OUTPUT_SUFFIX):
        output = args.pop()

    if output is None:
        if len(args) == 1:
            output = str(Path(args[0]).with_suffix(OUTPUT_SUFFIX))
        else:
            output = DEFAULT_OUTPUT

    args.sort(key=natural_key)
    return InputSet(
        inputs=[Path(a) for a in args],
        output=Path(output),
        cover=Path(cover) if cover else None,
    )
