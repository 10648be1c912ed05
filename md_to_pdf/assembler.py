"""Concatenate input documents, page break between each, cover kept apart."""

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from md_to_pdf.inputs import InputSet


PAGE_BREAK = '<div class="page-break"></div>'
_SEPARATOR = f"\n\n{PAGE_BREAK}\n\n"


@dataclass
class AssembledDocument:
    body: str
    cover: str | None = None
    count: int = 0


def assemble(texts: Sequence[str], cover: str | None = None) -> AssembledDocument:
    return AssembledDocument(body=_SEPARATOR.join(texts), cover=cover, count=len(texts))


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def assemble_files(input_set: InputSet) -> AssembledDocument:
    cover = _read(input_set.cover) if input_set.cover else None
    return assemble([_read(p) for p in input_set.inputs], cover=cover)
