"""Shared fixtures: input files on disk and fakes for the external systems."""

import pytest

from md_to_pdf.export import ENGINES
from md_to_pdf.rasterize import RASTERIZERS, image_name


class FakeRasterizer:
    """Writes a stub PNG per diagram, except for indices listed in ``fail``."""

    def __init__(self):
        self.fail = set()
        self.calls = []

    def __call__(self, diagrams, out_dir, options):
        self.calls.append(list(diagrams))
        images = {}
        for d in diagrams:
            if d.index in self.fail:
                continue
            path = out_dir / image_name(d.index)
            path.write_bytes(b"\x89PNG\r\n")
            images[d.index] = path
        return images


class FakeEngine:
    """Stands in for WeasyPrint; remembers the HTML it was given."""

    def __init__(self):
        self.html = None
        self.base_url = None
        self.error = None

    def __call__(self, html_path, pdf_path, base_url):
        self.html = html_path.read_text(encoding="utf-8")
        self.base_url = base_url
        if self.error is not None:
            raise self.error
        pdf_path.write_bytes(b"%PDF-1.7\n")


@pytest.fixture
def write(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def rasterizer(monkeypatch):
    fake = FakeRasterizer()
    monkeypatch.setitem(RASTERIZERS, "browser", fake)
    return fake


@pytest.fixture
def engine(monkeypatch):
    fake = FakeEngine()
    monkeypatch.setitem(ENGINES, "weasyprint", fake)
    return fake
