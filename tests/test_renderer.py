# tests/test_renderer.py
# ============================================================
# Unit Tests — Page Renderer Backend
# ============================================================
# pdf2image and the poppler lookup are monkeypatched, so these
# run without poppler installed.
#
# Run:
#   pytest tests/test_renderer.py -v
# ============================================================

import pytest
from PIL import Image
from pdf2image.exceptions import PDFSyntaxError

from docingest.errors import PageRenderError, RendererUnavailableError
from docingest.pdf import renderer as renderer_module
from docingest.pdf.renderer import Pdf2ImageRenderer, bootstrap_renderer


class TestPdf2ImageRenderer:
    """Test the pdf2image call and its error mapping."""

    def test_renders_one_page_at_scaled_dpi(self, monkeypatch):
        calls = []

        def fake_convert(data, **kwargs):
            calls.append(kwargs)
            return [Image.new("RGB", (10, 10))]

        monkeypatch.setattr(renderer_module, "convert_from_bytes", fake_convert)
        image = Pdf2ImageRenderer().render_page(b"%PDF", page_num=3, scale=2.0)

        assert image.size == (10, 10)
        assert calls[0]["dpi"] == 144
        assert calls[0]["first_page"] == 3
        assert calls[0]["last_page"] == 3

    def test_syntax_error_becomes_page_error(self, monkeypatch):
        def fake_convert(data, **kwargs):
            raise PDFSyntaxError("bad xref")

        monkeypatch.setattr(renderer_module, "convert_from_bytes", fake_convert)
        with pytest.raises(PageRenderError) as exc_info:
            Pdf2ImageRenderer().render_page(b"%PDF", page_num=2, scale=2.0)
        assert exc_info.value.page_num == 2

    def test_no_output_is_page_error(self, monkeypatch):
        monkeypatch.setattr(renderer_module, "convert_from_bytes", lambda data, **kwargs: [])
        with pytest.raises(PageRenderError):
            Pdf2ImageRenderer().render_page(b"%PDF", page_num=1, scale=2.0)

    def test_backend_id(self):
        assert Pdf2ImageRenderer().backend_id() == "pdf2image"


class TestBootstrap:
    """Test the one-time poppler availability check."""

    def test_missing_poppler_raises(self, monkeypatch):
        monkeypatch.setattr(renderer_module.shutil, "which", lambda name, path=None: None)
        with pytest.raises(RendererUnavailableError) as exc_info:
            bootstrap_renderer()
        assert exc_info.value.details["missing"] == ["pdfinfo", "pdftoppm"]

    def test_found_poppler_returns_renderer(self, monkeypatch):
        monkeypatch.setattr(
            renderer_module.shutil, "which", lambda name, path=None: f"/opt/poppler/{name}"
        )
        renderer = bootstrap_renderer(poppler_path="/opt/poppler")
        assert isinstance(renderer, Pdf2ImageRenderer)
        assert renderer.poppler_path == "/opt/poppler"
