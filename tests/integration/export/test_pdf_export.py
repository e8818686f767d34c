import fitz
import pytest

from offer_kit.export.exporter import PdfExporter, is_pdf
from offer_kit.export.text_layout import layout_text_pdf
from offer_kit.observability import InMemoryMetricsHook, names
from offer_kit.rendering.instructions import DrawText, EraseRect, FontSpec
from offer_kit.rendering.surfaces import rasterize_pdf, render_page_png

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _page_count(data: bytes) -> int:
    with fitz.open(stream=data, filetype="pdf") as doc:
        return doc.page_count


# --- Overlay export ---


def test_overlay_export_keeps_pages_and_removes_text(multipage_pdf: bytes) -> None:
    instructions = {
        1: [
            EraseRect(100, 50, 80, 16, mode="punch"),
            DrawText(100, 62, "Engineer", FontSpec("serif", 14)),
        ]
    }

    result = PdfExporter(scale=1.0).export_overlay(multipage_pdf, instructions)

    assert result.ok
    assert is_pdf(result.data)
    with fitz.open(stream=result.data, filetype="pdf") as doc:
        assert doc.page_count == 2
        # rasterized pages carry images only, so the original tokens are gone
        assert all(page.get_text().strip() == "" for page in doc)
        assert doc[0].rect.width == pytest.approx(612)


def test_corrupt_source_is_returned_unchanged() -> None:
    hook = InMemoryMetricsHook()
    source = b"this is not a pdf"

    result = PdfExporter(metrics_hook=hook).export_overlay(source, {1: []})

    assert not result.ok
    assert result.data == source
    assert result.error
    assert hook.total(names.EXPORT_FALLBACKS_TOTAL) == 1


# --- Text export ---


def test_text_export_flows_onto_extra_pages() -> None:
    text = "\n".join(f"Clause {i}: the employee agrees to the terms." for i in range(120))

    result = PdfExporter().export_text(text, title="Long Offer")

    assert result.ok
    assert _page_count(result.data) > 1
    with fitz.open(stream=result.data, filetype="pdf") as doc:
        assert "Clause 0:" in doc[0].get_text()
        assert doc.metadata["title"] == "Long Offer"


def test_layout_uses_a4() -> None:
    with fitz.open(stream=layout_text_pdf("Hello"), filetype="pdf") as doc:
        assert doc[0].rect.width == pytest.approx(595.28, abs=0.1)
        assert doc[0].rect.height == pytest.approx(841.89, abs=0.1)


# --- Preview surfaces ---


def test_render_page_png(offer_pdf: bytes) -> None:
    png = render_page_png(
        offer_pdf, 1, [DrawText(40, 100, "Alex Kim", FontSpec("sans-serif", 12), flagged=True)]
    )

    assert png.startswith(PNG_SIGNATURE)


def test_render_page_png_page_out_of_range(offer_pdf: bytes) -> None:
    with pytest.raises(IndexError):
        render_page_png(offer_pdf, 2)


def test_fill_erase_covers_original_text(offer_pdf: bytes) -> None:
    # the title sits at x=40, baseline 50pt below the top edge
    erased = rasterize_pdf(offer_pdf, {1: [EraseRect(30, 30, 300, 30, mode="fill")]}, scale=1.0)

    with fitz.open(stream=erased, filetype="pdf") as doc:
        pixmap = doc[0].get_pixmap()
        # inside the erased box every sampled pixel is white
        samples = [pixmap.pixel(x, 40) for x in range(45, 200, 10)]
    assert all(sample[:3] == (255, 255, 255) for sample in samples)
