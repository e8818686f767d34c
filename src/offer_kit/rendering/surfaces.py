# rendering/surfaces.py

import logging
from collections.abc import Mapping, Sequence

import fitz

from .fonts import WebFamily
from .instructions import (
    DrawText,
    EraseRect,
    FontSpec,
    Instruction,
    TextMetrics,
    Viewport,
)

logger = logging.getLogger(__name__)

# PDF base-14 fonts built into MuPDF
BASE14_FONTS: dict[WebFamily, str] = {
    "serif": "tiro",
    "sans-serif": "helv",
    "monospace": "cour",
}

TEXT_COLOR = (0.0, 0.0, 0.0)
FLAGGED_COLOR = (0.75, 0.1, 0.1)
FILL_COLOR = (1.0, 1.0, 1.0)


class FitzTextMeasurer:
    """Text metrics from MuPDF's base-14 fonts."""

    def __init__(self) -> None:
        self._fonts: dict[str, fitz.Font] = {}

    def _font(self, family: WebFamily) -> fitz.Font:
        code = BASE14_FONTS.get(family, "helv")
        if code not in self._fonts:
            self._fonts[code] = fitz.Font(code)
        return self._fonts[code]

    def measure(self, text: str, font: FontSpec) -> TextMetrics:
        f = self._font(font.family)
        return TextMetrics(
            width=f.text_length(text, fontsize=font.size),
            ascent=f.ascender * font.size,
            descent=-f.descender * font.size,
        )


class PdfPageSurface:
    """Applies render instructions directly onto a PyMuPDF page.

    Instructions must be built against :attr:`viewport`, whose pixels are
    the page's own top-left based points. Punch erases are applied as
    redactions so the original glyphs are removed, not just covered; the
    page should belong to a throwaway document.
    """

    def __init__(self, page: fitz.Page, *, highlight_flagged: bool = True) -> None:
        self.page = page
        self.highlight_flagged = highlight_flagged

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.page.rect.width, self.page.rect.height, 1.0)

    def apply(self, instructions: Sequence[Instruction]) -> None:
        erases = [i for i in instructions if isinstance(i, EraseRect)]
        draws = [i for i in instructions if isinstance(i, DrawText)]

        punches = [e for e in erases if e.mode == "punch"]
        for erase in punches:
            self.page.add_redact_annot(_rect(erase), fill=False)
        if punches:
            self.page.apply_redactions(images=fitz.PDF_REDACT_IMAGE_NONE)

        for erase in erases:
            if erase.mode == "fill":
                self.page.draw_rect(_rect(erase), color=None, fill=FILL_COLOR, width=0)

        for draw in draws:
            color = FLAGGED_COLOR if draw.flagged and self.highlight_flagged else TEXT_COLOR
            self.page.insert_text(
                fitz.Point(draw.x, draw.y),
                draw.text,
                fontsize=draw.font.size,
                fontname=BASE14_FONTS.get(draw.font.family, "helv"),
                color=color,
            )
        logger.debug(
            "Applied %d erases and %d draws to page %d",
            len(erases),
            len(draws),
            self.page.number + 1,
        )


def _rect(erase: EraseRect) -> fitz.Rect:
    return fitz.Rect(erase.x, erase.y, erase.x + erase.width, erase.y + erase.height)


def open_pdf(source: bytes) -> fitz.Document:
    return fitz.open(stream=source, filetype="pdf")


def render_page_png(
    source: bytes,
    page_number: int,
    instructions: Sequence[Instruction] = (),
    *,
    scale: float = 1.5,
    highlight_flagged: bool = True,
) -> bytes:
    """Rasterize one page (1-based) of ``source`` with instructions applied."""
    with open_pdf(source) as doc:
        if not 1 <= page_number <= doc.page_count:
            raise IndexError(f"Page {page_number} out of range (1-{doc.page_count})")
        page = doc[page_number - 1]
        PdfPageSurface(page, highlight_flagged=highlight_flagged).apply(instructions)
        pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale))
        return pixmap.tobytes("png")


def rasterize_pdf(
    source: bytes,
    page_instructions: Mapping[int, Sequence[Instruction]],
    *,
    scale: float = 3.0,
    highlight_flagged: bool = False,
) -> bytes:
    """Build a new PDF whose pages are images of the substituted source pages.

    Each output page keeps the source page's size in points. Pages are keyed
    by 1-based number; pages without instructions are copied as rendered.
    """
    with open_pdf(source) as doc, fitz.open() as out:
        for page in doc:
            number = page.number + 1
            PdfPageSurface(page, highlight_flagged=highlight_flagged).apply(
                page_instructions.get(number, ())
            )
            png = page.get_pixmap(matrix=fitz.Matrix(scale, scale)).tobytes("png")
            target = out.new_page(width=page.rect.width, height=page.rect.height)
            target.insert_image(target.rect, stream=png)
        return out.tobytes(garbage=3, deflate=True)
