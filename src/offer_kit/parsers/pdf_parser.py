# parsers/pdf_parser.py

import io
import logging
import math
from time import monotonic
from typing import Any

import pdfplumber

from offer_kit.observability import names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import DocumentExtractor, ExtractionError
from .models import ExtractedDocument, ExtractedPage, TextFragment, Transform

logger = logging.getLogger(__name__)

# Baseline drift (page units) still considered the same text run
BASELINE_TOLERANCE = 0.5
SIZE_TOLERANCE = 0.1
# Horizontal gap, in ems, that ends a run (3pt at 12pt, as pdfplumber's x_tolerance)
GAP_TOLERANCE = 0.25


class PdfExtractor(DocumentExtractor):
    """
    Deterministic PDF text extractor.
    - Uses page order and content-stream character order
    - Groups characters into runs sharing font, size and baseline
    - Starts a new run at any visible horizontal gap, so each run is
      positioned by its own first character
    - Emits one TextFragment per run, transform scaled by font size
    """

    def __init__(self, metrics_hook: MetricsHook = NoOpMetricsHook()) -> None:
        self.metrics_hook = metrics_hook

    def extract(self, source: bytes) -> ExtractedDocument:
        if not source:
            raise ExtractionError("Empty document")

        start = monotonic()
        try:
            with pdfplumber.open(io.BytesIO(source)) as pdf:
                title = self._extract_title(pdf)
                pages = [
                    ExtractedPage(
                        number=page_number,
                        width=float(page.width),
                        height=float(page.height),
                        fragments=self._extract_fragments(page),
                    )
                    for page_number, page in enumerate(pdf.pages, start=1)
                ]
        except Exception as exc:
            self.metrics_hook.increment(names.EXTRACTION_ERRORS_TOTAL)
            logger.error("PDF extraction failed: %s", exc)
            raise ExtractionError(f"Unable to read PDF: {exc}") from exc

        if not pages:
            raise ExtractionError("PDF has no pages")

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.EXTRACTION_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.EXTRACTION_PAGES_TOTAL, len(pages))
        logger.info(
            "Extracted %d pages, %d fragments in %.0fms",
            len(pages),
            sum(len(p.fragments) for p in pages),
            elapsed_ms,
        )
        return ExtractedDocument(
            title=title,
            source_type="pdf",
            pages=pages,
            metadata={"source_type": "pdf"},
        )

    def _extract_fragments(self, page: Any) -> list[TextFragment]:
        fragments: list[TextFragment] = []
        run: list[dict] = []

        for char in page.chars:
            if run and not self._continues_run(run[-1], char):
                fragments.append(self._to_fragment(run))
                run = []
            run.append(char)

        if run:
            fragments.append(self._to_fragment(run))
        return fragments

    def _continues_run(self, prev: dict, char: dict) -> bool:
        if prev.get("fontname") != char.get("fontname"):
            return False
        if abs(float(prev["size"]) - float(char["size"])) > SIZE_TOLERANCE:
            return False
        if abs(prev["matrix"][5] - char["matrix"][5]) > BASELINE_TOLERANCE:
            return False
        # A jump backwards means the content stream moved elsewhere on the line
        if float(char["x0"]) < float(prev["x0"]):
            return False
        gap = float(char["x0"]) - float(prev["x1"])
        return gap <= GAP_TOLERANCE * float(char["size"])

    def _to_fragment(self, run: list[dict]) -> TextFragment:
        first = run[0]
        return TextFragment(
            content="".join(c["text"] for c in run),
            source_transform=_fragment_transform(first),
            font_name=first.get("fontname", ""),
        )

    def _extract_title(self, pdf: Any) -> str:
        """
        Simple heuristic:
        - First non-empty line of first page
        """
        if not pdf.pages:
            return "Untitled Document"
        text = pdf.pages[0].extract_text() or ""
        for line in text.splitlines():
            if line.strip():
                return line.strip()
        return "Untitled Document"


def _fragment_transform(char: dict) -> Transform:
    # pdfminer's char matrix excludes the font size; "size" is the glyph
    # height after the matrix is applied, so divide the matrix scale back out.
    a, b, c, d, e, f = (float(v) for v in char["matrix"])
    size = float(char["size"])
    vertical_scale = math.hypot(c, d)
    font_size = size / vertical_scale if vertical_scale else size
    return (a * font_size, b * font_size, c * font_size, d * font_size, e, f)
