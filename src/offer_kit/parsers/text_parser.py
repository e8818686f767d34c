# parsers/text_parser.py

import logging

from .base import DocumentExtractor, ExtractionError
from .models import ExtractedDocument, ExtractedPage, TextFragment

logger = logging.getLogger(__name__)

# A4 in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
MARGIN = 50.0
FONT_SIZE = 12.0
LINE_HEIGHT = FONT_SIZE * 1.4
FONT_NAME = "Helvetica"


class TextExtractor(DocumentExtractor):
    """Lays a plain-text template out as if it were printed on A4 pages.

    Each line becomes one fragment so plain templates flow through the same
    scanning and layout code as PDFs.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def extract(self, source: bytes) -> ExtractedDocument:
        try:
            text = source.decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise ExtractionError(f"Template is not valid {self._encoding}") from exc
        return self.extract_text(text)

    def extract_text(self, text: str) -> ExtractedDocument:
        lines = text.splitlines()
        lines_per_page = max(1, int((PAGE_HEIGHT - 2 * MARGIN) // LINE_HEIGHT))

        pages: list[ExtractedPage] = []
        for page_index, first in enumerate(range(0, max(len(lines), 1), lines_per_page)):
            fragments = [
                TextFragment(
                    content=line,
                    source_transform=(
                        FONT_SIZE,
                        0.0,
                        0.0,
                        FONT_SIZE,
                        MARGIN,
                        PAGE_HEIGHT - MARGIN - FONT_SIZE - row * LINE_HEIGHT,
                    ),
                    font_name=FONT_NAME,
                )
                for row, line in enumerate(lines[first : first + lines_per_page])
                if line
            ]
            pages.append(
                ExtractedPage(
                    number=page_index + 1,
                    width=PAGE_WIDTH,
                    height=PAGE_HEIGHT,
                    fragments=fragments,
                )
            )

        title = next((line.strip() for line in lines if line.strip()), "Untitled Document")
        logger.debug("Laid out %d template lines on %d pages", len(lines), len(pages))
        return ExtractedDocument(
            title=title,
            source_type="text",
            pages=pages,
            metadata={"source_type": "text"},
        )
