from .base import DocumentExtractor, ExtractionError
from .layout import group_lines, layout_text, page_text
from .models import ExtractedDocument, ExtractedPage, TextFragment, Transform
from .pdf_parser import PdfExtractor
from .text_parser import TextExtractor

__all__ = [
    "DocumentExtractor",
    "ExtractedDocument",
    "ExtractedPage",
    "ExtractionError",
    "PdfExtractor",
    "TextExtractor",
    "TextFragment",
    "Transform",
    "group_lines",
    "layout_text",
    "page_text",
]
