from .exporter import ExportResult, PdfExporter, is_pdf, offer_letter_filename
from .text_layout import layout_text_pdf, wrap_lines

__all__ = [
    "ExportResult",
    "PdfExporter",
    "is_pdf",
    "layout_text_pdf",
    "offer_letter_filename",
    "wrap_lines",
]
