from .flat import substitute_text
from .fonts import web_safe_family
from .instructions import (
    DrawText,
    EraseRect,
    FontSpec,
    Instruction,
    TextMeasurer,
    TextMetrics,
    Viewport,
    multiply,
)
from .positional import render_substitutions
from .renderer import SubstitutionRenderer
from .surfaces import FitzTextMeasurer, PdfPageSurface, rasterize_pdf, render_page_png

__all__ = [
    "DrawText",
    "EraseRect",
    "FitzTextMeasurer",
    "FontSpec",
    "Instruction",
    "PdfPageSurface",
    "SubstitutionRenderer",
    "TextMeasurer",
    "TextMetrics",
    "Viewport",
    "multiply",
    "rasterize_pdf",
    "render_page_png",
    "render_substitutions",
    "substitute_text",
    "web_safe_family",
]
