# parsers/models.py

from dataclasses import dataclass, field
from typing import Literal

# (a, b, c, d, e, f): maps fragment-local coordinates to page coordinates
Transform = tuple[float, float, float, float, float, float]

IDENTITY: Transform = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


@dataclass(frozen=True)
class TextFragment:
    """A contiguous run of extracted text with its own position and font.

    ``source_transform`` already includes the font size, so its scale
    components are the glyph size in page units and ``(e, f)`` is the
    baseline origin in PDF user space (y grows upwards).
    """

    content: str
    source_transform: Transform
    font_name: str = ""

    @property
    def baseline(self) -> float:
        return self.source_transform[5]

    @property
    def x(self) -> float:
        return self.source_transform[4]


@dataclass(frozen=True)
class ExtractedPage:
    number: int
    width: float
    height: float
    fragments: list[TextFragment]


@dataclass(frozen=True)
class ExtractedDocument:
    title: str
    source_type: Literal["pdf", "text"]
    pages: list[ExtractedPage]
    metadata: dict = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)
