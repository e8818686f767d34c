# parsers/layout.py

from collections.abc import Iterable, Sequence

from .models import ExtractedPage, TextFragment

# Baselines closer than this (page units) sit on the same visual line
LINE_TOLERANCE = 5.0


def group_lines(
    fragments: Iterable[TextFragment], tolerance: float = LINE_TOLERANCE
) -> list[list[TextFragment]]:
    """Group fragments into visual lines, top to bottom, left to right."""
    ordered = sorted(fragments, key=lambda f: (-f.baseline, f.x))

    lines: list[list[TextFragment]] = []
    anchor: float | None = None
    for fragment in ordered:
        if anchor is None or abs(fragment.baseline - anchor) >= tolerance:
            lines.append([])
            anchor = fragment.baseline
        lines[-1].append(fragment)

    return [sorted(line, key=lambda f: f.x) for line in lines]


def page_text(page: ExtractedPage, tolerance: float = LINE_TOLERANCE) -> str:
    return "\n".join(
        "".join(f.content for f in line) for line in group_lines(page.fragments, tolerance)
    )


def layout_text(pages: Sequence[ExtractedPage], tolerance: float = LINE_TOLERANCE) -> str:
    """Flat rendition of a document that keeps its line breaks."""
    return "\n".join(page_text(page, tolerance) for page in pages)
