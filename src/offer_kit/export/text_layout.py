# export/text_layout.py

import io

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

FONT_NAME = "Helvetica"
FONT_SIZE = 12
LINE_HEIGHT = FONT_SIZE * 1.4
MARGIN = 50


def wrap_lines(text: str, max_width: float) -> list[str]:
    """Greedy word wrap, measured in Helvetica at the body font size.

    Explicit newlines always break. A single word wider than the line is
    kept whole on a line of its own.
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if current and stringWidth(candidate, FONT_NAME, FONT_SIZE) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


def layout_text_pdf(text: str, title: str = "Offer Letter") -> bytes:
    buffer = io.BytesIO()
    width, height = A4
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(title)
    pdf.setFont(FONT_NAME, FONT_SIZE)

    top = height - MARGIN - FONT_SIZE
    y = top
    for line in wrap_lines(text, width - 2 * MARGIN):
        if y < MARGIN:
            pdf.showPage()
            pdf.setFont(FONT_NAME, FONT_SIZE)
            y = top
        if line:
            pdf.drawString(MARGIN, y, line)
        y -= LINE_HEIGHT

    pdf.save()
    return buffer.getvalue()
