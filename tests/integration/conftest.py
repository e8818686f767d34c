from pathlib import Path

import pytest
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas


def _create_offer_pdf(path: Path) -> None:
    """Single-page offer letter with one token split across two fonts."""
    c = canvas.Canvas(str(path), pagesize=LETTER)
    width, height = LETTER

    text = c.beginText(40, height - 50)
    text.setFont("Helvetica", 12)
    text.textLine("OFFER OF EMPLOYMENT")
    text.textLine("")
    text.textLine("Dear [Candidate Name],")
    text.textLine("This is an at-will agreement. Your start date is [Start Date].")
    # "[Company]" straddles a font change, so it is extracted as two runs
    text.textOut("Welcome to [Com")
    text.setFont("Helvetica-Bold", 12)
    text.textOut("pany]")
    text.setFont("Helvetica", 12)
    text.textLine(".")

    c.drawText(text)
    c.showPage()
    c.save()


def _create_multipage_pdf(path: Path) -> None:
    c = canvas.Canvas(str(path), pagesize=LETTER)
    width, height = LETTER

    # Page 1
    text = c.beginText(40, height - 50)
    text.setFont("Times-Roman", 14)
    for line in ["OFFER LETTER", "Position: [Job Title]"]:
        text.textLine(line)
    c.drawText(text)
    c.showPage()

    # Page 2
    text = c.beginText(40, height - 50)
    text.setFont("Courier", 10)
    for line in ["Signed: [Candidate Name]", "Date: [Start Date]"]:
        text.textLine(line)
    c.drawText(text)
    c.showPage()

    c.save()


def _create_two_column_pdf(path: Path) -> None:
    """Label and value columns drawn as separate strings on shared baselines."""
    c = canvas.Canvas(str(path), pagesize=LETTER)
    c.setFont("Helvetica", 12)
    c.drawString(50, 100, "Name:")
    c.drawString(300, 100, "[Candidate Name]")
    c.drawString(50, 80, "Start:")
    c.drawString(300, 80, "Starting on [Start Date]")
    c.showPage()
    c.save()


@pytest.fixture(scope="session")
def pdf_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Create all test PDFs once per run."""
    dir_path: Path = tmp_path_factory.mktemp("pdfs")

    _create_offer_pdf(dir_path / "offer.pdf")
    _create_multipage_pdf(dir_path / "multipage.pdf")
    _create_two_column_pdf(dir_path / "two_column.pdf")

    return dir_path


@pytest.fixture(scope="session")
def offer_pdf(pdf_dir: Path) -> bytes:
    return (pdf_dir / "offer.pdf").read_bytes()


@pytest.fixture(scope="session")
def multipage_pdf(pdf_dir: Path) -> bytes:
    return (pdf_dir / "multipage.pdf").read_bytes()


@pytest.fixture(scope="session")
def two_column_pdf(pdf_dir: Path) -> bytes:
    return (pdf_dir / "two_column.pdf").read_bytes()
