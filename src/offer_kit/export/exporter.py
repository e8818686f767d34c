# export/exporter.py

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from time import monotonic

from offer_kit.observability import names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook
from offer_kit.rendering.instructions import Instruction
from offer_kit.rendering.surfaces import rasterize_pdf

from .text_layout import layout_text_pdf

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF"

CANDIDATE_KEYS = ("Candidate Name", "candidate_name", "name")

PageInstructions = Mapping[int, Sequence[Instruction]]


@dataclass(frozen=True)
class ExportResult:
    """Bytes to hand to the user.

    When ``ok`` is false, ``data`` is the unchanged fallback (usually the
    last-known-good source) and ``error`` says what went wrong.
    """

    data: bytes
    ok: bool
    error: str | None = None


def is_pdf(data: bytes) -> bool:
    return data[: len(PDF_HEADER)] == PDF_HEADER


def offer_letter_filename(values: Mapping[str, str], today: date | None = None) -> str:
    candidate = next((values[k] for k in CANDIDATE_KEYS if values.get(k)), "Candidate")
    clean = re.sub(r"[^a-zA-Z0-9]", "_", candidate)
    day = (today or date.today()).isoformat()
    return f"Offer_Letter_{clean}_{day}.pdf"


class PdfExporter:
    """Produces downloadable PDFs, never raising on render failures."""

    def __init__(
        self,
        *,
        scale: float = 3.0,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.scale = scale
        self.metrics_hook = metrics_hook

    def export_overlay(
        self,
        source: bytes,
        page_instructions: PageInstructions | Callable[[], PageInstructions],
    ) -> ExportResult:
        """Rasterize every page of ``source`` with substitutions applied.

        ``page_instructions`` may be a callable so that failures while
        building them also fall back to ``source``.
        """

        def build() -> bytes:
            instructions = (
                page_instructions() if callable(page_instructions) else page_instructions
            )
            return rasterize_pdf(source, instructions, scale=self.scale)

        return self._run("overlay", build, fallback=source)

    def export_text(
        self, text: str, *, fallback: bytes = b"", title: str = "Offer Letter"
    ) -> ExportResult:
        """Lay substituted text out on fresh A4 pages."""
        return self._run(
            "text", lambda: layout_text_pdf(text, title=title), fallback=fallback
        )

    def _run(self, kind: str, build: Callable[[], bytes], *, fallback: bytes) -> ExportResult:
        start = monotonic()
        self.metrics_hook.increment(names.EXPORT_REQUESTS_TOTAL, labels={"kind": kind})
        try:
            data = build()
            if not is_pdf(data):
                raise ValueError("Output is not a valid PDF (no %PDF header)")
        except Exception as exc:
            self.metrics_hook.increment(names.EXPORT_FALLBACKS_TOTAL, labels={"kind": kind})
            logger.warning("PDF export (%s) failed, returning original bytes: %s", kind, exc)
            return ExportResult(data=fallback, ok=False, error=str(exc))

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.EXPORT_DURATION, elapsed_ms, labels={"kind": kind}
        )
        logger.info("Exported %s PDF (%d bytes) in %.0fms", kind, len(data), elapsed_ms)
        return ExportResult(data=data, ok=True)
