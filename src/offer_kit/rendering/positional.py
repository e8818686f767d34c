# rendering/positional.py

import logging
from collections.abc import Callable, Collection, Sequence
from math import hypot
from time import monotonic

from offer_kit.observability import names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook
from offer_kit.parsers.models import TextFragment
from offer_kit.templates.models import TokenMatch

from .fonts import web_safe_family
from .instructions import (
    DrawText,
    EraseMode,
    EraseRect,
    FontSpec,
    Instruction,
    TextMeasurer,
    Viewport,
    multiply,
)

logger = logging.getLogger(__name__)

# em units, applied on every side of the erased box
PADDING = 0.02
ASCENT_FALLBACK = 0.8
DESCENT_FALLBACK = 0.2


def render_substitutions(
    fragments: Sequence[TextFragment],
    matches: Sequence[TokenMatch],
    viewport: Viewport,
    resolve: Callable[[str], str],
    measurer: TextMeasurer,
    *,
    erase_mode: EraseMode = "fill",
    flagged_names: Collection[str] = (),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Instruction]:
    """Build erase/draw instructions that overlay values onto their tokens.

    Coordinates are in viewport pixels. Tokens whose value resolves to an
    empty string produce no instructions. A token split over several
    fragments erases each piece under its own fragment and draws the whole
    value once, at the baseline of the first piece.
    """
    start = monotonic()
    instructions: list[Instruction] = []

    for match in matches:
        value = resolve(match.token_name)
        if not value:
            continue

        draw_at: tuple[float, float, FontSpec] | None = None
        for span in match.spans:
            fragment = fragments[span.fragment_index]
            m = multiply(viewport.transform, fragment.source_transform)
            sx = hypot(m[0], m[1])
            sy = hypot(m[2], m[3])

            unit = FontSpec(family=web_safe_family(fragment.font_name), size=1.0)
            before = measurer.measure(fragment.content[: span.start], unit).width
            token = measurer.measure(fragment.content[span.start : span.end], unit)
            ascent = token.ascent if token.ascent is not None else ASCENT_FALLBACK
            descent = token.descent if token.descent is not None else DESCENT_FALLBACK

            instructions.append(
                EraseRect(
                    x=m[4] + (before - PADDING) * sx,
                    y=m[5] - (ascent + PADDING) * sy,
                    width=(token.width + 2 * PADDING) * sx,
                    height=(ascent + descent + 2 * PADDING) * sy,
                    mode=erase_mode,
                )
            )
            if draw_at is None:
                draw_at = (m[4] + before * sx, m[5], FontSpec(unit.family, sy))

        x, y, font = draw_at
        instructions.append(
            DrawText(
                x=x,
                y=y,
                text=value,
                font=font,
                flagged=match.token_name in flagged_names,
            )
        )

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.RENDER_DURATION, elapsed_ms)
    metrics_hook.increment(names.RENDER_INSTRUCTIONS_TOTAL, len(instructions))
    logger.debug(
        "Built %d render instructions for %d tokens in %.1fms",
        len(instructions),
        len(matches),
        elapsed_ms,
    )
    return instructions
