# rendering/renderer.py

from collections.abc import Callable, Collection, Mapping, Sequence

from offer_kit.observability.base import MetricsHook, NoOpMetricsHook
from offer_kit.parsers.models import TextFragment
from offer_kit.templates.models import TokenMatch

from .flat import substitute_text
from .instructions import EraseMode, Instruction, TextMeasurer, Viewport
from .positional import render_substitutions


class SubstitutionRenderer:
    """Substitutes variable values into a template.

    Two modes share one set of rules: ``flat`` rewrites plain text,
    ``positional`` produces drawing instructions over extracted fragments.
    Empty values leave their tokens untouched in both.
    """

    def __init__(
        self,
        measurer: TextMeasurer,
        *,
        erase_mode: EraseMode = "fill",
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.measurer = measurer
        self.erase_mode = erase_mode
        self.metrics_hook = metrics_hook

    def flat(self, text: str, values: Mapping[str, str]) -> str:
        return substitute_text(text, values)

    def positional(
        self,
        fragments: Sequence[TextFragment],
        matches: Sequence[TokenMatch],
        viewport: Viewport,
        resolve: Callable[[str], str],
        *,
        flagged_names: Collection[str] = (),
        erase_mode: EraseMode | None = None,
    ) -> list[Instruction]:
        return render_substitutions(
            fragments,
            matches,
            viewport,
            resolve,
            self.measurer,
            erase_mode=erase_mode or self.erase_mode,
            flagged_names=flagged_names,
            metrics_hook=self.metrics_hook,
        )
