# src/offer_kit/suggestions/base.py

import json
import logging
import re
from collections.abc import Sequence
from typing import Protocol

from offer_kit.observability.base import MetricsHook

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class EntitySuggester(Protocol):
    """Proposes values for template placeholders from the letter's own text.

    Design principles:
    - Output only feeds ``VariableBinder.seed``: it never overwrites edits
    - Transport only: Retries only on network/rate-limit errors
    - Unusable model output yields an empty mapping, not an exception
    """

    metrics_hook: MetricsHook

    async def suggest(self, *, text: str, names: Sequence[str]) -> dict[str, str]:
        """Suggest values for ``names``.

        Args:
            text: Flat template text the placeholders appear in.
            names: Placeholder names, deduplicated, in document order.

        Returns:
            Mapping of a subset of ``names`` to non-blank values.

        Raises:
            Provider-specific errors after retry exhaustion.
        """
        ...


def parse_suggestions(raw: str | None, names: Sequence[str]) -> dict[str, str]:
    """Extract a ``{name: value}`` object from model output.

    Tolerates a surrounding markdown code fence. Unknown names, non-string
    and blank values are dropped.
    """
    if not raw:
        return {}

    try:
        data = json.loads(_FENCE.sub("", raw.strip()))
    except json.JSONDecodeError:
        logger.warning("Failed to parse suggestion output: %.200s", raw)
        return {}

    if not isinstance(data, dict):
        logger.warning("Suggestion output is not a JSON object: %s", type(data).__name__)
        return {}

    wanted = set(names)
    return {
        key: value.strip()
        for key, value in data.items()
        if key in wanted and isinstance(value, str) and value.strip()
    }
