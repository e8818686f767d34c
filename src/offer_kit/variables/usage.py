# variables/usage.py

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from offer_kit.compliance.sentences import Sentence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Usage:
    occurrences: int = 0
    flagged_occurrences: int = 0


def token_pattern(name: str) -> re.Pattern[str]:
    """Literal ``[name]`` with optional inner whitespace, case-sensitive."""
    return re.compile(r"\[\s*" + re.escape(name) + r"\s*\]")


def index_usage(
    variable_names: Iterable[str],
    sentences: Sequence[Sentence],
    flags: Mapping[str, object],
) -> dict[str, Usage]:
    """Count where each variable literally appears and how often that is
    inside a flagged sentence.

    Matching is exact on the variable's name. A variable bound through a
    synonym or a case variant still reports zero occurrences here.
    """
    usage: dict[str, Usage] = {}
    for name in variable_names:
        pattern = token_pattern(name)
        occurrences = 0
        flagged = 0
        for sentence in sentences:
            count = len(pattern.findall(sentence.text))
            if not count:
                continue
            occurrences += count
            if sentence.id in flags:
                flagged += count
        usage[name] = Usage(occurrences=occurrences, flagged_occurrences=flagged)
    return usage


class UsageIndexer:
    """Memoized ``index_usage``; recomputes only when an input changed."""

    def __init__(self) -> None:
        self._key: tuple | None = None
        self._result: dict[str, Usage] = {}

    def index(
        self,
        variable_names: Iterable[str],
        sentences: Sequence[Sentence],
        flags: Mapping[str, object],
    ) -> dict[str, Usage]:
        names = tuple(variable_names)
        key = (
            names,
            tuple((s.id, s.text) for s in sentences),
            frozenset(flags),
        )
        if key != self._key:
            logger.debug("Reindexing usage for %d variables", len(names))
            self._result = index_usage(names, sentences, flags)
            self._key = key
        return dict(self._result)

    def invalidate(self) -> None:
        self._key = None
