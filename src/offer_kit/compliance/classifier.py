# compliance/classifier.py

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from time import monotonic

from offer_kit.observability import names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook

from .rule import ComplianceRule, Severity
from .rulebook import RuleBook
from .sentences import Sentence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComplianceFlag:
    rule: ComplianceRule
    matched_phrase: str

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    @property
    def message(self) -> str:
        return self.rule.message


FlagMap = dict[str, list[ComplianceFlag]]


@dataclass(frozen=True)
class SeveritySummary:
    error: int = 0
    warning: int = 0
    info: int = 0

    @property
    def total(self) -> int:
        return self.error + self.warning + self.info


def classify(
    sentences: Sequence[Sentence],
    jurisdiction: str,
    rules: RuleBook | Mapping[str, Iterable[ComplianceRule]],
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> FlagMap:
    """Flag sentences containing any phrase of the jurisdiction's rules.

    Only rules filed under ``jurisdiction`` apply. Flags follow rule order.
    Sentences without a flag are left out of the result entirely.
    """
    start = monotonic()
    if isinstance(rules, RuleBook):
        active = rules.rules_for(jurisdiction)
    else:
        active = list(rules.get(jurisdiction, ()))

    flags: FlagMap = {}
    for sentence in sentences:
        matched = []
        for rule in active:
            phrase = rule.first_match(sentence.text)
            if phrase is not None:
                matched.append(ComplianceFlag(rule=rule, matched_phrase=phrase))
        if matched:
            flags[sentence.id] = matched

    flag_count = sum(len(f) for f in flags.values())
    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.CLASSIFY_DURATION, elapsed_ms)
    metrics_hook.record_gauge(names.CLASSIFY_SENTENCE_COUNT, len(sentences))
    metrics_hook.increment(
        names.CLASSIFY_FLAGS_RAISED, flag_count, labels={"jurisdiction": jurisdiction}
    )
    logger.debug(
        "Compliance analysis for %s: %d sentences, %d flagged, %d flags",
        jurisdiction,
        len(sentences),
        len(flags),
        flag_count,
    )
    return flags


def summarize(flags: Mapping[str, Sequence[ComplianceFlag]]) -> SeveritySummary:
    counts = {severity: 0 for severity in Severity}
    for sentence_flags in flags.values():
        for flag in sentence_flags:
            counts[flag.severity] += 1
    return SeveritySummary(
        error=counts[Severity.ERROR],
        warning=counts[Severity.WARNING],
        info=counts[Severity.INFO],
    )


class ComplianceClassifier:
    """Owns the sentence -> flags map for the selected jurisdiction.

    Flags are rebuilt wholesale whenever the sentences, the jurisdiction or
    the rule book change; they are never patched incrementally.
    """

    def __init__(
        self,
        rulebook: RuleBook,
        jurisdiction: str,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.rulebook = rulebook
        self.metrics_hook = metrics_hook
        self._jurisdiction = jurisdiction
        self._sentences: list[Sentence] = []
        self._flags: FlagMap = {}
        self._computed_for: tuple[str, int] | None = None

    @property
    def jurisdiction(self) -> str:
        return self._jurisdiction

    @property
    def sentences(self) -> list[Sentence]:
        return list(self._sentences)

    def set_sentences(self, sentences: Sequence[Sentence]) -> None:
        self._sentences = list(sentences)
        self._computed_for = None

    def set_jurisdiction(self, jurisdiction: str) -> None:
        if jurisdiction != self._jurisdiction:
            self._jurisdiction = jurisdiction
            self._computed_for = None

    @property
    def flags(self) -> FlagMap:
        key = (self._jurisdiction, self.rulebook.version)
        if key != self._computed_for:
            self._flags = classify(
                self._sentences,
                self._jurisdiction,
                self.rulebook,
                metrics_hook=self.metrics_hook,
            )
            self._computed_for = key
        return {sid: list(f) for sid, f in self._flags.items()}

    def summary(self) -> SeveritySummary:
        return summarize(self.flags)

    def flagged_sentences(self) -> list[Sentence]:
        flags = self.flags
        return [s for s in self._sentences if s.id in flags]
