import pytest

from offer_kit.compliance.classifier import (
    ComplianceClassifier,
    SeveritySummary,
    classify,
    summarize,
)
from offer_kit.compliance.rule import ComplianceRule, Severity
from offer_kit.compliance.rulebook import RuleBook
from offer_kit.compliance.sentences import Sentence, split_sentences
from offer_kit.observability import InMemoryMetricsHook, names


@pytest.fixture
def rulebook() -> RuleBook:
    book = RuleBook()
    book.add_rule(
        "CA",
        "at_will",
        {"severity": "warning", "message": "At-will language", "flaggedPhrases": ["at-will"]},
    )
    book.add_rule(
        "CA",
        "non_compete",
        {
            "severity": "error",
            "message": "Non-competes are void",
            "flaggedPhrases": ["non-compete", "competitive business"],
        },
    )
    book.add_rule(
        "NY",
        "salary_history",
        {"severity": "error", "message": "No salary history", "flaggedPhrases": ["prior salary"]},
    )
    return book


# --- classify ---


def test_flags_only_rules_of_the_selected_jurisdiction(rulebook: RuleBook) -> None:
    sentences = [Sentence("sentence-0", "This is an at-will agreement.")]

    ca_flags = classify(sentences, "CA", rulebook)
    ny_flags = classify(sentences, "NY", rulebook)

    assert list(ca_flags) == ["sentence-0"]
    assert ca_flags["sentence-0"][0].rule.key == "at_will"
    assert ca_flags["sentence-0"][0].matched_phrase == "at-will"
    assert ny_flags == {}


def test_matching_is_case_insensitive(rulebook: RuleBook) -> None:
    flags = classify([Sentence("s", "Employment is AT-WILL.")], "CA", rulebook)

    assert flags["s"][0].severity is Severity.WARNING


def test_one_flag_per_rule_in_rule_order(rulebook: RuleBook) -> None:
    sentence = Sentence(
        "s", "This non-compete bars any competitive business and is at-will."
    )

    flags = classify([sentence], "CA", rulebook)["s"]

    assert [f.rule.key for f in flags] == ["at_will", "non_compete"]
    # first phrase in rule order, not first in the sentence
    assert flags[1].matched_phrase == "non-compete"


def test_unflagged_sentences_are_absent(rulebook: RuleBook) -> None:
    sentences = split_sentences("Welcome aboard. This is an at-will agreement. See you soon.")

    flags = classify(sentences, "CA", rulebook)

    assert list(flags) == ["sentence-1"]


def test_every_flag_phrase_occurs_in_its_sentence(rulebook: RuleBook) -> None:
    sentences = split_sentences(
        "Your AT-WILL employment starts Monday. No Non-Compete applies. "
        "We never ask for prior salary."
    )
    by_id = {s.id: s for s in sentences}

    for code in ("CA", "NY"):
        for sentence_id, flags in classify(sentences, code, rulebook).items():
            assert flags
            for flag in flags:
                assert flag.matched_phrase.lower() in by_id[sentence_id].text.lower()
                assert flag.rule in rulebook.rules_for(code)


def test_accepts_plain_mapping_of_rules() -> None:
    rule = ComplianceRule(
        key="bonus", severity=Severity.INFO, message="Bonus", flagged_phrases=["bonus"]
    )

    flags = classify([Sentence("s", "A signing bonus applies.")], "TX", {"TX": [rule]})

    assert flags["s"][0].rule is rule


def test_records_metrics(rulebook: RuleBook) -> None:
    hook = InMemoryMetricsHook()

    classify(
        split_sentences("It is at-will. No non-compete."), "CA", rulebook, metrics_hook=hook
    )

    assert hook.total(names.CLASSIFY_FLAGS_RAISED) == 2
    assert {names.CLASSIFY_DURATION, names.CLASSIFY_SENTENCE_COUNT} <= hook.names()


# --- summarize ---


def test_summarize_counts_by_severity(rulebook: RuleBook) -> None:
    flags = classify(
        split_sentences("It is at-will. No non-compete. Also non-compete and at-will."),
        "CA",
        rulebook,
    )

    summary = summarize(flags)

    assert summary == SeveritySummary(error=2, warning=2, info=0)
    assert summary.total == 4


def test_summarize_empty() -> None:
    assert summarize({}).total == 0


# --- ComplianceClassifier ---


class TestComplianceClassifier:
    def test_recomputes_when_jurisdiction_changes(self, rulebook: RuleBook) -> None:
        classifier = ComplianceClassifier(rulebook, "CA")
        classifier.set_sentences([Sentence("sentence-0", "This is an at-will agreement.")])

        assert "sentence-0" in classifier.flags

        classifier.set_jurisdiction("NY")
        assert classifier.flags == {}
        assert classifier.jurisdiction == "NY"

    def test_recomputes_when_rules_change(self, rulebook: RuleBook) -> None:
        classifier = ComplianceClassifier(rulebook, "NY")
        classifier.set_sentences([Sentence("sentence-0", "This is an at-will agreement.")])
        assert classifier.flags == {}

        rulebook.add_rule(
            "NY", "at_will", {"severity": "info", "message": "note", "flaggedPhrases": ["at-will"]}
        )

        assert classifier.summary() == SeveritySummary(info=1)

    def test_caches_between_reads(self, rulebook: RuleBook) -> None:
        hook = InMemoryMetricsHook()
        classifier = ComplianceClassifier(rulebook, "CA", metrics_hook=hook)
        classifier.set_sentences(split_sentences("It is at-will."))

        classifier.flags
        classifier.flags
        classifier.summary()

        runs = [r for r in hook.records if r.name == names.CLASSIFY_DURATION]
        assert len(runs) == 1

    def test_returned_flags_are_copies(self, rulebook: RuleBook) -> None:
        classifier = ComplianceClassifier(rulebook, "CA")
        classifier.set_sentences(split_sentences("It is at-will."))

        classifier.flags.clear()

        assert classifier.flags

    def test_flagged_sentences_keep_document_order(self, rulebook: RuleBook) -> None:
        classifier = ComplianceClassifier(rulebook, "CA")
        classifier.set_sentences(
            split_sentences("No non-compete here. Hello there. It is at-will.")
        )

        assert [s.id for s in classifier.flagged_sentences()] == ["sentence-0", "sentence-2"]
