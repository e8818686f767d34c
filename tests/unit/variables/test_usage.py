import offer_kit.variables.usage as usage_module
from offer_kit.compliance.sentences import Sentence
from offer_kit.variables.usage import Usage, UsageIndexer, index_usage, token_pattern

SENTENCES = [
    Sentence("sentence-0", "Dear [Candidate Name], welcome."),
    Sentence("sentence-1", "This is an at-will offer for [ Candidate Name ] as [Job Title]."),
    Sentence("sentence-2", "Your salary is [Salary ($)]."),
]
FLAGS = {"sentence-1": ["flag"]}


def test_token_pattern_escapes_name_and_allows_inner_whitespace() -> None:
    pattern = token_pattern("Salary ($)")

    assert pattern.search("[Salary ($)]")
    assert pattern.search("[  Salary ($) ]")
    assert not pattern.search("[salary ($)]")


def test_counts_occurrences_and_flagged_occurrences() -> None:
    usage = index_usage(["Candidate Name", "Job Title", "Salary ($)"], SENTENCES, FLAGS)

    assert usage["Candidate Name"] == Usage(occurrences=2, flagged_occurrences=1)
    assert usage["Job Title"] == Usage(occurrences=1, flagged_occurrences=1)
    assert usage["Salary ($)"] == Usage(occurrences=1, flagged_occurrences=0)


def test_absent_variable_has_zero_counts() -> None:
    usage = index_usage(["Signing Bonus"], SENTENCES, FLAGS)

    assert usage["Signing Bonus"] == Usage(0, 0)


def test_matching_is_exact_not_fuzzy() -> None:
    usage = index_usage(["candidate_name", "job title"], SENTENCES, FLAGS)

    assert usage["candidate_name"].occurrences == 0
    assert usage["job title"].occurrences == 0


def test_flagged_never_exceeds_occurrences() -> None:
    names = ["Candidate Name", "Job Title", "Salary ($)", "Other"]
    flags = {s.id: ["flag"] for s in SENTENCES}

    usage = index_usage(names, SENTENCES, flags)

    assert sum(u.flagged_occurrences for u in usage.values()) <= sum(
        u.occurrences for u in usage.values()
    )
    assert all(u.flagged_occurrences <= u.occurrences for u in usage.values())


class TestUsageIndexer:
    def test_memoizes_until_inputs_change(self, monkeypatch) -> None:
        calls = []

        original = usage_module.index_usage

        def counting(*args):
            calls.append(args)
            return original(*args)

        monkeypatch.setattr(usage_module, "index_usage", counting)
        indexer = UsageIndexer()

        indexer.index(["Job Title"], SENTENCES, FLAGS)
        indexer.index(["Job Title"], SENTENCES, FLAGS)
        assert len(calls) == 1

        indexer.index(["Job Title"], SENTENCES, {})
        assert len(calls) == 2

        indexer.invalidate()
        indexer.index(["Job Title"], SENTENCES, {})
        assert len(calls) == 3

    def test_returns_fresh_dicts(self) -> None:
        indexer = UsageIndexer()

        first = indexer.index(["Job Title"], SENTENCES, FLAGS)
        first.clear()

        assert indexer.index(["Job Title"], SENTENCES, FLAGS)["Job Title"].occurrences == 1
