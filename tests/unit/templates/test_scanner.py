import pytest

from offer_kit.observability import InMemoryMetricsHook, names
from offer_kit.parsers.models import TextFragment
from offer_kit.templates.models import TokenSpan
from offer_kit.templates.scanner import (
    TOKEN_PATTERN,
    scan_fragments,
    scan_text,
    unique_token_names,
)


def _fragments(*contents: str) -> list[TextFragment]:
    return [
        TextFragment(content=c, source_transform=(12, 0, 0, 12, 10.0 * i, 700))
        for i, c in enumerate(contents)
    ]


# --- Single fragment ---


def test_finds_tokens_in_one_fragment() -> None:
    matches = scan_fragments(_fragments("Dear [Candidate Name], welcome to [Company]."))

    assert [m.token_name for m in matches] == ["Candidate Name", "Company"]
    assert all(not m.is_split for m in matches)
    assert matches[0].spans == (TokenSpan(0, 5, 21),)


def test_trims_token_names() -> None:
    matches = scan_fragments(_fragments("Start: [  Start Date ]"))

    assert [m.token_name for m in matches] == ["Start Date"]


def test_empty_tokens_are_ignored() -> None:
    assert scan_fragments(_fragments("Empty [] and blank [   ] brackets")) == []


def test_keeps_every_occurrence() -> None:
    matches = scan_fragments(_fragments("[Name] and [Name]", "again [Name]"))

    assert [m.token_name for m in matches] == ["Name", "Name", "Name"]


def test_nested_bracket_closes_at_first_closing_bracket() -> None:
    matches = scan_fragments(_fragments("[outer [inner] tail]"))

    assert [m.token_name for m in matches] == ["outer [inner"]


# --- Cross-fragment ---


def test_token_split_over_three_fragments() -> None:
    matches = scan_fragments(_fragments("Dear [", "Candidate", " Name]"))

    assert len(matches) == 1
    match = matches[0]
    assert match.token_name == "Candidate Name"
    assert match.is_split
    assert match.spans == (
        TokenSpan(0, 5, 6),
        TokenSpan(1, 0, 9),
        TokenSpan(2, 0, 6),
    )
    assert match.first_span == TokenSpan(0, 5, 6)


def test_split_spans_reconstruct_the_token() -> None:
    fragments = _fragments("Your salary is [Base ", "Sal", "ary] per year, starting [Start", " Date].")

    for match in scan_fragments(fragments):
        covered = "".join(
            fragments[s.fragment_index].content[s.start : s.end] for s in match.spans
        )
        assert covered.startswith("[") and covered.endswith("]")
        assert covered[1:-1].strip() == match.token_name


def test_unclosed_bracket_produces_nothing() -> None:
    assert scan_fragments(_fragments("Dear [Candidate", " Name and more text")) == []


def test_empty_fragments_are_skipped_in_spans() -> None:
    matches = scan_fragments(_fragments("[Job", "", " Title]"))

    assert matches[0].token_name == "Job Title"
    assert [s.fragment_index for s in matches[0].spans] == [0, 2]


@pytest.mark.parametrize(
    "contents",
    [
        ("Dear [", "Candidate", " Name]"),
        ("[A]", "[B", "]", "text [C] [", "D ]"),
        ("no tokens here",),
        ("[x][y]", "[", "z", "]", "[]", "[ ]"),
        ("unclosed [", "still open", "and [closed]"),
        ("", "[Salary ($)]", ""),
    ],
)
def test_matches_regex_over_concatenation(contents: tuple[str, ...]) -> None:
    expected = [
        m.group(1).strip()
        for m in TOKEN_PATTERN.finditer("".join(contents))
        if m.group(1).strip()
    ]

    assert [m.token_name for m in scan_fragments(_fragments(*contents))] == expected


def test_records_scan_metrics() -> None:
    hook = InMemoryMetricsHook()

    scan_fragments(_fragments("[A] [B", "]"), metrics_hook=hook)

    assert hook.total(names.SCAN_TOKENS_FOUND) == 2
    assert hook.total(names.SCAN_SPLIT_TOKENS_FOUND) == 1
    assert names.SCAN_DURATION in hook.names()


# --- Flat text and dedup ---


def test_scan_text() -> None:
    assert scan_text("Hi [Name], [ Name ] and [] [Role]") == ["Name", "Name", "Role"]


def test_unique_names_keep_first_seen_order_and_casing() -> None:
    matches = scan_fragments(_fragments("[Name] [Role] [Name] [name]"))

    assert unique_token_names(matches) == ["Name", "Role", "name"]
    assert unique_token_names(["b", "a", "b"]) == ["b", "a"]
