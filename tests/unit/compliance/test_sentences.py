import pytest

from offer_kit.compliance.sentences import Sentence, section_number, split_sentences


def test_splits_on_terminal_punctuation_followed_by_whitespace() -> None:
    sentences = split_sentences("We are pleased to offer you the role. Congratulations! Any questions?")

    assert [s.text for s in sentences] == [
        "We are pleased to offer you the role.",
        "Congratulations!",
        "Any questions?",
    ]
    assert [s.id for s in sentences] == ["sentence-0", "sentence-1", "sentence-2"]


def test_does_not_split_without_whitespace() -> None:
    sentences = split_sentences("Salary is $120.000 per year.")

    assert len(sentences) == 1


def test_folds_line_breaks_and_drops_empty_parts() -> None:
    sentences = split_sentences("Dear [Candidate\nName],\nwelcome.   \n\n  ")

    assert sentences == [Sentence("sentence-0", "Dear [Candidate Name], welcome.", 0)]


def test_empty_text() -> None:
    assert split_sentences("   ") == []


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Your employment is at-will.", 5),
        ("All confidentiality obligations survive.", 6),
        ("You agree not to join a competitive business.", 8),
        ("Any dispute goes to arbitration.", 10),
        ("You are eligible for health benefits.", 3),
        ("This offer is subject to a background check.", 7),
        ("Your salary is paid bi-weekly.", 2),
        ("We look forward to working with you.", 0),
    ],
)
def test_section_number(text: str, expected: int) -> None:
    assert section_number(text) == expected


def test_section_keywords_are_checked_in_order() -> None:
    # at-will (5) wins over salary (2)
    assert section_number("Your salary does not change the at-will relationship.") == 5
