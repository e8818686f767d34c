import pytest

from offer_kit.suggestions.base import parse_suggestions
from offer_kit.suggestions.prompt import MAX_TEXT_CHARS, build_prompt, placeholder_hint

NAMES = ["Candidate Name", "Company", "Start Date"]


# --- parse_suggestions ---


def test_parses_plain_json_object() -> None:
    raw = '{"Candidate Name": " Alex Kim ", "Company": "Acme"}'

    assert parse_suggestions(raw, NAMES) == {"Candidate Name": "Alex Kim", "Company": "Acme"}


def test_strips_markdown_fence() -> None:
    raw = '```json\n{"Start Date": "March 1, 2024"}\n```'

    assert parse_suggestions(raw, NAMES) == {"Start Date": "March 1, 2024"}


def test_drops_unknown_blank_and_non_string_values() -> None:
    raw = '{"Salary": "$1", "Company": "  ", "Start Date": 2024, "Candidate Name": "Jo"}'

    assert parse_suggestions(raw, NAMES) == {"Candidate Name": "Jo"}


@pytest.mark.parametrize("raw", [None, "", "not json", "[1, 2]", '"text"'])
def test_unusable_output_gives_empty_mapping(raw) -> None:
    assert parse_suggestions(raw, NAMES) == {}


# --- prompt ---


@pytest.mark.parametrize(
    ("name", "fragment"),
    [
        ("Base Salary", "Dollar amount"),
        ("Client/Customer Name", "hiring company"),
        ("Candidate Name", "full name"),
        ("[Job Title]", "Job title"),
        ("Governing State", "Governing law"),
        ("Start Date", "Calendar date"),
        ("Office Location", "as it appears"),
    ],
)
def test_placeholder_hint(name: str, fragment: str) -> None:
    assert fragment in placeholder_hint(name)


def test_build_prompt_lists_names_and_truncates_text() -> None:
    system, user = build_prompt("x" * (MAX_TEXT_CHARS + 50), NAMES)

    assert "JSON object" in system
    assert "- Candidate Name: Person's full name" in user
    assert "- Start Date:" in user
    assert user.count("x") == MAX_TEXT_CHARS
