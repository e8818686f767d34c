from offer_kit.variables.synonyms import (
    DEFAULT_SYNONYMS,
    SynonymTable,
    constant_case,
    normalize_name,
)


def test_normalize_name_strips_separators() -> None:
    assert normalize_name("Client/Customer_Name - x\\y") == "clientcustomernamexy"


def test_constant_case() -> None:
    assert constant_case("Start Date") == "START_DATE"
    assert constant_case("Client/Customer Name") == "CLIENT_CUSTOMER_NAME"


def test_default_table() -> None:
    assert SynonymTable().as_dict() == DEFAULT_SYNONYMS


def test_aliases_for_canonical_name() -> None:
    aliases = SynonymTable().aliases_for("Job Title")

    assert aliases == ["JOB_TITLE", "JobTitle"]


def test_aliases_for_alias_include_canonical_first() -> None:
    aliases = SynonymTable().aliases_for("START_DATE")

    assert aliases[0] == "Proposed Start Date"
    assert "Start Date" in aliases
    assert "START_DATE" not in aliases


def test_aliases_for_unknown_name() -> None:
    assert SynonymTable().aliases_for("Signing Bonus") == []


def test_extend_merges_without_duplicates() -> None:
    table = SynonymTable({})
    table.extend("Salary", ["Base Pay", "Annual Salary"])
    table.extend("Salary", ["Base Pay", "BASE_SALARY"])

    assert table.as_dict() == {"Salary": ("Base Pay", "Annual Salary", "BASE_SALARY")}
    assert table.aliases_for("base pay") == ["Salary", "Base Pay", "Annual Salary", "BASE_SALARY"]
