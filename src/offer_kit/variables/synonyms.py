# variables/synonyms.py

"""Known aliases for common offer letter fields.

Templates from different sources spell the same field differently
("Proposed Start Date", "START_DATE", "StartDate"). The table maps a
canonical name to its aliases; lookups work in both directions.
"""

import re
from collections.abc import Iterable, Mapping

DEFAULT_SYNONYMS: dict[str, tuple[str, ...]] = {
    "Proposed Start Date": (
        "Start Date",
        "PROPOSED_START_DATE",
        "START_DATE",
        "ProposedStartDate",
        "StartDate",
    ),
    "Client/Customer Name": (
        "Client Customer Name",
        "CLIENT/CUSTOMER NAME",
        "CLIENT_CUSTOMER_NAME",
        "Client Name",
        "CLIENT_NAME",
        "Customer Name",
        "CUSTOMER_NAME",
    ),
    "Job Title": ("JOB_TITLE", "JobTitle"),
    "Candidate Name": ("CANDIDATE_NAME", "CandidateName"),
}

_SEPARATORS = re.compile(r"[\s_\-/\\]")
_UNDERSCORE_RUNS = re.compile(r"[\s/\-]+")


def normalize_name(name: str) -> str:
    """Drop whitespace, underscores, hyphens and slashes; lowercase."""
    return _SEPARATORS.sub("", name).lower()


def constant_case(name: str) -> str:
    """``"Start Date"`` -> ``"START_DATE"``."""
    return _UNDERSCORE_RUNS.sub("_", name).upper()


class SynonymTable:
    def __init__(self, entries: Mapping[str, Iterable[str]] | None = None) -> None:
        self._entries: dict[str, tuple[str, ...]] = {}
        for canonical, aliases in (DEFAULT_SYNONYMS if entries is None else entries).items():
            self.extend(canonical, aliases)

    def extend(self, canonical: str, aliases: Iterable[str]) -> None:
        existing = self._entries.get(canonical, ())
        merged = existing + tuple(a for a in aliases if a not in existing)
        self._entries[canonical] = merged

    def aliases_for(self, name: str) -> list[str]:
        """Every other spelling of ``name``, canonical names first."""
        key = normalize_name(name)
        found: list[str] = []
        for canonical, aliases in self._entries.items():
            group = (canonical, *aliases)
            if any(normalize_name(candidate) == key for candidate in group):
                found.extend(c for c in group if c != name and c not in found)
        return found

    def as_dict(self) -> dict[str, tuple[str, ...]]:
        return dict(self._entries)
