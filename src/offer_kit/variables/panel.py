# variables/panel.py

from collections.abc import Iterable, Mapping

from .binder import Variable
from .categories import CATEGORY_ORDER, Category, categorize
from .usage import Usage


def build_variables(values: Mapping[str, str], usage: Mapping[str, Usage]) -> list[Variable]:
    rows = []
    for name, value in values.items():
        counts = usage.get(name, Usage())
        rows.append(
            Variable(
                name=name,
                value=value,
                occurrences=counts.occurrences,
                flagged_occurrences=counts.flagged_occurrences,
            )
        )
    return rows


def filter_variables(
    variables: Iterable[Variable],
    *,
    search: str = "",
    flagged_only: bool = False,
) -> list[Variable]:
    needle = search.strip().lower()
    return [
        v
        for v in variables
        if (not needle or needle in v.name.lower())
        and (not flagged_only or v.flagged_occurrences > 0)
    ]


def group_by_category(variables: Iterable[Variable]) -> dict[Category, list[Variable]]:
    """Variables per category, in display order; empty categories omitted."""
    groups: dict[Category, list[Variable]] = {category: [] for category in CATEGORY_ORDER}
    for variable in variables:
        groups[categorize(variable.name)].append(variable)
    return {category: rows for category, rows in groups.items() if rows}
