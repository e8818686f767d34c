from .binder import (
    BinderChange,
    Completion,
    Variable,
    VariableBinder,
    resolve_value,
)
from .categories import CATEGORY_ORDER, CATEGORY_TITLES, Category, categorize
from .panel import build_variables, filter_variables, group_by_category
from .synonyms import DEFAULT_SYNONYMS, SynonymTable, constant_case, normalize_name
from .usage import Usage, UsageIndexer, index_usage

__all__ = [
    "BinderChange",
    "CATEGORY_ORDER",
    "CATEGORY_TITLES",
    "Category",
    "Completion",
    "DEFAULT_SYNONYMS",
    "SynonymTable",
    "Usage",
    "UsageIndexer",
    "Variable",
    "VariableBinder",
    "build_variables",
    "categorize",
    "constant_case",
    "filter_variables",
    "group_by_category",
    "index_usage",
    "normalize_name",
    "resolve_value",
]
