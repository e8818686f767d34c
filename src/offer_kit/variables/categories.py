# variables/categories.py

from typing import Literal

Category = Literal["personal", "company", "position", "compensation", "dates", "other"]

# Checked in order; the first category with a matching keyword wins
CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    ("personal", ("name", "candidate", "employee")),
    ("company", ("company", "organization", "employer")),
    ("position", ("position", "title", "job", "role")),
    ("compensation", ("salary", "compensation", "pay", "wage")),
    ("dates", ("date", "start", "end", "time")),
)

CATEGORY_ORDER: tuple[Category, ...] = (
    "personal",
    "company",
    "position",
    "compensation",
    "dates",
    "other",
)

CATEGORY_TITLES: dict[Category, str] = {
    "personal": "Personal Information",
    "company": "Company Details",
    "position": "Job Information",
    "compensation": "Compensation",
    "dates": "Important Dates",
    "other": "Other Details",
}


def categorize(name: str) -> Category:
    lowered = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "other"
