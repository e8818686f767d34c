# src/offer_kit/suggestions/prompt.py

from collections.abc import Sequence

MAX_TEXT_CHARS = 12_000

SYSTEM_PROMPT = (
    "You fill in placeholders of employment offer letters. "
    "Use only facts stated in the letter. "
    "Respond with a single JSON object mapping each placeholder name, exactly "
    "as given, to its value. Omit placeholders you cannot infer."
)


def placeholder_hint(name: str) -> str:
    """Deterministic description of what a placeholder most likely holds."""
    k = name.strip().strip("[]").lower()

    if any(w in k for w in ("salary", "compensation", "pay", "wage", "bonus", "amount")):
        return "Dollar amount, e.g. $120,000 per year"

    if any(w in k for w in ("company", "employer", "organization", "client", "customer")):
        return "Legal name of the hiring company"

    if "name" in k:
        return "Person's full name"

    if any(w in k for w in ("title", "position", "role", "job")):
        return "Job title offered, e.g. Senior Software Engineer"

    if any(w in k for w in ("state", "jurisdiction", "governing", "country")):
        return "Governing law state or country"

    if "date" in k:
        return "Calendar date in Month D, YYYY format"

    return "Value for this placeholder as it appears in the letter"


def build_prompt(text: str, names: Sequence[str]) -> tuple[str, str]:
    """Return the ``(system, user)`` prompt pair for a suggestion request."""
    hints = "\n".join(f"- {name}: {placeholder_hint(name)}" for name in names)
    body = text[:MAX_TEXT_CHARS]
    user = f"Placeholders:\n{hints}\n\nOffer letter:\n{body}"
    return SYSTEM_PROMPT, user
