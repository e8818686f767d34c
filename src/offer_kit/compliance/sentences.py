# compliance/sentences.py

import re
from dataclasses import dataclass

# Ordered; the first section whose keyword appears wins
SECTION_KEYWORDS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (5, ("at-will", "terminate employment")),
    (6, ("confidentiality", "intellectual property")),
    (8, ("employment agreement", "competitive")),
    (10, ("arbitration", "dispute")),
    (3, ("benefits", "health")),
    (7, ("pre-employment", "background")),
    (2, ("compensation", "salary")),
)

_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Sentence:
    id: str
    text: str
    section_number: int = 0


def section_number(text: str) -> int:
    """Offer letter section a sentence most likely belongs to; 0 if unknown."""
    lowered = text.lower()
    for number, keywords in SECTION_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return number
    return 0


def split_sentences(text: str) -> list[Sentence]:
    """Split after ``.``, ``!`` or ``?`` followed by whitespace.

    Line breaks inside a sentence are folded into single spaces so a
    placeholder wrapped across lines still reads as one token.
    """
    sentences: list[Sentence] = []
    for part in _BOUNDARY.split(text):
        clean = _WHITESPACE.sub(" ", part).strip()
        if not clean:
            continue
        sentences.append(
            Sentence(
                id=f"sentence-{len(sentences)}",
                text=clean,
                section_number=section_number(clean),
            )
        )
    return sentences
