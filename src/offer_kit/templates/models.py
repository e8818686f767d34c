# templates/models.py

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenSpan:
    """The part of one fragment covered by a token: ``content[start:end]``."""

    fragment_index: int
    start: int
    end: int


@dataclass(frozen=True)
class TokenMatch:
    """One occurrence of a ``[Name]`` placeholder.

    Spans are in reading order. The first span starts at ``[`` and the last
    span ends right after ``]``; a token inside a single fragment has one span.
    """

    token_name: str
    spans: tuple[TokenSpan, ...]

    @property
    def is_split(self) -> bool:
        return len(self.spans) > 1

    @property
    def first_span(self) -> TokenSpan:
        return self.spans[0]
