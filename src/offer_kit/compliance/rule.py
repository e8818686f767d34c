# compliance/rule.py

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ComplianceRule(BaseModel):
    """A phrase-matching rule scoped to one jurisdiction.

    Accepts both the camelCase keys used in rule files
    (``lawReference``, ``flaggedPhrases``) and the snake_case field names.
    """

    key: str = Field(min_length=1)
    severity: Severity
    message: str = Field(min_length=1)
    law_reference: str | None = Field(default=None, alias="lawReference")
    suggestion: str | None = None
    alternative_language: str | None = Field(default=None, alias="alternativeLanguage")
    flagged_phrases: list[str] = Field(default_factory=list, alias="flaggedPhrases")

    class Config:
        extra = "forbid"
        frozen = True
        populate_by_name = True

    @field_validator("flagged_phrases")
    @classmethod
    def _drop_blank_phrases(cls, phrases: list[str]) -> list[str]:
        return [p.strip() for p in phrases if p.strip()]

    def first_match(self, text: str) -> str | None:
        """First phrase (in rule order) found in ``text``, ignoring case."""
        lowered = text.lower()
        for phrase in self.flagged_phrases:
            if phrase.lower() in lowered:
                return phrase
        return None
