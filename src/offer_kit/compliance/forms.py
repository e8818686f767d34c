# compliance/forms.py

import re
from dataclasses import dataclass

_KEY_CHARS = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class RuleForm:
    """A rule described in plain words, as an HR user would type it.

    ``flagged_phrases`` is a comma-separated list.
    """

    name: str
    description: str
    severity: str = "error"
    law_reference: str = ""
    flagged_phrases: str = ""

    @property
    def rule_key(self) -> str:
        return _KEY_CHARS.sub("_", self.name.lower())

    def phrases(self) -> list[str]:
        return [p.strip() for p in self.flagged_phrases.split(",") if p.strip()]

    def to_definition(self) -> dict:
        definition: dict = {"severity": self.severity, "message": self.description}
        if self.law_reference:
            definition["lawReference"] = self.law_reference
        phrases = self.phrases()
        if phrases:
            definition["flaggedPhrases"] = phrases
        return definition


RULE_PRESETS: dict[str, RuleForm] = {
    "overtime": RuleForm(
        name="Overtime Pay Requirements",
        severity="error",
        description=(
            "Employees must receive overtime pay at 1.5x their regular rate "
            "for hours worked over 40 per week."
        ),
        law_reference="Fair Labor Standards Act (FLSA) Section 207",
        flagged_phrases="overtime, time and a half, 40 hours, weekly hours",
    ),
    "benefits": RuleForm(
        name="Benefits Disclosure",
        severity="warning",
        description=(
            "All employee benefits including health insurance, retirement plans, "
            "and paid time off must be clearly disclosed."
        ),
        law_reference="Employee Retirement Income Security Act (ERISA)",
        flagged_phrases="benefits, health insurance, retirement, PTO, paid time off",
    ),
    "probation": RuleForm(
        name="Probation Period Limits",
        severity="warning",
        description=(
            "Probationary periods cannot exceed 90 days and must be clearly "
            "defined with specific evaluation criteria."
        ),
        law_reference="State Employment Law",
        flagged_phrases="probation, probationary period, trial period, evaluation",
    ),
    "termination": RuleForm(
        name="At-Will Employment Notice",
        severity="error",
        description=(
            "Employment relationship must be clearly defined as at-will with "
            "proper notice requirements."
        ),
        law_reference="State Labor Code",
        flagged_phrases="at-will, termination, employment relationship, notice period",
    ),
}
