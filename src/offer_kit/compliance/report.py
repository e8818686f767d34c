# compliance/report.py

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .classifier import ComplianceFlag, summarize
from .rule import Severity


class FlagEntry(BaseModel):
    type: str
    severity: Severity
    message: str
    matched_phrase: str = Field(alias="matchedPhrase")
    law_reference: str | None = Field(default=None, alias="lawReference")
    suggestion: str | None = None
    alternative_language: str | None = Field(default=None, alias="alternativeLanguage")

    class Config:
        populate_by_name = True

    @classmethod
    def from_flag(cls, flag: ComplianceFlag) -> "FlagEntry":
        return cls(
            type=flag.rule.key,
            severity=flag.severity,
            message=flag.message,
            matched_phrase=flag.matched_phrase,
            law_reference=flag.rule.law_reference,
            suggestion=flag.rule.suggestion,
            alternative_language=flag.rule.alternative_language,
        )


class ComplianceReport(BaseModel):
    template: str
    state: str
    timestamp: datetime
    summary: dict[str, int]
    total_issues: int = Field(alias="totalIssues")
    critical_issues: list[FlagEntry] = Field(alias="criticalIssues")
    warnings: list[FlagEntry]
    details: dict[str, list[FlagEntry]]

    class Config:
        populate_by_name = True

    def filename(self) -> str:
        stamp = int(self.timestamp.timestamp() * 1000)
        return f"compliance-report-{self.state}-{stamp}.json"

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def build_report(
    flags: Mapping[str, Sequence[ComplianceFlag]],
    *,
    jurisdiction: str,
    template_title: str = "Offer Letter",
    now: datetime | None = None,
) -> ComplianceReport:
    summary = summarize(flags)
    details = {
        sentence_id: [FlagEntry.from_flag(f) for f in sentence_flags]
        for sentence_id, sentence_flags in flags.items()
    }
    every = [entry for entries in details.values() for entry in entries]
    return ComplianceReport(
        template=template_title,
        state=jurisdiction,
        timestamp=now or datetime.now(timezone.utc),
        summary={"error": summary.error, "warning": summary.warning, "info": summary.info},
        total_issues=len(every),
        critical_issues=[e for e in every if e.severity is Severity.ERROR],
        warnings=[e for e in every if e.severity is Severity.WARNING],
        details=details,
    )
