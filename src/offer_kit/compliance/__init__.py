from .classifier import (
    ComplianceClassifier,
    ComplianceFlag,
    FlagMap,
    SeveritySummary,
    classify,
    summarize,
)
from .forms import RULE_PRESETS, RuleForm
from .report import ComplianceReport, FlagEntry, build_report
from .rule import ComplianceRule, Severity
from .rulebook import RuleBook, RuleValidationError
from .sentences import Sentence, section_number, split_sentences
from .sync import RuleSyncClient, SyncResult

__all__ = [
    "ComplianceClassifier",
    "ComplianceFlag",
    "ComplianceReport",
    "ComplianceRule",
    "FlagEntry",
    "FlagMap",
    "RULE_PRESETS",
    "RuleBook",
    "RuleForm",
    "RuleSyncClient",
    "RuleValidationError",
    "Sentence",
    "Severity",
    "SeveritySummary",
    "SyncResult",
    "build_report",
    "classify",
    "section_number",
    "split_sentences",
    "summarize",
]
