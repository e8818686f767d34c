# Compliance
from .compliance import (
    ComplianceClassifier,
    ComplianceFlag,
    ComplianceReport,
    ComplianceRule,
    RuleBook,
    RuleForm,
    RuleSyncClient,
    RuleValidationError,
    Severity,
    classify,
    split_sentences,
)

# Configuration
from .config import RuleSyncConfig, SessionConfig

# Export
from .export import ExportResult, PdfExporter, offer_letter_filename

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Parsers
from .parsers import (
    ExtractedDocument,
    ExtractionError,
    PdfExtractor,
    TextExtractor,
    TextFragment,
)

# Rendering
from .rendering import SubstitutionRenderer, Viewport, substitute_text

# Session
from .session import LoadResult, OfferLetterSession, SessionEvent

# Suggestions
from .suggestions import EntitySuggester, SuggesterConfig, create_entity_suggester

# Templates
from .templates import TokenMatch, TokenSpan, scan_fragments, scan_text

# Variables
from .variables import SynonymTable, Variable, VariableBinder, categorize

__all__ = [
    # Compliance
    "ComplianceClassifier",
    "ComplianceFlag",
    "ComplianceReport",
    "ComplianceRule",
    "RuleBook",
    "RuleForm",
    "RuleSyncClient",
    "RuleValidationError",
    "Severity",
    "classify",
    "split_sentences",
    # Configuration
    "RuleSyncConfig",
    "SessionConfig",
    # Export
    "ExportResult",
    "PdfExporter",
    "offer_letter_filename",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsers
    "ExtractedDocument",
    "ExtractionError",
    "PdfExtractor",
    "TextExtractor",
    "TextFragment",
    # Rendering
    "SubstitutionRenderer",
    "Viewport",
    "substitute_text",
    # Session
    "LoadResult",
    "OfferLetterSession",
    "SessionEvent",
    # Suggestions
    "EntitySuggester",
    "SuggesterConfig",
    "create_entity_suggester",
    # Templates
    "TokenMatch",
    "TokenSpan",
    "scan_fragments",
    "scan_text",
    # Variables
    "SynonymTable",
    "Variable",
    "VariableBinder",
    "categorize",
]
