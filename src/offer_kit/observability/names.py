# src/offer_kit/observability/names.py

"""Standard metric names for offer-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Extraction Metrics
# ============================================================================

# Duration
EXTRACTION_DURATION = "extraction_duration"

# Counters
EXTRACTION_PAGES_TOTAL = "extraction_pages_total"
EXTRACTION_ERRORS_TOTAL = "extraction_errors_total"


# ============================================================================
# Token Scanning Metrics
# ============================================================================

# Duration
SCAN_DURATION = "scan_duration"

# Counters
SCAN_TOKENS_FOUND = "scan_tokens_found"
SCAN_SPLIT_TOKENS_FOUND = "scan_split_tokens_found"


# ============================================================================
# Compliance Metrics
# ============================================================================

# Duration
CLASSIFY_DURATION = "classify_duration"

# Counters
CLASSIFY_FLAGS_RAISED = "classify_flags_raised"
RULES_REJECTED_TOTAL = "rules_rejected_total"

# Gauges
CLASSIFY_SENTENCE_COUNT = "classify_sentence_count"


# ============================================================================
# Rule Sync Metrics
# ============================================================================

# Duration
RULE_SYNC_DURATION = "rule_sync_duration"

# Counters
RULE_SYNC_REQUESTS_TOTAL = "rule_sync_requests_total"
RULE_SYNC_ERRORS_TOTAL = "rule_sync_errors_total"


# ============================================================================
# Rendering Metrics
# ============================================================================

# Duration
RENDER_DURATION = "render_duration"

# Counters
RENDER_INSTRUCTIONS_TOTAL = "render_instructions_total"
RENDER_SUPERSEDED_TOTAL = "render_superseded_total"


# ============================================================================
# Export Metrics
# ============================================================================

# Duration
EXPORT_DURATION = "export_duration"

# Counters
EXPORT_REQUESTS_TOTAL = "export_requests_total"
EXPORT_FALLBACKS_TOTAL = "export_fallbacks_total"


# ============================================================================
# Entity Suggestion Metrics
# ============================================================================

# Duration
SUGGESTION_DURATION = "suggestion_duration"

# Counters
SUGGESTION_REQUESTS_TOTAL = "suggestion_requests_total"
SUGGESTION_VALUES_TOTAL = "suggestion_values_total"


# ============================================================================
# Debounce Metrics
# ============================================================================

# Counters
DEBOUNCE_TRIGGERS_TOTAL = "debounce_triggers_total"
DEBOUNCE_SUPERSEDED_TOTAL = "debounce_superseded_total"
