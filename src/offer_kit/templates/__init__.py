from .models import TokenMatch, TokenSpan
from .scanner import TOKEN_PATTERN, scan_fragments, scan_text, unique_token_names

__all__ = [
    "TOKEN_PATTERN",
    "TokenMatch",
    "TokenSpan",
    "scan_fragments",
    "scan_text",
    "unique_token_names",
]
