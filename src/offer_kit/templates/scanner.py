# templates/scanner.py

import bisect
import logging
import re
from collections.abc import Iterable, Sequence
from time import monotonic

from offer_kit.observability import names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook
from offer_kit.parsers.models import TextFragment

from .models import TokenMatch, TokenSpan

logger = logging.getLogger(__name__)

# "[" then one or more non-"]" characters then "]". The first "]" always
# closes the token, so "[a [b]" is a single token named "a [b".
TOKEN_PATTERN = re.compile(r"\[([^\]]+)\]")


def scan_fragments(
    fragments: Sequence[TextFragment],
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[TokenMatch]:
    """Find every placeholder occurrence in a run of fragments.

    Fragments are scanned as one stream so a token whose brackets fall in
    different fragments (``"Dear ["``, ``"Candidate"``, ``" Name]"``) is found
    exactly as if the document were a single string. Each match is mapped
    back to the fragment sub-ranges it covers. An opening bracket that is
    never closed produces nothing.
    """
    start = monotonic()

    starts: list[int] = []
    offset = 0
    for fragment in fragments:
        starts.append(offset)
        offset += len(fragment.content)
    stream = "".join(f.content for f in fragments)

    matches: list[TokenMatch] = []
    for m in TOKEN_PATTERN.finditer(stream):
        token_name = m.group(1).strip()
        if not token_name:
            continue
        spans = _spans_for(m.start(), m.end(), starts, fragments)
        matches.append(TokenMatch(token_name=token_name, spans=spans))

    elapsed_ms = 1000 * (monotonic() - start)
    split_count = sum(1 for m in matches if m.is_split)
    metrics_hook.record_latency(names.SCAN_DURATION, elapsed_ms)
    metrics_hook.increment(names.SCAN_TOKENS_FOUND, len(matches))
    metrics_hook.increment(names.SCAN_SPLIT_TOKENS_FOUND, split_count)
    logger.debug(
        "Scanned %d fragments: %d tokens (%d split)",
        len(fragments),
        len(matches),
        split_count,
    )
    return matches


def _spans_for(
    begin: int,
    end: int,
    starts: list[int],
    fragments: Sequence[TextFragment],
) -> tuple[TokenSpan, ...]:
    spans: list[TokenSpan] = []
    index = bisect.bisect_right(starts, begin) - 1
    while index < len(fragments) and starts[index] < end:
        fragment_start = starts[index]
        fragment_end = fragment_start + len(fragments[index].content)
        lo = max(begin, fragment_start)
        hi = min(end, fragment_end)
        if hi > lo:
            spans.append(TokenSpan(index, lo - fragment_start, hi - fragment_start))
        index += 1
    return tuple(spans)


def scan_text(text: str) -> list[str]:
    """Token names in a flat string, one entry per occurrence."""
    names_found = (m.group(1).strip() for m in TOKEN_PATTERN.finditer(text))
    return [name for name in names_found if name]


def unique_token_names(tokens: Iterable[TokenMatch | str]) -> list[str]:
    """Distinct names in first-seen order; the first casing seen wins."""
    seen: dict[str, None] = {}
    for token in tokens:
        name = token.token_name if isinstance(token, TokenMatch) else token
        seen.setdefault(name, None)
    return list(seen)
