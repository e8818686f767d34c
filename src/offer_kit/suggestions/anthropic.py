# src/offer_kit/suggestions/anthropic.py

import logging
from collections.abc import Sequence
from time import monotonic
from typing import Any

from anthropic import APIError, AsyncAnthropic
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from offer_kit.observability import names as metric_names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import EntitySuggester, parse_suggestions
from .prompt import build_prompt

logger = logging.getLogger(__name__)


class AnthropicEntitySuggester(EntitySuggester):
    """Anthropic-backed placeholder suggester.

    Stateless. Transport-only retries.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-20250514",
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized AnthropicEntitySuggester with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def suggest(self, *, text: str, names: Sequence[str]) -> dict[str, str]:
        if not names:
            return {}

        start = monotonic()
        system, user = build_prompt(text, names)
        logger.debug("Requesting Anthropic suggestions for %d placeholders", len(names))

        raw = await self._call_api(
            system=system,
            messages=[{"role": "user", "content": user}],
        )
        # Text blocks only; the model is not given tools
        content = "".join(block.text for block in raw.content if block.type == "text")
        suggestions = parse_suggestions(content, names)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(metric_names.SUGGESTION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            metric_names.SUGGESTION_REQUESTS_TOTAL,
            labels={"provider": "anthropic", "model": self._model},
        )
        self.metrics_hook.increment(metric_names.SUGGESTION_VALUES_TOTAL, len(suggestions))

        logger.info(
            "Anthropic suggestions: %d of %d placeholders, latency=%.0fms",
            len(suggestions),
            len(names),
            elapsed_ms,
        )
        return suggestions

    async def _call_api(self, *, system: str, messages: list[dict[str, str]]) -> Any:
        """Call Anthropic API with transport-only retries."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(APIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.messages.create(
                    model=self._model,
                    system=system,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=0.0,
                    max_tokens=1024,
                )
