# src/offer_kit/suggestions/openai.py

import logging
from collections.abc import Sequence
from time import monotonic
from typing import Any

from openai import AsyncOpenAI, OpenAIError
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


class OpenAIEntitySuggester(EntitySuggester):
    """OpenAI-backed placeholder suggester.

    Stateless. Transport-only retries. JSON mode output.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized OpenAIEntitySuggester with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def suggest(self, *, text: str, names: Sequence[str]) -> dict[str, str]:
        if not names:
            return {}

        start = monotonic()
        system, user = build_prompt(text, names)
        logger.debug("Requesting OpenAI suggestions for %d placeholders", len(names))

        raw = await self._call_api(
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ]
        )
        suggestions = parse_suggestions(raw.choices[0].message.content, names)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(metric_names.SUGGESTION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            metric_names.SUGGESTION_REQUESTS_TOTAL,
            labels={"provider": "openai", "model": self._model},
        )
        self.metrics_hook.increment(metric_names.SUGGESTION_VALUES_TOTAL, len(suggestions))

        logger.info(
            "OpenAI suggestions: %d of %d placeholders, latency=%.0fms",
            len(suggestions),
            len(names),
            elapsed_ms,
        )
        return suggestions

    async def _call_api(self, *, messages: list[dict[str, str]]) -> Any:
        """Call OpenAI API with transport-only retries."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(OpenAIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=0.0,
                    response_format={"type": "json_object"},
                )
