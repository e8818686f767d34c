# compliance/sync.py

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from time import monotonic

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from offer_kit.config import RuleSyncConfig
from offer_kit.observability import names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

SYNC_PATH = "/compliance/phrases"


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


@dataclass(frozen=True)
class SyncResult:
    jurisdiction: str
    ok: bool
    phrase_count: int
    error: str | None = None


class RuleSyncClient:
    """Pushes a jurisdiction's flagged phrases to the phrase-detection service.

    Retries transport errors and 5xx responses only. A failed sync is logged and reported, never
    raised: local classification keeps working on its own rule copy.
    """

    def __init__(
        self,
        config: RuleSyncConfig,
        *,
        client: httpx.AsyncClient | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url, timeout=config.timeout
        )
        self.metrics_hook = metrics_hook
        logger.info("Initialized RuleSyncClient for %s", config.base_url)

    async def sync(self, jurisdiction: str, phrases: Sequence[str]) -> SyncResult:
        start = monotonic()
        payload = {"jurisdiction": jurisdiction, "phrases": list(phrases)}
        self.metrics_hook.increment(
            names.RULE_SYNC_REQUESTS_TOTAL, labels={"jurisdiction": jurisdiction}
        )

        try:
            await self._post(payload)
        except httpx.HTTPError as exc:
            self.metrics_hook.increment(
                names.RULE_SYNC_ERRORS_TOTAL, labels={"jurisdiction": jurisdiction}
            )
            logger.warning("Failed to sync compliance phrases for %s: %s", jurisdiction, exc)
            return SyncResult(
                jurisdiction, ok=False, phrase_count=len(phrases), error=str(exc)
            )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.RULE_SYNC_DURATION, elapsed_ms)
        logger.info(
            "Synced %d compliance phrases for %s in %.0fms",
            len(phrases),
            jurisdiction,
            elapsed_ms,
        )
        return SyncResult(jurisdiction, ok=True, phrase_count=len(phrases))

    async def _post(self, payload: dict) -> None:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._config.max_retries),
            wait=wait_exponential(
                multiplier=self._config.backoff, min=self._config.backoff, max=10
            ),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                response = await self._client.post(SYNC_PATH, json=payload)
                response.raise_for_status()

    async def close(self) -> None:
        await self._client.aclose()
