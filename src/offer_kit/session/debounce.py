# session/debounce.py

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

from offer_kit.observability import names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

DebouncedAction = Callable[[int], Awaitable[None] | None]


class Debouncer:
    """Runs only the last of a burst of triggers, ``delay_ms`` after it.

    Every trigger (and every :meth:`cancel`) bumps a monotonically increasing
    generation. An action receives the generation it was scheduled under and
    should check :meth:`is_current` before committing, since a newer trigger
    may arrive while it is still running.
    """

    def __init__(
        self,
        delay_ms: float = 400.0,
        *,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay = delay_ms / 1000
        self.metrics_hook = metrics_hook
        self._generation = 0
        self._task: asyncio.Task | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def trigger(self, action: DebouncedAction) -> int:
        """Restart the window; must be called from a running event loop."""
        self._supersede()
        self._generation += 1
        generation = self._generation
        self._task = asyncio.get_running_loop().create_task(self._fire(generation, action))
        self.metrics_hook.increment(names.DEBOUNCE_TRIGGERS_TOTAL)
        return generation

    def cancel(self) -> int:
        """Drop any pending action and invalidate in-flight results."""
        self._supersede()
        self._generation += 1
        return self._generation

    async def wait(self) -> None:
        """Wait for the pending action, if any, to finish or be superseded."""
        while self._task is not None and not self._task.done():
            task = self._task
            await asyncio.wait({task})
            if task is self._task and not task.cancelled():
                task.result()

    def _supersede(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            self.metrics_hook.increment(names.DEBOUNCE_SUPERSEDED_TOTAL)
            logger.debug("Superseded debounced action (generation %d)", self._generation)

    async def _fire(self, generation: int, action: DebouncedAction) -> None:
        await asyncio.sleep(self.delay)
        if not self.is_current(generation):
            return
        result = action(generation)
        if inspect.isawaitable(result):
            await result
