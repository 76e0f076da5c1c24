"""Background auto-refresh for a light."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

_LOGGER = logging.getLogger(__name__)


class AutoRefreshScheduler:
    """Runs ``action`` every ``interval`` seconds while ``is_enabled()`` is true.

    The task keeps ticking whether or not the flag is set, so toggling it never
    restarts the timer. The first tick fires as soon as the task starts.
    Failures are logged and handed to ``on_error``; they do not stop the loop.
    """

    def __init__(
        self,
        action: Callable[[], Awaitable[None]],
        interval: float,
        is_enabled: Callable[[], bool],
        *,
        on_error: Callable[[Exception], None] | None = None,
        name: str = "light",
    ) -> None:
        self._action = action
        self._interval = interval
        self._is_enabled = is_enabled
        self._on_error = on_error
        self._name = name
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        """Return whether the background task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background task."""
        if self.running:
            return
        _LOGGER.debug(
            "Starting auto refresh for %s every %.1fs", self._name, self._interval
        )
        self._task = asyncio.create_task(self._worker())

    async def stop(self) -> None:
        """Stop the background task."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        _LOGGER.debug("Stopped auto refresh for %s", self._name)

    async def tick(self) -> None:
        """Run one scheduled step."""
        if not self._is_enabled():
            return
        try:
            await self._action()
        except asyncio.CancelledError:
            raise
        except Exception as err:  # pylint: disable=broad-except
            _LOGGER.warning("Auto refresh of %s failed: %s", self._name, err)
            if self._on_error is None:
                return
            try:
                self._on_error(err)
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception(
                    "Auto refresh error callback for %s failed", self._name
                )

    async def _worker(self) -> None:
        while True:
            await self.tick()
            await asyncio.sleep(self._interval)
