"""Debounced invocation of async callbacks.

Search inputs call the debouncer on every keystroke; only the last call of a
burst reaches the callback, ``delay`` seconds after the burst pauses.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

from gudang.config import settings

logger = logging.getLogger(__name__)


class Debouncer:
    """Trailing-edge debouncer bound to a running event loop.

    A callback that has already started is never cancelled by a later call.
    Callbacks run one at a time: a call whose delay elapses while an earlier
    callback is still running waits for that callback to finish first.

    Attributes:
        callback: sync or async callable receiving the latest call arguments
        delay: quiet period in seconds, defaults to ``SEARCH_DEBOUNCE_SECONDS``
    """

    def __init__(self, callback: Callable[..., Any], delay: Optional[float] = None) -> None:
        if delay is None:
            delay = settings.SEARCH_DEBOUNCE_SECONDS
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.callback = callback
        self.delay = delay
        self._timer: Optional[asyncio.Task[None]] = None
        self._firing: Optional[asyncio.Task[None]] = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._args = args
        self._kwargs = kwargs
        self._timer = asyncio.get_running_loop().create_task(self._fire_later())

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def flush(self) -> None:
        """Run the pending call immediately, if there is one."""
        if not self.pending:
            return
        self.cancel()
        args, kwargs = self._args, self._kwargs
        await self._after_running()
        await self._invoke(args, kwargs)

    async def wait(self) -> None:
        """Wait until no call is pending or running."""
        while True:
            task = self._timer if self._timer is not None else self._firing
            if task is None or task.done():
                return
            await asyncio.wait({task})

    async def _fire_later(self) -> None:
        await asyncio.sleep(self.delay)
        args, kwargs = self._args, self._kwargs
        previous = self._firing
        self._firing, self._timer = self._timer, None
        if previous is not None and not previous.done():
            await asyncio.wait({previous})
        await self._invoke(args, kwargs)

    async def _after_running(self) -> None:
        running = self._firing
        if running is not None and not running.done():
            await asyncio.wait({running})

    async def _invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        try:
            result = self.callback(*args, **kwargs)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Debounced callback %r failed", self.callback)
