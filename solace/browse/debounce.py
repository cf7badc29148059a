"""Keystroke debouncing on the asyncio event loop."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Delay a callback until calls stop arriving for ``delay`` seconds.

    Each call replaces the pending one; only the last value is delivered.
    Once the delay has elapsed the callback runs to completion even if new
    calls arrive meanwhile (they schedule a fresh delay).
    """

    def __init__(self, callback: Callable[[T], Awaitable[None]], delay: float):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._callback = callback
        self.delay = delay
        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def __call__(self, value: T) -> None:
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._fire(value))

    async def _fire(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        # Detach before running so a new call does not cancel the callback
        self._pending = None
        await self._callback(value)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    async def wait(self) -> None:
        """Wait for the pending delay (and its callback) to finish, if any.

        A pending call replaced by a newer one is followed to its successor
        instead of cancelling the waiter.
        """
        task = self._pending
        while task is not None:
            await asyncio.wait({task})
            if not task.cancelled():
                task.result()
                return
            task = self._pending
