"""Summary: Debounced, latest-request-wins runner for live suggestions.

Importance: Recomputes suggestions only after edits pause and drops superseded work.
Alternatives: Reschedule timers implicitly on every keystroke.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar


logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class Superseded(Exception):
    """A newer request replaced this one before it finished."""


class LatestRequestRunner:
    """Summary: Runs at most one request at a time, always the most recent.

    Importance: Stale suggestions never overwrite fresher ones.
    Alternatives: Queue every request and discard results by sequence number.
    """

    def __init__(self, delay_seconds: float = 1.0) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")
        self._delay = delay_seconds
        self._current: asyncio.Task | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._current is not None and not self._current.done()

    async def submit(self, factory: Callable[[], Awaitable[ResultT]]) -> ResultT:
        """Summary: Wait out the debounce delay, then run the request.

        Importance: Each submission cancels whatever was pending before it.
        Alternatives: Let callers track and cancel their own timers.

        Raises Superseded when a later submission or cancel() replaces this
        request before it completes.
        """

        self._generation += 1
        generation = self._generation
        await self._cancel_current()
        task = asyncio.ensure_future(self._run(factory))
        self._current = task
        try:
            return await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Request %s superseded.", generation)
                raise Superseded(f"Request {generation} was superseded") from None
            raise
        finally:
            if self._current is task:
                self._current = None

    async def cancel(self) -> None:
        """Summary: Drop the pending request, if any."""

        self._generation += 1
        await self._cancel_current()

    async def _run(self, factory: Callable[[], Awaitable[ResultT]]) -> ResultT:
        await asyncio.sleep(self._delay)
        return await factory()

    async def _cancel_current(self) -> None:
        task = self._current
        self._current = None
        if task is None or task.done():
            return
        task.cancel()
        # Only a cancel aimed at the caller propagates out of wait().
        await asyncio.wait({task})
