# app/managers/debounce.py
"""
Debounced persistence trigger.

Coalesces bursts of edits into a single write: every ``schedule`` call
cancels the pending timer and starts a new one, so only the state passed
with the most recent call is written, once the quiet interval has elapsed
without further edits.

Writes that have already started are never cancelled. A newer write may
therefore race an older one at the store; the store keeps whichever
arrives last.
"""

from asyncio import CancelledError, Task, current_task, get_running_loop, sleep
from collections.abc import Awaitable, Callable
from contextlib import suppress
from logging import getLogger

from app.configs import file_logger, settings

logger = file_logger(getLogger(__name__))

_NOTHING = object()


class DebouncedSaver[T]:
    """
    Schedule a save no sooner than ``delay`` seconds after the last edit.

    At most one write is pending at a time. A failed write is logged and
    dropped: the caller's in-memory state stays authoritative.

    Example:
        >>> saver = DebouncedSaver(storage_write, delay=2.0)
        >>> saver.schedule(document)  # inside a running event loop
    """

    def __init__(
        self,
        save: Callable[[T], Awaitable[object]],
        delay: float = settings.AUTOSAVE_DEBOUNCE_SECONDS,
        name: str = "autosave",
    ) -> None:
        self._save = save
        self._delay = delay
        self._name = name
        self._latest: T | object = _NOTHING
        self._timer: Task[None] | None = None
        self._in_flight: set[Task[None]] = set()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether a write is scheduled but has not started yet."""
        return self._timer is not None and not self._timer.done()

    def schedule(self, value: T) -> None:
        """
        Replace any pending write with a write of ``value`` after the delay.

        Must be called from within a running event loop.
        """
        self._cancel_timer()
        self._latest = value
        self._timer = get_running_loop().create_task(self._wait_then_write())

    def cancel(self) -> bool:
        """
        Drop the pending write, if any.

        Returns:
            True if a pending write was discarded.
        """
        had_pending = self.pending
        self._cancel_timer()
        self._latest = _NOTHING
        if had_pending:
            logger.debug(f"{self._name}: pending write cancelled")
        return had_pending

    async def flush(self) -> bool:
        """
        Perform the pending write now and wait for in-flight writes.

        Returns:
            True if a pending write was performed by this call.
        """
        wrote = False
        if self.pending:
            self._cancel_timer()
            value, self._latest = self._latest, _NOTHING
            await self._write(value)
            wrote = True

        if self._in_flight:
            for task in list(self._in_flight):
                with suppress(CancelledError):
                    await task
        return wrote

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _wait_then_write(self) -> None:
        await sleep(self._delay)

        # From here on the write belongs to the in-flight set, not the timer
        task = current_task()
        self._timer = None
        value, self._latest = self._latest, _NOTHING
        if task is not None:
            self._in_flight.add(task)
        try:
            await self._write(value)
        finally:
            if task is not None:
                self._in_flight.discard(task)

    async def _write(self, value: T | object) -> None:
        if value is _NOTHING:
            return
        try:
            await self._save(value)  # type: ignore[arg-type]
        except Exception:
            logger.exception(f"{self._name}: debounced write failed, change kept in memory only")
        else:
            logger.debug(f"{self._name}: debounced write completed")
