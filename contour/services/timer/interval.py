"""Repeating interval scheduling for the countdown"""
import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class IntervalHandle(Protocol):
    def cancel(self) -> None: ...


class IntervalScheduler(Protocol):
    """Registers a callback that fires every `seconds` until cancelled."""

    def set_interval(self, callback: Callable[[], None], seconds: float) -> IntervalHandle: ...


class _LoopInterval:
    """Re-arms loop.call_later after each firing."""

    def __init__(self, loop: asyncio.AbstractEventLoop, callback: Callable[[], None], seconds: float):
        self._loop = loop
        self._callback = callback
        self._seconds = seconds
        self._cancelled = False
        self._timer_handle: Optional[asyncio.TimerHandle] = None
        self._arm()

    def _arm(self):
        self._timer_handle = self._loop.call_later(self._seconds, self._fire)

    def _fire(self):
        if self._cancelled:
            return
        # re-arm first so a callback that cancels us wins
        self._arm()
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None


class AsyncioIntervalScheduler:
    """Interval scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def set_interval(self, callback: Callable[[], None], seconds: float) -> IntervalHandle:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug(f"Interval armed every {seconds}s")
        return _LoopInterval(loop, callback, seconds)
