"""Timer Scheduler - countdown lifecycle (idle -> running <-> paused -> complete)"""
import logging
from typing import Callable, Optional

from contour import config
from .interval import IntervalHandle, IntervalScheduler, AsyncioIntervalScheduler
from .models.timer_state import TimerPhase, TimerState

logger = logging.getLogger(__name__)


def format_display(seconds: int) -> str:
    """MM:SS, or H:MM:SS from one hour up."""
    seconds = max(0, seconds)
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def compute_progress(remaining_seconds: int, total_seconds: int) -> float:
    if total_seconds <= 0:
        return 0.0
    return max(0.0, min(1.0, remaining_seconds / total_seconds))


def create_timer(total_seconds: int, label: str = "") -> TimerState:
    """Idle countdown; a non-positive total is already complete."""
    total_seconds = max(0, int(total_seconds))
    return TimerState(
        total_seconds=total_seconds,
        remaining_seconds=total_seconds,
        is_complete=total_seconds == 0,
        label=label,
        display=format_display(total_seconds),
        progress=compute_progress(total_seconds, total_seconds),
    )


def tick(state: TimerState) -> TimerState:
    """
    One-second transition. Pure: returns a new state.

    Non-running and completed timers are returned unchanged. Reaching zero
    sets is_complete and stops the countdown.
    """
    if state.is_complete or not state.is_running:
        return state
    remaining = max(0, state.remaining_seconds - 1)
    done = remaining == 0
    return state.model_copy(update={
        "remaining_seconds": remaining,
        "is_running": not done,
        "is_complete": done,
        "display": format_display(remaining),
        "progress": compute_progress(remaining, state.total_seconds),
    })


def reset(state: TimerState) -> TimerState:
    return state.model_copy(update={
        "remaining_seconds": state.total_seconds,
        "is_running": False,
        "is_complete": state.total_seconds == 0,
        "display": format_display(state.total_seconds),
        "progress": compute_progress(state.total_seconds, state.total_seconds),
    })


class TimerScheduler:
    """
    Owns one countdown and at most one interval handle.

    State changes are pushed to `on_change`; `on_complete` fires exactly once
    per run when the countdown reaches zero.
    """

    def __init__(
        self,
        interval_scheduler: Optional[IntervalScheduler] = None,
        on_change: Optional[Callable[[TimerState], None]] = None,
        on_complete: Optional[Callable[[TimerState], None]] = None,
        tick_seconds: float = config.TIMER_TICK_SECONDS,
    ):
        self._intervals = interval_scheduler or AsyncioIntervalScheduler()
        self._on_change = on_change
        self._on_complete = on_complete
        self._tick_seconds = tick_seconds
        self._handle: Optional[IntervalHandle] = None
        self._state: Optional[TimerState] = None
        self._phase = TimerPhase.IDLE

    @property
    def state(self) -> Optional[TimerState]:
        return self._state

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def has_active_interval(self) -> bool:
        return self._handle is not None

    def set_duration(self, seconds: int, label: str = "") -> bool:
        """Initialize the countdown. Only valid while idle; non-positive durations are rejected."""
        if self._phase != TimerPhase.IDLE:
            logger.warning(f"set_duration ignored in phase {self._phase.value}")
            return False
        if seconds is None or seconds <= 0:
            logger.debug(f"Rejected timer duration: {seconds}")
            return False
        self._state = create_timer(seconds, label)
        self._notify()
        return True

    def load(self, state: TimerState) -> None:
        """Adopt a freshly detected idle countdown, discarding any previous one."""
        self.discard()
        self._state = state
        self._phase = TimerPhase.COMPLETE if state.is_complete else TimerPhase.IDLE

    def start(self) -> bool:
        """idle -> running"""
        if self._state is None or self._phase != TimerPhase.IDLE:
            return False
        if self._state.is_complete:
            self._phase = TimerPhase.COMPLETE
            return False
        if not self._arm():
            return False
        self._phase = TimerPhase.RUNNING
        self._state = self._state.model_copy(update={"is_running": True})
        logger.info(f"Timer started: {self._state.total_seconds}sec ({self._state.label})")
        self._notify()
        return True

    def toggle(self) -> bool:
        """running -> paused, paused -> running"""
        if self._state is None:
            return False
        if self._phase == TimerPhase.RUNNING:
            self._clear_interval()
            self._phase = TimerPhase.PAUSED
            self._state = self._state.model_copy(update={"is_running": False})
            logger.info(f"Timer paused at {self._state.remaining_seconds}sec")
        elif self._phase == TimerPhase.PAUSED:
            if not self._arm():
                return False
            self._phase = TimerPhase.RUNNING
            self._state = self._state.model_copy(update={"is_running": True})
            logger.info(f"Timer resumed at {self._state.remaining_seconds}sec")
        elif self._phase == TimerPhase.IDLE:
            return self.start()
        else:
            return False
        self._notify()
        return True

    def reset(self) -> None:
        """Any phase -> idle with the full duration restored."""
        self._clear_interval()
        self._phase = TimerPhase.IDLE
        if self._state is not None:
            self._state = reset(self._state)
            self._notify()

    def discard(self) -> None:
        """Drop the countdown entirely (module unfocused or composer cleared)."""
        self._clear_interval()
        self._state = None
        self._phase = TimerPhase.IDLE

    def _arm(self) -> bool:
        # at most one live interval
        self._clear_interval()
        try:
            self._handle = self._intervals.set_interval(self._on_tick, self._tick_seconds)
        except RuntimeError as e:
            logger.error(f"Could not schedule timer interval: {e}")
            self._handle = None
            return False
        return True

    def _clear_interval(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_tick(self) -> None:
        try:
            if self._state is None or self._phase != TimerPhase.RUNNING:
                self._clear_interval()
                return
            previous = self._state
            self._state = tick(previous)
            if self._state.is_complete and not previous.is_complete:
                self._clear_interval()
                self._phase = TimerPhase.COMPLETE
                logger.info(f"Timer completed: {self._state.label}")
                self._fire_complete()
            self._notify()
        except Exception as e:
            logger.error(f"Error processing timer tick: {e}")
            self._clear_interval()

    def _fire_complete(self) -> None:
        if self._on_complete is None:
            return
        try:
            self._on_complete(self._state)
        except Exception as e:
            # best-effort notification
            logger.warning(f"Timer completion notification failed: {e}")

    def _notify(self) -> None:
        if self._on_change is not None and self._state is not None:
            self._on_change(self._state)
