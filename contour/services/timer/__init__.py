from .timer_scheduler import TimerScheduler, create_timer, tick, reset, format_display
from .interval import AsyncioIntervalScheduler, IntervalScheduler

__all__ = [
    "TimerScheduler",
    "create_timer",
    "tick",
    "reset",
    "format_display",
    "AsyncioIntervalScheduler",
    "IntervalScheduler",
]
