"""Timer detector - free-form durations: "5m", "1h30m", "90s", "10:00", "25 min"."""
import re
from typing import Optional, Tuple

from contour.services.timer.models.timer_state import TimerState
from contour.services.timer.timer_scheduler import create_timer

MAX_TIMER_SECONDS = 24 * 3600

_UNIT_SECONDS = {"h": 3600, "m": 60, "s": 1}
_TOKEN_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*(h|hrs?|hours?|m|mins?|minutes?|s|secs?|seconds?)(?![a-z])",
    re.IGNORECASE,
)
_CLOCK_PATTERN = re.compile(r"^(?:(\d{1,2}):)?(\d{1,3}):(\d{2})$")


def parse_duration(text: str) -> Optional[int]:
    """
    Parse a duration into whole seconds.

    Returns:
        Seconds, or None when the text is not a duration. A bare number is
        taken as minutes ("25" -> 1500).
    """
    s = text.strip().lower()
    s = re.sub(r"^(?:timer|set timer|start timer)\s*(?:for\s+)?", "", s)
    s = re.sub(r"\s+timer$", "", s)
    if not s:
        return None

    match = _CLOCK_PATTERN.match(s)
    if match:
        hours, minutes, seconds = int(match.group(1) or 0), int(match.group(2)), int(match.group(3))
        if seconds > 59 or (match.group(1) and minutes > 59):
            return None
        return hours * 3600 + minutes * 60 + seconds

    if re.fullmatch(r"\d+(?:\.\d+)?", s):
        return round(float(s) * 60)

    consumed = _TOKEN_PATTERN.sub("", s)
    if re.sub(r"[\s,]|and", "", consumed):
        return None
    total = 0.0
    for value, unit in _TOKEN_PATTERN.findall(s):
        total += float(value) * _UNIT_SECONDS[unit[0].lower()]
    return round(total) if total else None


def duration_label(seconds: int) -> str:
    """"1h 30m", "5m", "1m 30s"."""
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def parse_timer(text: str) -> Optional[Tuple[int, str]]:
    """(seconds, label) for a valid positive duration within a day."""
    seconds = parse_duration(text)
    if not seconds or seconds <= 0 or seconds > MAX_TIMER_SECONDS:
        return None
    return seconds, duration_label(seconds)


def detect_timer(text: str) -> Optional[TimerState]:
    """Build an idle countdown for a duration, or None for malformed input."""
    parsed = parse_timer(text)
    if not parsed:
        return None
    seconds, label = parsed
    return create_timer(seconds, label)
