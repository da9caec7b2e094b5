"""Date calculator detector - "days until Dec 25", "30 days from now", "2 weeks ago"."""
import re
from datetime import date, datetime, timedelta
from typing import Dict, Optional

from contour.models.module import DateResult
from contour.utils.datetime_helper import format_date_long, format_date_short

MONTHS: Dict[str, int] = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6, "jul": 7, "july": 7,
    "aug": 8, "august": 8, "sep": 9, "sept": 9, "september": 9, "oct": 10, "october": 10,
    "nov": 11, "november": 11, "dec": 12, "december": 12,
}

WEEKDAYS: Dict[str, int] = {
    "monday": 0, "mon": 0, "tuesday": 1, "tue": 1, "tues": 1, "wednesday": 2, "wed": 2,
    "thursday": 3, "thu": 3, "thurs": 3, "friday": 4, "fri": 4, "saturday": 5, "sat": 5,
    "sunday": 6, "sun": 6,
}

# Fixed-date holidays as (month, day)
HOLIDAYS: Dict[str, tuple] = {
    "christmas": (12, 25), "xmas": (12, 25), "christmas eve": (12, 24),
    "new year": (1, 1), "new years": (1, 1), "new year's": (1, 1), "new year's day": (1, 1),
    "new years eve": (12, 31), "new year's eve": (12, 31),
    "halloween": (10, 31), "valentines": (2, 14), "valentine's": (2, 14),
    "valentines day": (2, 14), "valentine's day": (2, 14), "independence day": (7, 4),
}

UNIT_DAYS = {"day": 1, "week": 7}

UNTIL_PATTERN = re.compile(
    r"^(?:how many\s+)?days?\s+(?P<dir>until|till|til|to|before|since|from)(?:\s+(?P<target>.+?))?\s*\??$",
    re.IGNORECASE,
)
OFFSET_PATTERN = re.compile(
    r"^(?:in\s+)?(?P<n>\d{1,5})\s*(?P<unit>days?|d|weeks?|wks?|w|months?|mos?|years?|yrs?|y)\s+"
    r"(?P<dir>from\s+now|from\s+today|later|after\s+today|ago|before\s+today)$",
    re.IGNORECASE,
)
IN_OFFSET_PATTERN = re.compile(
    r"^in\s+(?P<n>\d{1,5})\s*(?P<unit>days?|weeks?|months?|years?)$",
    re.IGNORECASE,
)


def add_months(d: date, months: int) -> date:
    """Move by whole months; a day missing in the target month clamps to its last day."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = d.day
    while True:
        try:
            return d.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1
            if day < 1:
                raise ValueError(f"Failed to move {d} by {months} months")


def shift(d: date, n: int, unit: str) -> date:
    unit = unit.lower().rstrip("s")
    if unit in ("day", "d"):
        return d + timedelta(days=n)
    if unit in ("week", "wk", "w"):
        return d + timedelta(weeks=n)
    if unit in ("month", "mo"):
        return add_months(d, n)
    return add_months(d, 12 * n)


def _next_occurrence(month: int, day: int, today: date, forward: bool) -> date:
    candidate = date(today.year, month, day)
    if forward and candidate < today:
        candidate = date(today.year + 1, month, day)
    elif not forward and candidate > today:
        candidate = date(today.year - 1, month, day)
    return candidate


def parse_date(text: str, today: date, forward: bool = True) -> Optional[date]:
    """
    Parse a target date relative to `today`.

    Accepts "2026-12-25", "12/25", "12/25/2027", "Dec 25", "25 December 2027",
    weekday names, "today"/"tomorrow"/"yesterday" and fixed holidays. A date
    without a year is the next (or, looking back, the previous) occurrence.
    """
    s = re.sub(r"\s+", " ", text.strip().lower().rstrip("?").rstrip(".")).replace(",", "")
    s = re.sub(r"^(?:the\s+|next\s+)", "", s)
    try:
        if s == "today":
            return today
        if s == "tomorrow":
            return today + timedelta(days=1)
        if s == "yesterday":
            return today - timedelta(days=1)
        if s in HOLIDAYS:
            return _next_occurrence(*HOLIDAYS[s], today, forward)
        if s in WEEKDAYS:
            delta = (WEEKDAYS[s] - today.weekday()) % 7
            if forward:
                return today + timedelta(days=delta or 7)
            return today - timedelta(days=(7 - delta) % 7 or 7)

        match = re.fullmatch(r"(\d{4})-(\d{1,2})-(\d{1,2})", s)
        if match:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

        match = re.fullmatch(r"(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?", s)
        if match:
            month, day = int(match.group(1)), int(match.group(2))
            if match.group(3):
                year = int(match.group(3))
                return date(year + 2000 if year < 100 else year, month, day)
            return _next_occurrence(month, day, today, forward)

        match = re.fullmatch(r"([a-z]+)\.? (\d{1,2})(?:st|nd|rd|th)?(?: (\d{4}))?", s) or \
            re.fullmatch(r"(\d{1,2})(?:st|nd|rd|th)? (?:of )?([a-z]+)(?: (\d{4}))?", s)
        if match:
            first, second, year = match.groups()
            month_name, day_text = (first, second) if first.isalpha() else (second, first)
            month = MONTHS.get(month_name)
            if not month:
                return None
            if year:
                return date(int(year), month, int(day_text))
            return _next_occurrence(month, int(day_text), today, forward)
    except ValueError:
        return None
    return None


def _plural(n: int, word: str) -> str:
    return f"{n:,} {word}" + ("" if abs(n) == 1 else "s")


def _today(now: Optional[datetime]) -> date:
    return (now or datetime.now()).date()


def detect_date(text: str, now: Optional[datetime] = None) -> Optional[DateResult]:
    """Detect date arithmetic phrasing and compute the answer relative to `now`."""
    s = text.strip()
    today = _today(now)

    match = UNTIL_PATTERN.match(s)
    if match:
        direction = match.group("dir").lower()
        backwards = direction in ("since", "from")
        target_text = match.group("target")
        if not target_text:
            return DateResult(display=f"Days {direction} …", is_partial=True)
        target = parse_date(target_text, today, forward=not backwards)
        if not target:
            return DateResult(display=f"Days {direction} {target_text.strip()}?", is_partial=True)
        days = (today - target).days if backwards else (target - today).days
        if backwards:
            display = f"{_plural(days, 'day')} since {format_date_short(target)}"
        elif days == 0:
            display = f"{format_date_short(target)} is today"
        else:
            display = f"{_plural(days, 'day')} until {format_date_short(target)}"
        weeks, rem = divmod(abs(days), 7)
        subtitle = format_date_long(target)
        if weeks:
            subtitle += f" · {_plural(weeks, 'week')}" + (f", {_plural(rem, 'day')}" if rem else "")
        return DateResult(target_date=target, days=days, display=display, subtitle=subtitle)

    match = OFFSET_PATTERN.match(s) or IN_OFFSET_PATTERN.match(s)
    if match:
        n = int(match.group("n"))
        unit = match.group("unit").lower()
        direction = match.groupdict().get("dir") or "from now"
        sign = -1 if direction.lower() in ("ago", "before today") else 1
        try:
            target = shift(today, sign * n, unit)
        except (ValueError, OverflowError):
            return DateResult(display="Date out of range", is_partial=True)
        days = (target - today).days
        label = "ago" if sign < 0 else "from today"
        return DateResult(
            target_date=target,
            days=days,
            display=format_date_long(target),
            subtitle=f"{_plural(abs(days), 'day')} {label}",
        )
    return None
