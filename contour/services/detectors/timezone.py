"""Timezone converter detector - "3pm EST in IST", "now in Tokyo"."""
import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from contour.models.module import TimezoneResult
from contour.utils.datetime_helper import day_offset_label, format_date_long, format_time_12h

logger = logging.getLogger(__name__)

# Zone abbreviations (shown upper-case) -> IANA zone
TIMEZONE_ABBREVIATIONS: Dict[str, str] = {
    "utc": "UTC", "gmt": "UTC", "z": "UTC",
    "est": "America/New_York", "edt": "America/New_York", "et": "America/New_York",
    "cst": "America/Chicago", "cdt": "America/Chicago", "ct": "America/Chicago",
    "mst": "America/Denver", "mdt": "America/Denver", "mt": "America/Denver",
    "pst": "America/Los_Angeles", "pdt": "America/Los_Angeles", "pt": "America/Los_Angeles",
    "akst": "America/Anchorage", "hst": "Pacific/Honolulu",
    "bst": "Europe/London", "wet": "Europe/Lisbon",
    "cet": "Europe/Paris", "cest": "Europe/Paris",
    "eet": "Europe/Athens", "eest": "Europe/Athens", "msk": "Europe/Moscow",
    "ist": "Asia/Kolkata", "pkt": "Asia/Karachi", "gst": "Asia/Dubai",
    "sgt": "Asia/Singapore", "hkt": "Asia/Hong_Kong", "cst china": "Asia/Shanghai",
    "jst": "Asia/Tokyo", "kst": "Asia/Seoul",
    "aest": "Australia/Sydney", "aedt": "Australia/Sydney", "awst": "Australia/Perth",
    "nzst": "Pacific/Auckland", "nzdt": "Pacific/Auckland",
    "brt": "America/Sao_Paulo", "art": "America/Argentina/Buenos_Aires",
    "nyc": "America/New_York", "la": "America/Los_Angeles", "sf": "America/Los_Angeles",
}

# City and country names (shown title-case) -> IANA zone
CITY_TIMEZONES: Dict[str, str] = {
    "new york": "America/New_York", "boston": "America/New_York",
    "toronto": "America/Toronto", "chicago": "America/Chicago", "denver": "America/Denver",
    "los angeles": "America/Los_Angeles",
    "san francisco": "America/Los_Angeles", "seattle": "America/Los_Angeles",
    "vancouver": "America/Vancouver", "mexico city": "America/Mexico_City",
    "sao paulo": "America/Sao_Paulo", "buenos aires": "America/Argentina/Buenos_Aires",
    "london": "Europe/London", "dublin": "Europe/Dublin", "lisbon": "Europe/Lisbon",
    "paris": "Europe/Paris", "berlin": "Europe/Berlin", "madrid": "Europe/Madrid",
    "rome": "Europe/Rome", "amsterdam": "Europe/Amsterdam", "zurich": "Europe/Zurich",
    "stockholm": "Europe/Stockholm", "athens": "Europe/Athens", "istanbul": "Europe/Istanbul",
    "moscow": "Europe/Moscow", "cairo": "Africa/Cairo", "lagos": "Africa/Lagos",
    "johannesburg": "Africa/Johannesburg", "nairobi": "Africa/Nairobi",
    "dubai": "Asia/Dubai", "karachi": "Asia/Karachi",
    "india": "Asia/Kolkata", "mumbai": "Asia/Kolkata", "delhi": "Asia/Kolkata",
    "bangalore": "Asia/Kolkata", "kolkata": "Asia/Kolkata",
    "dhaka": "Asia/Dhaka", "bangkok": "Asia/Bangkok", "jakarta": "Asia/Jakarta",
    "singapore": "Asia/Singapore", "hong kong": "Asia/Hong_Kong",
    "beijing": "Asia/Shanghai", "shanghai": "Asia/Shanghai", "manila": "Asia/Manila",
    "seoul": "Asia/Seoul", "tokyo": "Asia/Tokyo", "japan": "Asia/Tokyo",
    "sydney": "Australia/Sydney", "melbourne": "Australia/Melbourne", "perth": "Australia/Perth",
    "auckland": "Pacific/Auckland", "honolulu": "Pacific/Honolulu",
}

TIMEZONES: Dict[str, str] = {**TIMEZONE_ABBREVIATIONS, **CITY_TIMEZONES}

POPULAR_TIMEZONES: List[str] = ["UTC", "EST", "PST", "London", "Paris", "IST", "Tokyo", "Sydney"]

_TIME = r"(?P<time>noon|midnight|\d{1,2}(?::\d{2})?\s*(?:am|pm|a\.m\.|p\.m\.)?)"
_ZONE = r"[a-z][a-z .]*?"
CONVERT_PATTERN = re.compile(
    r"^" + _TIME + r"\s+(?P<from>" + _ZONE + r")\s+(?P<conn>in|to|into)(?:\s+(?P<to>" + _ZONE + r"))?\s*\??$",
    re.IGNORECASE,
)
NOW_PATTERN = re.compile(
    r"^(?:now|time|current time|what time is it|what's the time)\s+in(?:\s+(?P<to>" + _ZONE + r"))?\s*\??$",
    re.IGNORECASE,
)


def find_timezone(label: Optional[str]) -> Optional[Tuple[str, ZoneInfo]]:
    """Return (display label, zone) for an abbreviation or city name."""
    if not label:
        return None
    key = re.sub(r"\s+", " ", label.strip().lower().rstrip("."))
    iana = TIMEZONES.get(key)
    if not iana:
        return None
    try:
        zone = ZoneInfo(iana)
    except ZoneInfoNotFoundError:
        logger.warning(f"Time zone data missing for {iana}")
        return None
    display = key.upper() if key in TIMEZONE_ABBREVIATIONS else key.title()
    return display, zone


def parse_time(text: str) -> Optional[Tuple[int, int]]:
    """Parse "3pm", "3:30 pm", "15:00", "noon" into (hour, minute)."""
    s = text.strip().lower().replace(".", "").replace(" ", "")
    if s == "noon":
        return 12, 0
    if s == "midnight":
        return 0, 0
    match = re.fullmatch(r"(\d{1,2})(?::(\d{2}))?(am|pm)?", s)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2) or 0)
    period = match.group(3)
    if minute > 59:
        return None
    if period:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if period == "pm" else 0)
    elif hour > 23 or match.group(2) is None:
        # a bare "3" is too ambiguous to be a time
        return None
    return hour, minute


def convert_timezone_direct(hour: int, minute: int, from_zone: ZoneInfo, to_zone: ZoneInfo,
                            now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Place hour:minute on today's date in from_zone and convert it to to_zone."""
    now = now or datetime.now(timezone.utc)
    local_today = now.astimezone(from_zone).date()
    source = datetime(local_today.year, local_today.month, local_today.day, hour, minute, tzinfo=from_zone)
    return source, source.astimezone(to_zone)


def detect_timezone(text: str, now: Optional[datetime] = None) -> Optional[TimezoneResult]:
    """Detect a time-zone conversion or a "now in <city>" lookup."""
    s = text.strip()
    now = now or datetime.now(timezone.utc)

    now_match = NOW_PATTERN.match(s)
    if now_match:
        target = find_timezone(now_match.group("to"))
        if not target:
            return TimezoneResult(
                from_time="now",
                from_zone="local",
                display="Now in …?",
                is_partial=True,
            )
        label, zone = target
        local = now.astimezone(zone)
        offset = local.strftime("%z")
        return TimezoneResult(
            from_time="now",
            from_zone="local",
            to_zone=label,
            to_time=format_time_12h(local),
            display=f"{format_time_12h(local)} in {label}",
            subtitle=f"{format_date_long(local.date())} · UTC{offset[:3]}:{offset[3:]}",
        )

    match = CONVERT_PATTERN.match(s)
    if not match:
        return None
    parsed_time = parse_time(match.group("time"))
    source_zone = find_timezone(match.group("from"))
    if not parsed_time or not source_zone:
        return None

    hour, minute = parsed_time
    from_label, from_zone = source_zone
    from_time = f"{hour % 12 or 12}:{minute:02d} {'AM' if hour < 12 else 'PM'}"

    target = find_timezone(match.group("to"))
    if not target:
        return TimezoneResult(
            from_time=from_time,
            from_zone=from_label,
            display=f"{from_time} {from_label} → ?",
            is_partial=True,
        )

    to_label, to_zone = target
    source, converted = convert_timezone_direct(hour, minute, from_zone, to_zone, now)
    day_offset = (converted.date() - source.date()).days
    subtitle = format_date_long(converted.date())
    if day_offset:
        subtitle = f"{subtitle} ({day_offset_label(day_offset)})"
    return TimezoneResult(
        from_time=from_time,
        from_zone=from_label,
        to_zone=to_label,
        to_time=format_time_12h(converted),
        day_offset=day_offset,
        display=f"{from_time} {from_label} = {format_time_12h(converted)} {to_label}",
        subtitle=subtitle,
    )
