from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidRecordError, InvalidTimezoneError

TzLike = Union[str, ZoneInfo]


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)


def resolve_timezone(tz: TzLike) -> ZoneInfo:
    if isinstance(tz, ZoneInfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        # OSError: directory names such as "America" inside the tz database.
        raise InvalidTimezoneError(f"unknown timezone {tz!r}") from e

def is_valid_timezone(name: str) -> bool:
    try:
        resolve_timezone(name)
    except InvalidTimezoneError:
        return False
    return True


def _aware(instant: datetime) -> datetime:
    # Naive instants are stored UTC.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant

def civil_date_at(instant: datetime, tz: TzLike) -> date:
    """The wall-clock date ``tz`` shows at ``instant``."""
    return _aware(instant).astimezone(resolve_timezone(tz)).date()

def day_difference(a: datetime, b: datetime, tz: TzLike) -> int:
    """
    Whole days from the civil date of ``b`` to the civil date of ``a`` in ``tz``.

    Both instants are first reduced to the date the zone's wall clock shows, so
    the time of day (and any DST shift between them) never changes the count.
    The difference of two day numbers is already an integer; no rounding step
    can move it.
    """
    zone = resolve_timezone(tz)
    return to_jdn(civil_date_at(a, zone)) - to_jdn(civil_date_at(b, zone))

def at_civil_date(instant: datetime, d: date, tz: TzLike) -> datetime:
    """Move ``instant`` to civil date ``d`` in ``tz``, keeping its wall-clock time of day."""
    zone = resolve_timezone(tz)
    local = _aware(instant).astimezone(zone)
    moved = datetime.combine(d, local.timetz().replace(tzinfo=None)).replace(tzinfo=zone, fold=local.fold)
    return moved.astimezone(_aware(instant).tzinfo)


def parse_instant(text: str) -> datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed); date-only strings mean UTC midnight."""
    s = text.strip()
    if s.endswith("Z") or s.endswith("z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as e:
        raise InvalidRecordError(f"not an ISO-8601 timestamp: {text!r}") from e
    return _aware(dt)

def format_instant(instant: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    utc = _aware(instant).astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def utc_offset_hours(tz: TzLike, at: Optional[datetime] = None) -> int:
    """UTC offset of ``tz`` at ``at`` (default: now), rounded to whole hours."""
    at = _aware(at) if at is not None else datetime.now(timezone.utc)
    offset = at.astimezone(resolve_timezone(tz)).utcoffset()
    return round(offset.total_seconds() / 3600)

def timezone_display(tz: TzLike, at: Optional[datetime] = None) -> str:
    """``"Asia/Shanghai (UTC+8)"``."""
    name = tz if isinstance(tz, str) else tz.key
    offset = utc_offset_hours(tz, at)
    sign = "+" if offset >= 0 else ""
    return f"{name} (UTC{sign}{offset})"
