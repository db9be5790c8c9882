"""
renewcal.engines.lunar
----------------------
Gregorian <-> lunisolar conversion over the fixed 1900-2100 table.

Forward conversion counts days from the epoch (Gregorian 1900-01-31, which
is lunar 1900-01-01) and peels off whole lunar years, then whole months.
The inverse has no closed form here: it searches the Gregorian days of the
lunar year and its two neighbours for the one that converts forward to the
requested label.
"""

from __future__ import annotations

import calendar as pycal
from datetime import date, timedelta
from typing import Iterator, Tuple

from ..core.errors import OutOfRangeError, UnresolvableError
from ..core.time import from_jdn, to_jdn
from ..core.types import LunarDate
from . import lunar_table as table

EPOCH = date(1900, 1, 31)
EPOCH_JDN = to_jdn(EPOCH)
LAST_SOLAR = date(table.MAX_YEAR, 12, 31)


def solar_to_lunar(year: int, month: int, day: int) -> LunarDate:
    """Lunar label of the Gregorian date ``year-month-day``."""
    if not (table.MIN_YEAR <= year <= table.MAX_YEAR):
        raise OutOfRangeError(f"solar year {year} outside {table.MIN_YEAR}..{table.MAX_YEAR}")
    try:
        d = date(year, month, day)
    except ValueError as e:
        raise OutOfRangeError(f"invalid Gregorian date {year}-{month}-{day}: {e}") from e
    offset = to_jdn(d) - EPOCH_JDN
    if offset < 0:
        raise OutOfRangeError(f"{d} precedes the lunar table epoch {EPOCH}")

    lunar_year = table.year_at_offset(offset)
    offset -= table.year_start_offset(lunar_year)

    # The leap month follows the ordinary month of the same number.
    for m, is_leap in table.months_in_year(lunar_year):
        n = table.lunar_month_length(lunar_year, m, is_leap)
        if offset < n:
            return LunarDate(lunar_year, m, offset + 1, is_leap)
        offset -= n
    raise AssertionError("year_length disagrees with its month lengths")


def solar_date_to_lunar(d: date) -> LunarDate:
    return solar_to_lunar(d.year, d.month, d.day)


def _candidates(lunar_year: int) -> Iterator[date]:
    for y in range(lunar_year - 1, lunar_year + 2):
        if not (table.MIN_YEAR <= y <= table.MAX_YEAR):
            continue
        for m in range(1, 13):
            for d in range(1, pycal.monthrange(y, m)[1] + 1):
                day = date(y, m, d)
                if day >= EPOCH:
                    yield day


def lunar_to_solar(lunar: LunarDate) -> date:
    """
    Gregorian date of ``lunar``.

    Every Gregorian day from January 1st of ``lunar.year - 1`` to December
    31st of ``lunar.year + 1`` is converted forward in order, and the first
    exact match on (year, month, day, leap flag) wins. At most 3*12*31
    conversions are made.

    Raises:
        UnresolvableError: no day in the window converts to ``lunar``.
    """
    for day in _candidates(lunar.year):
        if solar_date_to_lunar(day) == lunar:
            return day
    raise UnresolvableError(f"no Gregorian date converts to {lunar}")


def lunar_to_solar_direct(lunar: LunarDate) -> date:
    """Offset-index inverse of solar_to_lunar; agrees with lunar_to_solar wherever both resolve."""
    offset = table.year_start_offset(lunar.year)
    for m, is_leap in table.months_in_year(lunar.year):
        if (m, is_leap) == (lunar.month, lunar.is_leap_month):
            break
        offset += table.lunar_month_length(lunar.year, m, is_leap)
    d = from_jdn(EPOCH_JDN + offset + lunar.day - 1)
    if d > LAST_SOLAR:
        raise UnresolvableError(f"{lunar} falls after {LAST_SOLAR}")
    return d


def days_to_lunar(lunar: LunarDate, today: date) -> int:
    """Whole days from ``today`` until the Gregorian date of ``lunar`` (negative once past)."""
    return (lunar_to_solar(lunar) - today).days


def lunar_month_bounds(year: int, month: int, is_leap_month: bool = False) -> Tuple[date, date]:
    """First and last Gregorian day of a lunar month instance."""
    n = table.lunar_month_length(year, month, is_leap_month)
    first = lunar_to_solar_direct(LunarDate(year, month, 1, is_leap_month))
    return first, first + timedelta(days=n - 1)


def lunar_new_year(year: int) -> date:
    return from_jdn(EPOCH_JDN + table.year_start_offset(year))
