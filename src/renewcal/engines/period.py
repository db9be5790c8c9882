"""
renewcal.engines.period
-----------------------
Advance a date by a {value, unit} period under either calendar.

Month and year steps clamp the day to the length of the target month
instead of rolling over into the next one: Jan 31 + 1 month is Feb 28/29,
and lunar day 30 in a 29-day target month becomes day 29.
"""

from __future__ import annotations

import calendar as pycal
import logging
from datetime import date, datetime, timedelta
from typing import Union

from ..core.errors import InvalidPeriodError
from ..core.time import TzLike, at_civil_date, civil_date_at
from ..core.types import CalendarKind, LunarDate, Period
from . import lunar_table as table
from .lunar import lunar_to_solar, solar_date_to_lunar

logger = logging.getLogger(__name__)

DateLike = Union[date, LunarDate]


def _clamp_day(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, pycal.monthrange(year, month)[1]))


def add_solar_period(d: date, period: Period) -> date:
    if period.unit == "day":
        return d + timedelta(days=period.value)
    if period.unit == "month":
        index = d.year * 12 + (d.month - 1) + period.value
        return _clamp_day(index // 12, index % 12 + 1, d.day)
    if period.unit == "year":
        return _clamp_day(d.year + period.value, d.month, d.day)
    raise InvalidPeriodError(f"unknown period unit {period.unit!r}")


def _resolve_lunar(year: int, month: int, day: int, was_leap: bool) -> LunarDate:
    # A leap month survives only if the target year repeats the same month.
    is_leap = was_leap and table.leap_month(year) == month
    max_day = table.lunar_month_length(year, month, is_leap)
    out = LunarDate(year, month, min(day, max_day), is_leap)
    # Raises UnresolvableError for labels past the end of the table (late lunar 2100).
    lunar_to_solar(out)
    return out


def add_lunar_period(lunar: LunarDate, period: Period) -> LunarDate:
    if period.unit == "day":
        solar = lunar_to_solar(lunar) + timedelta(days=period.value)
        return solar_date_to_lunar(solar)
    if period.unit == "month":
        index = (lunar.year - table.MIN_YEAR) * 12 + (lunar.month - 1) + period.value
        year, month = index // 12 + table.MIN_YEAR, index % 12 + 1
        return _resolve_lunar(year, month, lunar.day, lunar.is_leap_month)
    if period.unit == "year":
        return _resolve_lunar(lunar.year + period.value, lunar.month, lunar.day, lunar.is_leap_month)
    raise InvalidPeriodError(f"unknown period unit {period.unit!r}")


def add_period(d: DateLike, period: Period, calendar_kind: CalendarKind = "solar") -> DateLike:
    """
    ``d`` advanced by ``period``; always strictly later than ``d``.

    Gregorian dates under ``calendar_kind="lunar"`` are converted to their
    lunar label, advanced with lunar rules and converted back, so the return
    type always matches the input type.
    """
    if isinstance(d, LunarDate):
        if calendar_kind != "lunar":
            raise ValueError("LunarDate input requires calendar_kind='lunar'")
        return add_lunar_period(d, period)
    if calendar_kind == "lunar":
        return lunar_to_solar(add_lunar_period(solar_date_to_lunar(d), period))
    if calendar_kind == "solar":
        return add_solar_period(d, period)
    raise ValueError(f"unknown calendar kind {calendar_kind!r}")


def add_period_to_instant(
    instant: datetime,
    period: Period,
    calendar_kind: CalendarKind,
    tz: TzLike,
) -> datetime:
    """Advance the civil date ``instant`` shows in ``tz``, keeping its wall-clock time of day."""
    before = civil_date_at(instant, tz)
    after = add_period(before, period, calendar_kind)
    logger.debug("period %s %s (%s): %s -> %s", period.value, period.unit, calendar_kind, before, after)
    return at_civil_date(instant, after, tz)


def preview_expiry(start: date, period: Period, calendar_kind: CalendarKind = "solar") -> date:
    """The expiry a subscription starting on ``start`` reaches after one period."""
    return add_period(start, period, calendar_kind)
