from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from .attributes.registry import available_attributes, compute_attributes
from .attributes.standard import day_name, month_name, year_name
from .config import Settings
from .core.interfaces import Clock, Store, SystemClock
from .core.time import TzLike
from .core.types import CalendarKind, LunarDate, LunarLabel, Period, RenewalResult, RunReport, SubscriptionSchedule
from .engines import lunar_table as _table
from .engines.lunar import days_to_lunar, lunar_month_bounds, lunar_new_year, lunar_to_solar, solar_date_to_lunar, solar_to_lunar
from .engines.period import add_period, add_period_to_instant, preview_expiry
from .engines.runner import run_scheduled_check as _run_scheduled_check
from .engines.schedule import evaluate, roll_forward

leap_month = _table.leap_month
month_length = _table.month_length
leap_month_length = _table.leap_month_length
year_length = _table.year_length


def lunar_info(d: date, *, attributes: Sequence[str] = ()) -> LunarLabel:
    """Lunar label of Gregorian ``d`` with its traditional names and optional attributes."""
    lunar = solar_date_to_lunar(d)
    label = LunarLabel(
        lunar=lunar,
        civil_date=d,
        year_name=year_name(lunar.year),
        month_name=month_name(lunar),
        day_name=day_name(lunar),
    )
    if attributes:
        label = replace(label, attributes=compute_attributes(label, attributes))
    return label


def run_scheduled_check(
    store: Store,
    *,
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
    tz: Optional[TzLike] = None,
) -> RunReport:
    """One scheduled pass; timezone and worker count default to ``settings``."""
    settings = settings or Settings()
    return _run_scheduled_check(
        store,
        clock or SystemClock(),
        tz if tz is not None else settings.timezone,
        max_workers=settings.max_workers,
    )


def new_schedule(
    id: str,
    expiry: datetime,
    *,
    now: datetime,
    tz: TzLike,
    period: Optional[Period] = Period(1, "month"),
    calendar_kind: CalendarKind = "solar",
    reminder_lead_days: int = 7,
    is_active: bool = True,
    auto_renew: bool = True,
    name: str = "",
) -> SubscriptionSchedule:
    """Build a schedule as the create/edit path would, rolling an already-expired date forward."""
    schedule = SubscriptionSchedule(
        id=id,
        expiry=expiry,
        calendar_kind=calendar_kind,
        period=period,
        reminder_lead_days=reminder_lead_days,
        is_active=is_active,
        auto_renew=auto_renew,
        name=name,
    )
    return roll_forward(schedule, now, tz)
