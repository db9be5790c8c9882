"""
renewcal.engines.schedule
-------------------------
Per-subscription renewal and reminder decision.

Nothing is persisted between calls: the state is recomputed from the
expiry instant, ``now`` and the configured timezone every time. An overdue
subscription with auto-renew is fast-forwarded through every missed cycle
in one evaluation (the catch-up loop); the caller persists the returned
expiry.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Tuple

from ..core.time import TzLike, day_difference, format_instant, resolve_timezone
from ..core.types import RenewalResult, ScheduleState, SubscriptionSchedule
from .period import add_period_to_instant

logger = logging.getLogger(__name__)


def in_reminder_window(days_remaining: int, lead_days: int) -> bool:
    """A lead of 0 means "on the day only"; otherwise ``0 <= days <= lead``."""
    if lead_days == 0:
        return days_remaining == 0
    return 0 <= days_remaining <= lead_days


def catch_up(
    schedule: SubscriptionSchedule,
    now: datetime,
    tz: TzLike,
) -> Tuple[datetime, int, int]:
    """
    Advance ``schedule.expiry`` one period at a time until it is no longer
    overdue. Returns ``(expiry, days_remaining, hops)``.

    Each hop moves the civil date strictly forward, so the loop ends after
    at most (days overdue / period length in days) + 1 hops.
    """
    if schedule.period is None:
        raise ValueError(f"subscription {schedule.id!r} has no renewal period")
    expiry = schedule.expiry
    days = day_difference(expiry, now, tz)
    hops = 0
    while days < 0:
        expiry = add_period_to_instant(expiry, schedule.period, schedule.calendar_kind, tz)
        days = day_difference(expiry, now, tz)
        hops += 1
    return expiry, days, hops


def evaluate(schedule: SubscriptionSchedule, now: datetime, tz: TzLike) -> RenewalResult:
    """
    Decide whether ``schedule`` is due for a reminder and whether its expiry
    must be rolled forward.

    Re-evaluating with the same ``now`` after persisting ``updated_expiry``
    gives the same ``days_remaining`` and ``should_notify`` with no further
    update, because the catch-up precondition (``days_remaining < 0``) no
    longer holds.

    Raises:
        OutOfRangeError / UnresolvableError: a lunar schedule left the
            1900-2100 table during catch-up. The schedule is not renewed.
    """
    zone = resolve_timezone(tz)
    days = day_difference(schedule.expiry, now, zone)

    if not schedule.is_active:
        return RenewalResult(None, days, False, "inactive")

    if days < 0:
        if not schedule.auto_renew:
            return RenewalResult(None, days, True, "active_overdue_manual")
        if schedule.period is None:
            # Nothing to renew with; not reminded either.
            return RenewalResult(None, days, False, "active_overdue_auto_renew")

        expiry, days, hops = catch_up(schedule, now, zone)
        logger.info(
            "renewed %r after %d hop(s): %s -> %s (%d day(s) left)",
            schedule.name or schedule.id, hops,
            format_instant(schedule.expiry), format_instant(expiry), days,
        )
        notify = in_reminder_window(days, schedule.reminder_lead_days)
        return RenewalResult(expiry, days, notify, "active_overdue_auto_renew", hops)

    notify = in_reminder_window(days, schedule.reminder_lead_days)
    state: ScheduleState = "active_due_soon" if notify else "active_future"
    return RenewalResult(None, days, notify, state)


def roll_forward(schedule: SubscriptionSchedule, now: datetime, tz: TzLike) -> SubscriptionSchedule:
    """
    Creation/edit-time normalization: an already-expired schedule with a
    period is moved to its first non-overdue cycle, whatever ``auto_renew``
    says. Schedules without a period are returned unchanged.
    """
    if schedule.period is None or day_difference(schedule.expiry, now, tz) >= 0:
        return schedule
    expiry, _, _ = catch_up(schedule, now, tz)
    return schedule.with_expiry(expiry)
