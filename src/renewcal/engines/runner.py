"""
renewcal.engines.runner
-----------------------
One scheduled pass over the whole subscription collection.

The store is a single blob, so results are written back with one
``replace_all`` per run, and only when some expiry moved. Overlapping runs
against the same snapshot are not guarded against here.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

from ..core.errors import RenewcalError
from ..core.interfaces import Clock, Store
from ..core.time import TzLike, resolve_timezone
from ..core.types import RenewalResult, RunReport, SubscriptionSchedule
from .schedule import evaluate

logger = logging.getLogger(__name__)

Outcome = Union[RenewalResult, RenewcalError]


def _evaluate_one(schedule: SubscriptionSchedule, now: datetime, tz: TzLike) -> Outcome:
    try:
        return evaluate(schedule, now, tz)
    except RenewcalError as e:
        return e


def evaluate_all(
    schedules: Sequence[SubscriptionSchedule],
    now: datetime,
    tz: TzLike,
    *,
    max_workers: Optional[int] = None,
) -> List[Outcome]:
    """Evaluate every schedule; per-record errors are returned in place of a result."""
    zone = resolve_timezone(tz)
    if max_workers is not None and max_workers > 1 and len(schedules) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(lambda s: _evaluate_one(s, now, zone), schedules))
    return [_evaluate_one(s, now, zone) for s in schedules]


def run_scheduled_check(
    store: Store,
    clock: Clock,
    tz: TzLike,
    *,
    max_workers: Optional[int] = None,
) -> RunReport:
    now = clock.now()
    schedules = store.list()
    rejected = store.rejected()
    logger.info("checking %d subscription(s) at %s (%s)", len(schedules), now.isoformat(), tz)

    outcomes = evaluate_all(schedules, now, tz, max_workers=max_workers)

    merged: List[SubscriptionSchedule] = []
    notifications: List[Tuple[str, int]] = []
    updated: List[str] = []
    # Undecodable records are reported here; the store keeps them on write.
    failures: List[Tuple[str, str]] = list(rejected)
    for schedule, outcome in zip(schedules, outcomes):
        if isinstance(outcome, RenewcalError):
            logger.error("subscription %r skipped: %s", schedule.name or schedule.id, outcome)
            failures.append((schedule.id, str(outcome)))
            merged.append(schedule)
            continue
        if outcome.updated_expiry is not None:
            merged.append(schedule.with_expiry(outcome.updated_expiry))
            updated.append(schedule.id)
        else:
            merged.append(schedule)
        if outcome.should_notify:
            notifications.append((schedule.id, outcome.days_remaining))

    if updated:
        store.replace_all(merged)
        logger.info("persisted %d renewed expiry date(s)", len(updated))

    notifications.sort(key=lambda item: item[1])
    if notifications:
        logger.info("%d subscription(s) due for a reminder", len(notifications))
    return RunReport(notifications=notifications, updated=updated, failures=failures)
