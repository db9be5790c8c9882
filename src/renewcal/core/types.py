from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from .errors import InvalidPeriodError, InvalidRecordError, OutOfRangeError
from ..engines import lunar_table

PeriodUnit = Literal["day", "month", "year"]
CalendarKind = Literal["solar", "lunar"]
ScheduleState = Literal[
    "inactive",
    "active_future",
    "active_due_soon",
    "active_overdue_auto_renew",
    "active_overdue_manual",
]

PERIOD_UNITS: Tuple[str, ...] = ("day", "month", "year")
CALENDAR_KINDS: Tuple[str, ...] = ("solar", "lunar")


@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap_month: bool = False

    def __post_init__(self) -> None:
        lunar_table.check_year(self.year)
        if not (1 <= self.month <= 12):
            raise OutOfRangeError(f"lunar month {self.month} not in 1..12")
        if self.is_leap_month and lunar_table.leap_month(self.year) != self.month:
            raise OutOfRangeError(f"lunar year {self.year} has no leap month {self.month}")
        n = lunar_table.lunar_month_length(self.year, self.month, self.is_leap_month)
        if not (1 <= self.day <= n):
            raise OutOfRangeError(
                f"lunar day {self.day} not in 1..{n} for {self.year}-{self.month}"
                f"{' (leap)' if self.is_leap_month else ''}"
            )


@dataclass(frozen=True)
class Period:
    value: int
    unit: PeriodUnit

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 1:
            raise InvalidPeriodError(f"period value must be an integer >= 1, got {self.value!r}")
        if self.unit not in PERIOD_UNITS:
            raise InvalidPeriodError(f"unknown period unit {self.unit!r}; expected one of {PERIOD_UNITS}")


@dataclass(frozen=True)
class SubscriptionSchedule:
    """The slice of a stored subscription the engine reads and may update.

    ``extra`` holds every persisted field the engine does not interpret, so a
    whole-collection replace writes them back untouched.
    """
    id: str
    expiry: datetime
    calendar_kind: CalendarKind = "solar"
    period: Optional[Period] = None
    reminder_lead_days: int = 7
    is_active: bool = True
    auto_renew: bool = True
    name: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.calendar_kind not in CALENDAR_KINDS:
            raise InvalidRecordError(f"unknown calendar kind {self.calendar_kind!r}")
        if self.reminder_lead_days < 0:
            raise InvalidRecordError(f"reminder_lead_days must be >= 0, got {self.reminder_lead_days}")

    def with_expiry(self, expiry: datetime) -> "SubscriptionSchedule":
        return replace(self, expiry=expiry)


@dataclass(frozen=True)
class RenewalResult:
    updated_expiry: Optional[datetime]
    days_remaining: int
    should_notify: bool
    state: ScheduleState
    hops: int = 0


@dataclass(frozen=True)
class RunReport:
    notifications: List[Tuple[str, int]] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "notifications": [{"id": i, "daysRemaining": d} for i, d in self.notifications],
            "updated": list(self.updated),
            "failures": [{"id": i, "error": e} for i, e in self.failures],
        }


@dataclass(frozen=True)
class LunarLabel:
    lunar: LunarDate
    civil_date: date
    year_name: str
    month_name: str
    day_name: str
    attributes: Optional[Dict[str, Any]] = None

    @property
    def full_name(self) -> str:
        return self.year_name + self.month_name + self.day_name
