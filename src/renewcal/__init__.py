"""renewcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Register standard attributes on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    leap_month,
    month_length,
    leap_month_length,
    year_length,
    solar_to_lunar,
    lunar_to_solar,
    days_to_lunar,
    lunar_info,
    lunar_month_bounds,
    lunar_new_year,
    available_attributes,
    add_period,
    add_period_to_instant,
    preview_expiry,
    evaluate,
    roll_forward,
    new_schedule,
    run_scheduled_check,
)
from .core.errors import (
    RenewcalError,
    OutOfRangeError,
    UnresolvableError,
    InvalidPeriodError,
    InvalidTimezoneError,
    InvalidRecordError,
    ConfigError,
)
from .core.types import LunarDate, LunarLabel, Period, RenewalResult, RunReport, SubscriptionSchedule

__version__ = "0.1.0"

__all__ = [
    "leap_month",
    "month_length",
    "leap_month_length",
    "year_length",
    "solar_to_lunar",
    "lunar_to_solar",
    "days_to_lunar",
    "lunar_info",
    "lunar_month_bounds",
    "lunar_new_year",
    "available_attributes",
    "add_period",
    "add_period_to_instant",
    "preview_expiry",
    "evaluate",
    "roll_forward",
    "new_schedule",
    "run_scheduled_check",
    "RenewcalError",
    "OutOfRangeError",
    "UnresolvableError",
    "InvalidPeriodError",
    "InvalidTimezoneError",
    "InvalidRecordError",
    "ConfigError",
    "LunarDate",
    "LunarLabel",
    "Period",
    "RenewalResult",
    "RunReport",
    "SubscriptionSchedule",
]
