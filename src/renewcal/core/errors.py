class RenewcalError(Exception):
    """Base error."""

class OutOfRangeError(RenewcalError):
    """Raised when a date falls outside the 1900-2100 lunar table."""

class UnresolvableError(RenewcalError):
    """Raised when a lunar date has no Gregorian counterpart in the search window."""

class InvalidPeriodError(RenewcalError):
    """Raised for a period value below 1 or an unknown unit."""

class InvalidTimezoneError(RenewcalError):
    """Raised for an unknown IANA timezone name."""

class InvalidRecordError(RenewcalError):
    """Raised when a persisted subscription record cannot be decoded."""

class ConfigError(RenewcalError):
    """Raised when the configuration file is unreadable or invalid."""
