from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Protocol, Sequence, Tuple

from .types import SubscriptionSchedule

class Clock(Protocol):
    def now(self) -> datetime: ...

class Store(Protocol):
    """Whole-collection storage: the subscriptions are read and replaced as one unit."""
    def list(self) -> List[SubscriptionSchedule]: ...
    def replace_all(self, schedules: Sequence[SubscriptionSchedule]) -> None: ...
    def rejected(self) -> List[Tuple[str, str]]:
        """(id, error) of records the last list() could not decode."""
        ...

class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)

@dataclass
class FixedClock:
    at: datetime

    def now(self) -> datetime:
        return self.at
