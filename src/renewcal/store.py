"""
Subscription record codec and whole-collection stores.

Persisted records use the camelCase shape of the surrounding application:

    {"id": "...", "name": "...", "expiryDate": "2024-03-01T00:00:00.000Z",
     "periodValue": 1, "periodUnit": "month", "reminderDays": 7,
     "isActive": true, "autoRenew": true, "useLunar": false, ...}

Fields the engine does not interpret are carried in ``extra`` and written
back unchanged.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .core.errors import InvalidPeriodError, InvalidRecordError
from .core.time import format_instant, parse_instant
from .core.types import Period, SubscriptionSchedule

logger = logging.getLogger(__name__)

ENGINE_FIELDS = (
    "id", "name", "expiryDate", "periodValue", "periodUnit",
    "reminderDays", "isActive", "autoRenew", "useLunar",
)


def _int_field(record: Mapping[str, Any], key: str, default: int) -> int:
    value = record.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidRecordError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidRecordError(f"{key} must be an integer, got {value!r}") from e


def from_record(record: Mapping[str, Any], *, default_reminder_days: int = 7) -> SubscriptionSchedule:
    """Decode one persisted subscription. Missing fields take the application's defaults."""
    if "id" not in record:
        raise InvalidRecordError("record has no id")
    if not record.get("expiryDate"):
        raise InvalidRecordError(f"record {record['id']!r} has no expiryDate")

    try:
        period = Period(_int_field(record, "periodValue", 1), record.get("periodUnit") or "month")
    except InvalidPeriodError as e:
        raise InvalidRecordError(f"record {record['id']!r}: {e}") from e

    return SubscriptionSchedule(
        id=str(record["id"]),
        name=str(record.get("name") or ""),
        expiry=parse_instant(str(record["expiryDate"])),
        calendar_kind="lunar" if record.get("useLunar") else "solar",
        period=period,
        reminder_lead_days=_int_field(record, "reminderDays", default_reminder_days),
        is_active=record.get("isActive") is not False,
        auto_renew=record.get("autoRenew") is not False,
        extra={k: v for k, v in record.items() if k not in ENGINE_FIELDS},
    )


def to_record(schedule: SubscriptionSchedule) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": schedule.id, "name": schedule.name}
    out.update(schedule.extra)
    out["expiryDate"] = format_instant(schedule.expiry)
    if schedule.period is not None:
        out["periodValue"] = schedule.period.value
        out["periodUnit"] = schedule.period.unit
    out["reminderDays"] = schedule.reminder_lead_days
    out["isActive"] = schedule.is_active
    out["autoRenew"] = schedule.auto_renew
    out["useLunar"] = schedule.calendar_kind == "lunar"
    return out


@dataclass
class MemoryStore:
    schedules: List[SubscriptionSchedule] = field(default_factory=list)
    writes: int = 0

    def list(self) -> List[SubscriptionSchedule]:
        return list(self.schedules)

    def replace_all(self, schedules: Sequence[SubscriptionSchedule]) -> None:
        self.schedules = list(schedules)
        self.writes += 1

    def rejected(self) -> List[Tuple[str, str]]:
        return []


class JsonFileStore:
    """The whole collection as one JSON array in one file; a missing file is an empty collection.

    Records that fail to decode are skipped by list(), reported by rejected(),
    and written back verbatim at their original positions by replace_all().
    """

    def __init__(self, path: str | os.PathLike, *, default_reminder_days: int = 7):
        self.path = Path(path)
        self.default_reminder_days = default_reminder_days
        self._undecoded: List[Tuple[int, str, Any, str]] = []

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except json.JSONDecodeError as e:
            raise InvalidRecordError(f"{self.path}: not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise InvalidRecordError(f"{self.path}: expected a JSON array of subscriptions")
        return data

    def list(self) -> List[SubscriptionSchedule]:
        out: List[SubscriptionSchedule] = []
        self._undecoded = []
        for index, record in enumerate(self._read()):
            try:
                if not isinstance(record, dict):
                    raise InvalidRecordError(f"expected an object, got {type(record).__name__}")
                out.append(from_record(record, default_reminder_days=self.default_reminder_days))
            except InvalidRecordError as e:
                rid = str(record.get("id")) if isinstance(record, dict) and "id" in record else f"#{index}"
                logger.warning("%s: record %s not decoded: %s", self.path, rid, e)
                self._undecoded.append((index, rid, record, str(e)))
        return out

    def rejected(self) -> List[Tuple[str, str]]:
        return [(rid, err) for _, rid, _, err in self._undecoded]

    def replace_all(self, schedules: Sequence[SubscriptionSchedule]) -> None:
        records: List[Any] = [to_record(s) for s in schedules]
        for index, _, raw, _ in self._undecoded:
            records.insert(min(index, len(records)), raw)
        blob = json.dumps(records, ensure_ascii=False, indent=2)
        base = self.path.parent
        base.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=base, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp, self.path)
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)
        logger.debug("wrote %d subscription(s) to %s", len(schedules), self.path)
