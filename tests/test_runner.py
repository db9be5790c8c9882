# tests/test_runner.py

import json
from datetime import datetime, timedelta, timezone

from renewcal import Period, SubscriptionSchedule, run_scheduled_check
from renewcal.config import Settings
from renewcal.core.interfaces import FixedClock
from renewcal.engines.runner import evaluate_all
from renewcal.store import JsonFileStore, MemoryStore

UTC = timezone.utc
NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)

def make_store():
    month = Period(1, "month")
    return MemoryStore([
        SubscriptionSchedule("renews", NOW - timedelta(days=40), period=month),
        SubscriptionSchedule("manual", NOW - timedelta(days=5), period=month, auto_renew=False),
        SubscriptionSchedule("soon", NOW + timedelta(days=3), period=month),
        SubscriptionSchedule("later", NOW + timedelta(days=60), period=month),
        SubscriptionSchedule("off", NOW - timedelta(days=9), period=month, is_active=False),
    ])

def test_single_write_and_sorted_notifications():
    store = make_store()
    report = run_scheduled_check(store, clock=FixedClock(NOW), tz="UTC")
    assert report.updated == ["renews"]
    assert report.notifications == [("manual", -5), ("soon", 3)]
    assert report.failures == []
    assert store.writes == 1
    by_id = {s.id: s for s in store.schedules}
    assert by_id["renews"].expiry == datetime(2024, 4, 4, 12, 0, tzinfo=UTC)
    assert by_id["off"].expiry == NOW - timedelta(days=9)
    assert [s.id for s in store.schedules] == ["renews", "manual", "soon", "later", "off"]

def test_second_run_writes_nothing():
    store = make_store()
    first = run_scheduled_check(store, clock=FixedClock(NOW), tz="UTC")
    second = run_scheduled_check(store, clock=FixedClock(NOW), tz="UTC")
    assert second.updated == []
    assert second.notifications == first.notifications
    assert store.writes == 1

def test_no_write_when_nothing_moved():
    store = MemoryStore([SubscriptionSchedule("a", NOW + timedelta(days=2), period=Period(1, "year"))])
    report = run_scheduled_check(store, clock=FixedClock(NOW), tz="UTC")
    assert report.notifications == [("a", 2)]
    assert store.writes == 0

def test_failure_is_isolated():
    end = datetime(2100, 12, 1, tzinfo=UTC)
    store = MemoryStore([
        SubscriptionSchedule("edge", end, calendar_kind="lunar", period=Period(1, "year")),
        SubscriptionSchedule("ok", end - timedelta(days=30), period=Period(1, "month")),
    ])
    report = run_scheduled_check(store, clock=FixedClock(end + timedelta(days=14)), tz="UTC")
    assert [i for i, _ in report.failures] == ["edge"]
    assert report.updated == ["ok"]
    assert store.writes == 1
    assert store.schedules[0].expiry == end
    assert report.as_dict()["failures"][0]["id"] == "edge"

def test_thread_pool_matches_serial():
    schedules = make_store().list()
    serial = evaluate_all(schedules, NOW, "UTC")
    pooled = evaluate_all(schedules, NOW, "UTC", max_workers=4)
    assert serial == pooled

def test_settings_supply_timezone():
    expiry = datetime(2024, 3, 15, 17, 0, tzinfo=UTC)
    store = MemoryStore([SubscriptionSchedule("a", expiry, period=Period(1, "month"), reminder_lead_days=0)])
    utc = run_scheduled_check(store, clock=FixedClock(NOW), settings=Settings(timezone="UTC"))
    shanghai = run_scheduled_check(store, clock=FixedClock(NOW), settings=Settings(timezone="Asia/Shanghai", max_workers=2))
    assert utc.notifications == [("a", 0)]
    assert shanghai.notifications == []

def test_report_as_dict():
    report = run_scheduled_check(make_store(), clock=FixedClock(NOW), tz="UTC")
    d = report.as_dict()
    assert d["notifications"][0] == {"id": "manual", "daysRemaining": -5}
    assert d["updated"] == ["renews"]

def test_undecodable_record_does_not_stop_the_run(tmp_path):
    path = tmp_path / "subs.json"
    path.write_text(json.dumps([
        {"id": "bad", "expiryDate": "2024-03-01", "periodUnit": "fortnight"},
        {"id": "due", "expiryDate": "2024-02-04T12:00:00.000Z"},
        {"id": "soon", "expiryDate": "2024-03-17T00:00:00.000Z"},
    ]), encoding="utf-8")

    report = run_scheduled_check(JsonFileStore(path), clock=FixedClock(NOW), tz="UTC")
    assert [i for i, _ in report.failures] == ["bad"]
    assert report.updated == ["due"]
    assert report.notifications == [("soon", 2)]

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert [r["id"] for r in saved] == ["bad", "due", "soon"]
    assert saved[0]["periodUnit"] == "fortnight"
    assert saved[1]["expiryDate"] == "2024-04-04T12:00:00.000Z"
