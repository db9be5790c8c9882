from __future__ import annotations

import argparse
from datetime import date
import json
import logging
import sys
import re
import importlib
import inspect


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    """argparse type for YYYY-MM-DD."""
    if not _DATE_RE.match(s):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}")
    y, m, d = map(int, s.split("-"))
    try:
        return date(y, m, d)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {s!r}: {e}") from e


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_lunar(argv: list[str]) -> int:
    import renewcal

    p = argparse.ArgumentParser(prog="renewcal lunar", description="Gregorian -> lunar date label")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    args = p.parse_args(argv)

    label = renewcal.lunar_info(args.date, attributes=tuple(args.attr))
    t = label.lunar
    leap_tag = "L" if t.is_leap_month else ""
    print(f"{label.civil_date}  ->  {t.year}-{t.month:02d}{leap_tag}-{t.day:02d}  {label.full_name}")
    if label.attributes:
        for k, v in label.attributes.items():
            print(f"  {k} = {v}")
    return 0


def cmd_solar(argv: list[str]) -> int:
    import renewcal

    p = argparse.ArgumentParser(prog="renewcal solar", description="Lunar date -> Gregorian date")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    p.add_argument("--leap", action="store_true", help="the leap instance of the month")
    args = p.parse_args(argv)

    lunar = renewcal.LunarDate(args.year, args.month, args.day, args.leap)
    print(renewcal.lunar_to_solar(lunar).isoformat())
    return 0


def cmd_add(argv: list[str]) -> int:
    import renewcal

    p = argparse.ArgumentParser(prog="renewcal add", description="Preview the expiry one period after a start date")
    p.add_argument("date", type=_parse_ymd, help="start date YYYY-MM-DD")
    p.add_argument("value", type=int, help="period value (>= 1)")
    p.add_argument("unit", choices=("day", "month", "year"))
    p.add_argument("--lunar", action="store_true", help="step in the lunar calendar")
    args = p.parse_args(argv)

    period = renewcal.Period(args.value, args.unit)
    kind = "lunar" if args.lunar else "solar"
    print(renewcal.preview_expiry(args.date, period, kind).isoformat())
    return 0


def cmd_check(argv: list[str]) -> int:
    import renewcal
    from renewcal.config import load_settings
    from renewcal.core.interfaces import FixedClock, SystemClock
    from renewcal.core.time import parse_instant, timezone_display
    from renewcal.store import JsonFileStore

    p = argparse.ArgumentParser(prog="renewcal check", description="Run one scheduled renewal/reminder pass over a JSON store")
    p.add_argument("--config", default=None, help="TOML settings file (default: $RENEWCAL_CONFIG)")
    p.add_argument("--store", default=None, help="JSON subscriptions file (overrides settings)")
    p.add_argument("--tz", default=None, help="IANA timezone (overrides settings)")
    p.add_argument("--now", default=None, help="ISO-8601 instant to evaluate at (default: current time)")
    p.add_argument("--json", action="store_true", help="print the report as JSON")
    p.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR (overrides settings)")
    args = p.parse_args(argv)

    settings = load_settings(args.config)
    logging.getLogger().setLevel((args.log_level or settings.log_level).upper())
    tz = args.tz or settings.timezone
    clock = FixedClock(parse_instant(args.now)) if args.now else SystemClock()
    store = JsonFileStore(args.store or settings.store_path, default_reminder_days=settings.default_reminder_days)

    report = renewcal.run_scheduled_check(store, settings=settings, clock=clock, tz=tz)

    if args.json:
        print(json.dumps(report.as_dict(), ensure_ascii=False, indent=2))
    else:
        print(f"Timezone: {timezone_display(tz, clock.now())}")
        print(f"Renewed:  {len(report.updated)}")
        for sub_id, days in report.notifications:
            print(f"  remind {sub_id}: {days} day(s) remaining")
        for sub_id, err in report.failures:
            print(f"  FAILED {sub_id}: {err}")
    return 1 if report.failures else 0


def main(argv: list[str] | None = None) -> int:
    from renewcal.core.errors import RenewcalError

    if argv is None:
        argv = sys.argv[1:]

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    # Shorthand: `renewcal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["lunar"] + list(argv)

    p = argparse.ArgumentParser(prog="renewcal", description="Lunisolar calendar and subscription renewal toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("lunar", help="Gregorian -> lunar date label")
    sub.add_parser("solar", help="Lunar date -> Gregorian date")
    sub.add_parser("add", help="Preview the expiry one period after a start date")
    sub.add_parser("check", help="Run one scheduled renewal/reminder pass")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "pretty-month", "leap-months"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    commands = {
        "lunar": cmd_lunar,
        "solar": cmd_solar,
        "add": cmd_add,
        "check": cmd_check,
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "renewcal.diagnostics.round_trip",
                "pretty-month": "renewcal.diagnostics.pretty_month",
                "leap-months": "renewcal.diagnostics.leap_months",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except RenewcalError as e:
        print(f"renewcal: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
