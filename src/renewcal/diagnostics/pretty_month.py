from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse

import renewcal


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def to_weeks(first: date, cells: list[tuple[str, str]]) -> list[list[tuple[str, str]]]:
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = [cell("", "") for _ in range(first.weekday())]  # Monday=0
    for top, bot in cells:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def lunar_month_calendar(Y: int, M: int, is_leap: bool) -> None:
    d0, d1 = renewcal.lunar_month_bounds(Y, M, is_leap)

    cells = []
    d = d0
    while d <= d1:
        t = renewcal.solar_to_lunar(d.year, d.month, d.day)
        cells.append((f"{t.day:2d}", f"{d.month:02d}-{d.day:02d}"))
        d += timedelta(days=1)

    leap_tag = "L" if is_leap else ""
    print_grid(f"lunar month  Y={Y}  M={M}{leap_tag}   ({d0} .. {d1})", to_weeks(d0, cells))


def lunar_year_summary(Y: int) -> None:
    """One line per month instance of lunar year Y: length and Gregorian span."""
    from renewcal.attributes.standard import year_name
    from renewcal.engines.lunar_table import months_in_year

    print(f"lunar year {Y}  {year_name(Y)}  ({renewcal.year_length(Y)} days, new year {renewcal.lunar_new_year(Y)})")
    for M, is_leap in months_in_year(Y):
        d0, d1 = renewcal.lunar_month_bounds(Y, M, is_leap)
        leap_tag = "L" if is_leap else " "
        print(f"  {M:2d}{leap_tag}  {(d1 - d0).days + 1}d  {d0} .. {d1}")
    print()


def gregorian_month_calendar(gy: int, gm: int) -> None:
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    cells = []
    d = first
    while d <= last:
        t = renewcal.solar_to_lunar(d.year, d.month, d.day)
        leap_tag = "L" if t.is_leap_month else ""
        cells.append((f"{d.day:2d}", f"{t.month:02d}{leap_tag}-{t.day:02d}"))
        d += timedelta(days=1)

    print_grid(f"Gregorian month  {gy}-{gm:02d}", to_weeks(first, cells))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a lunar-month calendar and/or a Gregorian-month calendar with paired labels."
    )
    p.add_argument("--lunar", nargs=2, type=int, metavar=("Y", "M"),
                   help="Lunar month to print: Y M (e.g. 2023 2)")
    p.add_argument("--leap", action="store_true",
                   help="If set, lunar month is the leap instance (only meaningful when the year repeats it).")
    p.add_argument("--year", type=int, metavar="Y",
                   help="Summarize every month of lunar year Y (e.g. 2023)")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2023 3)")

    args = p.parse_args(argv)

    if not args.lunar and not args.greg and args.year is None:
        # the 2023 leap second month and the Gregorian month it starts in
        lunar_month_calendar(Y=2023, M=2, is_leap=True)
        gregorian_month_calendar(gy=2023, gm=3)
        return 0

    if args.year is not None:
        lunar_year_summary(args.year)

    if args.lunar:
        Y, M = args.lunar
        lunar_month_calendar(Y=Y, M=M, is_leap=args.leap)

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(gy=gy, gm=gm)

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
