"""
renewcal.engines.lunar_table
----------------------------
Fixed lunisolar year table for 1900-2100.

Each entry packs one lunar year into 17 bits:

    bit 16      -> leap month has 30 days (else 29)
    bits 15..4  -> month 1..12 has 30 days (bit 15 is month 1)
    bits 3..0   -> number of the leap month, 0 when the year has none

The table is a tuple and is never mutated, so every lookup is safe to share
across threads.
"""

from __future__ import annotations

from bisect import bisect_right
from functools import lru_cache
from itertools import accumulate
from typing import Tuple

from ..core.errors import OutOfRangeError

MIN_YEAR = 1900
MAX_YEAR = 2100

LUNAR_INFO: Tuple[int, ...] = (
    0x04bd8, 0x04ae0, 0x0a570, 0x054d5, 0x0d260, 0x0d950, 0x16554, 0x056a0, 0x09ad0, 0x055d2,  # 1900
    0x04ae0, 0x0a5b6, 0x0a4d0, 0x0d250, 0x1d255, 0x0b540, 0x0d6a0, 0x0ada2, 0x095b0, 0x14977,  # 1910
    0x04970, 0x0a4b0, 0x0b4b5, 0x06a50, 0x06d40, 0x1ab54, 0x02b60, 0x09570, 0x052f2, 0x04970,  # 1920
    0x06566, 0x0d4a0, 0x0ea50, 0x16a95, 0x05ad0, 0x02b60, 0x186e3, 0x092e0, 0x1c8d7, 0x0c950,  # 1930
    0x0d4a0, 0x1d8a6, 0x0b550, 0x056a0, 0x1a5b4, 0x025d0, 0x092d0, 0x0d2b2, 0x0a950, 0x0b557,  # 1940
    0x06ca0, 0x0b550, 0x15355, 0x04da0, 0x0a5b0, 0x14573, 0x052b0, 0x0a9a8, 0x0e950, 0x06aa0,  # 1950
    0x0aea6, 0x0ab50, 0x04b60, 0x0aae4, 0x0a570, 0x05260, 0x0f263, 0x0d950, 0x05b57, 0x056a0,  # 1960
    0x096d0, 0x04dd5, 0x04ad0, 0x0a4d0, 0x0d4d4, 0x0d250, 0x0d558, 0x0b540, 0x0b6a0, 0x195a6,  # 1970
    0x095b0, 0x049b0, 0x0a974, 0x0a4b0, 0x0b27a, 0x06a50, 0x06d40, 0x0af46, 0x0ab60, 0x09570,  # 1980
    0x04af5, 0x04970, 0x064b0, 0x074a3, 0x0ea50, 0x06b58, 0x05ac0, 0x0ab60, 0x096d5, 0x092e0,  # 1990
    0x0c960, 0x0d954, 0x0d4a0, 0x0da50, 0x07552, 0x056a0, 0x0abb7, 0x025d0, 0x092d0, 0x0cab5,  # 2000
    0x0a950, 0x0b4a0, 0x0baa4, 0x0ad50, 0x055d9, 0x04ba0, 0x0a5b0, 0x15176, 0x052b0, 0x0a930,  # 2010
    0x07954, 0x06aa0, 0x0ad50, 0x05b52, 0x04b60, 0x0a6e6, 0x0a4e0, 0x0d260, 0x0ea65, 0x0d530,  # 2020
    0x05aa0, 0x076a3, 0x096d0, 0x04afb, 0x04ad0, 0x0a4d0, 0x1d0b6, 0x0d250, 0x0d520, 0x0dd45,  # 2030
    0x0b5a0, 0x056d0, 0x055b2, 0x049b0, 0x0a577, 0x0a4b0, 0x0aa50, 0x1b255, 0x06d20, 0x0ada0,  # 2040
    0x14b63, 0x09370, 0x049f8, 0x04970, 0x064b0, 0x168a6, 0x0ea50, 0x06b20, 0x1a6c4, 0x0aae0,  # 2050
    0x092e0, 0x0d2e3, 0x0c960, 0x0d557, 0x0d4a0, 0x0da50, 0x05d55, 0x056a0, 0x0a6d0, 0x055d4,  # 2060
    0x052d0, 0x0a9b8, 0x0a950, 0x0b4a0, 0x0b6a6, 0x0ad50, 0x055a0, 0x0aba4, 0x0a5b0, 0x052b0,  # 2070
    0x0b273, 0x06930, 0x07337, 0x06aa0, 0x0ad50, 0x14b55, 0x04b60, 0x0a570, 0x054e4, 0x0d160,  # 2080
    0x0e968, 0x0d520, 0x0daa0, 0x16aa6, 0x056d0, 0x04ae0, 0x0a9d4, 0x0a2d0, 0x0d150, 0x0f252,  # 2090
    0x0d520,                                                                                    # 2100
)

assert len(LUNAR_INFO) == MAX_YEAR - MIN_YEAR + 1


def check_year(year: int) -> None:
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise OutOfRangeError(f"year {year} outside supported range {MIN_YEAR}..{MAX_YEAR}")


def _info(year: int) -> int:
    check_year(year)
    return LUNAR_INFO[year - MIN_YEAR]


def leap_month(year: int) -> int:
    """Number of the leap month in ``year``, or 0 when there is none."""
    return _info(year) & 0xF


def month_length(year: int, month: int) -> int:
    """Length of the ordinary (non-leap) ``month`` of ``year``: 29 or 30."""
    if not (1 <= month <= 12):
        raise OutOfRangeError(f"lunar month {month} not in 1..12")
    return 30 if _info(year) & (0x10000 >> month) else 29


def leap_month_length(year: int) -> int:
    """Length of the leap month of ``year``; 0 when the year has none."""
    if not leap_month(year):
        return 0
    return 30 if _info(year) & 0x10000 else 29


def lunar_month_length(year: int, month: int, is_leap_month: bool = False) -> int:
    if is_leap_month:
        if leap_month(year) != month:
            raise OutOfRangeError(f"lunar year {year} has no leap month {month}")
        return leap_month_length(year)
    return month_length(year, month)


@lru_cache(maxsize=None)
def year_length(year: int) -> int:
    """Total days in lunar ``year``: twelve months at 29 plus the long ones, plus the leap month."""
    info = _info(year)
    total = 348
    mask = 0x8000
    while mask > 0x8:
        if info & mask:
            total += 1
        mask >>= 1
    return total + leap_month_length(year)


def months_in_year(year: int) -> Tuple[Tuple[int, bool], ...]:
    """Month instances of ``year`` in chronological order as ``(month, is_leap_month)``."""
    leap = leap_month(year)
    out = []
    for m in range(1, 13):
        out.append((m, False))
        if m == leap:
            out.append((m, True))
    return tuple(out)


# Day offset of each lunar new year from the epoch (lunar 1900-01-01); the
# last element is the day after lunar 2100 ends.
YEAR_STARTS: Tuple[int, ...] = tuple(
    accumulate((year_length(y) for y in range(MIN_YEAR, MAX_YEAR + 1)), initial=0)
)


def year_start_offset(year: int) -> int:
    check_year(year)
    return YEAR_STARTS[year - MIN_YEAR]


def year_at_offset(offset: int) -> int:
    """Lunar year containing day ``offset`` counted from the epoch."""
    if not (0 <= offset < YEAR_STARTS[-1]):
        raise OutOfRangeError(f"day offset {offset} outside the lunar table")
    return MIN_YEAR + bisect_right(YEAR_STARTS, offset) - 1
