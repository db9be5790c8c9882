# tests/test_lunar.py

import random
from datetime import date, timedelta

import pytest

from renewcal import LunarDate, OutOfRangeError, UnresolvableError
from renewcal import days_to_lunar, lunar_month_bounds, lunar_to_solar, solar_to_lunar
from renewcal.engines.lunar import EPOCH, LAST_SOLAR, lunar_to_solar_direct, solar_date_to_lunar

def test_epoch_is_first_lunar_day():
    assert solar_to_lunar(1900, 1, 31) == LunarDate(1900, 1, 1)
    assert lunar_to_solar(LunarDate(1900, 1, 1)) == EPOCH

@pytest.mark.parametrize(
    "ymd,expected",
    [
        ((2023, 1, 22), LunarDate(2023, 1, 1)),
        ((2023, 3, 21), LunarDate(2023, 2, 30, False)),
        ((2023, 3, 22), LunarDate(2023, 2, 1, True)),
        ((2023, 4, 19), LunarDate(2023, 2, 29, True)),
        ((2023, 4, 20), LunarDate(2023, 3, 1, False)),
        ((2024, 2, 9), LunarDate(2023, 12, 30)),
        ((2024, 2, 10), LunarDate(2024, 1, 1)),
    ],
)
def test_known_conversions(ymd, expected):
    assert solar_to_lunar(*ymd) == expected
    assert lunar_to_solar(expected) == date(*ymd)

@pytest.mark.parametrize(
    "ymd",
    [(1900, 1, 30), (1900, 1, 1), (1899, 12, 31), (2101, 1, 1), (2023, 2, 29), (2023, 13, 1)],
)
def test_solar_out_of_range(ymd):
    with pytest.raises(OutOfRangeError):
        solar_to_lunar(*ymd)

def test_last_supported_solar_day_converts():
    t = solar_date_to_lunar(LAST_SOLAR)
    assert t.year == 2100
    assert lunar_to_solar(t) == LAST_SOLAR

def test_round_trip_sampled():
    random.seed(0)
    span = (LAST_SOLAR - EPOCH).days
    for _ in range(150):
        d = EPOCH + timedelta(days=random.randint(0, span))
        t = solar_date_to_lunar(d)
        assert lunar_to_solar(t) == d
        assert lunar_to_solar_direct(t) == d

def test_consecutive_days_step_by_one_lunar_day():
    d = date(2023, 1, 1)
    prev = solar_date_to_lunar(d)
    for _ in range(400):
        d += timedelta(days=1)
        cur = solar_date_to_lunar(d)
        if cur.day != 1:
            assert (cur.year, cur.month, cur.is_leap_month) == (prev.year, prev.month, prev.is_leap_month)
            assert cur.day == prev.day + 1
        prev = cur

def test_late_2100_label_is_unresolvable():
    # Lunar 2100 runs into Gregorian 2101, which the table does not cover.
    late = LunarDate(2100, 12, 29)
    with pytest.raises(UnresolvableError):
        lunar_to_solar(late)
    with pytest.raises(UnresolvableError):
        lunar_to_solar_direct(late)

def test_days_to_lunar():
    today = date(2023, 3, 1)
    assert days_to_lunar(LunarDate(2023, 2, 1, True), today) == 21
    assert days_to_lunar(LunarDate(2023, 1, 1), today) == -38
    assert days_to_lunar(solar_to_lunar(2023, 3, 1), today) == 0

def test_lunar_month_bounds():
    assert lunar_month_bounds(2023, 2) == (date(2023, 2, 20), date(2023, 3, 21))
    assert lunar_month_bounds(2023, 2, True) == (date(2023, 3, 22), date(2023, 4, 19))
