# tests/test_lunar_table.py

import pytest
from datetime import date

from renewcal import OutOfRangeError
from renewcal.engines import lunar_table as table
from renewcal.engines.lunar import lunar_new_year

def test_table_covers_1900_to_2100():
    assert len(table.LUNAR_INFO) == 201
    assert table.YEAR_STARTS[0] == 0
    assert len(table.YEAR_STARTS) == 202

def test_known_leap_months():
    assert table.leap_month(2023) == 2
    assert table.leap_month(2025) == 6
    assert table.leap_month(2020) == 4
    assert table.leap_month(2033) == 11
    assert table.leap_month(2024) == 0
    assert table.leap_month(1900) == 8

def test_leap_month_length():
    assert table.leap_month_length(2023) == 29
    assert table.leap_month_length(2017) == 30
    assert table.leap_month_length(2024) == 0

def test_month_lengths_2023():
    assert [table.month_length(2023, m) for m in range(1, 13)] == [
        29, 30, 29, 30, 30, 29, 30, 30, 29, 30, 29, 30,
    ]

def test_year_length():
    assert table.year_length(1900) == 384
    assert table.year_length(2023) == 384
    assert table.year_length(2024) == 354
    assert table.YEAR_STARTS[1] == 384

def test_year_length_matches_month_sum():
    for y in range(table.MIN_YEAR, table.MAX_YEAR + 1):
        total = sum(table.lunar_month_length(y, m, leap) for m, leap in table.months_in_year(y))
        assert total == table.year_length(y)
        assert 353 <= total <= 385

def test_months_in_year_places_leap_after_ordinary():
    months = table.months_in_year(2023)
    assert len(months) == 13
    assert months[1:3] == ((2, False), (2, True))
    assert len(table.months_in_year(2024)) == 12

def test_new_year_dates():
    assert lunar_new_year(1900) == date(1900, 1, 31)
    assert lunar_new_year(2023) == date(2023, 1, 22)
    assert lunar_new_year(2024) == date(2024, 2, 10)

@pytest.mark.parametrize("year", [1899, 2101])
def test_out_of_range_years(year):
    with pytest.raises(OutOfRangeError):
        table.leap_month(year)
    with pytest.raises(OutOfRangeError):
        table.year_length(year)

def test_no_such_leap_month():
    with pytest.raises(OutOfRangeError):
        table.lunar_month_length(2023, 3, True)

def test_year_at_offset_bounds():
    assert table.year_at_offset(0) == 1900
    assert table.year_at_offset(383) == 1900
    assert table.year_at_offset(384) == 1901
    assert table.year_at_offset(table.YEAR_STARTS[-1] - 1) == 2100
    with pytest.raises(OutOfRangeError):
        table.year_at_offset(-1)
    with pytest.raises(OutOfRangeError):
        table.year_at_offset(table.YEAR_STARTS[-1])
