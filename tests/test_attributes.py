# tests/test_attributes.py

import pytest
from datetime import date

import renewcal
from renewcal import LunarDate
from renewcal.attributes.standard import day_name, month_name, year_name

def test_year_names():
    assert year_name(1984) == "甲子年"
    assert year_name(2023) == "癸卯年"
    assert year_name(2024) == "甲辰年"

def test_month_and_day_names():
    assert month_name(LunarDate(2023, 2, 1, True)) == "閏二月"
    assert month_name(LunarDate(2023, 11, 1)) == "冬月"
    assert month_name(LunarDate(2023, 12, 1)) == "臘月"
    assert day_name(LunarDate(2023, 1, 20)) == "二十"
    assert day_name(LunarDate(2023, 1, 21)) == "廿一"
    assert day_name(LunarDate(2023, 2, 30)) == "三十"

def test_lunar_info_full_name():
    label = renewcal.lunar_info(date(2023, 3, 22))
    assert label.lunar == LunarDate(2023, 2, 1, True)
    assert label.full_name == "癸卯年閏二月初一"
    assert label.attributes is None

def test_lunar_info_attributes():
    d = date(2023, 3, 22)
    label = renewcal.lunar_info(d, attributes=("weekday", "zodiac", "sexagenary_year"))
    assert label.attributes["weekday"] == d.weekday()
    assert label.attributes["zodiac"] == "rabbit"
    assert label.attributes["stem"] == "癸"
    assert label.attributes["branch"] == "卯"
    assert label.attributes["cycle_index"] == 39

def test_available_and_unknown_attributes():
    assert {"weekday", "zodiac", "sexagenary_year", "leap_month"} <= set(renewcal.available_attributes())
    with pytest.raises(KeyError):
        renewcal.lunar_info(date(2023, 3, 22), attributes=("moon_phase",))

def test_leap_month_attribute():
    leap = renewcal.lunar_info(date(2023, 3, 22), attributes=("leap_month",))
    plain = renewcal.lunar_info(date(2023, 3, 21), attributes=("leap_month",))
    assert leap.attributes == {"is_leap_month": True}
    assert plain.attributes == {"is_leap_month": False}
