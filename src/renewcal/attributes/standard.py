from __future__ import annotations
from typing import Any, Dict

from ..core.types import LunarDate, LunarLabel
from .registry import label_jdn, register_attribute

HEAVENLY_STEMS = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")
EARTHLY_BRANCHES = ("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥")
ZODIAC = ("rat", "ox", "tiger", "rabbit", "dragon", "snake",
          "horse", "goat", "monkey", "rooster", "dog", "pig")
MONTH_NAMES = ("正", "二", "三", "四", "五", "六", "七", "八", "九", "十", "冬", "臘")
DAY_NAMES = (
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
)

# 1984 (and every 60th year from it) is 甲子.
def _cycle(year: int) -> int:
    return (year - 4) % 60

def year_name(year: int) -> str:
    i = _cycle(year)
    return HEAVENLY_STEMS[i % 10] + EARTHLY_BRANCHES[i % 12] + "年"

def month_name(lunar: LunarDate) -> str:
    return ("閏" if lunar.is_leap_month else "") + MONTH_NAMES[lunar.month - 1] + "月"

def day_name(lunar: LunarDate) -> str:
    return DAY_NAMES[lunar.day - 1]

@register_attribute("weekday")
def weekday(label: LunarLabel) -> Dict[str, Any]:
    # 0=Mon..6=Sun, same as date.weekday()
    return {"weekday": label_jdn(label) % 7}

@register_attribute("sexagenary_year")
def sexagenary_year(label: LunarLabel) -> Dict[str, Any]:
    i = _cycle(label.lunar.year)
    return {"stem": HEAVENLY_STEMS[i % 10], "branch": EARTHLY_BRANCHES[i % 12], "cycle_index": i}

@register_attribute("zodiac")
def zodiac(label: LunarLabel) -> Dict[str, Any]:
    return {"zodiac": ZODIAC[_cycle(label.lunar.year) % 12]}

@register_attribute("leap_month")
def leap_month_flag(label: LunarLabel) -> Dict[str, Any]:
    return {"is_leap_month": label.lunar.is_leap_month}
