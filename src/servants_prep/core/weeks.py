#!/usr/bin/env python3
"""
WEEKLY CLASS CALENDAR - Week boundaries, week numbers and code prefixes

Weeks start on Sunday. A weekly code issued for ``week_of`` stays valid until
the end of the day seven days later.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple, Union

from .models.records import WeeklyGrade

GRADE_PREFIXES = {
    WeeklyGrade.PRE_K: "PK",
    WeeklyGrade.KINDERGARTEN: "KG",
    WeeklyGrade.GRADE_1: "G1",
    WeeklyGrade.GRADE_2: "G2",
    WeeklyGrade.GRADE_3: "G3",
    WeeklyGrade.GRADE_4: "G4",
    WeeklyGrade.GRADE_5: "G5",
    WeeklyGrade.GRADE_6_PLUS: "G6",
}

_PREFIX_GRADES = {prefix: grade for grade, prefix in GRADE_PREFIXES.items()}


def parse_code_prefix(code: str) -> Optional[WeeklyGrade]:
    """Class grade encoded in a weekly code's prefix, if any"""
    prefix = code.split("-")[0]
    return _PREFIX_GRADES.get(prefix)


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(value: Optional[Union[date, datetime]] = None) -> datetime:
    """Midnight on the Sunday starting the week containing ``value``"""
    day = _as_date(value if value is not None else datetime.now())
    # Monday is 0, so Sunday is 6 days past weekday() == 0
    days_since_sunday = (day.weekday() + 1) % 7
    return datetime.combine(day - timedelta(days=days_since_sunday), time.min)


def code_valid_until(week_of: Union[date, datetime]) -> datetime:
    """Last moment a code issued for ``week_of`` is accepted"""
    return datetime.combine(_as_date(week_of) + timedelta(days=7), time.max)


def assignment_weeks(start_date: Union[date, datetime], total_weeks: int) -> List[Tuple[int, date]]:
    """(week_number, week_of) pairs for every scheduled week"""
    start = _as_date(start_date)
    return [(i + 1, start + timedelta(weeks=i)) for i in range(total_weeks)]


def week_number(start_date: Union[date, datetime], week_of: Union[date, datetime]) -> Optional[int]:
    """1-based week of ``week_of`` within an assignment, None before the start"""
    diff_days = (_as_date(week_of) - _as_date(start_date)).days
    number = round(diff_days / 7) + 1
    return number if number >= 1 else None
