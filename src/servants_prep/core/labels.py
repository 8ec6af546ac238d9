#!/usr/bin/env python3
"""
DISPLAY LABELS - Enum value to human-readable name lookups

Lookups never fail on an unrecognized value. They return a tagged result:
``Known(raw, label)`` for a mapped value, ``Unknown(raw)`` otherwise, so callers
can tell a real label from a data-quality gap. ``Unknown.label`` is the raw
string, which keeps display code simple.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union

from .models.records import AttendanceStatus, StudentGrade, WeeklyGrade


@dataclass(frozen=True)
class Known:
    """A value with a configured display name"""
    raw: str
    label: str

    @property
    def is_known(self) -> bool:
        return True


@dataclass(frozen=True)
class Unknown:
    """A value with no configured display name"""
    raw: str

    @property
    def label(self) -> str:
        return self.raw

    @property
    def is_known(self) -> bool:
        return False


Label = Union[Known, Unknown]


def _raw_value(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def lookup_label(display_names: Mapping[str, str], value) -> Label:
    """Look up a display name, tagging misses as Unknown"""
    raw = _raw_value(value)
    label = display_names.get(raw)
    if label is None:
        return Unknown(raw)
    return Known(raw, label)


STUDENT_GRADE_DISPLAY_NAMES = {
    StudentGrade.GRADE_9.value: "9th Grade",
    StudentGrade.GRADE_10.value: "10th Grade",
    StudentGrade.GRADE_11.value: "11th Grade",
    StudentGrade.GRADE_12.value: "12th Grade",
    StudentGrade.COLLEGE_FRESHMAN.value: "College Freshman",
    StudentGrade.COLLEGE_SOPHOMORE.value: "College Sophomore",
    StudentGrade.COLLEGE_JUNIOR.value: "College Junior",
    StudentGrade.COLLEGE_SENIOR.value: "College Senior",
    StudentGrade.POST_COLLEGE.value: "Post-College",
    StudentGrade.OTHER.value: "Other",
}

WEEKLY_GRADE_DISPLAY_NAMES = {
    WeeklyGrade.PRE_K.value: "Pre-K",
    WeeklyGrade.KINDERGARTEN.value: "Kindergarten",
    WeeklyGrade.GRADE_1.value: "1st Grade",
    WeeklyGrade.GRADE_2.value: "2nd Grade",
    WeeklyGrade.GRADE_3.value: "3rd Grade",
    WeeklyGrade.GRADE_4.value: "4th Grade",
    WeeklyGrade.GRADE_5.value: "5th Grade",
    WeeklyGrade.GRADE_6_PLUS.value: "6th Grade+",
}

ATTENDANCE_STATUS_LABELS = {
    AttendanceStatus.PRESENT.value: "Present",
    AttendanceStatus.LATE.value: "Late",
    AttendanceStatus.ABSENT.value: "Absent",
    AttendanceStatus.EXCUSED.value: "Excused",
}


def student_grade_display_name(grade) -> Label:
    return lookup_label(STUDENT_GRADE_DISPLAY_NAMES, grade)


def weekly_grade_display_name(grade) -> Label:
    return lookup_label(WEEKLY_GRADE_DISPLAY_NAMES, grade)


def attendance_status_label(status) -> Label:
    return lookup_label(ATTENDANCE_STATUS_LABELS, status)
