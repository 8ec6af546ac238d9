#!/usr/bin/env python3
"""
ATTENDANCE CALCULATOR - Lesson attendance percentages and absence projections
Converts raw per-lesson statuses into the attendance graduation requirement

CALCULATION TYPES:
✅ Status Tally: PRESENT / LATE / ABSENT / EXCUSED counts
✅ Attendance %: (present + late / 2) / (total - excused) * 100
✅ Effective Absences: absent + late / 2
✅ Absences Allowed: Future absences a student can still afford at the threshold

FORMULA NOTES:
- PRESENT counts as 1, LATE as 0.5 (2 lates = 1 absence), ABSENT as 0
- EXCUSED is removed from both numerator and denominator
- Exam-day lessons are filtered out before tallying
- No countable lessons -> percentage is None (undetermined), never 0
- Percentages are returned unrounded; rounding is a display concern

EDGE CASES HANDLED:
- Unrecognized statuses: Dropped from every bucket
- Already below threshold: Absences allowed goes negative (not clamped)

Priority: CRITICAL - Graduation requirement
Dependencies: models.calculations for result types
"""

import logging
import math
from enum import Enum
from typing import Iterable, List, Optional

from ..models.calculations import AttendanceCounts, AttendanceSummary, RequirementScale
from ..models.records import AttendanceRecord, AttendanceStatus

logger = logging.getLogger(__name__)

DEFAULT_ATTENDANCE_THRESHOLD = 75.0

_BUCKETS = {
    AttendanceStatus.PRESENT.value: "present",
    AttendanceStatus.LATE.value: "late",
    AttendanceStatus.ABSENT.value: "absent",
    AttendanceStatus.EXCUSED.value: "excused",
}


def classify_statuses(statuses: Iterable[str]) -> AttendanceCounts:
    """Tally status values into attendance counts"""
    tallies = {"present": 0, "late": 0, "absent": 0, "excused": 0}
    for status in statuses:
        if isinstance(status, Enum):
            status = status.value
        bucket = _BUCKETS.get(status)
        if bucket is not None:
            tallies[bucket] += 1
    return AttendanceCounts(**tallies)


def count_attendance_statuses(records: Iterable[AttendanceRecord]) -> AttendanceCounts:
    """Tally a collection of attendance records"""
    return classify_statuses(record.status for record in records)


def calculate_attendance_percentage(counts: AttendanceCounts) -> Optional[float]:
    """
    Attendance percentage from counts

    Returns:
        Percentage in [0, 100], or None when there are no countable lessons
    """
    countable = counts.countable
    if countable <= 0:
        return None

    # Multiply first so exact halves stay exact (e.g. 87.5)
    return counts.effective_present * 100 / countable


def calculate_attendance_from_records(records: Iterable[AttendanceRecord]) -> Optional[float]:
    return calculate_attendance_percentage(count_attendance_statuses(records))


def meets_attendance_requirement(
    percentage: Optional[float], threshold: float = DEFAULT_ATTENDANCE_THRESHOLD
) -> bool:
    """Threshold check, inclusive. An undetermined percentage never meets it."""
    return percentage is not None and percentage >= threshold


def calculate_effective_absences(counts: AttendanceCounts) -> float:
    return counts.effective_absences


def calculate_absences_allowed(
    counts: AttendanceCounts,
    remaining_lessons: int,
    threshold: float = DEFAULT_ATTENDANCE_THRESHOLD,
) -> int:
    """
    How many more absences a student can take and still finish at the threshold

    Assumes every other remaining lesson is attended:
        (effective_present + remaining - x) / (countable + remaining) >= threshold

    Args:
        counts: Current attendance counts
        remaining_lessons: Lessons still scheduled this year
        threshold: Required percentage (75 -> 0.75)

    Returns:
        Floor of the allowance. Negative means the student cannot recover.
    """
    ratio = threshold / 100
    future_present_needed = ratio * (counts.countable + remaining_lessons)
    allowed = counts.effective_present + remaining_lessons - future_present_needed
    return math.floor(allowed)


def exclude_exam_days(records: Iterable[AttendanceRecord]) -> List[AttendanceRecord]:
    return [record for record in records if not record.is_exam_day]


class AttendanceCalculator:
    """Summarize a student's lesson attendance against the requirement"""

    def __init__(self, requirements: Optional[RequirementScale] = None):
        self.requirements = requirements or RequirementScale()
        self.calculation_log: List[str] = []

    @property
    def threshold(self) -> float:
        return self.requirements.attendance_threshold

    def summarize(self, records: Iterable[AttendanceRecord]) -> AttendanceSummary:
        """
        Build an attendance summary, ignoring exam-day lessons

        Args:
            records: Attendance records for one student

        Returns:
            AttendanceSummary with counts, percentage (or None) and met flag
        """
        self.calculation_log = []

        records = list(records)
        lesson_records = exclude_exam_days(records)
        skipped = len(records) - len(lesson_records)
        if skipped:
            self.calculation_log.append(f"📝 Skipped {skipped} exam-day records")

        counts = count_attendance_statuses(lesson_records)
        unrecognized = len(lesson_records) - counts.total
        if unrecognized:
            # Not an error; flagged so data-quality gaps show up in the log
            logger.warning(f"⚠️ {unrecognized} attendance records with unrecognized status")
            self.calculation_log.append(
                f"⚠️ Warning: {unrecognized} records with unrecognized status were ignored"
            )

        percentage = calculate_attendance_percentage(counts)
        met = meets_attendance_requirement(percentage, self.threshold)

        if percentage is None:
            self.calculation_log.append("📊 Attendance undetermined: no countable lessons")
        else:
            self.calculation_log.append(
                f"📊 Attendance: {counts.effective_present:g} / {counts.countable} = {percentage:.2f}%"
            )

        return AttendanceSummary(
            counts=counts,
            percentage=percentage,
            met=met,
            required=self.threshold,
        )

    def absences_allowed(self, records: Iterable[AttendanceRecord], remaining_lessons: int) -> int:
        counts = count_attendance_statuses(exclude_exam_days(records))
        return calculate_absences_allowed(counts, remaining_lessons, self.threshold)

    def get_calculation_log(self) -> List[str]:
        return self.calculation_log
