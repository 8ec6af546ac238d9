"""Attendance, exam and eligibility calculators"""

from .attendance import (
    AttendanceCalculator,
    calculate_absences_allowed,
    calculate_attendance_from_records,
    calculate_attendance_percentage,
    calculate_effective_absences,
    classify_statuses,
    count_attendance_statuses,
    meets_attendance_requirement,
)
from .exams import ExamScoreAggregator, calculate_overall_average, calculate_section_averages
from .eligibility import (
    GraduationEligibilityEvaluator,
    WeeklyEligibilityEvaluator,
    calculate_weekly_attendance,
)

__all__ = [
    "AttendanceCalculator",
    "calculate_absences_allowed",
    "calculate_attendance_from_records",
    "calculate_attendance_percentage",
    "calculate_effective_absences",
    "classify_statuses",
    "count_attendance_statuses",
    "meets_attendance_requirement",
    "ExamScoreAggregator",
    "calculate_overall_average",
    "calculate_section_averages",
    "GraduationEligibilityEvaluator",
    "WeeklyEligibilityEvaluator",
    "calculate_weekly_attendance",
]
