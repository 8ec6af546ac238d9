"""Record and calculation models"""

from .records import (
    AccessCode,
    AttendanceRecord,
    AttendanceStatus,
    ExamScore,
    ExamYearLevel,
    StudentEnrollment,
    StudentGrade,
    WeeklyAssignment,
    WeeklyCode,
    WeeklyGrade,
    WeeklyLog,
    WeeklyLogStatus,
    YearLevel,
    normalize_code,
)
from .calculations import (
    AttendanceCounts,
    AttendanceSummary,
    EligibilitySnapshot,
    ExamSummary,
    InvalidReason,
    RequirementScale,
    SectionAverage,
    ValidationResult,
    WeeklyAttendance,
    WeeklyProgress,
)

__all__ = [
    "AccessCode",
    "AttendanceRecord",
    "AttendanceStatus",
    "ExamScore",
    "ExamYearLevel",
    "StudentEnrollment",
    "StudentGrade",
    "WeeklyAssignment",
    "WeeklyCode",
    "WeeklyGrade",
    "WeeklyLog",
    "WeeklyLogStatus",
    "YearLevel",
    "normalize_code",
    "AttendanceCounts",
    "AttendanceSummary",
    "EligibilitySnapshot",
    "ExamSummary",
    "InvalidReason",
    "RequirementScale",
    "SectionAverage",
    "ValidationResult",
    "WeeklyAttendance",
    "WeeklyProgress",
]
