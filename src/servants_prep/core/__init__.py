"""Progress and eligibility computation engine"""

from .access_codes import is_access_code_valid, validate_access_code
from .calculators import (
    AttendanceCalculator,
    ExamScoreAggregator,
    GraduationEligibilityEvaluator,
    WeeklyEligibilityEvaluator,
)

__all__ = [
    "is_access_code_valid",
    "validate_access_code",
    "AttendanceCalculator",
    "ExamScoreAggregator",
    "GraduationEligibilityEvaluator",
    "WeeklyEligibilityEvaluator",
]
