#!/usr/bin/env python3
"""
CALCULATION MODELS - Derived values produced by the progress calculators

Everything here is recomputed on demand from the current records and is never
the source of truth. Percentages and averages use None for "undetermined"
(no countable data yet); None is never interchangeable with 0.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RequirementScale(BaseModel):
    """Graduation thresholds (percent)"""

    attendance_threshold: float = Field(75.0, description="Minimum lesson attendance")
    overall_average_threshold: float = Field(75.0, description="Minimum mean of all exam scores")
    section_minimum: float = Field(60.0, description="Minimum average per exam section")
    weekly_attendance_threshold: float = Field(75.0, description="Minimum weekly class attendance")


class AttendanceCounts(BaseModel):
    """Categorical attendance tallies, one unit per lesson or week"""

    model_config = ConfigDict(frozen=True)

    present: int = 0
    late: int = 0
    absent: int = 0
    excused: int = 0

    @property
    def total(self) -> int:
        return self.present + self.late + self.absent + self.excused

    @property
    def countable(self) -> int:
        """Units contributing to both numerator and denominator"""
        return self.total - self.excused

    @property
    def effective_present(self) -> float:
        """Two lates count as one absence"""
        return self.present + self.late / 2

    @property
    def effective_absences(self) -> float:
        return self.absent + self.late / 2


class AttendanceSummary(BaseModel):
    """Lesson attendance for one student"""

    model_config = ConfigDict(frozen=True)

    counts: AttendanceCounts
    percentage: Optional[float] = Field(None, description="None when no countable lessons")
    met: bool = Field(..., description="Percentage meets the threshold (False when undetermined)")
    required: float = Field(75.0, description="Threshold used")

    @property
    def is_determined(self) -> bool:
        return self.percentage is not None


class SectionAverage(BaseModel):
    """Average of all scores within one exam section"""

    model_config = ConfigDict(frozen=True)

    section_id: str
    average: float
    scores: List[float] = Field(default_factory=list)
    passing: bool


class ExamSummary(BaseModel):
    """Per-section and overall exam results for one student"""

    model_config = ConfigDict(frozen=True)

    section_averages: List[SectionAverage] = Field(default_factory=list)
    overall_average: Optional[float] = Field(None, description="Mean of every score; None with no scores")
    overall_average_met: bool
    all_sections_met: bool
    required_average: float = 75.0
    required_minimum: float = 60.0


class EligibilitySnapshot(BaseModel):
    """Three-flag graduation decision plus the numbers behind it"""

    model_config = ConfigDict(frozen=True)

    attendance_met: bool
    overall_average_met: bool
    all_sections_met: bool

    attendance_percentage: Optional[float] = None
    overall_average: Optional[float] = None
    section_averages: List[SectionAverage] = Field(default_factory=list)

    @property
    def eligible(self) -> bool:
        return self.attendance_met and self.overall_average_met and self.all_sections_met


class WeeklyAttendance(BaseModel):
    """Supplemental class attendance for one assignment"""

    model_config = ConfigDict(frozen=True)

    present: int
    excused: int
    absent: int
    effective_total: int
    percentage: float
    met: bool


class WeeklyProgress(BaseModel):
    """Supplemental class graduation requirement across both program years"""

    model_config = ConfigDict(frozen=True)

    year1_met: bool
    year2_met: bool

    @property
    def all_met(self) -> bool:
        return self.year1_met and self.year2_met


class InvalidReason(str, Enum):
    """Why an access code was rejected"""
    REVOKED = "revoked"
    EXPIRED = "expired"
    MAXIMUM_USAGE = "maximum usage"


REASON_MESSAGES = {
    InvalidReason.REVOKED: "Code has been revoked",
    InvalidReason.EXPIRED: "Code has expired",
    InvalidReason.MAXIMUM_USAGE: "Code has reached maximum usage",
}


class ValidationResult(BaseModel):
    """Outcome of validating an access code"""

    model_config = ConfigDict(frozen=True)

    valid: bool
    reason: Optional[InvalidReason] = None

    @model_validator(mode="after")
    def check_reason(self):
        """Reason is present exactly when the code is invalid"""
        if self.valid and self.reason is not None:
            raise ValueError("A valid result cannot carry a reason")
        if not self.valid and self.reason is None:
            raise ValueError("An invalid result must carry a reason")
        return self

    @property
    def message(self) -> Optional[str]:
        if self.reason is None:
            return None
        return REASON_MESSAGES[self.reason]

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def rejected(cls, reason: InvalidReason) -> "ValidationResult":
        return cls(valid=False, reason=reason)


__all__ = [
    "RequirementScale",
    "AttendanceCounts",
    "AttendanceSummary",
    "SectionAverage",
    "ExamSummary",
    "EligibilitySnapshot",
    "WeeklyAttendance",
    "WeeklyProgress",
    "InvalidReason",
    "REASON_MESSAGES",
    "ValidationResult",
]
