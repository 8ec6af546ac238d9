#!/usr/bin/env python3
"""
RECORD MODELS - Pydantic schemas for the raw records supplied by the storage layer
Type-safe containers for attendance, exam scores, enrollments and access codes

RECORD TYPES:
✅ Attendance Records: One status per lesson (PRESENT / LATE / ABSENT / EXCUSED)
✅ Exam Scores: Percentage per assessment, grouped by exam section
✅ Weekly Logs: One status per supplemental-class week (VERIFIED / MANUAL / EXCUSED / REJECTED)
✅ Access Codes: Invite codes and weekly verification codes

VALIDATION RULES:
- Statuses are kept as plain strings so unrecognized values reach the classifier
- Counts and scores are NOT range-checked; malformed values are the caller's problem
- Code lookups are case-insensitive (normalized to upper case, stripped)

Priority: CRITICAL - Foundation for all progress calculations
Dependencies: Pydantic for validation
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AttendanceStatus(str, Enum):
    """Per-lesson attendance status"""
    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"


class WeeklyLogStatus(str, Enum):
    """Per-week supplemental class status"""
    VERIFIED = "VERIFIED"  # Student submitted a valid weekly code
    MANUAL = "MANUAL"  # Marked present by an administrator
    EXCUSED = "EXCUSED"
    REJECTED = "REJECTED"


class YearLevel(str, Enum):
    """Program year a student is enrolled in"""
    YEAR_1 = "YEAR_1"
    YEAR_2 = "YEAR_2"


class ExamYearLevel(str, Enum):
    """Program year an exam applies to"""
    YEAR_1 = "YEAR_1"
    YEAR_2 = "YEAR_2"
    BOTH = "BOTH"


class StudentGrade(str, Enum):
    """School grade reported on a registration submission"""
    GRADE_9 = "GRADE_9"
    GRADE_10 = "GRADE_10"
    GRADE_11 = "GRADE_11"
    GRADE_12 = "GRADE_12"
    COLLEGE_FRESHMAN = "COLLEGE_FRESHMAN"
    COLLEGE_SOPHOMORE = "COLLEGE_SOPHOMORE"
    COLLEGE_JUNIOR = "COLLEGE_JUNIOR"
    COLLEGE_SENIOR = "COLLEGE_SENIOR"
    POST_COLLEGE = "POST_COLLEGE"
    OTHER = "OTHER"


class WeeklyGrade(str, Enum):
    """Class grade a student helps with in the weekly supplemental program"""
    PRE_K = "PRE_K"
    KINDERGARTEN = "KINDERGARTEN"
    GRADE_1 = "GRADE_1"
    GRADE_2 = "GRADE_2"
    GRADE_3 = "GRADE_3"
    GRADE_4 = "GRADE_4"
    GRADE_5 = "GRADE_5"
    GRADE_6_PLUS = "GRADE_6_PLUS"


class AttendanceRecord(BaseModel):
    """Attendance for one student at one lesson"""

    model_config = ConfigDict(frozen=True)

    student_id: Optional[str] = Field(None, description="Student identifier")
    lesson_id: Optional[str] = Field(None, description="Lesson identifier")
    academic_year_id: Optional[str] = Field(None, description="Academic year of the lesson")
    status: str = Field(..., description="PRESENT, LATE, ABSENT or EXCUSED")
    is_exam_day: bool = Field(False, description="Exam-day lessons do not count toward attendance")


class ExamScore(BaseModel):
    """A single scored assessment, already converted to a percentage"""

    model_config = ConfigDict(frozen=True)

    student_id: Optional[str] = Field(None, description="Student identifier")
    academic_year_id: Optional[str] = Field(None, description="Academic year of the exam")
    section_id: str = Field(..., description="Exam section (scoring category)")
    percentage: float = Field(..., description="Score as a percentage of the maximum")
    year_level: ExamYearLevel = Field(ExamYearLevel.BOTH, description="Program year the exam applies to")

    @classmethod
    def from_points(
        cls, section_id: str, score: float, max_score: float, **kwargs
    ) -> "ExamScore":
        """Build a score from raw points (score * 100 / max_score)"""
        return cls(section_id=section_id, percentage=score * 100 / max_score, **kwargs)


class StudentEnrollment(BaseModel):
    """Program enrollment of a student"""

    student_id: str = Field(..., description="Student identifier")
    year_level: YearLevel = Field(YearLevel.YEAR_1, description="Current program year")
    mentor_id: Optional[str] = Field(None, description="Assigned mentor")
    is_async_student: bool = Field(False, description="Attends asynchronously")
    is_active: bool = Field(True, description="Enrollment still active")


class WeeklyLog(BaseModel):
    """Supplemental class status for one week of an assignment"""

    model_config = ConfigDict(frozen=True)

    week_number: int = Field(..., description="1-based week within the assignment")
    status: str = Field(..., description="VERIFIED, MANUAL, EXCUSED or REJECTED")
    code_id: Optional[str] = Field(None, description="Weekly code used to verify the week")
    notes: Optional[str] = Field(None, description="Administrator notes")


class WeeklyAssignment(BaseModel):
    """A student's supplemental class assignment for one program year"""

    id: str = Field(..., description="Assignment identifier")
    student_id: str = Field(..., description="Student identifier")
    grade: WeeklyGrade = Field(..., description="Class grade the student is assigned to")
    year_level: YearLevel = Field(..., description="Program year the assignment counts for")
    start_date: date = Field(..., description="First week of the assignment")
    total_weeks: int = Field(..., description="Number of scheduled weeks")
    is_active: bool = Field(True, description="Currently active assignment")
    logs: List[WeeklyLog] = Field(default_factory=list, description="Logged weeks")


class AccessCode(BaseModel):
    """Time-boxed, usage-capped code gating a self-service action"""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Code text as shown to users")
    label: Optional[str] = Field(None, description="Administrator label")
    is_active: bool = Field(True, description="False once revoked")
    expires_at: Optional[datetime] = Field(None, description="No expiry when None")
    max_uses: int = Field(0, description="0 means unlimited")
    usage_count: int = Field(0, description="Successful redemptions so far")


class WeeklyCode(BaseModel):
    """Weekly verification code for one class grade"""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Code text, e.g. G2-AB3K")
    grade: WeeklyGrade = Field(..., description="Class grade the code belongs to")
    week_of: date = Field(..., description="Sunday the code was issued for")
    valid_until: datetime = Field(..., description="Last moment the code is accepted")
    is_active: bool = Field(True, description="False once deactivated")

    def as_access_code(self) -> AccessCode:
        """View this weekly code as an unlimited-use access code"""
        return AccessCode(
            code=self.code,
            is_active=self.is_active,
            expires_at=self.valid_until,
            max_uses=0,
        )


def normalize_code(code: str) -> str:
    """Normalize user-typed code text for lookup"""
    return code.strip().upper()


__all__ = [
    "AttendanceStatus",
    "WeeklyLogStatus",
    "YearLevel",
    "ExamYearLevel",
    "StudentGrade",
    "WeeklyGrade",
    "AttendanceRecord",
    "ExamScore",
    "StudentEnrollment",
    "WeeklyLog",
    "WeeklyAssignment",
    "AccessCode",
    "WeeklyCode",
    "normalize_code",
]
