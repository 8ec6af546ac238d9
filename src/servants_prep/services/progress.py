#!/usr/bin/env python3
"""
PROGRESS SERVICE - Student analytics and code workflows over a repository

OPERATIONS:
✅ Student Analytics: Attendance, exam and graduation results for one student
✅ Weekly Progress: Per-assignment weekly class attendance and year flags
✅ Invite Codes: Issue (collision-retried), validate and redeem
✅ Weekly Codes: Issue one per class grade per week, verify student submissions

All figures are recomputed from the repository on every call; nothing derived
is cached or stored.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List, Optional

from ..config import Settings, get_settings
from ..core.access_codes import validate_access_code
from ..core.calculators.attendance import (
    AttendanceCalculator,
    calculate_absences_allowed,
    count_attendance_statuses,
    exclude_exam_days,
)
from ..core.calculators.eligibility import (
    GraduationEligibilityEvaluator,
    WeeklyEligibilityEvaluator,
)
from ..core.calculators.exams import ExamScoreAggregator
from ..core.labels import weekly_grade_display_name
from ..core.models.calculations import (
    AttendanceSummary,
    EligibilitySnapshot,
    ExamSummary,
    RequirementScale,
    ValidationResult,
    WeeklyAttendance,
    WeeklyProgress,
)
from ..core.models.records import (
    AccessCode,
    ExamScore,
    ExamYearLevel,
    StudentEnrollment,
    WeeklyAssignment,
    WeeklyCode,
    WeeklyGrade,
    YearLevel,
    normalize_code,
)
from ..core.tokens import generate_invite_code, generate_temp_password, generate_weekly_code
from ..core.weeks import assignment_weeks, code_valid_until
from ..exceptions import (
    AccessCodeNotFoundError,
    CodeGenerationError,
    EnrollmentNotFoundError,
    WeeklyCodeGradeMismatchError,
)
from .repository import ProgressRepository

logger = logging.getLogger(__name__)


@dataclass
class StudentAnalytics:
    """Everything the analytics view needs for one student"""
    enrollment: StudentEnrollment
    attendance: AttendanceSummary
    exams: ExamSummary
    graduation: EligibilitySnapshot


@dataclass
class WeekStatus:
    week_number: int
    week_of: date
    status: Optional[str] = None


@dataclass
class AssignmentProgress:
    assignment: WeeklyAssignment
    grade_display_name: str
    attendance: Optional[WeeklyAttendance]
    weeks: List[WeekStatus] = field(default_factory=list)


@dataclass
class WeeklyProgressReport:
    student_id: str
    assignments: List[AssignmentProgress]
    graduation: WeeklyProgress


def exam_year_levels(year_level: YearLevel) -> List[ExamYearLevel]:
    """Exams that count for a student: shared exams plus their own year's"""
    if year_level == YearLevel.YEAR_1:
        return [ExamYearLevel.BOTH, ExamYearLevel.YEAR_1]
    return [ExamYearLevel.BOTH, ExamYearLevel.YEAR_2]


class ProgressService:
    """Calls the calculation engine with records fetched from a repository"""

    def __init__(
        self,
        repository: ProgressRepository,
        requirements: Optional[RequirementScale] = None,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.settings = settings or get_settings()
        self.requirements = requirements or self.settings.requirements()
        self.evaluator = GraduationEligibilityEvaluator(self.requirements)
        self.weekly_evaluator = WeeklyEligibilityEvaluator(self.requirements)

    # ---- Academic progress ----

    def _get_enrollment(self, student_id: str) -> StudentEnrollment:
        enrollment = self.repository.get_enrollment(student_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(student_id)
        return enrollment

    def _scoped_exam_scores(
        self, enrollment: StudentEnrollment, academic_year_id: Optional[str]
    ) -> List[ExamScore]:
        levels = exam_year_levels(enrollment.year_level)
        return [
            score
            for score in self.repository.list_exam_scores(enrollment.student_id, academic_year_id)
            if score.year_level in levels
        ]

    def student_analytics(
        self, student_id: str, academic_year_id: Optional[str] = None
    ) -> StudentAnalytics:
        """
        Attendance, exam and graduation results for one student

        Args:
            student_id: Student identifier
            academic_year_id: Restrict to one academic year; all years when None

        Raises:
            EnrollmentNotFoundError: The student is not enrolled
        """
        enrollment = self._get_enrollment(student_id)
        records = self.repository.list_attendance_records(student_id, academic_year_id)
        scores = self._scoped_exam_scores(enrollment, academic_year_id)

        attendance = AttendanceCalculator(self.requirements).summarize(records)
        exams = ExamScoreAggregator(self.requirements).summarize(scores)
        graduation = self.evaluator.combine(attendance, exams)
        # Undetermined attendance is reported as met, matching the graduation flag
        attendance = attendance.model_copy(update={"met": graduation.attendance_met})

        logger.debug(f"Eligibility for {student_id}: {graduation.eligible}")

        return StudentAnalytics(
            enrollment=enrollment,
            attendance=attendance,
            exams=exams,
            graduation=graduation,
        )

    def absences_allowed(
        self, student_id: str, remaining_lessons: int, academic_year_id: Optional[str] = None
    ) -> int:
        """Future absences the student can afford; negative when already behind"""
        records = self.repository.list_attendance_records(student_id, academic_year_id)
        counts = count_attendance_statuses(exclude_exam_days(records))
        return calculate_absences_allowed(
            counts, remaining_lessons, self.requirements.attendance_threshold
        )

    # ---- Weekly classes ----

    def weekly_progress(self, student_id: str) -> WeeklyProgressReport:
        assignments = self.repository.list_weekly_assignments(student_id)

        progress = []
        for assignment in assignments:
            logs_by_week = {log.week_number: log for log in assignment.logs}
            weeks = []
            for number, week_of in assignment_weeks(assignment.start_date, assignment.total_weeks):
                log = logs_by_week.get(number)
                weeks.append(WeekStatus(number, week_of, log.status if log else None))

            progress.append(
                AssignmentProgress(
                    assignment=assignment,
                    grade_display_name=weekly_grade_display_name(assignment.grade).label,
                    attendance=self.weekly_evaluator.assignment_attendance(assignment),
                    weeks=weeks,
                )
            )

        return WeeklyProgressReport(
            student_id=student_id,
            assignments=progress,
            graduation=self.weekly_evaluator.evaluate(assignments),
        )

    # ---- Code issuance ----

    def _generate_unused_code(self, generate: Callable[[], str]) -> str:
        """Retry generation on collision, up to the configured attempt count"""
        attempts = self.settings.code_generation_attempts
        for attempt in range(1, attempts + 1):
            code = generate()
            if not self.repository.code_exists(code):
                return code
            logger.warning(f"⚠️ Code collision on attempt {attempt}/{attempts}")
        raise CodeGenerationError(f"No unused code after {attempts} attempts")

    def issue_invite_code(
        self,
        label: Optional[str] = None,
        max_uses: int = 0,
        expires_at: Optional[datetime] = None,
    ) -> AccessCode:
        code = self._generate_unused_code(
            lambda: generate_invite_code(
                self.settings.invite_code_prefix, self.settings.invite_code_length
            )
        )
        access_code = AccessCode(code=code, label=label, max_uses=max_uses, expires_at=expires_at)
        self.repository.add_access_code(access_code)
        logger.info(f"✅ Issued invite code {code}")
        return access_code

    def issue_weekly_codes(self, week_of: date) -> List[WeeklyCode]:
        """Create a code for every class grade that has none for ``week_of``"""
        existing = {code.grade for code in self.repository.list_weekly_codes(week_of)}
        valid_until = code_valid_until(week_of)

        issued = []
        for grade in WeeklyGrade:
            if grade in existing:
                continue
            code = self._generate_unused_code(
                lambda: generate_weekly_code(grade, self.settings.weekly_code_length)
            )
            weekly_code = WeeklyCode(code=code, grade=grade, week_of=week_of, valid_until=valid_until)
            self.repository.add_weekly_code(weekly_code)
            issued.append(weekly_code)

        logger.info(f"✅ Issued {len(issued)} weekly codes for week of {week_of}")
        return issued

    def temporary_password(self) -> str:
        """Temporary password for an approved registration"""
        return generate_temp_password(self.settings.temp_password_length)

    # ---- Code validation ----

    def validate_invite_code(self, code: str, now: Optional[datetime] = None) -> ValidationResult:
        """Read-only check of an invite code"""
        normalized = normalize_code(code)
        access_code = self.repository.get_access_code(normalized)
        if access_code is None:
            raise AccessCodeNotFoundError(normalized)
        return validate_access_code(access_code, now)

    def redeem_invite_code(self, code: str, now: Optional[datetime] = None) -> ValidationResult:
        """Validate and consume one use of an invite code atomically"""
        normalized = normalize_code(code)
        result = self.repository.redeem_access_code(
            normalized, lambda access_code: validate_access_code(access_code, now)
        )
        if result is None:
            raise AccessCodeNotFoundError(normalized)
        if not result.valid:
            logger.info(f"❌ Invite code {normalized} rejected: {result.reason.value}")
        return result

    def verify_weekly_code(
        self, code: str, grade: WeeklyGrade, now: Optional[datetime] = None
    ) -> ValidationResult:
        """
        Check a weekly code submitted by a student assigned to ``grade``

        Raises:
            AccessCodeNotFoundError: No such code
            WeeklyCodeGradeMismatchError: Code is valid but for another grade
        """
        normalized = normalize_code(code)
        weekly_code = self.repository.get_weekly_code(normalized)
        if weekly_code is None:
            raise AccessCodeNotFoundError(normalized)

        result = validate_access_code(weekly_code.as_access_code(), now)
        if result.valid and weekly_code.grade != WeeklyGrade(grade):
            raise WeeklyCodeGradeMismatchError(normalized, weekly_code.grade, grade)
        return result
