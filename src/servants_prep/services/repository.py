"""
Repository interface consumed by the progress service, plus an in-memory
implementation used for tests and CSV-driven batch reports.

Any store can back the service as long as ``redeem_access_code`` performs the
validity check and the usage increment as one atomic step (for a SQL store:
inside a serializable transaction). Otherwise two concurrent redemptions of
the last remaining use can both succeed.
"""

import logging
import threading
from datetime import date
from typing import Callable, Dict, List, Optional, Protocol

from ..core.models.calculations import ValidationResult
from ..core.models.records import (
    AccessCode,
    AttendanceRecord,
    ExamScore,
    StudentEnrollment,
    WeeklyAssignment,
    WeeklyCode,
)

logger = logging.getLogger(__name__)

AccessCodeCheck = Callable[[AccessCode], ValidationResult]


class ProgressRepository(Protocol):
    """Read/write operations the progress service needs from storage"""

    def get_enrollment(self, student_id: str) -> Optional[StudentEnrollment]: ...

    def list_enrollments(self) -> List[StudentEnrollment]: ...

    def list_attendance_records(
        self, student_id: str, academic_year_id: Optional[str] = None
    ) -> List[AttendanceRecord]: ...

    def list_exam_scores(
        self, student_id: str, academic_year_id: Optional[str] = None
    ) -> List[ExamScore]: ...

    def list_weekly_assignments(self, student_id: str) -> List[WeeklyAssignment]: ...

    def get_access_code(self, code: str) -> Optional[AccessCode]: ...

    def add_access_code(self, access_code: AccessCode) -> None: ...

    def redeem_access_code(self, code: str, check: AccessCodeCheck) -> Optional[ValidationResult]:
        """Atomically run ``check`` and, if valid, increment usage_count"""
        ...

    def get_weekly_code(self, code: str) -> Optional[WeeklyCode]: ...

    def list_weekly_codes(self, week_of: date) -> List[WeeklyCode]: ...

    def add_weekly_code(self, weekly_code: WeeklyCode) -> None: ...

    def code_exists(self, code: str) -> bool: ...


class InMemoryProgressRepository:
    """Dictionary-backed repository; a single lock serializes code redemption"""

    def __init__(self):
        self.enrollments: Dict[str, StudentEnrollment] = {}
        self.attendance_records: List[AttendanceRecord] = []
        self.exam_scores: List[ExamScore] = []
        self.weekly_assignments: List[WeeklyAssignment] = []
        self.access_codes: Dict[str, AccessCode] = {}
        self.weekly_codes: Dict[str, WeeklyCode] = {}
        self._lock = threading.Lock()

    # ---- Loading ----

    def add_enrollment(self, enrollment: StudentEnrollment) -> None:
        self.enrollments[enrollment.student_id] = enrollment

    def add_attendance_records(self, records: List[AttendanceRecord]) -> None:
        self.attendance_records.extend(records)

    def add_exam_scores(self, scores: List[ExamScore]) -> None:
        self.exam_scores.extend(scores)

    def add_weekly_assignment(self, assignment: WeeklyAssignment) -> None:
        self.weekly_assignments.append(assignment)

    # ---- Queries ----

    def get_enrollment(self, student_id: str) -> Optional[StudentEnrollment]:
        return self.enrollments.get(student_id)

    def list_enrollments(self) -> List[StudentEnrollment]:
        return list(self.enrollments.values())

    def list_attendance_records(
        self, student_id: str, academic_year_id: Optional[str] = None
    ) -> List[AttendanceRecord]:
        return [
            record
            for record in self.attendance_records
            if record.student_id == student_id
            and (academic_year_id is None or record.academic_year_id == academic_year_id)
        ]

    def list_exam_scores(
        self, student_id: str, academic_year_id: Optional[str] = None
    ) -> List[ExamScore]:
        return [
            score
            for score in self.exam_scores
            if score.student_id == student_id
            and (academic_year_id is None or score.academic_year_id == academic_year_id)
        ]

    def list_weekly_assignments(self, student_id: str) -> List[WeeklyAssignment]:
        return [a for a in self.weekly_assignments if a.student_id == student_id]

    # ---- Access codes ----

    def get_access_code(self, code: str) -> Optional[AccessCode]:
        return self.access_codes.get(code)

    def add_access_code(self, access_code: AccessCode) -> None:
        with self._lock:
            self.access_codes[access_code.code] = access_code

    def redeem_access_code(self, code: str, check: AccessCodeCheck) -> Optional[ValidationResult]:
        with self._lock:
            access_code = self.access_codes.get(code)
            if access_code is None:
                return None

            result = check(access_code)
            if result.valid:
                self.access_codes[code] = access_code.model_copy(
                    update={"usage_count": access_code.usage_count + 1}
                )
                logger.info(f"🎟️ Redeemed {code} (use {access_code.usage_count + 1})")
            return result

    def get_weekly_code(self, code: str) -> Optional[WeeklyCode]:
        return self.weekly_codes.get(code)

    def list_weekly_codes(self, week_of: date) -> List[WeeklyCode]:
        return [c for c in self.weekly_codes.values() if c.week_of == week_of]

    def add_weekly_code(self, weekly_code: WeeklyCode) -> None:
        with self._lock:
            self.weekly_codes[weekly_code.code] = weekly_code

    def code_exists(self, code: str) -> bool:
        return code in self.access_codes or code in self.weekly_codes
