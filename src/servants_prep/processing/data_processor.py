#!/usr/bin/env python3
"""
DATA PROCESSOR - CSV loading, validation, and cohort eligibility reports
Load program exports into typed records and evaluate every enrolled student

DATA SOURCES:
✅ Enrollments CSV - Student ID, program year level, mentor
✅ Attendance CSV - One row per student per lesson with status
✅ Exam Scores CSV - Raw points per student per exam section
✅ Weekly Logs CSV (optional) - Weekly class assignments and their logged weeks

VALIDATION STRATEGY:
1. Schema Validation: Required columns must exist
2. Row Validation: Rows that cannot be converted are skipped with a warning
3. Cross-Reference Validation: Student IDs must appear in Enrollments

Loaders never raise on bad files; problems are collected in
validation_errors / validation_warnings and reported together.

Priority: HIGH - Batch reporting
Dependencies: pandas, numpy, tqdm
"""

import logging
import math
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..core.models.records import (
    AttendanceRecord,
    ExamScore,
    ExamYearLevel,
    StudentEnrollment,
    WeeklyAssignment,
    WeeklyLog,
    YearLevel,
)
from ..exceptions import EnrollmentNotFoundError
from ..services.progress import ProgressService
from ..services.repository import InMemoryProgressRepository

logger = logging.getLogger(__name__)

ENROLLMENTS_FILE = "Enrollments.csv"
ATTENDANCE_FILE = "Attendance.csv"
EXAM_SCORES_FILE = "Exam Scores.csv"
WEEKLY_LOGS_FILE = "Weekly Logs.csv"

REPORT_COLUMNS = [
    "Student ID",
    "Year Level",
    "Attendance %",
    "Overall Average",
    "Attendance Met",
    "Average Met",
    "Sections Met",
    "Eligible",
    "Weekly Year 1 Met",
    "Weekly Year 2 Met",
]

TRUE_VALUES = {"YES", "Y", "TRUE", "1"}


def _clean(value) -> Optional[str]:
    """String value of a cell, None for blanks and NaN"""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


def _flag(value) -> bool:
    text = _clean(value)
    return text is not None and text.upper() in TRUE_VALUES


class ProgressDataProcessor:
    """Load and validate program CSV exports"""

    def __init__(self, data_dir: Path = None):
        self.data_dir = Path(data_dir) if data_dir is not None else Path("data")

        self.enrollments: pd.DataFrame = None
        self.attendance: pd.DataFrame = None
        self.exam_scores: pd.DataFrame = None
        self.weekly_logs: pd.DataFrame = None

        self.validation_errors: List[str] = []
        self.validation_warnings: List[str] = []

    # ---- Loading ----

    def load_all_data(self) -> bool:
        """Load all CSV sources; False when a required source is unusable"""
        logger.info("🔍 LOADING PROGRAM DATA SOURCES")

        success = True
        success &= self._load_enrollments()
        success &= self._load_attendance()
        success &= self._load_exam_scores()

        # Optional - won't fail if missing
        self._load_weekly_logs()

        if success:
            logger.info("✅ All data sources loaded successfully")
            self._perform_cross_validation()
        else:
            logger.error("❌ Data loading failed - check validation errors")

        return success

    def _read_csv(self, file_name: str, required_columns: List[str]) -> Optional[pd.DataFrame]:
        file_path = self.data_dir / file_name
        try:
            logger.info(f"📊 Loading {file_path}")
            frame = pd.read_csv(file_path, encoding="utf-8-sig", dtype=str)
        except Exception as e:
            self.validation_errors.append(f"Failed to load {file_name}: {e}")
            logger.error(f"  ❌ Failed to load {file_name}: {e}")
            return None

        missing_columns = [col for col in required_columns if col not in frame.columns]
        if missing_columns:
            self.validation_errors.append(f"{file_name} missing columns: {missing_columns}")
            return None

        logger.info(f"  ✅ Loaded {len(frame)} rows from {file_name}")
        return frame

    def _load_enrollments(self) -> bool:
        self.enrollments = self._read_csv(ENROLLMENTS_FILE, ["Student ID", "Year Level"])
        return self.enrollments is not None

    def _load_attendance(self) -> bool:
        self.attendance = self._read_csv(ATTENDANCE_FILE, ["Student ID", "Status"])
        return self.attendance is not None

    def _load_exam_scores(self) -> bool:
        self.exam_scores = self._read_csv(
            EXAM_SCORES_FILE, ["Student ID", "Section", "Score", "Max Score"]
        )
        return self.exam_scores is not None

    def _load_weekly_logs(self) -> bool:
        if not (self.data_dir / WEEKLY_LOGS_FILE).exists():
            self.validation_warnings.append(f"{WEEKLY_LOGS_FILE} not found - weekly progress skipped")
            return False
        self.weekly_logs = self._read_csv(
            WEEKLY_LOGS_FILE,
            ["Assignment ID", "Student ID", "Grade", "Year Level", "Start Date", "Total Weeks"],
        )
        return self.weekly_logs is not None

    def _perform_cross_validation(self):
        enrolled = set(self.get_all_student_ids())
        for name, frame in (("Attendance", self.attendance), ("Exam Scores", self.exam_scores)):
            ids = {_clean(v) for v in frame["Student ID"]} - {None}
            orphans = sorted(ids - enrolled)
            if orphans:
                self.validation_warnings.append(
                    f"{name} has {len(orphans)} students without an enrollment: {orphans[:5]}"
                )

    # ---- Record conversion ----

    def get_all_student_ids(self) -> List[str]:
        if self.enrollments is None:
            return []
        return [sid for sid in (_clean(v) for v in self.enrollments["Student ID"]) if sid]

    def enrollment_records(self) -> List[StudentEnrollment]:
        records = []
        for index, row in self.enrollments.iterrows():
            student_id = _clean(row["Student ID"])
            try:
                records.append(
                    StudentEnrollment(
                        student_id=student_id,
                        year_level=YearLevel(_clean(row["Year Level"])),
                        mentor_id=_clean(row.get("Mentor ID")),
                        is_async_student=_flag(row.get("Async")),
                    )
                )
            except ValueError as e:
                self.validation_warnings.append(f"{ENROLLMENTS_FILE} row {index + 2} skipped: {e}")
        return records

    def attendance_records(self) -> List[AttendanceRecord]:
        records = []
        for _, row in self.attendance.iterrows():
            status = _clean(row["Status"])
            records.append(
                AttendanceRecord(
                    student_id=_clean(row["Student ID"]),
                    lesson_id=_clean(row.get("Lesson ID")),
                    academic_year_id=_clean(row.get("Academic Year")),
                    status=status.upper() if status else "",
                    is_exam_day=_flag(row.get("Exam Day")),
                )
            )
        return records

    def exam_score_records(self) -> List[ExamScore]:
        records = []
        for index, row in self.exam_scores.iterrows():
            try:
                score = float(row["Score"])
                max_score = float(row["Max Score"])
                if not (math.isfinite(score) and math.isfinite(max_score)):
                    raise ValueError("Score and Max Score are required")
                if max_score == 0:
                    raise ValueError("Max Score is 0")
                year_level = _clean(row.get("Year Level")) or ExamYearLevel.BOTH.value
                records.append(
                    ExamScore.from_points(
                        section_id=_clean(row["Section"]),
                        score=score,
                        max_score=max_score,
                        student_id=_clean(row["Student ID"]),
                        academic_year_id=_clean(row.get("Academic Year")),
                        year_level=ExamYearLevel(year_level.upper()),
                    )
                )
            except (TypeError, ValueError) as e:
                self.validation_warnings.append(f"{EXAM_SCORES_FILE} row {index + 2} skipped: {e}")
        return records

    def weekly_assignments(self) -> List[WeeklyAssignment]:
        if self.weekly_logs is None:
            return []

        assignments: Dict[str, WeeklyAssignment] = {}
        for index, row in self.weekly_logs.iterrows():
            assignment_id = _clean(row["Assignment ID"])
            try:
                if assignment_id not in assignments:
                    assignments[assignment_id] = WeeklyAssignment(
                        id=assignment_id,
                        student_id=_clean(row["Student ID"]),
                        grade=_clean(row["Grade"]),
                        year_level=_clean(row["Year Level"]),
                        start_date=date.fromisoformat(_clean(row["Start Date"])),
                        total_weeks=int(float(row["Total Weeks"])),
                    )
                week = _clean(row.get("Week Number"))
                status = _clean(row.get("Status"))
                if week is not None and status is not None:
                    assignments[assignment_id].logs.append(
                        WeeklyLog(week_number=int(float(week)), status=status.upper())
                    )
            except (TypeError, ValueError) as e:
                self.validation_warnings.append(f"{WEEKLY_LOGS_FILE} row {index + 2} skipped: {e}")
        return list(assignments.values())

    def build_repository(self) -> InMemoryProgressRepository:
        """In-memory repository holding every loaded record"""
        repository = InMemoryProgressRepository()
        for enrollment in self.enrollment_records():
            repository.add_enrollment(enrollment)
        repository.add_attendance_records(self.attendance_records())
        repository.add_exam_scores(self.exam_score_records())
        for assignment in self.weekly_assignments():
            repository.add_weekly_assignment(assignment)
        return repository

    def generate_validation_report(self) -> str:
        lines = ["📋 DATA VALIDATION REPORT", "=" * 60]
        if not self.validation_errors and not self.validation_warnings:
            lines.append("✅ No issues found")
        for error in self.validation_errors:
            lines.append(f"❌ ERROR: {error}")
        for warning in self.validation_warnings:
            lines.append(f"⚠️ WARNING: {warning}")
        return "\n".join(lines)


def _undetermined_as_nan(value: Optional[float]) -> float:
    return np.nan if value is None else value


def build_eligibility_report(
    service: ProgressService, student_ids: Iterable[str], progress: bool = False
) -> pd.DataFrame:
    """
    One row per student with the graduation flags and the numbers behind them

    Undetermined percentages and averages are NaN, never 0.
    """
    student_ids = list(student_ids)
    iterator = (
        tqdm(student_ids, desc="Evaluating", unit="student") if progress else student_ids
    )

    rows = []
    for student_id in iterator:
        try:
            analytics = service.student_analytics(student_id)
        except EnrollmentNotFoundError:
            logger.warning(f"⚠️ Skipping {student_id}: not enrolled")
            continue

        weekly = service.weekly_progress(student_id).graduation
        graduation = analytics.graduation
        rows.append({
            "Student ID": student_id,
            "Year Level": analytics.enrollment.year_level.value,
            "Attendance %": _undetermined_as_nan(graduation.attendance_percentage),
            "Overall Average": _undetermined_as_nan(graduation.overall_average),
            "Attendance Met": graduation.attendance_met,
            "Average Met": graduation.overall_average_met,
            "Sections Met": graduation.all_sections_met,
            "Eligible": graduation.eligible,
            "Weekly Year 1 Met": weekly.year1_met,
            "Weekly Year 2 Met": weekly.year2_met,
        })

    return pd.DataFrame(rows, columns=REPORT_COLUMNS)
