"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Record factories (attendance, exam scores, weekly assignments)
- Requirement thresholds and settings
- An in-memory repository and progress service
"""

from datetime import date, datetime, timedelta

import pytest

from servants_prep.config import Settings
from servants_prep.core.models import (
    AccessCode,
    AttendanceRecord,
    ExamScore,
    ExamYearLevel,
    RequirementScale,
    StudentEnrollment,
    WeeklyAssignment,
    WeeklyGrade,
    WeeklyLog,
    YearLevel,
)
from servants_prep.services import InMemoryProgressRepository, ProgressService


def make_attendance(statuses, student_id="S1", academic_year_id="2025", exam_day=False):
    """Attendance records for one student, one per status"""
    return [
        AttendanceRecord(
            student_id=student_id,
            lesson_id=f"L{i}",
            academic_year_id=academic_year_id,
            status=status,
            is_exam_day=exam_day,
        )
        for i, status in enumerate(statuses)
    ]


def make_scores(section_percentages, student_id="S1", academic_year_id="2025",
                year_level=ExamYearLevel.BOTH):
    """Exam scores from {section: [percentages]}"""
    scores = []
    for section_id, percentages in section_percentages.items():
        for percentage in percentages:
            scores.append(
                ExamScore(
                    student_id=student_id,
                    academic_year_id=academic_year_id,
                    section_id=section_id,
                    percentage=percentage,
                    year_level=year_level,
                )
            )
    return scores


def make_assignment(statuses, year_level=YearLevel.YEAR_1, total_weeks=None,
                    student_id="S1", assignment_id="A1", grade=WeeklyGrade.GRADE_2):
    """Weekly assignment with one log per status, weeks numbered from 1"""
    return WeeklyAssignment(
        id=assignment_id,
        student_id=student_id,
        grade=grade,
        year_level=year_level,
        start_date=date(2025, 9, 7),
        total_weeks=total_weeks if total_weeks is not None else len(statuses),
        logs=[WeeklyLog(week_number=i + 1, status=status) for i, status in enumerate(statuses)],
    )


@pytest.fixture
def requirements():
    return RequirementScale()


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file"""
    return Settings(_env_file=None)


@pytest.fixture
def now():
    return datetime(2025, 10, 15, 12, 0, 0)


@pytest.fixture
def repository():
    """Repository with one Year 1 student (S1) and one Year 2 student (S2)"""
    repo = InMemoryProgressRepository()
    repo.add_enrollment(StudentEnrollment(student_id="S1", year_level=YearLevel.YEAR_1))
    repo.add_enrollment(StudentEnrollment(student_id="S2", year_level=YearLevel.YEAR_2))

    repo.add_attendance_records(make_attendance(["PRESENT"] * 9 + ["ABSENT"], student_id="S1"))
    repo.add_attendance_records(make_attendance(["ABSENT"] * 2, student_id="S1", exam_day=True))
    repo.add_attendance_records(make_attendance(["PRESENT", "ABSENT"], student_id="S2"))

    repo.add_exam_scores(make_scores({"Bible": [80, 90]}, student_id="S1"))
    repo.add_exam_scores(make_scores({"Dogma": [40]}, student_id="S1", year_level=ExamYearLevel.YEAR_2))
    repo.add_exam_scores(make_scores({"Dogma": [55]}, student_id="S2", year_level=ExamYearLevel.YEAR_2))
    return repo


@pytest.fixture
def service(repository, settings):
    return ProgressService(repository, settings=settings)


@pytest.fixture
def invite_code(now):
    return AccessCode(code="SP-ABCD2345", expires_at=now + timedelta(days=1), max_uses=2)
