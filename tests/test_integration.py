"""
End-to-end test: CSV exports -> repository -> progress service -> eligibility report
"""

import math

import pytest

from servants_prep.processing import ProgressDataProcessor, build_eligibility_report
from servants_prep.processing.data_processor import REPORT_COLUMNS
from servants_prep.services import ProgressService

ENROLLMENTS = """Student ID,Year Level
S1,YEAR_1
S2,YEAR_2
S3,YEAR_1
"""

ATTENDANCE = """Student ID,Lesson ID,Status,Exam Day
S1,L1,PRESENT,
S1,L2,PRESENT,
S1,L3,LATE,
S1,L4,LATE,
S1,L5,ABSENT,Yes
S2,L1,PRESENT,
S2,L2,ABSENT,
S2,L3,ABSENT,
S3,L1,EXCUSED,
"""

EXAM_SCORES = """Student ID,Section,Score,Max Score,Year Level
S1,Bible,80,100,BOTH
S1,Dogma,90,100,YEAR_1
S1,Dogma,10,100,YEAR_2
S2,Bible,50,100,BOTH
"""

WEEKLY_LOGS = """Assignment ID,Student ID,Grade,Year Level,Start Date,Total Weeks,Week Number,Status
A1,S1,GRADE_1,YEAR_1,2025-09-07,2,1,VERIFIED
A1,S1,GRADE_1,YEAR_1,2025-09-07,2,2,VERIFIED
"""


@pytest.fixture
def report(tmp_path, settings):
    (tmp_path / "Enrollments.csv").write_text(ENROLLMENTS, encoding="utf-8")
    (tmp_path / "Attendance.csv").write_text(ATTENDANCE, encoding="utf-8")
    (tmp_path / "Exam Scores.csv").write_text(EXAM_SCORES, encoding="utf-8")
    (tmp_path / "Weekly Logs.csv").write_text(WEEKLY_LOGS, encoding="utf-8")

    processor = ProgressDataProcessor(tmp_path)
    assert processor.load_all_data()

    service = ProgressService(processor.build_repository(), settings=settings)
    return build_eligibility_report(service, processor.get_all_student_ids() + ["GHOST"])


def test_report_shape(report):
    assert list(report.columns) == REPORT_COLUMNS
    # Unenrolled ids are skipped
    assert list(report["Student ID"]) == ["S1", "S2", "S3"]


def test_eligible_student(report):
    row = report.set_index("Student ID").loc["S1"]

    assert row["Attendance %"] == 75
    assert row["Overall Average"] == 85
    assert bool(row["Eligible"]) is True
    assert bool(row["Weekly Year 1 Met"]) is True
    assert bool(row["Weekly Year 2 Met"]) is False


def test_ineligible_student(report):
    row = report.set_index("Student ID").loc["S2"]

    assert row["Attendance %"] == pytest.approx(100 / 3)
    assert bool(row["Attendance Met"]) is False
    assert bool(row["Average Met"]) is False
    assert bool(row["Sections Met"]) is False
    assert bool(row["Eligible"]) is False


def test_undetermined_values_are_nan(report):
    row = report.set_index("Student ID").loc["S3"]

    assert math.isnan(row["Attendance %"])
    assert math.isnan(row["Overall Average"])
    assert bool(row["Eligible"]) is True


def test_progress_bar_does_not_change_result(tmp_path, settings, report):
    processor = ProgressDataProcessor(tmp_path)
    processor.load_all_data()
    service = ProgressService(processor.build_repository(), settings=settings)

    with_progress = build_eligibility_report(service, processor.get_all_student_ids(), progress=True)

    assert list(with_progress["Eligible"]) == list(report["Eligible"])
