"""
Unit Tests for Eligibility Evaluators

Tests for:
- Three-flag graduation decision
- No-data defaults for lessons and exams
- Weekly class attendance and year flags
"""

import pytest

from servants_prep.core.calculators.eligibility import (
    GraduationEligibilityEvaluator,
    WeeklyEligibilityEvaluator,
    calculate_weekly_attendance,
)
from servants_prep.core.models import RequirementScale, WeeklyLog, YearLevel

from conftest import make_assignment, make_attendance, make_scores


class TestGraduationEligibility:

    def test_all_flags_met(self):
        evaluator = GraduationEligibilityEvaluator()
        snapshot = evaluator.evaluate(
            make_attendance(["PRESENT"] * 9 + ["ABSENT"]),
            make_scores({"Bible": [80, 90], "Dogma": [70]}),
            student_id="S1",
        )

        assert snapshot.attendance_met is True
        assert snapshot.overall_average_met is True
        assert snapshot.all_sections_met is True
        assert snapshot.eligible is True
        assert snapshot.attendance_percentage == 90
        assert snapshot.overall_average == 80

    def test_failing_section_blocks_eligibility(self):
        snapshot = GraduationEligibilityEvaluator().evaluate(
            make_attendance(["PRESENT"] * 4),
            make_scores({"Bible": [100, 100], "Dogma": [59]}),
        )

        assert snapshot.overall_average_met is True
        assert snapshot.all_sections_met is False
        assert snapshot.eligible is False

    def test_low_attendance_blocks_eligibility(self):
        snapshot = GraduationEligibilityEvaluator().evaluate(
            make_attendance(["PRESENT", "ABSENT"]),
            make_scores({"Bible": [90]}),
        )

        assert snapshot.attendance_met is False
        assert snapshot.eligible is False

    def test_no_data_is_not_penalized(self):
        snapshot = GraduationEligibilityEvaluator().evaluate([], [])

        assert snapshot.attendance_percentage is None
        assert snapshot.overall_average is None
        assert snapshot.eligible is True

    def test_only_excused_lessons_counts_as_met(self):
        snapshot = GraduationEligibilityEvaluator().evaluate(make_attendance(["EXCUSED"] * 3), [])

        assert snapshot.attendance_percentage is None
        assert snapshot.attendance_met is True

    def test_custom_requirements(self):
        evaluator = GraduationEligibilityEvaluator(RequirementScale(overall_average_threshold=85))
        snapshot = evaluator.evaluate([], make_scores({"Bible": [80]}))

        assert snapshot.overall_average_met is False

    def test_calculation_log_collects_steps(self):
        evaluator = GraduationEligibilityEvaluator()
        evaluator.evaluate(make_attendance(["PRESENT"]), make_scores({"Bible": [80]}), student_id="S9")

        log = evaluator.get_calculation_log()
        assert "S9" in log[0]
        assert "Eligible" in log[-1]


class TestWeeklyAttendance:

    def test_verified_and_manual_count_present(self):
        logs = [
            WeeklyLog(week_number=1, status="VERIFIED"),
            WeeklyLog(week_number=2, status="MANUAL"),
            WeeklyLog(week_number=3, status="REJECTED"),
        ]

        attendance = calculate_weekly_attendance(logs, total_weeks=4)

        assert attendance.present == 2
        assert attendance.absent == 2
        assert attendance.percentage == 50
        assert attendance.met is False

    def test_excused_weeks_shrink_the_total(self):
        logs = [WeeklyLog(week_number=i, status="VERIFIED") for i in range(1, 4)]
        logs.append(WeeklyLog(week_number=4, status="EXCUSED"))

        attendance = calculate_weekly_attendance(logs, total_weeks=4)

        assert attendance.effective_total == 3
        assert attendance.percentage == 100
        assert attendance.met is True

    def test_all_weeks_excused_is_undetermined(self):
        logs = [WeeklyLog(week_number=1, status="EXCUSED")]

        assert calculate_weekly_attendance(logs, total_weeks=1) is None

    def test_threshold_is_inclusive(self):
        statuses = ["VERIFIED"] * 3 + ["REJECTED"]
        attendance = calculate_weekly_attendance(make_assignment(statuses).logs, total_weeks=4)

        assert attendance.percentage == 75
        assert attendance.met is True


class TestWeeklyEligibility:

    def test_both_years_met(self):
        assignments = [
            make_assignment(["VERIFIED"] * 4, year_level=YearLevel.YEAR_1, assignment_id="A1"),
            make_assignment(["MANUAL"] * 4, year_level=YearLevel.YEAR_2, assignment_id="A2"),
        ]

        progress = WeeklyEligibilityEvaluator().evaluate(assignments)

        assert progress.year1_met is True
        assert progress.year2_met is True
        assert progress.all_met is True

    def test_missing_year_is_not_met(self):
        progress = WeeklyEligibilityEvaluator().evaluate(
            [make_assignment(["VERIFIED"] * 4, year_level=YearLevel.YEAR_1)]
        )

        assert progress.year1_met is True
        assert progress.year2_met is False
        assert progress.all_met is False

    def test_fully_excused_year_is_not_met(self):
        progress = WeeklyEligibilityEvaluator().evaluate(
            [make_assignment(["EXCUSED"] * 4, year_level=YearLevel.YEAR_1)]
        )

        assert progress.year1_met is False

    @pytest.mark.parametrize("threshold,expected", [(50, True), (75, False)])
    def test_weekly_threshold_from_requirements(self, threshold, expected):
        evaluator = WeeklyEligibilityEvaluator(RequirementScale(weekly_attendance_threshold=threshold))
        assignment = make_assignment(["VERIFIED", "REJECTED"])

        assert evaluator.assignment_attendance(assignment).met is expected
