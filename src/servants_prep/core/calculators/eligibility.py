#!/usr/bin/env python3
"""
ELIGIBILITY EVALUATOR - Graduation decisions for lessons/exams and weekly classes

ACADEMIC DOMAIN:
✅ Attendance Met: Lesson attendance >= 75% (exam days excluded)
✅ Overall Average Met: Mean of all exam scores >= 75%
✅ All Sections Met: Every section average >= 60%
✅ Eligible: All three flags

SUPPLEMENTAL WEEKLY DOMAIN:
✅ Weekly Attendance: (VERIFIED + MANUAL) / (total weeks - EXCUSED) >= 75%
✅ Year Progress: Year 1 and Year 2 assignments must each meet the threshold

POLICY:
- Academic flags default to True when their metric has no data yet; a student
  is never marked ineligible for lessons or exams that have not happened.
- Weekly assignments are different: a missing assignment, or one with every
  week excused, does not count as met.

Priority: CRITICAL - Graduation decision
Dependencies: attendance and exam calculators
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from ..models.calculations import (
    AttendanceSummary,
    EligibilitySnapshot,
    ExamSummary,
    RequirementScale,
    WeeklyAttendance,
    WeeklyProgress,
)
from ..models.records import (
    AttendanceRecord,
    ExamScore,
    WeeklyAssignment,
    WeeklyLog,
    WeeklyLogStatus,
    YearLevel,
)
from .attendance import AttendanceCalculator
from .exams import ExamScoreAggregator

logger = logging.getLogger(__name__)

WEEKLY_PRESENT_STATUSES = {WeeklyLogStatus.VERIFIED.value, WeeklyLogStatus.MANUAL.value}


class GraduationEligibilityEvaluator:
    """Combine attendance and exam results into one graduation decision"""

    def __init__(self, requirements: Optional[RequirementScale] = None):
        self.requirements = requirements or RequirementScale()
        self.attendance_calculator = AttendanceCalculator(self.requirements)
        self.exam_aggregator = ExamScoreAggregator(self.requirements)
        self.calculation_log: List[str] = []

    def evaluate(
        self,
        attendance_records: Iterable[AttendanceRecord],
        exam_scores: Iterable[ExamScore],
        student_id: Optional[str] = None,
    ) -> EligibilitySnapshot:
        """
        Evaluate graduation eligibility for one student

        Args:
            attendance_records: Lesson attendance (exam days are filtered here)
            exam_scores: Exam scores already scoped to the student's year level
            student_id: Used for logging only

        Returns:
            EligibilitySnapshot with the three flags and the numbers behind them
        """
        self.calculation_log = [f"🎓 Evaluating eligibility for student {student_id or '(unknown)'}"]

        attendance = self.attendance_calculator.summarize(attendance_records)
        exams = self.exam_aggregator.summarize(exam_scores)
        self.calculation_log.extend(self.attendance_calculator.get_calculation_log())
        self.calculation_log.extend(self.exam_aggregator.get_calculation_log())

        snapshot = self.combine(attendance, exams)

        self.calculation_log.append(
            f"{'✅' if snapshot.eligible else '❌'} Eligible: {snapshot.eligible} "
            f"(attendance={snapshot.attendance_met}, average={snapshot.overall_average_met}, "
            f"sections={snapshot.all_sections_met})"
        )
        logger.debug(f"Eligibility for {student_id}: {snapshot.eligible}")
        return snapshot

    @staticmethod
    def combine(attendance: AttendanceSummary, exams: ExamSummary) -> EligibilitySnapshot:
        """Apply the no-data-is-not-penalized policy and build the snapshot"""
        attendance_met = attendance.met if attendance.is_determined else True

        return EligibilitySnapshot(
            attendance_met=attendance_met,
            overall_average_met=exams.overall_average_met,
            all_sections_met=exams.all_sections_met,
            attendance_percentage=attendance.percentage,
            overall_average=exams.overall_average,
            section_averages=exams.section_averages,
        )

    def get_calculation_log(self) -> List[str]:
        return self.calculation_log


def calculate_weekly_attendance(
    logs: Iterable[WeeklyLog], total_weeks: int, threshold: float = 75.0
) -> Optional[WeeklyAttendance]:
    """
    Weekly class attendance for one assignment

    Weeks without a log, and REJECTED weeks, count as absent.

    Returns:
        WeeklyAttendance, or None when every scheduled week is excused
    """
    present = 0
    excused = 0
    for log in logs:
        status = log.status.value if isinstance(log.status, Enum) else log.status
        if status in WEEKLY_PRESENT_STATUSES:
            present += 1
        elif status == WeeklyLogStatus.EXCUSED.value:
            excused += 1

    effective_total = total_weeks - excused
    if effective_total <= 0:
        return None

    percentage = present * 100 / effective_total
    return WeeklyAttendance(
        present=present,
        excused=excused,
        absent=total_weeks - present - excused,
        effective_total=effective_total,
        percentage=percentage,
        met=percentage >= threshold,
    )


class WeeklyEligibilityEvaluator:
    """Weekly supplemental class requirement across both program years"""

    def __init__(self, requirements: Optional[RequirementScale] = None):
        self.requirements = requirements or RequirementScale()

    def assignment_attendance(self, assignment: WeeklyAssignment) -> Optional[WeeklyAttendance]:
        return calculate_weekly_attendance(
            assignment.logs,
            assignment.total_weeks,
            self.requirements.weekly_attendance_threshold,
        )

    def _year_met(self, assignments: List[WeeklyAssignment], year_level: YearLevel) -> bool:
        for assignment in assignments:
            if assignment.year_level == year_level:
                attendance = self.assignment_attendance(assignment)
                return attendance is not None and attendance.met
        return False

    def evaluate(self, assignments: Iterable[WeeklyAssignment]) -> WeeklyProgress:
        """Year flags come from the first assignment found for each year level"""
        assignments = list(assignments)
        return WeeklyProgress(
            year1_met=self._year_met(assignments, YearLevel.YEAR_1),
            year2_met=self._year_met(assignments, YearLevel.YEAR_2),
        )
