"""
Unit Tests for Roles, Display Labels and the Weekly Calendar
"""

from datetime import date, datetime, time

import pytest

from servants_prep.core.labels import (
    Known,
    Unknown,
    attendance_status_label,
    student_grade_display_name,
    weekly_grade_display_name,
)
from servants_prep.core.models import StudentGrade, WeeklyGrade
from servants_prep.core.roles import (
    Capability,
    UserRole,
    capabilities_for,
    has_capability,
    is_admin,
    is_read_only_admin,
    role_display_name,
)
from servants_prep.core.weeks import (
    assignment_weeks,
    code_valid_until,
    parse_code_prefix,
    week_number,
    week_start,
)


class TestRoles:

    def test_priest_is_read_only_admin(self):
        assert is_admin(UserRole.PRIEST)
        assert is_read_only_admin(UserRole.PRIEST)
        assert not has_capability(UserRole.PRIEST, Capability.MANAGE_DATA)
        assert not has_capability(UserRole.PRIEST, Capability.ASSIGN_MENTORS)
        assert has_capability(UserRole.PRIEST, Capability.VIEW_REGISTRATIONS)

    @pytest.mark.parametrize("role", [UserRole.SUPER_ADMIN, UserRole.SERVANT_PREP])
    def test_program_leaders_manage_everything(self, role):
        assert is_admin(role)
        assert not is_read_only_admin(role)
        assert has_capability(role, Capability.REVIEW_ASYNC_NOTES)
        assert has_capability(role, Capability.MANAGE_WEEKLY_ATTENDANCE)

    def test_only_super_admin_manages_all_users(self):
        holders = [role for role in UserRole if has_capability(role, Capability.MANAGE_ALL_USERS)]

        assert holders == [UserRole.SUPER_ADMIN]

    def test_only_students_submit_async_content(self):
        holders = [role for role in UserRole if has_capability(role, Capability.SUBMIT_ASYNC_CONTENT)]

        assert holders == [UserRole.STUDENT]

    def test_mentor(self):
        assert not is_admin(UserRole.MENTOR)
        assert has_capability("MENTOR", Capability.SELF_ASSIGN_MENTEES)

    def test_unknown_role_has_no_capabilities(self):
        assert capabilities_for("JANITOR") == frozenset()
        assert not is_admin("JANITOR")

    def test_role_display_name(self):
        assert role_display_name(UserRole.SERVANT_PREP).label == "Servants Prep Leader"
        assert role_display_name("JANITOR") == Unknown("JANITOR")


class TestLabels:

    def test_known_grade(self):
        label = weekly_grade_display_name(WeeklyGrade.GRADE_6_PLUS)

        assert label == Known("GRADE_6_PLUS", "6th Grade+")
        assert label.is_known

    def test_unknown_falls_back_to_raw(self):
        label = student_grade_display_name("GRADE_13")

        assert isinstance(label, Unknown)
        assert label.label == "GRADE_13"
        assert not label.is_known

    def test_student_grade_and_status(self):
        assert student_grade_display_name(StudentGrade.COLLEGE_JUNIOR).label == "College Junior"
        assert attendance_status_label("LATE").label == "Late"


class TestWeeks:

    def test_week_start_is_sunday(self):
        # 2025-10-15 is a Wednesday
        assert week_start(date(2025, 10, 15)) == datetime(2025, 10, 12)
        assert week_start(datetime(2025, 10, 12, 18, 30)) == datetime(2025, 10, 12)

    def test_code_valid_until_end_of_day_a_week_later(self):
        valid_until = code_valid_until(date(2025, 10, 12))

        assert valid_until.date() == date(2025, 10, 19)
        assert valid_until.time() == time.max

    def test_parse_code_prefix(self):
        assert parse_code_prefix("KG-AB3K") == WeeklyGrade.KINDERGARTEN
        assert parse_code_prefix("SP-AB3KXYZW") is None

    def test_assignment_weeks(self):
        weeks = assignment_weeks(date(2025, 9, 7), 3)

        assert weeks == [(1, date(2025, 9, 7)), (2, date(2025, 9, 14)), (3, date(2025, 9, 21))]

    def test_week_number(self):
        assert week_number(date(2025, 9, 7), date(2025, 9, 21)) == 3
        assert week_number(date(2025, 9, 7), date(2025, 8, 31)) is None
