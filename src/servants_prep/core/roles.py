#!/usr/bin/env python3
"""
ROLE CAPABILITIES - Single table mapping each role to what it may do

ROLES:
✅ SUPER_ADMIN: Everything
✅ PRIEST: Read-only admin (views students and registrations, manages nothing)
✅ SERVANT_PREP: Program leader, manages everything except other admins
✅ MENTOR: Views and self-assigns mentees
✅ STUDENT: Submits their own weekly codes and async content

All permission questions go through ``has_capability`` so related checks
cannot drift apart.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union

from .labels import Label, lookup_label


class UserRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    PRIEST = "PRIEST"
    SERVANT_PREP = "SERVANT_PREP"
    MENTOR = "MENTOR"
    STUDENT = "STUDENT"


class Capability(str, Enum):
    ACCESS_ADMIN = "access_admin"
    MANAGE_USERS = "manage_users"
    MANAGE_STUDENTS = "manage_students"
    MANAGE_ALL_USERS = "manage_all_users"
    MANAGE_DATA = "manage_data"
    MANAGE_CURRICULUM = "manage_curriculum"
    MANAGE_EXAMS = "manage_exams"
    MANAGE_ENROLLMENTS = "manage_enrollments"
    ASSIGN_MENTORS = "assign_mentors"
    SELF_ASSIGN_MENTEES = "self_assign_mentees"
    BE_MENTOR = "be_mentor"
    VIEW_STUDENTS = "view_students"
    MANAGE_INVITE_CODES = "manage_invite_codes"
    REVIEW_REGISTRATIONS = "review_registrations"
    VIEW_REGISTRATIONS = "view_registrations"
    REVIEW_ASYNC_NOTES = "review_async_notes"
    SET_ASYNC_STATUS = "set_async_status"
    SUBMIT_ASYNC_CONTENT = "submit_async_content"
    MANAGE_WEEKLY_CLASSES = "manage_weekly_classes"
    MANAGE_WEEKLY_ATTENDANCE = "manage_weekly_attendance"
    SUBMIT_WEEKLY_CODES = "submit_weekly_codes"


_PROGRAM_MANAGEMENT = frozenset({
    Capability.ACCESS_ADMIN,
    Capability.MANAGE_USERS,
    Capability.MANAGE_STUDENTS,
    Capability.MANAGE_DATA,
    Capability.MANAGE_CURRICULUM,
    Capability.MANAGE_EXAMS,
    Capability.MANAGE_ENROLLMENTS,
    Capability.ASSIGN_MENTORS,
    Capability.BE_MENTOR,
    Capability.VIEW_STUDENTS,
    Capability.MANAGE_INVITE_CODES,
    Capability.REVIEW_REGISTRATIONS,
    Capability.VIEW_REGISTRATIONS,
    Capability.REVIEW_ASYNC_NOTES,
    Capability.SET_ASYNC_STATUS,
    Capability.MANAGE_WEEKLY_CLASSES,
    Capability.MANAGE_WEEKLY_ATTENDANCE,
})

ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.SUPER_ADMIN: _PROGRAM_MANAGEMENT | {Capability.MANAGE_ALL_USERS},
    UserRole.SERVANT_PREP: _PROGRAM_MANAGEMENT,
    UserRole.PRIEST: frozenset({
        Capability.ACCESS_ADMIN,
        Capability.VIEW_STUDENTS,
        Capability.VIEW_REGISTRATIONS,
    }),
    UserRole.MENTOR: frozenset({
        Capability.BE_MENTOR,
        Capability.SELF_ASSIGN_MENTEES,
        Capability.VIEW_STUDENTS,
    }),
    UserRole.STUDENT: frozenset({
        Capability.SUBMIT_ASYNC_CONTENT,
        Capability.SUBMIT_WEEKLY_CODES,
    }),
}

ROLE_DISPLAY_NAMES = {
    UserRole.SUPER_ADMIN.value: "Super Admin",
    UserRole.PRIEST.value: "Priest",
    UserRole.SERVANT_PREP.value: "Servants Prep Leader",
    UserRole.MENTOR.value: "Mentor",
    UserRole.STUDENT.value: "Student",
}


def capabilities_for(role: Union[UserRole, str]) -> FrozenSet[Capability]:
    """Capabilities granted to a role; unknown roles get none"""
    try:
        return ROLE_CAPABILITIES[UserRole(role)]
    except ValueError:
        return frozenset()


def has_capability(role: Union[UserRole, str], capability: Capability) -> bool:
    return capability in capabilities_for(role)


def is_admin(role: Union[UserRole, str]) -> bool:
    return has_capability(role, Capability.ACCESS_ADMIN)


def is_read_only_admin(role: Union[UserRole, str]) -> bool:
    """Admin access without any data management"""
    return is_admin(role) and not has_capability(role, Capability.MANAGE_DATA)


def role_display_name(role: Union[UserRole, str]) -> Label:
    return lookup_label(ROLE_DISPLAY_NAMES, role)
