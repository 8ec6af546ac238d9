"""
Servants Prep progress engine

Attendance, exam and graduation eligibility calculations, access code
validation and secure code generation for a multi-year mentorship program.
"""

from .config import Settings, get_settings, setup_logging
from .exceptions import (
    AccessCodeNotFoundError,
    CodeGenerationError,
    EnrollmentNotFoundError,
    ServantsPrepError,
    WeeklyCodeGradeMismatchError,
)
from .services import InMemoryProgressRepository, ProgressRepository, ProgressService

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "AccessCodeNotFoundError",
    "CodeGenerationError",
    "EnrollmentNotFoundError",
    "ServantsPrepError",
    "WeeklyCodeGradeMismatchError",
    "InMemoryProgressRepository",
    "ProgressRepository",
    "ProgressService",
]
