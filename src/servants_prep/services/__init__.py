"""Repository abstraction and the progress service built on it"""

from .progress import ProgressService, StudentAnalytics, WeeklyProgressReport
from .repository import InMemoryProgressRepository, ProgressRepository

__all__ = [
    "ProgressService",
    "StudentAnalytics",
    "WeeklyProgressReport",
    "InMemoryProgressRepository",
    "ProgressRepository",
]
