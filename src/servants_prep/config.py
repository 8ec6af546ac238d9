"""
Runtime settings and logging setup

Settings are read from SERVANTS_PREP_* environment variables (or a .env file).
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.models.calculations import RequirementScale

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SERVANTS_PREP_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = "INFO"

    # ---- Graduation thresholds (percent) ----
    attendance_threshold: float = 75.0
    overall_average_threshold: float = 75.0
    section_minimum: float = 60.0
    weekly_attendance_threshold: float = 75.0

    # ---- Codes and passwords ----
    invite_code_prefix: str = "SP"
    invite_code_length: int = Field(8, ge=1)
    weekly_code_length: int = Field(4, ge=1)
    temp_password_length: int = Field(12, ge=4)
    code_generation_attempts: int = Field(5, ge=1)

    # ---- Batch reports ----
    data_dir: Path = Path("data")

    def requirements(self) -> RequirementScale:
        return RequirementScale(
            attendance_threshold=self.attendance_threshold,
            overall_average_threshold=self.overall_average_threshold,
            section_minimum=self.section_minimum,
            weekly_attendance_threshold=self.weekly_attendance_threshold,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str = None) -> logging.Logger:
    """Configure the root logger once and return the package logger"""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    logger = logging.getLogger("servants_prep")
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    return logger
