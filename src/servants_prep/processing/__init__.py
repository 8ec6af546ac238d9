"""CSV loading and cohort reports"""

from .data_processor import ProgressDataProcessor, build_eligibility_report

__all__ = ["ProgressDataProcessor", "build_eligibility_report"]
