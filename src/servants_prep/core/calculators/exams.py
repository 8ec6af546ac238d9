#!/usr/bin/env python3
"""
EXAM SCORE AGGREGATOR - Section averages and the overall exam average

CALCULATION TYPES:
✅ Section Average: Mean percentage of every score in a section (passing >= 60)
✅ Overall Average: Mean of ALL individual scores across sections (not a mean of means)
✅ All Sections Passing: Every section with scores is at or above the minimum

EDGE CASES HANDLED:
- Section with no scores: Not reported (neither passing nor failing)
- No scores at all: Overall average is None
- Non-finite scores: Propagate through the arithmetic unchanged

Priority: CRITICAL - Graduation requirement
Dependencies: models.calculations for result types
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models.calculations import ExamSummary, RequirementScale, SectionAverage
from ..models.records import ExamScore

logger = logging.getLogger(__name__)


def group_scores_by_section(scores: Iterable[ExamScore]) -> Dict[str, List[float]]:
    """Group percentages by section, keeping first-seen section order"""
    scores_by_section: Dict[str, List[float]] = {}
    for score in scores:
        if score.section_id not in scores_by_section:
            scores_by_section[score.section_id] = []
        scores_by_section[score.section_id].append(score.percentage)
    return scores_by_section


def calculate_section_averages(
    scores: Iterable[ExamScore], section_minimum: float = 60.0
) -> List[SectionAverage]:
    section_averages = []
    for section_id, section_scores in group_scores_by_section(scores).items():
        average = sum(section_scores) / len(section_scores)
        section_averages.append(
            SectionAverage(
                section_id=section_id,
                average=average,
                scores=section_scores,
                passing=average >= section_minimum,
            )
        )
    return section_averages


def calculate_overall_average(scores: Iterable[ExamScore]) -> Optional[float]:
    all_scores = [score.percentage for score in scores]
    if not all_scores:
        return None
    return sum(all_scores) / len(all_scores)


class ExamScoreAggregator:
    """Aggregate a student's exam scores against the exam requirements"""

    def __init__(self, requirements: Optional[RequirementScale] = None):
        self.requirements = requirements or RequirementScale()
        self.calculation_log: List[str] = []

    def summarize(self, scores: Iterable[ExamScore]) -> ExamSummary:
        """
        Calculate section averages and the overall average

        Missing data is never penalized: with no scores the overall average is
        None and both "met" flags are True.
        """
        self.calculation_log = []
        scores = list(scores)

        section_averages = calculate_section_averages(scores, self.requirements.section_minimum)
        overall_average = calculate_overall_average(scores)

        if overall_average is None:
            overall_average_met = True
            self.calculation_log.append("📊 No exam scores yet")
        else:
            overall_average_met = overall_average >= self.requirements.overall_average_threshold
            self.calculation_log.append(
                f"📊 Overall average: {overall_average:.2f}% over {len(scores)} scores"
            )

        # Vacuously true with no sections
        all_sections_met = all(section.passing for section in section_averages)

        for section in section_averages:
            status = "✅" if section.passing else "❌"
            self.calculation_log.append(
                f"   {status} {section.section_id}: {section.average:.2f}% ({len(section.scores)} scores)"
            )

        return ExamSummary(
            section_averages=section_averages,
            overall_average=overall_average,
            overall_average_met=overall_average_met,
            all_sections_met=all_sections_met,
            required_average=self.requirements.overall_average_threshold,
            required_minimum=self.requirements.section_minimum,
        )

    def get_calculation_log(self) -> List[str]:
        return self.calculation_log
