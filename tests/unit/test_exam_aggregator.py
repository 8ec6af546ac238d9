"""
Unit Tests for Exam Score Aggregator

Tests for:
- Section averages and the section minimum
- Overall average across all scores
- Missing data defaults
"""

import math

import pytest

from servants_prep.core.calculators.exams import (
    ExamScoreAggregator,
    calculate_overall_average,
    calculate_section_averages,
)
from servants_prep.core.models import ExamScore

from conftest import make_scores


class TestSectionAverages:

    def test_average_per_section(self):
        scores = make_scores({"Bible": [70, 90], "Dogma": [50]})

        averages = calculate_section_averages(scores)

        assert [(s.section_id, s.average) for s in averages] == [("Bible", 80), ("Dogma", 50)]
        assert averages[0].passing is True
        assert averages[1].passing is False

    def test_section_minimum_is_inclusive(self):
        averages = calculate_section_averages(make_scores({"Liturgy": [60]}))

        assert averages[0].passing is True

    def test_no_scores_no_sections(self):
        assert calculate_section_averages([]) == []


class TestOverallAverage:

    def test_mean_of_scores_not_mean_of_sections(self):
        # Section means are 100 and 40; mean of the four scores is 55
        scores = make_scores({"Bible": [100], "Dogma": [40, 40, 40]})

        assert calculate_overall_average(scores) == 55

    def test_no_scores_is_undetermined(self):
        assert calculate_overall_average([]) is None

    def test_non_finite_score_propagates(self):
        scores = make_scores({"Bible": [80, float("nan")]})

        assert math.isnan(calculate_overall_average(scores))

    def test_from_points(self):
        score = ExamScore.from_points("Bible", score=9, max_score=10)

        assert score.percentage == 90


class TestExamScoreAggregator:

    def test_summary_flags(self):
        summary = ExamScoreAggregator().summarize(make_scores({"Bible": [80, 90], "Dogma": [55]}))

        assert summary.overall_average == pytest.approx(75)
        assert summary.overall_average_met is True
        assert summary.all_sections_met is False

    def test_no_scores_defaults_to_met(self):
        summary = ExamScoreAggregator().summarize([])

        assert summary.overall_average is None
        assert summary.overall_average_met is True
        assert summary.all_sections_met is True
        assert summary.section_averages == []

    def test_calculation_log(self):
        aggregator = ExamScoreAggregator()
        aggregator.summarize(make_scores({"Bible": [80]}))

        log = aggregator.get_calculation_log()
        assert any("Bible" in line for line in log)
