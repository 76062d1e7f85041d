"""
Unit tests for program-agnostic aggregation.
"""
from datetime import date, datetime, timezone

import pytest

from performance_engine.models.performance import (
    PerformanceAnalytics,
    PerformanceSession,
    ProgramType,
    TimePeriod,
)
from performance_engine.services.performance.aggregator import (
    AnalyticsAggregator,
    RecommendationRule,
    average_rating,
    build_comparison,
    consistency_score,
    evaluate_rules,
    filter_sessions_by_period,
    improvement_percentage,
    total_duration,
    within_period,
)


def _session(day, duration=60, rating=None):
    return PerformanceSession(
        id=f"s{day}",
        date=datetime(2025, 3, day, 9, 0),
        program=ProgramType.SWIMMING,
        session_type="training",
        duration=duration,
        rating=rating,
    )


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

class TestTotals:
    """Tests for duration and rating totals."""

    def test_duration_is_summed_not_averaged(self):
        assert total_duration([_session(1, 60), _session(2, 45)]) == 105

    def test_unrated_sessions_are_excluded_from_average(self):
        """One unrated session and one rated 4 average to 4, not 2."""
        assert average_rating([_session(1, rating=None), _session(2, rating=4)]) == 4

    def test_no_ratings_average_is_zero(self):
        assert average_rating([_session(1)]) == 0
        assert average_rating([]) == 0


class TestImprovementAndConsistency:
    """Tests for series scores."""

    def test_improvement_rounds_to_one_decimal(self):
        assert improvement_percentage(28.5, 26.3) == pytest.approx(7.7)

    @pytest.mark.parametrize("first, last", [(0, 26.3), (28.5, 0), (None, 26.3)])
    def test_sentinel_endpoint_gives_zero(self, first, last):
        assert improvement_percentage(first, last) == 0

    def test_identical_values_are_fully_consistent(self):
        assert consistency_score([30.0, 30.0, 30.0]) == 100

    def test_too_few_values_score_zero(self):
        assert consistency_score([30.0]) == 0
        assert consistency_score([30.0, 0, None]) == 0

    def test_sentinels_are_ignored(self):
        assert consistency_score([30.0, 0, 30.0, None]) == 100

    def test_score_is_clamped(self):
        """A wildly spread series never goes below 0."""
        assert consistency_score([1.0, 1000.0]) >= 0

    def test_comparison_lower_is_better(self):
        comparison = build_comparison("Pace", previous=95.0, current=92.0, period="month", lower_is_better=True)
        assert comparison.improvement == pytest.approx(3.0)
        assert comparison.percentage_change == pytest.approx(3.2)


# ---------------------------------------------------------------------------
# Period filtering
# ---------------------------------------------------------------------------

class TestPeriodFiltering:
    """Tests for windowed session filtering."""

    def test_window_ends_at_latest_session_by_default(self):
        sessions = [_session(1), _session(5), _session(10)]
        kept = filter_sessions_by_period(sessions, TimePeriod.WEEK)
        assert [s.id for s in kept] == ["s5", "s10"]

    def test_explicit_reference_date(self):
        sessions = [_session(1), _session(5), _session(10)]
        kept = filter_sessions_by_period(sessions, TimePeriod.WEEK, reference_date=date(2025, 3, 6))
        assert [s.id for s in kept] == ["s1", "s5"]

    def test_all_keeps_everything(self):
        sessions = [_session(1), _session(28)]
        assert filter_sessions_by_period(sessions, TimePeriod.ALL) == sessions

    def test_reference_day_is_inclusive(self):
        assert within_period(datetime(2025, 3, 6, 23, 0), TimePeriod.WEEK, date(2025, 3, 6))

    def test_aware_reference_is_compared_as_utc(self):
        reference = datetime(2025, 3, 6, 12, 0, tzinfo=timezone.utc)
        assert within_period(datetime(2025, 3, 6, 11, 0), TimePeriod.WEEK, reference)
        assert not within_period(datetime(2025, 3, 6, 13, 0), TimePeriod.WEEK, reference)


# ---------------------------------------------------------------------------
# Rules and aggregator
# ---------------------------------------------------------------------------

class TestRecommendationRules:
    """Tests for threshold rules."""

    def test_matching_rules_in_table_order(self):
        analytics = PerformanceAnalytics(program=ProgramType.SWIMMING, period=TimePeriod.MONTH, total_sessions=1)
        rules = (
            RecommendationRule("few", lambda a: a.total_sessions < 3, "Train more"),
            RecommendationRule("many", lambda a: a.total_sessions > 10, "Rest more"),
            RecommendationRule("count", lambda a: True, lambda a: f"{a.total_sessions} session(s)"),
        )
        assert evaluate_rules(analytics, rules) == ["Train more", "1 session(s)"]


class TestAnalyticsAggregator:
    """Tests for the aggregator's totals."""

    def test_summary_totals(self):
        sessions = [_session(1, 60, rating=None), _session(2, 30, rating=4)]
        analytics = AnalyticsAggregator().summarize(ProgramType.SWIMMING, sessions, TimePeriod.MONTH, series=[30, 30])

        assert analytics.total_sessions == 2
        assert analytics.total_duration == 90
        assert analytics.average_rating == 4
        assert analytics.consistency == 100

    def test_consistency_function_is_swappable(self):
        aggregator = AnalyticsAggregator(consistency_fn=lambda values: 42.0)
        analytics = aggregator.summarize(ProgramType.SWIMMING, [], TimePeriod.MONTH, series=[])
        assert analytics.consistency == 42.0

    def test_no_series_leaves_consistency_unset(self):
        analytics = AnalyticsAggregator().summarize(ProgramType.SWIMMING, [], TimePeriod.MONTH)
        assert analytics.consistency is None
