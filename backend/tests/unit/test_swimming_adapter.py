"""
Unit tests for swim record normalization.

Covers the time codec, stroke and pool normalization, improvement,
personal bests and the progression chart with its goal line.
"""
from datetime import date

import pytest

from performance_engine.models.performance import TimePeriod
from performance_engine.models.swimming import PoolSize, SwimmingStroke
from performance_engine.services.performance.adapter import (
    SwimmingDataAdapter,
    format_time_change,
    parse_record_date,
    seconds_to_time_string,
    time_string_to_seconds,
)


@pytest.fixture
def adapter():
    return SwimmingDataAdapter()


# ---------------------------------------------------------------------------
# Time codec
# ---------------------------------------------------------------------------

class TestTimeParsing:
    """Tests for MM:SS.ss parsing."""

    def test_minutes_and_seconds(self):
        assert time_string_to_seconds("01:05.50") == pytest.approx(65.5)

    def test_bare_number_is_seconds(self):
        assert time_string_to_seconds("27.8") == pytest.approx(27.8)
        assert time_string_to_seconds(31.2) == pytest.approx(31.2)

    @pytest.mark.parametrize("value", [
        "", "   ", None, "00:00.00", "abc", "1:2:3", "-5",
        "inf", "Infinity", "1e400", "nan", float("inf"),
    ])
    def test_unusable_input_is_sentinel(self, value):
        """Anything that is not a positive time means 'no time recorded'."""
        assert time_string_to_seconds(value) == 0

    @pytest.mark.parametrize("text", ["00:26.30", "01:05.50", "02:00.00", "17:59.99", "120:00.01"])
    def test_format_inverts_parse(self, text):
        assert seconds_to_time_string(time_string_to_seconds(text)) == text


class TestTimeFormatting:
    """Tests for seconds to MM:SS.ss formatting."""

    def test_zero_is_sentinel_string(self):
        assert seconds_to_time_string(0) == "00:00.00"
        assert seconds_to_time_string(None) == "00:00.00"

    def test_rounding_never_shows_sixty_seconds(self):
        """59.999s rounds up into the next minute."""
        assert seconds_to_time_string(59.999) == "01:00.00"

    def test_time_change_sign(self):
        assert format_time_change(-0.5) == "-0.50"
        assert format_time_change(0.25) == "+0.25"
        assert format_time_change(0) == "0.00"


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestStrokeNormalization:
    """Tests for the stroke synonym table."""

    @pytest.mark.parametrize("raw, expected", [
        ("free", SwimmingStroke.FREESTYLE),
        ("FREESTYLE", SwimmingStroke.FREESTYLE),
        ("Back", SwimmingStroke.BACKSTROKE),
        ("breast", SwimmingStroke.BREASTSTROKE),
        ("Fly", SwimmingStroke.BUTTERFLY),
        ("IM", SwimmingStroke.INDIVIDUAL_MEDLEY),
        ("medley", SwimmingStroke.INDIVIDUAL_MEDLEY),
        ("Individual Medley", SwimmingStroke.INDIVIDUAL_MEDLEY),
        ("individual_medley", SwimmingStroke.INDIVIDUAL_MEDLEY),
    ])
    def test_synonyms_map_to_canonical_stroke(self, adapter, raw, expected):
        assert adapter.normalize_stroke(raw) is expected

    @pytest.mark.parametrize("raw", ["", None, "doggy paddle"])
    def test_unknown_stroke_defaults_to_freestyle(self, adapter, raw):
        assert adapter.normalize_stroke(raw) is SwimmingStroke.FREESTYLE


class TestPoolSizeNormalization:
    """Tests for pool size substring matching."""

    @pytest.mark.parametrize("raw, expected", [
        ("25m", PoolSize.POOL_25M),
        ("Short course 25 metres", PoolSize.POOL_25M),
        ("50m", PoolSize.POOL_50M),
        ("olympic 50", PoolSize.POOL_50M),
        ("17m", PoolSize.POOL_25M),
        (None, PoolSize.POOL_25M),
    ])
    def test_pool_size(self, adapter, raw, expected):
        assert adapter.normalize_pool_size(raw) is expected


# ---------------------------------------------------------------------------
# Improvement and charts
# ---------------------------------------------------------------------------

class TestImprovement:
    """Tests for event improvement percentage."""

    def test_first_to_latest_by_date(self, adapter, swim_event):
        """28.50 then 26.30 is a 7.7% improvement, whatever the input order."""
        assert adapter.calculate_improvement(swim_event) == pytest.approx(7.7)

    def test_fewer_than_two_times_is_zero(self, adapter):
        event = {"allTimes": [{"time": "00:30.00", "date": "2025-01-01"}]}
        assert adapter.calculate_improvement(event) == 0

    def test_regression_is_negative(self, adapter):
        event = {"allTimes": [
            {"time": "00:30.00", "date": "2025-01-01"},
            {"time": "00:31.00", "date": "2025-02-01"},
        ]}
        assert adapter.calculate_improvement(event) < 0

    def test_sentinel_endpoint_is_zero(self, adapter):
        event = {"allTimes": [
            {"time": "00:00.00", "date": "2025-01-01"},
            {"time": "00:31.00", "date": "2025-02-01"},
        ]}
        assert adapter.calculate_improvement(event) == 0

    def test_explicit_percentage_wins(self, adapter, swim_event):
        event = dict(swim_event, improvement={"percentage": 2.5})
        assert adapter.calculate_improvement(event) == 2.5


class TestChartData:
    """Tests for the progression chart with goal and personal-best lines."""

    def test_personal_best_and_goal_lines(self, adapter, swim_times):
        chart = adapter.generate_chart_data(swim_times)

        assert [p.value for p in chart.data] == pytest.approx([28.5, 27.8, 26.3])
        assert [p.label for p in chart.data] == ["03:01", "03:05", "03:10"]
        assert chart.personal_best_line == pytest.approx(26.3)
        assert chart.goal_line == pytest.approx(25.51, abs=0.01)

    def test_explicit_goal_is_kept(self, adapter, swim_times):
        chart = adapter.generate_chart_data(swim_times, goal=25.0)
        assert chart.goal_line == 25.0

    def test_no_recorded_time_means_no_lines(self, adapter):
        chart = adapter.generate_chart_data([{"time": "00:00.00", "date": "2025-03-01"}])
        assert chart.personal_best_line is None
        assert chart.goal_line is None


# ---------------------------------------------------------------------------
# Times history
# ---------------------------------------------------------------------------

class TestTimesHistory:
    """Tests for personal bests, comparisons and period filtering."""

    def test_personal_best_marked_newest_first(self, adapter, swim_times):
        times = adapter.mark_personal_bests(adapter.transform_all_times(swim_times))

        assert [t.date for t in times] == ["2025-03-10", "2025-03-05", "2025-03-01"]
        assert [t.is_pb for t in times] == [True, False, False]

    def test_defaults_fill_missing_fields(self, adapter):
        (detail,) = adapter.transform_all_times([{"time": "00:31.00"}])
        assert detail.id == "time_0"
        assert detail.venue == "Academy Pool"
        assert detail.time_in_seconds == pytest.approx(31.0)

    def test_compare_times_faster_is_improvement(self, adapter):
        comparison = adapter.compare_times(current=27.8, previous=28.5)
        assert comparison.is_improvement
        assert comparison.sign == "-"
        assert comparison.difference == pytest.approx(0.7)

    def test_filter_by_period_uses_reference_date(self, adapter, swim_times):
        kept = adapter.filter_by_period(swim_times, TimePeriod.WEEK, date(2025, 3, 10))
        assert {t["date"] for t in kept} == {"2025-03-05", "2025-03-10"}

    def test_filter_all_keeps_everything(self, adapter, swim_times):
        assert adapter.filter_by_period(swim_times, TimePeriod.ALL, date(2020, 1, 1)) == swim_times

    def test_undated_entries_drop_out_of_windows(self, adapter):
        kept = adapter.filter_by_period([{"time": "00:30.00"}], TimePeriod.YEAR, date(2025, 1, 1))
        assert kept == []

    def test_display_dates_parse(self):
        assert parse_record_date("05 Mar 2025").day == 5
        assert parse_record_date("not a date") is None


# ---------------------------------------------------------------------------
# Cards and detail
# ---------------------------------------------------------------------------

class TestEventViews:
    """Tests for the overview card and event detail."""

    def test_card_derives_best_time_and_latest_swim(self, adapter, swim_event):
        card = adapter.transform_performance_card(swim_event)

        assert card.title == "100m Freestyle"
        assert card.stroke is SwimmingStroke.FREESTYLE
        assert card.pool_size is PoolSize.POOL_25M
        assert card.best_time == "00:26.30"
        assert card.last_swam == "2025-03-10"
        assert card.total_races == 3
        assert card.improvement == pytest.approx(7.7)

    def test_card_defaults(self, adapter):
        card = adapter.transform_performance_card({"stroke": "fly"})
        assert card.distance == 50
        assert card.best_time == "00:00.00"
        assert card.total_races == 0
        assert card.improvement == 0

    def test_card_with_infinite_best_time(self, adapter):
        card = adapter.transform_performance_card({"stroke": "free", "bestTime": "inf"})
        assert card.best_time == "00:00.00"

        card = adapter.transform_performance_card({"stroke": "free", "bestTimeInSeconds": float("inf")})
        assert card.best_time_in_seconds == 0

    def test_stats_accept_bare_improvement_number(self, adapter):
        stats = adapter.transform_stats({"statistics": {"improvement": 5.0}, "allTimes": []})
        assert stats.improvement.percentage == 5.0
        assert stats.improvement.time_change == "0.00"

    def test_stats_ignore_non_object_statistics(self, adapter, swim_event):
        stats = adapter.transform_stats(dict(swim_event, statistics="n/a"))
        assert stats.total_races == 3
        assert stats.improvement.percentage == pytest.approx(7.7)

    def test_detail_uses_open_goal_for_goal_line(self, adapter, swim_event):
        event = dict(swim_event, goals=[
            {"targetTime": "00:27.00", "achieved": True},
            {"targetTime": "00:25.90", "label": "County"},
        ])
        detail = adapter.transform_performance_detail(event)

        assert detail.chart_data.goal_line == pytest.approx(25.9)
        assert detail.best_time.date == "2025-03-10"
        assert detail.goals[1].id == "goal_1"
        assert detail.statistics.total_races == 3
        assert detail.statistics.improvement.time_change == "-2.20"

    def test_detail_serializes_to_camel_case(self, adapter, swim_event):
        payload = adapter.transform_performance_detail(swim_event).model_dump(by_alias=True, mode="json")
        assert "allTimes" in payload
        assert "personalBestLine" in payload["chartData"]
