"""
Unit tests for the performance value objects.
"""
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from performance_engine.models.basketball import ShotTally
from performance_engine.models.performance import (
    BasePerformanceMetric,
    MetricType,
    PerformanceSession,
    ProgramType,
    TimePeriod,
    ValidationResult,
)
from performance_engine.models.swimming import (
    SwimmingSkillLevel,
    SwimmingStroke,
    classify_swim_time,
)


def _metric(**overrides):
    fields = dict(id="m1", title="50m Freestyle", type=MetricType.TIME, category="times")
    fields.update(overrides)
    return BasePerformanceMetric(**fields)


class TestTimeMetricInvariant:
    """Time metric values are seconds or an MM:SS.ss string."""

    @pytest.mark.parametrize("value", [31.2, 0, "00:31.20", "120:00.00"])
    def test_valid_time_values(self, value):
        assert _metric(value=value).value == value

    @pytest.mark.parametrize("value", ["31.2", "0:31.20", "00:61.00", -1])
    def test_invalid_time_values(self, value):
        with pytest.raises(ValidationError):
            _metric(value=value)

    def test_other_types_accept_free_strings(self):
        assert _metric(type=MetricType.SCORE, value="B+").value == "B+"


class TestValueObjects:
    """Tests for immutability, serialization and ranges."""

    def test_models_are_frozen(self):
        metric = _metric(value=31.2)
        with pytest.raises(ValidationError):
            metric.value = 30.0

    def test_camel_case_round_trip(self):
        metric = _metric(value=31.2, personal_best=30.9)
        payload = metric.model_dump(by_alias=True, mode="json")

        assert payload["personalBest"] == 30.9
        assert BasePerformanceMetric.model_validate(payload) == metric

    @pytest.mark.parametrize("field, value", [("rating", 6), ("difficulty", 0), ("duration", -5)])
    def test_session_ranges(self, field, value):
        fields = dict(
            id="s", date=datetime(2025, 1, 1), program=ProgramType.SWIMMING,
            session_type="training", duration=30,
        )
        fields[field] = value
        with pytest.raises(ValidationError):
            PerformanceSession(**fields)

    def test_session_date_is_naive_utc(self):
        session = PerformanceSession(
            id="s", date=datetime(2025, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2))),
            program=ProgramType.SWIMMING, session_type="training", duration=30,
        )
        assert session.date == datetime(2025, 1, 1, 10, 0)
        assert session.date.tzinfo is None

    def test_period_days(self):
        assert TimePeriod.WEEK.days == 7
        assert TimePeriod.ALL.days is None

    def test_validation_result_truthiness(self):
        assert ValidationResult.from_errors([])
        assert not ValidationResult.from_errors(["bad"])

    def test_shot_tally_accuracy(self):
        assert ShotTally(made=3, attempted=4).accuracy == 75.0
        assert ShotTally().accuracy is None


class TestSwimmingStandards:
    """Tests for qualifying-time classification."""

    def test_highest_level_met(self):
        assert classify_swim_time(SwimmingStroke.FREESTYLE, 50, 37.5) is SwimmingSkillLevel.ADVANCED

    def test_slower_than_beginner(self):
        assert classify_swim_time(SwimmingStroke.FREESTYLE, 50, 90.0) is None

    def test_sentinel_and_unknown_distance(self):
        assert classify_swim_time(SwimmingStroke.BUTTERFLY, 100, 0) is None
        assert classify_swim_time(SwimmingStroke.BUTTERFLY, 75, 60.0) is None
