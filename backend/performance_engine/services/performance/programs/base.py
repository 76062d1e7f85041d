"""
Base Program Adapter - Abstract interface for program-specific performance logic.
"""
import math
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_snake

from performance_engine.core.config import settings
from performance_engine.core.exceptions import ProgramMismatchError
from performance_engine.core.logging import get_logger
from performance_engine.models.performance import (
    BasePerformanceMetric,
    MetricTrend,
    MetricType,
    PerformanceAnalytics,
    PerformanceChartData,
    TIME_STRING_PATTERN,
    PerformanceSession,
    ProgramPerformanceConfig,
    ProgramType,
    TimePeriod,
    TrendDirection,
    ValidationResult,
)
from performance_engine.services.performance.adapter import parse_record_date
from performance_engine.services.performance.aggregator import (
    AnalyticsAggregator,
    RecommendationRule,
    evaluate_rules,
)

logger = get_logger(__name__)

TREND_PERIOD = "vs last session"


def format_validation_errors(exc: ValidationError, prefix: Optional[str] = None) -> List[str]:
    """Flatten a pydantic ValidationError into "field: message" strings."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in (prefix, *error["loc"]) if part is not None)
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


class ProgramPerformanceAdapter(ABC):
    """
    Abstract base class for program performance adapters.

    Subclasses implement, for one program:
    - Raw record validation and transformation into metrics
    - Chart generation over sessions
    - Period analytics and recommendations
    """

    program: ClassVar[ProgramType]
    config: ClassVar[ProgramPerformanceConfig]
    session_model: ClassVar[Type[PerformanceSession]] = PerformanceSession
    recommendation_rules: ClassVar[Tuple[RecommendationRule, ...]] = ()
    default_recommendations: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, aggregator: Optional[AnalyticsAggregator] = None):
        self.aggregator = aggregator or AnalyticsAggregator()

    @abstractmethod
    def transform_metrics(self, raw_records: Sequence[Dict[str, Any]]) -> List[BasePerformanceMetric]:
        """
        Map raw records onto the common metric model.

        Args:
            raw_records: Validated raw records, in display order

        Returns:
            One metric per record, in input order
        """
        pass

    @abstractmethod
    def generate_charts(
        self,
        sessions: Sequence[PerformanceSession],
        period: TimePeriod,
    ) -> List[PerformanceChartData]:
        """
        Build the program's charts.

        Args:
            sessions: Sessions of any program; others are ignored
            period: Period label carried by each chart

        Returns:
            Charts with points in ascending date order, [] without sessions
        """
        pass

    @abstractmethod
    def calculate_analytics(
        self,
        sessions: Sequence[PerformanceSession],
        period: TimePeriod,
    ) -> PerformanceAnalytics:
        """Summarize the program's sessions for a period."""
        pass

    @abstractmethod
    def _check_fields(self, data: Dict[str, Any], errors: List[str]) -> None:
        """Append the program's field problems for one raw record."""
        pass

    @abstractmethod
    def _summarize_session(self, session: PerformanceSession) -> Dict[str, Any]:
        pass

    def check_performance_data(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Check one raw record, listing every problem found.

        Field checks run first. A record that passes them is built into
        its metric model, so anything transform_metrics would reject is
        reported here instead of raised later.
        """
        errors = self._check_common(data)
        if not isinstance(data, dict):
            return ValidationResult.from_errors(errors)

        self._check_fields(data, errors)
        if errors:
            return ValidationResult.from_errors(errors)

        try:
            self.transform_metrics([data])
        except ValidationError as exc:
            errors.extend(format_validation_errors(exc))
        return ValidationResult.from_errors(errors)

    def validate_performance_data(self, data: Dict[str, Any]) -> bool:
        return bool(self.check_performance_data(data))

    def get_recommendations(self, analytics: Optional[PerformanceAnalytics]) -> List[str]:
        """
        Recommendations for an analytics summary.

        Falls back to the program defaults when there is nothing to go on
        or no rule fires, so the result is never empty.
        """
        if analytics is None or analytics.total_sessions == 0:
            return list(self.default_recommendations)

        messages = evaluate_rules(analytics, self.recommendation_rules)
        return messages or list(self.default_recommendations)

    def session_summary(self, session: PerformanceSession) -> Dict[str, Any]:
        """
        Statistics for a single session.

        Raises:
            ProgramMismatchError: If the session belongs to another program
        """
        if session.program is not self.program:
            raise ProgramMismatchError(
                expected=self.program.value,
                actual=session.program.value,
                session_id=session.id,
            )

        summary = {
            "session_id": session.id,
            "date": session.date.isoformat(),
            "session_type": session.session_type,
            "duration": session.duration,
            "rating": session.rating,
        }
        summary.update(self._summarize_session(self._coerce(session)))
        return summary

    # ========================================
    # Shared Helper Methods
    # ========================================

    def _coerce(self, session: PerformanceSession) -> PerformanceSession:
        """Upgrade a generic session to the program's session model."""
        if isinstance(session, self.session_model):
            return session
        return self.session_model.model_validate(session.model_dump())

    def _own_sessions(self, sessions: Iterable[PerformanceSession]) -> List[PerformanceSession]:
        """The program's sessions, oldest first."""
        sessions = list(sessions)
        own = [self._coerce(s) for s in sessions if s.program is self.program]
        skipped = len(sessions) - len(own)
        if skipped:
            logger.debug("Ignored sessions of other programs", program=self.program.value, skipped=skipped)
        return sorted(own, key=lambda s: s.date)

    def _recent(self, sessions: Sequence[PerformanceSession], limit: Optional[int] = None) -> List[PerformanceSession]:
        """Most recent sessions, still oldest first."""
        limit = settings.CHART_HISTORY_LIMIT if limit is None else limit
        return list(sessions[-limit:]) if limit > 0 else []

    def _base_analytics(
        self,
        sessions: Sequence[PerformanceSession],
        period: TimePeriod,
        series: Optional[Sequence[Optional[float]]] = None,
    ) -> PerformanceAnalytics:
        return self.aggregator.summarize(self.program, sessions, period, series)

    def _finish_analytics(self, analytics: PerformanceAnalytics, **fields: Any) -> PerformanceAnalytics:
        """Apply program-specific fields, then derive recommendations from them."""
        analytics = analytics.model_copy(update=fields)
        return analytics.model_copy(update={"recommendations": self.get_recommendations(analytics)})

    def _metric_trend(
        self,
        previous: Optional[float],
        current: Optional[float],
        lower_is_better: bool = False,
    ) -> Optional[MetricTrend]:
        """
        Trend of current against previous reading.

        Returns None unless both readings are positive numbers.
        """
        if not previous or not current or previous <= 0 or current <= 0:
            return None

        improvement = previous - current if lower_is_better else current - previous
        if improvement > 0:
            direction = TrendDirection.UP
        elif improvement < 0:
            direction = TrendDirection.DOWN
        else:
            direction = TrendDirection.NEUTRAL

        return MetricTrend(
            direction=direction,
            percentage=round(abs(improvement / previous * 100), 1),
            period=TREND_PERIOD,
        )

    def _metric_type(self, raw: Dict[str, Any], default: MetricType) -> MetricType:
        value = raw.get("type")
        if isinstance(value, MetricType):
            return value
        try:
            return MetricType(str(value)) if value is not None else default
        except ValueError:
            return default

    def _last_updated(self, raw: Dict[str, Any]) -> Optional[datetime]:
        return parse_record_date(raw.get("lastUpdated") or raw.get("last_updated") or raw.get("date"))

    def _check_common(self, data: Any) -> List[str]:
        """Checks shared by every program; a non-dict stops further checks."""
        if not isinstance(data, dict):
            return [f"Record must be an object, got {type(data).__name__}"]

        errors = []
        metric_type = getattr(data.get("type"), "value", data.get("type"))
        if metric_type is not None and metric_type not in {t.value for t in MetricType}:
            errors.append(f"Unknown metric type: {metric_type}")

        for key in ("value", "goal", "personalBest"):
            value = data.get(self._key(data, key))
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float, str))):
                errors.append(f"{key} must be a number or a string")

        value = data.get("value")
        if metric_type == MetricType.TIME.value:
            if isinstance(value, str) and not TIME_STRING_PATTERN.match(value):
                errors.append(f"Time value must be MM:SS.ss, got {value!r}")
            elif isinstance(value, (int, float)) and value < 0:
                errors.append("Time value cannot be negative")
        return errors

    def _key(self, data: Dict[str, Any], name: str) -> str:
        """The camelCase key when present, else its snake_case spelling."""
        return name if name in data else to_snake(name)

    def _check_enum(self, data: Dict[str, Any], key: str, enum_cls: Type, errors: List[str]) -> None:
        value = data.get(key)
        if value is not None and getattr(value, "value", value) not in {m.value for m in enum_cls}:
            errors.append(f"Invalid {key}: {value}")

    def _check_count(self, data: Dict[str, Any], key: str, errors: List[str]) -> None:
        value = data.get(key)
        if value is None:
            return
        whole = isinstance(value, (int, float)) and not isinstance(value, bool) and float(value).is_integer()
        if not whole or value < 0:
            errors.append(f"{key} must be a non-negative whole number, got {value!r}")

    def _check_model(self, data: Dict[str, Any], key: str, model: Type[BaseModel], errors: List[str]) -> None:
        """Check a nested object against its model."""
        value = data.get(key)
        if value is None or isinstance(value, model):
            return
        try:
            model.model_validate(value)
        except ValidationError as exc:
            errors.extend(format_validation_errors(exc, prefix=key))

    def _check_range(
        self,
        data: Dict[str, Any],
        key: str,
        errors: List[str],
        low: float = 0,
        high: Optional[float] = None,
    ) -> None:
        value = data.get(key)
        if value is None:
            return
        if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
            errors.append(f"{key} must be a number")
        elif value < low or (high is not None and value > high):
            bound = f"between {low} and {high}" if high is not None else f"at least {low}"
            errors.append(f"{key} must be {bound}, got {value}")
