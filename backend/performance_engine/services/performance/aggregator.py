"""
Analytics Aggregator - Program-agnostic period summaries.

Provides:
- Session totals (count, duration, rating)
- Improvement and consistency scores over a value series
- Period filtering
- Threshold-driven recommendation rules
"""
import statistics
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar, Union

from performance_engine.core.logging import get_logger
from performance_engine.models.performance import (
    PerformanceAnalytics,
    PerformanceComparison,
    PerformanceSession,
    ProgramType,
    TimePeriod,
)

logger = get_logger(__name__)

# Reserved "no time recorded" marker for swim times
SENTINEL_TIME = 0.0

SessionT = TypeVar("SessionT", bound=PerformanceSession)
ConsistencyFn = Callable[[Sequence[Optional[float]]], float]


def is_recorded(value: Optional[float]) -> bool:
    """True for a real measurement, False for None or the 0 sentinel."""
    return value is not None and value > SENTINEL_TIME


def total_duration(sessions: Iterable[PerformanceSession]) -> float:
    """Sum of session durations in minutes."""
    return sum(session.duration for session in sessions)


def average_rating(sessions: Iterable[PerformanceSession]) -> float:
    """
    Mean rating over rated sessions.

    Unrated sessions are left out of numerator and denominator alike.
    Returns 0 when no session carries a rating.
    """
    ratings = [s.rating for s in sessions if s.rating is not None]
    if not ratings:
        return 0
    return sum(ratings) / len(ratings)


def mean_of(values: Iterable[Optional[float]]) -> Optional[float]:
    """Mean of the defined values, None when nothing is defined."""
    defined = [v for v in values if v is not None]
    if not defined:
        return None
    return sum(defined) / len(defined)


def improvement_percentage(first: Optional[float], last: Optional[float]) -> float:
    """
    Percentage improvement from first to last time, rounded to 1 decimal.

    Lower times are better, so a positive result means the swimmer got
    faster. Either endpoint being the sentinel yields 0.
    """
    if not is_recorded(first) or not is_recorded(last):
        return 0
    return round((first - last) / first * 100, 1)


def consistency_score(values: Sequence[Optional[float]]) -> float:
    """
    Stability of a series on a 0-100 scale.

    consistency = clamp(100 * (1 - stddev / mean), 0, 100), using the
    population standard deviation. Sentinel and missing values are
    ignored; fewer than two recorded values scores 0.
    """
    recorded = [v for v in values if is_recorded(v)]
    if len(recorded) < 2:
        return 0

    mean = statistics.fmean(recorded)
    stddev = statistics.pstdev(recorded)
    score = 100 * (1 - stddev / mean)
    return round(max(0.0, min(100.0, score)), 1)


def build_comparison(
    metric: str,
    previous: float,
    current: float,
    period: str,
    lower_is_better: bool = False,
) -> PerformanceComparison:
    """Compare two readings; improvement is signed so positive = better."""
    change = current - previous
    improvement = -change if lower_is_better else change
    percentage_change = round(improvement / previous * 100, 1) if previous else 0

    return PerformanceComparison(
        metric=metric,
        current=current,
        previous=previous,
        improvement=round(improvement, 2),
        percentage_change=percentage_change,
        period=period,
    )


def _as_datetime(moment: Union[date, datetime], at: time) -> datetime:
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            return moment.astimezone(timezone.utc).replace(tzinfo=None)
        return moment
    return datetime.combine(moment, at)


def within_period(
    moment: Union[date, datetime],
    period: TimePeriod,
    reference: Union[date, datetime],
) -> bool:
    """Whether moment falls inside the period window ending at reference."""
    if period.days is None:
        return True
    # Bare dates cover the whole day
    reference_dt = _as_datetime(reference, time.max)
    moment_dt = _as_datetime(moment, time.min)
    return reference_dt - timedelta(days=period.days) <= moment_dt <= reference_dt


def filter_sessions_by_period(
    sessions: Sequence[SessionT],
    period: TimePeriod,
    reference_date: Optional[Union[date, datetime]] = None,
) -> List[SessionT]:
    """
    Keep sessions within the period window.

    The window ends at reference_date, defaulting to the latest session,
    so the result never depends on the wall clock.
    """
    if period.days is None or not sessions:
        return list(sessions)

    reference = reference_date or max(s.date for s in sessions)
    return [s for s in sessions if within_period(s.date, period, reference)]


# ========================================
# Recommendation rules
# ========================================

@dataclass(frozen=True)
class RecommendationRule:
    """
    A threshold check over an analytics summary.

    message may be a callable to interpolate analytics values.
    """
    key: str
    applies: Callable[[PerformanceAnalytics], bool]
    message: Union[str, Callable[[PerformanceAnalytics], str]]

    def evaluate(self, analytics: PerformanceAnalytics) -> Optional[str]:
        if not self.applies(analytics):
            return None
        if callable(self.message):
            return self.message(analytics)
        return self.message


def evaluate_rules(
    analytics: PerformanceAnalytics,
    rules: Sequence[RecommendationRule],
) -> List[str]:
    """Messages of every matching rule, in table order."""
    messages = []
    for rule in rules:
        message = rule.evaluate(analytics)
        if message is not None:
            messages.append(message)
    return messages


class AnalyticsAggregator:
    """
    Computes the program-agnostic part of PerformanceAnalytics.

    Usage:
        aggregator = AnalyticsAggregator()
        analytics = aggregator.summarize(ProgramType.SWIMMING, sessions, TimePeriod.MONTH)
    """

    def __init__(self, consistency_fn: ConsistencyFn = consistency_score):
        self.consistency_fn = consistency_fn

    def summarize(
        self,
        program: ProgramType,
        sessions: Sequence[PerformanceSession],
        period: TimePeriod,
        series: Optional[Sequence[Optional[float]]] = None,
    ) -> PerformanceAnalytics:
        """
        Build totals for a program's sessions.

        Args:
            program: Program the sessions belong to
            sessions: Sessions already filtered to the program
            period: Reporting period label
            series: Values whose stability defines consistency (optional)

        Returns:
            PerformanceAnalytics with totals filled in
        """
        consistency = self.consistency_fn(series) if series is not None else None

        analytics = PerformanceAnalytics(
            program=program,
            period=period,
            total_sessions=len(sessions),
            total_duration=total_duration(sessions),
            average_rating=average_rating(sessions),
            consistency=consistency,
        )

        logger.debug(
            "Aggregated session totals",
            program=program.value,
            period=period.value,
            total_sessions=analytics.total_sessions,
            total_duration=analytics.total_duration,
            consistency=consistency,
        )

        return analytics
