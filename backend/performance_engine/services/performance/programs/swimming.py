"""
Swimming Program Adapter - Swim times, pace, distance and technique.

Time metrics are lower-is-better: trends count a faster swim as "up"
and the times chart is flagged as a time series so it renders on an
inverted axis.
"""
import math
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from performance_engine.core.config import settings
from performance_engine.core.logging import get_logger
from performance_engine.models.performance import (
    ChartDataPoint,
    ChartType,
    MetricKind,
    MetricType,
    PerformanceAnalytics,
    PerformanceChartData,
    ProgramPerformanceConfig,
    ProgramType,
    TimePeriod,
)
from performance_engine.models.swimming import (
    STROKE_DISPLAY_NAMES,
    SWIMMING_DISTANCES,
    PoolType,
    SwimmingPerformanceMetric,
    SwimmingSession,
    SwimmingSkillLevel,
    SwimmingStroke,
    classify_swim_time,
)
from performance_engine.services.performance.adapter import (
    seconds_to_time_string,
    swimming_data_adapter,
    time_string_to_seconds,
)
from performance_engine.services.performance.aggregator import (
    RecommendationRule,
    build_comparison,
    is_recorded,
    mean_of,
)
from performance_engine.services.performance.charts import build_chart, format_chart_label
from performance_engine.services.performance.programs.base import ProgramPerformanceAdapter

logger = get_logger(__name__)


SWIMMING_CONFIG = ProgramPerformanceConfig(
    program=ProgramType.SWIMMING,
    display_name="Swimming",
    primary_color="#0EA5E9",
    secondary_color="#0284C7",
    icon="water",
    metrics=("time", "distance", "stroke_rate", "technique", "endurance"),
    chart_types=(ChartType.LINE, ChartType.BAR, ChartType.RADAR),
    session_types=("training", "technique", "endurance", "sprint", "recovery"),
    skill_levels=tuple(level.value for level in SwimmingSkillLevel),
    equipment=("kickboard", "pull_buoy", "fins", "paddles", "snorkel"),
)

STROKE_COLORS: Dict[SwimmingStroke, str] = {
    SwimmingStroke.FREESTYLE: "#0EA5E9",
    SwimmingStroke.BACKSTROKE: "#8B5CF6",
    SwimmingStroke.BREASTSTROKE: "#10B981",
    SwimmingStroke.BUTTERFLY: "#F59E0B",
    SwimmingStroke.INDIVIDUAL_MEDLEY: "#EF4444",
}

METRIC_ICONS: Dict[MetricType, str] = {
    MetricType.TIME: "timer",
    MetricType.DISTANCE: "trending-up",
    MetricType.PERCENTAGE: "analytics",
}

METRIC_UNITS: Dict[MetricType, str] = {
    MetricType.TIME: "min:sec",
    MetricType.DISTANCE: "m",
    MetricType.PERCENTAGE: "%",
}

TECHNIQUE_COLOR = "#10B981"

MIN_SESSIONS = 3
TECHNIQUE_THRESHOLD = 70
BASE_VOLUME_METERS = 5000
# Share of total distance above which one stroke dominates training
STROKE_DOMINANCE = 0.7
# Standards counted as a strength when a set time meets them
STRONG_LEVELS = (SwimmingSkillLevel.ADVANCED, SwimmingSkillLevel.COMPETITIVE, SwimmingSkillLevel.ELITE)

SWIMMING_RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        key="frequency",
        applies=lambda a: a.total_sessions < MIN_SESSIONS,
        message="Increase training frequency to 3-4 sessions per week for better progress",
    ),
    RecommendationRule(
        key="technique",
        applies=lambda a: a.average_technique is not None and a.average_technique < TECHNIQUE_THRESHOLD,
        message="Focus on technique work with drills and video analysis",
    ),
    RecommendationRule(
        key="stroke_balance",
        applies=lambda a: a.favorite_stroke is not None,
        message=lambda a: (
            f"Consider working on other strokes beyond {a.favorite_stroke} for balanced development"
        ),
    ),
    RecommendationRule(
        key="base_volume",
        applies=lambda a: a.total_distance is not None and a.total_distance < BASE_VOLUME_METERS,
        message="Gradually increase weekly distance to build endurance base",
    ),
)

SWIMMING_DEFAULT_RECOMMENDATIONS = (
    "Start with consistent training sessions 3-4 times per week",
    "Focus on proper breathing technique and body position",
    "Practice all four strokes for balanced development",
    "Set realistic goals and track your progress regularly",
    "Work with a qualified instructor to improve technique",
)


def _stroke_distances(session: SwimmingSession) -> Dict[SwimmingStroke, int]:
    distances: Dict[SwimmingStroke, int] = defaultdict(int)
    for swim_set in session.sets:
        distances[swim_set.stroke] += swim_set.total_distance
    return distances


def _technique_score(session: SwimmingSession) -> Optional[float]:
    return mean_of(t.overall_technique for t in session.technique)


def _best_set_times(sessions: Sequence[SwimmingSession]) -> Dict[Tuple[SwimmingStroke, int], float]:
    """Fastest recorded repetition per stroke and standard distance."""
    best: Dict[Tuple[SwimmingStroke, int], float] = {}
    for session in sessions:
        for swim_set in session.sets:
            recorded = [t for t in swim_set.times if is_recorded(t)]
            if not recorded or swim_set.distance not in SWIMMING_DISTANCES:
                continue
            key = (swim_set.stroke, swim_set.distance)
            best[key] = min(recorded + ([best[key]] if key in best else []))
    return best


def _is_positive_seconds(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


class SwimmingPerformanceAdapter(ProgramPerformanceAdapter):
    """Performance adapter for the swimming program."""

    program = ProgramType.SWIMMING
    config = SWIMMING_CONFIG
    session_model = SwimmingSession
    recommendation_rules = SWIMMING_RULES
    default_recommendations = SWIMMING_DEFAULT_RECOMMENDATIONS

    # ========================================
    # Validation
    # ========================================

    def _check_fields(self, data: Dict[str, Any], errors: List[str]) -> None:
        stroke = data.get("stroke")
        if stroke is None or stroke == "":
            errors.append("stroke is required")
        elif not swimming_data_adapter.is_known_stroke(stroke):
            errors.append(f"Invalid stroke: {stroke}")

        distance = data.get("distance")
        if distance is not None and distance not in SWIMMING_DISTANCES:
            errors.append(f"Invalid distance: {distance}")

        seconds = data.get("timeInSeconds", data.get("time_in_seconds"))
        if seconds is not None and not _is_positive_seconds(seconds):
            errors.append("timeInSeconds must be a positive number")

        self._check_enum(data, self._key(data, "poolType"), PoolType, errors)
        self._check_range(data, self._key(data, "strokeRate"), errors)
        self._check_count(data, self._key(data, "strokeCount"), errors)

        splits = data.get("splits")
        if splits is not None and not (
            isinstance(splits, (list, tuple)) and all(_is_positive_seconds(s) for s in splits)
        ):
            errors.append("splits must be a list of positive seconds")

    # ========================================
    # Metrics
    # ========================================

    def transform_metrics(self, raw_records: Sequence[Dict[str, Any]]) -> List[SwimmingPerformanceMetric]:
        """
        Build swim metrics, one per record.

        A record's trend compares it with the previous record of the same
        stroke and distance. Time values are emitted as "MM:SS.ss".
        """
        metrics = []
        last_time_by_event: Dict[Tuple[SwimmingStroke, Optional[int]], float] = {}

        for index, raw in enumerate(raw_records):
            stroke = swimming_data_adapter.normalize_stroke(raw.get("stroke"))
            distance = raw.get("distance")
            seconds = raw.get("timeInSeconds", raw.get("time_in_seconds"))
            if seconds is None and raw.get("time") is not None:
                seconds = time_string_to_seconds(raw.get("time"))
            has_time = seconds is not None

            metric_type = self._metric_type(raw, MetricType.TIME if has_time else MetricType.SCORE)

            if metric_type is MetricType.TIME:
                value = seconds_to_time_string(seconds) if has_time else raw.get("value")
            else:
                value = raw.get("value")

            event = (stroke, distance)
            trend = None
            if has_time and metric_type is MetricType.TIME:
                trend = self._metric_trend(last_time_by_event.get(event), seconds, lower_is_better=True)
                if is_recorded(seconds):
                    last_time_by_event[event] = seconds

            if distance is not None:
                title = f"{distance}m {STROKE_DISPLAY_NAMES[stroke]}"
            else:
                title = raw.get("title") or "Swimming Metric"

            metrics.append(SwimmingPerformanceMetric(
                id=str(raw.get("id") or f"swimming_metric_{index}"),
                title=title,
                value=value,
                unit=raw.get("unit") or METRIC_UNITS.get(metric_type),
                type=metric_type,
                trend=trend,
                icon=raw.get("icon") or METRIC_ICONS.get(metric_type, SWIMMING_CONFIG.icon),
                color=raw.get("color") or STROKE_COLORS[stroke],
                category=raw.get("category") or ("times" if metric_type is MetricType.TIME else "training"),
                last_updated=self._last_updated(raw),
                goal=raw.get("goal"),
                personal_best=raw.get("personalBest", raw.get("personal_best")),
                stroke=stroke,
                distance=distance,
                pool_type=raw.get("poolType", raw.get("pool_type")),
                time_in_seconds=seconds,
                stroke_rate=raw.get("strokeRate", raw.get("stroke_rate")),
                stroke_count=raw.get("strokeCount", raw.get("stroke_count")),
                splits=raw.get("splits") or [],
            ))

        logger.debug("Transformed swimming metrics", count=len(metrics))
        return metrics

    # ========================================
    # Charts
    # ========================================

    def generate_charts(
        self,
        sessions: Sequence[SwimmingSession],
        period: TimePeriod,
    ) -> List[PerformanceChartData]:
        own = self._own_sessions(sessions)
        if not own:
            return []

        recent = self._recent(own)
        charts = [
            self._times_chart(recent, period),
            self._distance_chart(recent, period),
            self._stroke_distribution_chart(recent, period),
            self._technique_chart(own, period),
        ]
        return [chart for chart in charts if chart is not None]

    def _times_chart(self, sessions: List[SwimmingSession], period: TimePeriod) -> PerformanceChartData:
        points = [
            ChartDataPoint(
                label=format_chart_label(s.date),
                value=s.average_pace,
                date=s.date,
                formatted_value=seconds_to_time_string(s.average_pace),
            )
            for s in sessions
            if is_recorded(s.average_pace)
        ]
        return build_chart(
            "swimming_times_progress",
            "Swimming Times Progress",
            ChartType.LINE,
            points,
            period,
            metric_kind=MetricKind.TIME,
            x_axis_label="Date",
            y_axis_label="Average Pace (sec/100m)",
            color=SWIMMING_CONFIG.primary_color,
        )

    def _distance_chart(self, sessions: List[SwimmingSession], period: TimePeriod) -> PerformanceChartData:
        points = [
            ChartDataPoint(
                label=format_chart_label(s.date),
                value=s.total_distance,
                date=s.date,
                formatted_value=f"{s.total_distance:g}m",
            )
            for s in sessions
        ]
        return build_chart(
            "swimming_distance",
            "Training Distance",
            ChartType.BAR,
            points,
            period,
            metric_kind=MetricKind.DISTANCE,
            x_axis_label="Date",
            y_axis_label="Distance (m)",
            color=SWIMMING_CONFIG.secondary_color,
        )

    def _stroke_distribution_chart(
        self,
        sessions: List[SwimmingSession],
        period: TimePeriod,
    ) -> Optional[PerformanceChartData]:
        totals: Dict[SwimmingStroke, int] = defaultdict(int)
        for session in sessions:
            for stroke, meters in _stroke_distances(session).items():
                totals[stroke] += meters

        points = [
            ChartDataPoint(
                label=STROKE_DISPLAY_NAMES[stroke],
                value=totals[stroke],
                color=STROKE_COLORS[stroke],
                formatted_value=f"{totals[stroke]}m",
            )
            for stroke in SwimmingStroke
            if totals[stroke] > 0
        ]
        if not points:
            return None

        return build_chart(
            "swimming_stroke_distribution",
            "Stroke Distribution",
            ChartType.PIE,
            points,
            period,
            metric_kind=MetricKind.DISTANCE,
        )

    def _technique_chart(
        self,
        sessions: List[SwimmingSession],
        period: TimePeriod,
    ) -> Optional[PerformanceChartData]:
        scored = [s for s in sessions if s.technique]
        scored = self._recent(scored, settings.TECHNIQUE_HISTORY_LIMIT)
        if not scored:
            return None

        points = []
        for session in scored:
            score = round(_technique_score(session), 1)
            points.append(ChartDataPoint(
                label=format_chart_label(session.date),
                value=score,
                date=session.date,
                formatted_value=f"{score:g}",
            ))

        return build_chart(
            "swimming_technique",
            "Technique Scores",
            ChartType.LINE,
            points,
            period,
            metric_kind=MetricKind.SCORE,
            x_axis_label="Date",
            y_axis_label="Technique Score (0-100)",
            color=TECHNIQUE_COLOR,
        )

    # ========================================
    # Analytics
    # ========================================

    def calculate_analytics(
        self,
        sessions: Sequence[SwimmingSession],
        period: TimePeriod,
    ) -> PerformanceAnalytics:
        own = self._own_sessions(sessions)
        paces = [s.average_pace for s in own]
        analytics = self._base_analytics(own, period, series=paces)
        if not own:
            return self._finish_analytics(analytics)

        stroke_totals: Dict[SwimmingStroke, int] = defaultdict(int)
        for session in own:
            for stroke, meters in _stroke_distances(session).items():
                stroke_totals[stroke] += meters
        set_distance = sum(stroke_totals.values())

        favorite = None
        if set_distance > 0:
            favorite = max(stroke_totals, key=stroke_totals.get)

        total_distance = sum(s.total_distance for s in own)
        technique = mean_of(t.overall_technique for s in own for t in s.technique)
        if technique is not None:
            technique = round(technique, 1)

        improvements = []
        pace_change = None
        recorded_paces = [p for p in paces if is_recorded(p)]
        if len(recorded_paces) >= 2:
            pace_comparison = build_comparison(
                "Average Pace",
                previous=recorded_paces[0],
                current=recorded_paces[-1],
                period=period.value,
                lower_is_better=True,
            )
            pace_change = pace_comparison.improvement
            improvements.append(pace_comparison)
        technique_scores = [score for score in (_technique_score(s) for s in own) if score is not None]
        if len(technique_scores) >= 2:
            improvements.append(build_comparison(
                "Technique Score",
                previous=round(technique_scores[0], 1),
                current=round(technique_scores[-1], 1),
                period=period.value,
            ))

        strengths = []
        areas = []
        if analytics.consistency is not None and analytics.consistency >= 80:
            strengths.append("Consistent pacing across sessions")
        if technique is not None and technique >= 80:
            strengths.append("Strong technique fundamentals")
        if len(own) >= MIN_SESSIONS:
            strengths.append("Regular training attendance")
        if pace_change is not None and pace_change > 0:
            strengths.append("Improving pace")

        if technique is not None and technique < TECHNIQUE_THRESHOLD:
            areas.append("Technique refinement")
        if total_distance < BASE_VOLUME_METERS:
            areas.append("Endurance base")
        if pace_change is not None and pace_change < 0:
            areas.append("Pace has slowed")
        if favorite is not None and stroke_totals[favorite] / set_distance > STROKE_DOMINANCE:
            areas.append("Stroke variety")

        for (stroke, distance), seconds in _best_set_times(own).items():
            event = f"{distance}m {STROKE_DISPLAY_NAMES[stroke]}"
            level = classify_swim_time(stroke, distance, seconds)
            if level in STRONG_LEVELS:
                strengths.append(f"{event} at {level.value} standard")
            elif level is None:
                areas.append(f"{event} below beginner standard")

        return self._finish_analytics(
            analytics,
            improvement_metrics=improvements,
            strengths=strengths,
            areas_for_improvement=areas,
            total_distance=total_distance,
            average_technique=technique,
            favorite_stroke=STROKE_DISPLAY_NAMES[favorite] if favorite else None,
        )

    def _summarize_session(self, session: SwimmingSession) -> Dict[str, Any]:
        stroke_distances = _stroke_distances(session)
        technique = _technique_score(session)
        return {
            "total_distance": session.total_distance,
            "set_distance": sum(stroke_distances.values()),
            "average_pace": session.average_pace,
            "formatted_pace": seconds_to_time_string(session.average_pace),
            "stroke_distances": {stroke.value: meters for stroke, meters in stroke_distances.items()},
            "average_technique": round(technique, 1) if technique is not None else None,
            "total_sets": len(session.sets),
        }
