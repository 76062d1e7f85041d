"""
Football Program Adapter - Technical ratings, physical output and match play.
"""
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from performance_engine.core.logging import get_logger
from performance_engine.models.football import (
    FOOTBALL_STANDARDS,
    TECHNICAL_SKILLS,
    FootballGameStats,
    FootballPerformanceMetric,
    FootballPosition,
    FootballSession,
    FootballSkill,
    FootballSkillLevel,
)
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
from performance_engine.services.performance.aggregator import (
    RecommendationRule,
    build_comparison,
    mean_of,
)
from performance_engine.services.performance.charts import build_chart, format_chart_label
from performance_engine.services.performance.programs.base import ProgramPerformanceAdapter

logger = get_logger(__name__)


FOOTBALL_CONFIG = ProgramPerformanceConfig(
    program=ProgramType.FOOTBALL,
    display_name="Football",
    primary_color="#22C55E",
    secondary_color="#16A34A",
    icon="football",
    metrics=("passing", "shooting", "dribbling", "defending", "fitness", "tactical"),
    chart_types=(ChartType.LINE, ChartType.BAR, ChartType.PIE, ChartType.RADAR),
    session_types=("training", "match", "fitness", "tactical", "technical"),
    skill_levels=tuple(level.value for level in FootballSkillLevel),
    equipment=("football", "cones", "goals", "bibs", "agility_poles"),
)

SKILL_COLORS: Dict[FootballSkill, str] = {
    FootballSkill.PASSING: "#3B82F6",
    FootballSkill.SHOOTING: "#F59E0B",
    FootballSkill.DRIBBLING: "#10B981",
    FootballSkill.DEFENDING: "#EF4444",
    FootballSkill.SPEED: "#8B5CF6",
    FootballSkill.STAMINA: "#06B6D4",
}

SKILL_ICONS: Dict[FootballSkill, str] = {
    FootballSkill.PASSING: "share",
    FootballSkill.SHOOTING: "radio-button-on",
    FootballSkill.DRIBBLING: "football",
    FootballSkill.DEFENDING: "shield",
    FootballSkill.SPEED: "flash",
    FootballSkill.STAMINA: "battery-charging",
}

PHYSICAL_COLOR = "#06B6D4"

MIN_SESSIONS = 3
SKILL_RATING_THRESHOLD = 6
CONDITIONING_MINUTES = 180

FOOTBALL_RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        key="frequency",
        applies=lambda a: a.total_sessions < MIN_SESSIONS,
        message="Train at least 3 times per week to build match sharpness",
    ),
    RecommendationRule(
        key="technical",
        applies=lambda a: (
            a.average_skill_rating is not None
            and a.average_skill_rating < SKILL_RATING_THRESHOLD
        ),
        message="Focus on first touch and passing accuracy under pressure",
    ),
    RecommendationRule(
        key="conditioning",
        applies=lambda a: a.total_duration < CONDITIONING_MINUTES,
        message="Build endurance through interval running",
    ),
)

FOOTBALL_DEFAULT_RECOMMENDATIONS = (
    "Focus on first touch and ball control in tight spaces",
    "Improve passing accuracy under pressure",
    "Work on shooting technique and power",
    "Enhance defensive positioning and timing",
    "Build endurance through interval running",
    "Practice both feet for balanced development",
)


def skill_display_name(skill: FootballSkill) -> str:
    return skill.value.replace("_", " ").title()


def technical_rating(session: FootballSession) -> Optional[float]:
    """Mean rating over the technical skills assessed in a session."""
    return mean_of(a.rating for a in session.skill_assessments if a.skill in TECHNICAL_SKILLS)


class FootballPerformanceAdapter(ProgramPerformanceAdapter):
    """Performance adapter for the football program."""

    program = ProgramType.FOOTBALL
    config = FOOTBALL_CONFIG
    session_model = FootballSession
    recommendation_rules = FOOTBALL_RULES
    default_recommendations = FOOTBALL_DEFAULT_RECOMMENDATIONS

    def _check_fields(self, data: Dict[str, Any], errors: List[str]) -> None:
        self._check_enum(data, "skill", FootballSkill, errors)
        self._check_enum(data, "position", FootballPosition, errors)
        self._check_range(data, "accuracy", errors, high=100)
        self._check_range(data, "speed", errors)
        self._check_range(data, "distance", errors)
        self._check_model(data, self._key(data, "gameStats"), FootballGameStats, errors)

    def transform_metrics(self, raw_records: Sequence[Dict[str, Any]]) -> List[FootballPerformanceMetric]:
        metrics = []
        last_by_skill: Dict[Optional[str], float] = {}

        for index, raw in enumerate(raw_records):
            skill = FootballSkill(raw["skill"]) if raw.get("skill") else None
            accuracy = raw.get("accuracy")
            speed = raw.get("speed")

            if accuracy is not None:
                value, unit, default_type = accuracy, "%", MetricType.PERCENTAGE
            elif speed is not None:
                value, unit, default_type = speed, "km/h", MetricType.SCORE
            else:
                value, unit, default_type = raw.get("value"), None, MetricType.RATING
            metric_type = self._metric_type(raw, default_type)
            if metric_type is MetricType.DISTANCE and unit is None:
                unit = "m"

            trend = None
            if isinstance(value, (int, float)):
                key = skill.value if skill else None
                trend = self._metric_trend(last_by_skill.get(key), value)
                last_by_skill[key] = value

            title = raw.get("title") or "Performance"
            if skill is not None:
                title = f"{skill_display_name(skill)} {title}"

            metrics.append(FootballPerformanceMetric(
                id=str(raw.get("id") or f"football_metric_{index}"),
                title=title,
                value=value,
                unit=raw.get("unit") or unit,
                type=metric_type,
                trend=trend,
                icon=raw.get("icon") or SKILL_ICONS.get(skill, FOOTBALL_CONFIG.icon),
                color=raw.get("color") or SKILL_COLORS.get(skill, FOOTBALL_CONFIG.primary_color),
                category=raw.get("category") or (skill.value if skill else "general"),
                last_updated=self._last_updated(raw),
                goal=raw.get("goal"),
                personal_best=raw.get("personalBest", raw.get("personal_best")),
                skill=skill,
                position=raw.get("position"),
                accuracy=accuracy,
                distance=raw.get("distance"),
                speed=speed,
                game_stats=raw.get("gameStats", raw.get("game_stats")),
            ))

        logger.debug("Transformed football metrics", count=len(metrics))
        return metrics

    # ========================================
    # Charts
    # ========================================

    def generate_charts(
        self,
        sessions: Sequence[FootballSession],
        period: TimePeriod,
    ) -> List[PerformanceChartData]:
        own = self._own_sessions(sessions)
        if not own:
            return []

        recent = self._recent(own)
        charts = [
            self._technical_chart(recent, period),
            self._physical_chart(recent, period),
            self._match_chart(recent, period),
        ]
        return [chart for chart in charts if chart is not None]

    def _technical_chart(self, sessions: List[FootballSession], period: TimePeriod) -> PerformanceChartData:
        points = []
        for session in sessions:
            rating = technical_rating(session)
            if rating is None:
                continue
            points.append(ChartDataPoint(
                label=format_chart_label(session.date),
                value=round(rating, 1),
                date=session.date,
                formatted_value=f"{rating:.1f}",
            ))

        return build_chart(
            "football_technical_skills",
            "Technical Skills Progress",
            ChartType.LINE,
            points,
            period,
            metric_kind=MetricKind.SCORE,
            x_axis_label="Date",
            y_axis_label="Skill Rating (1-10)",
            color=FOOTBALL_CONFIG.primary_color,
        )

    def _physical_chart(
        self,
        sessions: List[FootballSession],
        period: TimePeriod,
    ) -> Optional[PerformanceChartData]:
        points = [
            ChartDataPoint(
                label=format_chart_label(s.date),
                value=s.physical_stats.distance_covered,
                date=s.date,
                formatted_value=f"{s.physical_stats.distance_covered:g} km",
            )
            for s in sessions
            if s.physical_stats is not None
        ]
        if not points:
            return None

        return build_chart(
            "football_physical_performance",
            "Distance Covered",
            ChartType.BAR,
            points,
            period,
            metric_kind=MetricKind.DISTANCE,
            x_axis_label="Date",
            y_axis_label="Distance (km)",
            color=PHYSICAL_COLOR,
        )

    def _match_chart(
        self,
        sessions: List[FootballSession],
        period: TimePeriod,
    ) -> Optional[PerformanceChartData]:
        points = []
        for session in sessions:
            if not session.match_play:
                continue
            application = mean_of(a.game_application for a in session.skill_assessments)
            if application is None:
                continue
            points.append(ChartDataPoint(
                label=format_chart_label(session.date),
                value=round(application, 1),
                date=session.date,
                formatted_value=f"{application:.1f}",
            ))
        if not points:
            return None

        return build_chart(
            "football_match_performance",
            "Match Performance",
            ChartType.LINE,
            points,
            period,
            metric_kind=MetricKind.SCORE,
            x_axis_label="Date",
            y_axis_label="Game Application (1-10)",
            color=FOOTBALL_CONFIG.secondary_color,
        )

    # ========================================
    # Analytics
    # ========================================

    def calculate_analytics(
        self,
        sessions: Sequence[FootballSession],
        period: TimePeriod,
    ) -> PerformanceAnalytics:
        own = self._own_sessions(sessions)
        technical = [technical_rating(s) for s in own]
        analytics = self._base_analytics(own, period, series=technical)
        if not own:
            return self._finish_analytics(analytics)

        by_skill: Dict[FootballSkill, List[float]] = defaultdict(list)
        for session in own:
            for assessment in session.skill_assessments:
                by_skill[assessment.skill].append(assessment.rating)
        ratings = [r for values in by_skill.values() for r in values]
        average_rating = mean_of(ratings)

        improvements = []
        measured = [t for t in technical if t is not None]
        if len(measured) >= 2:
            improvements.append(build_comparison(
                "Technical Rating",
                previous=round(measured[0], 1),
                current=round(measured[-1], 1),
                period=period.value,
            ))
        distances = [s.physical_stats.distance_covered for s in own if s.physical_stats is not None]
        if len(distances) >= 2:
            improvements.append(build_comparison(
                "Distance Covered",
                previous=distances[0],
                current=distances[-1],
                period=period.value,
            ))

        strong = FOOTBALL_STANDARDS[FootballSkillLevel.ADVANCED]
        weak = FOOTBALL_STANDARDS[FootballSkillLevel.YOUTH]
        strengths = []
        areas = []
        for skill in FootballSkill:
            if not by_skill[skill]:
                continue
            mean = sum(by_skill[skill]) / len(by_skill[skill])
            if mean >= strong[skill]:
                strengths.append(skill_display_name(skill))
            elif mean < weak[skill]:
                areas.append(skill_display_name(skill))

        return self._finish_analytics(
            analytics,
            improvement_metrics=improvements,
            strengths=strengths,
            areas_for_improvement=areas,
            average_skill_rating=round(average_rating, 1) if average_rating is not None else None,
        )

    def _summarize_session(self, session: FootballSession) -> Dict[str, Any]:
        rating = technical_rating(session)
        physical = session.physical_stats
        return {
            "technical_rating": round(rating, 1) if rating is not None else None,
            "distance_covered": physical.distance_covered if physical else None,
            "max_speed": physical.max_speed if physical else None,
            "skills_assessed": [a.skill.value for a in session.skill_assessments],
            "drills": [d.value for d in session.drills],
            "match_play": session.match_play,
        }
