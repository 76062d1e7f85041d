"""
Basketball Program Adapter - Shooting, skill assessments and game performance.
"""
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from performance_engine.core.logging import get_logger
from performance_engine.models.basketball import (
    BASKETBALL_STANDARDS,
    BasketballGameStats,
    BasketballPerformanceMetric,
    BasketballPosition,
    BasketballSession,
    BasketballSkill,
    BasketballSkillLevel,
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


BASKETBALL_CONFIG = ProgramPerformanceConfig(
    program=ProgramType.BASKETBALL,
    display_name="Basketball",
    primary_color="#F97316",
    secondary_color="#EA580C",
    icon="basketball",
    metrics=("shooting", "dribbling", "passing", "defense", "rebounding", "game_stats"),
    chart_types=(ChartType.LINE, ChartType.BAR, ChartType.PIE, ChartType.RADAR),
    session_types=("practice", "scrimmage", "game", "skills", "conditioning"),
    skill_levels=tuple(level.value for level in BasketballSkillLevel),
    equipment=("basketball", "cones", "agility_ladder", "resistance_bands"),
)

SKILL_COLORS: Dict[BasketballSkill, str] = {
    BasketballSkill.SHOOTING: "#F97316",
    BasketballSkill.PASSING: "#3B82F6",
    BasketballSkill.DRIBBLING: "#10B981",
    BasketballSkill.DEFENSE: "#EF4444",
    BasketballSkill.REBOUNDING: "#8B5CF6",
}

SKILL_ICONS: Dict[BasketballSkill, str] = {
    BasketballSkill.SHOOTING: "radio-button-on",
    BasketballSkill.PASSING: "swap-horizontal",
    BasketballSkill.DRIBBLING: "basketball",
    BasketballSkill.DEFENSE: "shield",
}

METRIC_UNITS: Dict[MetricType, str] = {
    MetricType.PERCENTAGE: "%",
    MetricType.COUNT: "makes",
}

MIN_SESSIONS = 3
SHOOTING_THRESHOLD = 50
SKILL_RATING_THRESHOLD = 5

BASKETBALL_RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        key="frequency",
        applies=lambda a: a.total_sessions < MIN_SESSIONS,
        message="Increase practice frequency for skill development",
    ),
    RecommendationRule(
        key="shooting_form",
        applies=lambda a: (
            a.average_shooting_accuracy is not None
            and a.average_shooting_accuracy < SHOOTING_THRESHOLD
        ),
        message="Focus on consistent shooting form and follow-through",
    ),
    RecommendationRule(
        key="fundamentals",
        applies=lambda a: (
            a.average_skill_rating is not None
            and a.average_skill_rating < SKILL_RATING_THRESHOLD
        ),
        message="Practice dribbling with both hands and work on defensive footwork",
    ),
)

BASKETBALL_DEFAULT_RECOMMENDATIONS = (
    "Focus on consistent shooting form and follow-through",
    "Practice dribbling with both hands to improve ball handling",
    "Work on defensive positioning and footwork",
    "Increase practice frequency for skill development",
    "Set specific goals for free throw and field goal percentages",
)


def skill_display_name(skill: BasketballSkill) -> str:
    return skill.value.replace("_", " ").title()


def session_shooting_accuracy(session: BasketballSession) -> Optional[float]:
    """
    Shooting percentage for a session.

    Uses the shot tallies when shots were attempted, otherwise the
    shooting assessment. None when the session measured neither.
    """
    stats = session.shooting_stats
    if stats is not None and stats.total_attempted > 0:
        return round(stats.total_made / stats.total_attempted * 100, 1)

    return mean_of(
        a.accuracy for a in session.skill_assessments if a.skill is BasketballSkill.SHOOTING
    )


class BasketballPerformanceAdapter(ProgramPerformanceAdapter):
    """Performance adapter for the basketball program."""

    program = ProgramType.BASKETBALL
    config = BASKETBALL_CONFIG
    session_model = BasketballSession
    recommendation_rules = BASKETBALL_RULES
    default_recommendations = BASKETBALL_DEFAULT_RECOMMENDATIONS

    def _check_fields(self, data: Dict[str, Any], errors: List[str]) -> None:
        self._check_enum(data, "skill", BasketballSkill, errors)
        self._check_enum(data, "position", BasketballPosition, errors)
        self._check_count(data, "attempts", errors)
        self._check_count(data, "makes", errors)
        self._check_range(data, "accuracy", errors, high=100)
        self._check_model(data, self._key(data, "gameStats"), BasketballGameStats, errors)

        attempts, makes = data.get("attempts"), data.get("makes")
        if not errors and attempts is not None and makes is not None and makes > attempts:
            errors.append(f"makes ({makes}) cannot exceed attempts ({attempts})")

    def transform_metrics(self, raw_records: Sequence[Dict[str, Any]]) -> List[BasketballPerformanceMetric]:
        metrics = []
        last_by_skill: Dict[Optional[str], float] = {}

        for index, raw in enumerate(raw_records):
            skill = BasketballSkill(raw["skill"]) if raw.get("skill") else None
            attempts = raw.get("attempts") or 0
            makes = raw.get("makes") or 0

            accuracy = raw.get("accuracy")
            if accuracy is None and attempts > 0:
                accuracy = round(makes / attempts * 100, 1)

            default_type = MetricType.PERCENTAGE if accuracy is not None else MetricType.SCORE
            metric_type = self._metric_type(raw, default_type)
            if metric_type is MetricType.PERCENTAGE:
                value = accuracy
            elif metric_type is MetricType.COUNT and raw.get("value") is None:
                value = makes
            else:
                value = raw.get("value")

            trend = None
            if isinstance(value, (int, float)):
                key = skill.value if skill else None
                trend = self._metric_trend(last_by_skill.get(key), value)
                last_by_skill[key] = value

            title = raw.get("title") or "Performance"
            if skill is not None:
                title = f"{skill_display_name(skill)} {title}"

            metrics.append(BasketballPerformanceMetric(
                id=str(raw.get("id") or f"basketball_metric_{index}"),
                title=title,
                value=value,
                unit=raw.get("unit") or METRIC_UNITS.get(metric_type),
                type=metric_type,
                trend=trend,
                icon=raw.get("icon") or SKILL_ICONS.get(skill, BASKETBALL_CONFIG.icon),
                color=raw.get("color") or SKILL_COLORS.get(skill, BASKETBALL_CONFIG.primary_color),
                category=raw.get("category") or (skill.value if skill else "general"),
                last_updated=self._last_updated(raw),
                goal=raw.get("goal"),
                personal_best=raw.get("personalBest", raw.get("personal_best")),
                skill=skill,
                position=raw.get("position"),
                attempts=attempts,
                makes=makes,
                accuracy=accuracy,
                game_stats=raw.get("gameStats", raw.get("game_stats")),
            ))

        logger.debug("Transformed basketball metrics", count=len(metrics))
        return metrics

    # ========================================
    # Charts
    # ========================================

    def generate_charts(
        self,
        sessions: Sequence[BasketballSession],
        period: TimePeriod,
    ) -> List[PerformanceChartData]:
        own = self._own_sessions(sessions)
        if not own:
            return []

        recent = self._recent(own)
        charts = [
            self._shooting_chart(recent, period),
            self._skills_radar(recent, period),
            self._game_chart(recent, period),
        ]
        return [chart for chart in charts if chart is not None]

    def _shooting_chart(self, sessions: List[BasketballSession], period: TimePeriod) -> PerformanceChartData:
        points = []
        for session in sessions:
            accuracy = session_shooting_accuracy(session)
            if accuracy is None:
                continue
            points.append(ChartDataPoint(
                label=format_chart_label(session.date),
                value=accuracy,
                date=session.date,
                formatted_value=f"{accuracy:g}%",
            ))

        return build_chart(
            "basketball_shooting_progress",
            "Shooting Accuracy Progress",
            ChartType.LINE,
            points,
            period,
            metric_kind=MetricKind.PERCENTAGE,
            x_axis_label="Date",
            y_axis_label="Shooting %",
            color=BASKETBALL_CONFIG.primary_color,
        )

    def _skills_radar(
        self,
        sessions: List[BasketballSession],
        period: TimePeriod,
    ) -> Optional[PerformanceChartData]:
        levels = self._skill_levels(sessions)
        if not levels:
            return None

        points = [
            ChartDataPoint(
                label=skill_display_name(skill),
                value=round(level, 1),
                color=SKILL_COLORS.get(skill),
            )
            for skill, level in levels.items()
        ]
        return build_chart(
            "basketball_skills_radar",
            "Skills Overview",
            ChartType.RADAR,
            points,
            period,
            metric_kind=MetricKind.SCORE,
            color=BASKETBALL_CONFIG.primary_color,
        )

    def _game_chart(
        self,
        sessions: List[BasketballSession],
        period: TimePeriod,
    ) -> Optional[PerformanceChartData]:
        points = [
            ChartDataPoint(
                label=format_chart_label(s.date),
                value=s.shooting_stats.total_made,
                date=s.date,
                formatted_value=f"{s.shooting_stats.total_made}/{s.shooting_stats.total_attempted}",
            )
            for s in sessions
            if s.shooting_stats is not None
        ]
        if not points:
            return None

        return build_chart(
            "basketball_game_stats",
            "Game Performance",
            ChartType.BAR,
            points,
            period,
            metric_kind=MetricKind.COUNT,
            x_axis_label="Date",
            y_axis_label="Shots Made",
            color=BASKETBALL_CONFIG.secondary_color,
        )

    def _skill_levels(self, sessions: Sequence[BasketballSession]) -> Dict[BasketballSkill, float]:
        """Mean assessed level (1-10) per skill, in enum order."""
        by_skill: Dict[BasketballSkill, List[float]] = defaultdict(list)
        for session in sessions:
            for assessment in session.skill_assessments:
                by_skill[assessment.skill].append(assessment.level)
        return {
            skill: sum(by_skill[skill]) / len(by_skill[skill])
            for skill in BasketballSkill
            if by_skill[skill]
        }

    # ========================================
    # Analytics
    # ========================================

    def calculate_analytics(
        self,
        sessions: Sequence[BasketballSession],
        period: TimePeriod,
    ) -> PerformanceAnalytics:
        own = self._own_sessions(sessions)
        accuracies = [session_shooting_accuracy(s) for s in own]
        analytics = self._base_analytics(own, period, series=accuracies)
        if not own:
            return self._finish_analytics(analytics)

        average_accuracy = mean_of(accuracies)
        ratings = [a.level for s in own for a in s.skill_assessments]
        average_rating = mean_of(ratings)

        improvements = []
        measured = [a for a in accuracies if a is not None]
        if len(measured) >= 2:
            improvements.append(build_comparison(
                "Shooting Accuracy",
                previous=measured[0],
                current=measured[-1],
                period=period.value,
            ))

        # Levels are 1-10, standards 0-100
        strong = BASKETBALL_STANDARDS[BasketballSkillLevel.INTERMEDIATE]
        weak = BASKETBALL_STANDARDS[BasketballSkillLevel.RECREATIONAL]
        levels = self._skill_levels(own)
        strengths = [
            skill_display_name(skill) for skill, level in levels.items()
            if level * 10 >= strong[skill]
        ]
        areas = [
            skill_display_name(skill) for skill, level in levels.items()
            if level * 10 < weak[skill]
        ]

        return self._finish_analytics(
            analytics,
            improvement_metrics=improvements,
            strengths=strengths,
            areas_for_improvement=areas,
            average_shooting_accuracy=round(average_accuracy, 1) if average_accuracy is not None else None,
            average_skill_rating=round(average_rating, 1) if average_rating is not None else None,
        )

    def _summarize_session(self, session: BasketballSession) -> Dict[str, Any]:
        stats = session.shooting_stats
        return {
            "shooting_accuracy": session_shooting_accuracy(session),
            "shots_made": stats.total_made if stats else 0,
            "shots_attempted": stats.total_attempted if stats else 0,
            "skills_assessed": [a.skill.value for a in session.skill_assessments],
            "drills": [d.value for d in session.drills],
            "gameplay": session.gameplay or session.scrimmage,
        }
