"""
Program-agnostic performance models.

Every program adapter consumes and produces these types. They are immutable
value objects that serialize to camelCase JSON for the presentation layer:

    chart.model_dump(by_alias=True, mode="json")
"""
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class ProgramType(str, Enum):
    """Academy programs. Only some have performance adapters."""
    SWIMMING = "swimming"
    BASKETBALL = "basketball"
    FOOTBALL = "football"
    MUSIC = "music"
    CODING = "coding"
    TENNIS = "tennis"
    SOCCER = "soccer"


class MetricType(str, Enum):
    TIME = "time"
    DISTANCE = "distance"
    SCORE = "score"
    PERCENTAGE = "percentage"
    COUNT = "count"
    RATING = "rating"
    LEVEL = "level"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class ChartType(str, Enum):
    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    AREA = "area"
    RADAR = "radar"
    PROGRESS = "progress"


class MetricKind(str, Enum):
    """What a chart's values measure. Time charts render on an inverted axis."""
    TIME = "time"
    COUNT = "count"
    PERCENTAGE = "percentage"
    DISTANCE = "distance"
    SCORE = "score"


# Window length in days for each reporting period, None = unbounded
_PERIOD_DAYS: Dict[str, Optional[int]] = {
    "week": 7,
    "month": 30,
    "quarter": 90,
    "semester": 182,
    "year": 365,
    "all": None,
}


class TimePeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    SEMESTER = "semester"
    YEAR = "year"
    ALL = "all"

    @property
    def days(self) -> Optional[int]:
        """Length of the period window in days (None for ALL)."""
        return _PERIOD_DAYS[self.value]


# "MM:SS.ss", minutes may exceed two digits for distance events
TIME_STRING_PATTERN = re.compile(r"^\d{2,}:[0-5]\d\.\d{2}$")


class PerformanceModel(BaseModel):
    """Base for all engine value objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ========================================
# Metrics
# ========================================

class MetricTrend(PerformanceModel):
    """Movement of a metric against a comparison period."""
    direction: TrendDirection
    percentage: float
    period: str


class BasePerformanceMetric(PerformanceModel):
    """One measured quantity at a point in time."""
    id: str
    title: str
    value: Optional[Union[int, float, str]] = None  # None = not measured
    unit: Optional[str] = None
    type: MetricType
    trend: Optional[MetricTrend] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    category: str
    last_updated: Optional[datetime] = None
    goal: Optional[Union[int, float, str]] = None
    personal_best: Optional[Union[int, float, str]] = None

    @model_validator(mode="after")
    def _check_time_value(self) -> "BasePerformanceMetric":
        # Time values are seconds or an already formatted MM:SS.ss string
        if self.type is MetricType.TIME:
            if isinstance(self.value, str):
                if not TIME_STRING_PATTERN.match(self.value):
                    raise ValueError(
                        f"Time metric value must be seconds or MM:SS.ss, got {self.value!r}"
                    )
            elif self.value is not None and self.value < 0:
                raise ValueError("Time metric value cannot be negative")
        return self


# ========================================
# Charts
# ========================================

class ChartDataPoint(PerformanceModel):
    label: str
    value: float
    date: Optional[datetime] = None
    color: Optional[str] = None
    formatted_value: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class PerformanceChartData(PerformanceModel):
    """
    A renderable series.

    Points are ordered ascending by date whenever dates are present.
    """
    id: str
    title: str
    type: ChartType
    data: List[ChartDataPoint] = Field(default_factory=list)
    x_axis_label: Optional[str] = None
    y_axis_label: Optional[str] = None
    color: Optional[str] = None
    period: TimePeriod
    goal_line: Optional[float] = None
    personal_best_line: Optional[float] = None
    metric_kind: Optional[MetricKind] = None


# ========================================
# Sessions
# ========================================

class PerformanceSession(PerformanceModel):
    """One training or competition unit."""
    id: str
    date: datetime
    program: ProgramType
    session_type: str
    duration: float = Field(ge=0)  # minutes
    metrics: List[BasePerformanceMetric] = Field(default_factory=list)
    notes: Optional[str] = None
    instructor: Optional[str] = None
    location: Optional[str] = None
    weather: Optional[str] = None
    difficulty: Optional[int] = Field(default=None, ge=1, le=10)
    rating: Optional[float] = Field(default=None, ge=1, le=5)

    @field_validator("date")
    @classmethod
    def naive_utc_date(cls, value: datetime) -> datetime:
        """Session dates are compared as naive UTC."""
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


# ========================================
# Analytics
# ========================================

class PerformanceComparison(PerformanceModel):
    metric: str
    current: Union[float, str]
    previous: Union[float, str]
    improvement: float
    percentage_change: float
    period: str


class PerformanceAchievement(PerformanceModel):
    id: str
    title: str
    description: str
    category: str
    date_achieved: datetime
    metric: str
    value: Union[float, str]
    icon: str
    rarity: str  # common, rare, epic, legendary
    program: ProgramType


class PerformanceGoal(PerformanceModel):
    id: str
    title: str
    description: str
    target_value: Union[float, str]
    current_value: Union[float, str]
    unit: str
    category: str
    deadline: Optional[datetime] = None
    progress: float = Field(ge=0, le=100)
    status: str  # active, completed, paused, missed
    program: ProgramType


class PerformanceAnalytics(PerformanceModel):
    """
    Per-period summary for one program.

    The optional program-specific fields feed the recommendation rules;
    they stay None for programs that do not measure them.
    """
    program: ProgramType
    period: TimePeriod
    total_sessions: int = 0
    total_duration: float = 0
    average_rating: float = 0
    consistency: Optional[float] = None
    improvement_metrics: List[PerformanceComparison] = Field(default_factory=list)
    top_achievements: List[PerformanceAchievement] = Field(default_factory=list)
    goal_progress: List[PerformanceGoal] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)

    # Program-specific inputs
    total_distance: Optional[float] = None
    average_technique: Optional[float] = None
    favorite_stroke: Optional[str] = None
    average_shooting_accuracy: Optional[float] = None
    average_skill_rating: Optional[float] = None


# ========================================
# Configuration and validation
# ========================================

class ProgramPerformanceConfig(PerformanceModel):
    """Static descriptor of a program, created once per program."""
    program: ProgramType
    display_name: str
    primary_color: str
    secondary_color: str
    icon: str
    metrics: Tuple[str, ...]
    chart_types: Tuple[ChartType, ...]
    session_types: Tuple[str, ...]
    skill_levels: Tuple[str, ...]
    equipment: Tuple[str, ...] = ()


class ValidationResult(PerformanceModel):
    """Outcome of validating one raw record. Falsy when invalid."""
    valid: bool
    errors: List[str] = Field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        return cls(valid=not errors, errors=errors)


# ========================================
# Reports
# ========================================

class RejectedRecord(PerformanceModel):
    """A raw record left out of a report, with the reasons."""
    index: int
    errors: List[str] = Field(default_factory=list)


class PerformanceReport(PerformanceModel):
    """Metrics, charts and analytics for one program and period."""
    program: ProgramType
    period: TimePeriod
    metrics: List[BasePerformanceMetric] = Field(default_factory=list)
    charts: List[PerformanceChartData] = Field(default_factory=list)
    analytics: PerformanceAnalytics
    rejected_records: List[RejectedRecord] = Field(default_factory=list)
