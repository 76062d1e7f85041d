"""
Swimming domain models.

Strokes and distances are drawn from fixed enumerations. Free-form input
("fly", "IM", "50 m pool") is normalized once by SwimmingDataAdapter and
never re-interpreted after that.
"""
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import Field, model_validator

from performance_engine.models.performance import (
    BasePerformanceMetric,
    PerformanceModel,
    PerformanceSession,
    ProgramType,
)


class SwimmingStroke(str, Enum):
    FREESTYLE = "freestyle"
    BACKSTROKE = "backstroke"
    BREASTSTROKE = "breaststroke"
    BUTTERFLY = "butterfly"
    INDIVIDUAL_MEDLEY = "individual_medley"


SWIMMING_DISTANCES: Tuple[int, ...] = (25, 50, 100, 200, 400, 800, 1500)


class PoolType(str, Enum):
    SHORT_COURSE = "short_course"  # 25m
    LONG_COURSE = "long_course"  # 50m


class PoolSize(str, Enum):
    """Pool sizes offered by academy facilities."""
    POOL_17M = "17m"
    POOL_25M = "25m"
    POOL_50M = "50m"


class SwimmingSkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    COMPETITIVE = "competitive"
    ELITE = "elite"


STROKE_DISPLAY_NAMES: Dict[SwimmingStroke, str] = {
    SwimmingStroke.FREESTYLE: "Freestyle",
    SwimmingStroke.BACKSTROKE: "Backstroke",
    SwimmingStroke.BREASTSTROKE: "Breaststroke",
    SwimmingStroke.BUTTERFLY: "Butterfly",
    SwimmingStroke.INDIVIDUAL_MEDLEY: "Individual Medley",
}


def _standard(*times: int) -> Dict[int, int]:
    return dict(zip(SWIMMING_DISTANCES, times))


# Qualifying times in seconds per level, stroke and distance
SWIMMING_STANDARDS: Dict[SwimmingSkillLevel, Dict[SwimmingStroke, Dict[int, int]]] = {
    SwimmingSkillLevel.BEGINNER: {
        SwimmingStroke.FREESTYLE: _standard(30, 65, 140, 300, 650, 1400, 2700),
        SwimmingStroke.BACKSTROKE: _standard(35, 75, 160, 340, 720, 1500, 2900),
        SwimmingStroke.BREASTSTROKE: _standard(40, 85, 180, 380, 800, 1650, 3100),
        SwimmingStroke.BUTTERFLY: _standard(35, 80, 170, 380, 820, 1700, 3200),
        SwimmingStroke.INDIVIDUAL_MEDLEY: _standard(40, 85, 180, 360, 760, 1600, 3000),
    },
    SwimmingSkillLevel.INTERMEDIATE: {
        SwimmingStroke.FREESTYLE: _standard(22, 48, 105, 220, 460, 980, 1850),
        SwimmingStroke.BACKSTROKE: _standard(25, 55, 120, 250, 520, 1100, 2050),
        SwimmingStroke.BREASTSTROKE: _standard(28, 62, 135, 285, 590, 1230, 2300),
        SwimmingStroke.BUTTERFLY: _standard(25, 58, 125, 270, 580, 1220, 2280),
        SwimmingStroke.INDIVIDUAL_MEDLEY: _standard(28, 62, 135, 280, 580, 1200, 2250),
    },
    SwimmingSkillLevel.ADVANCED: {
        SwimmingStroke.FREESTYLE: _standard(18, 38, 82, 170, 350, 740, 1400),
        SwimmingStroke.BACKSTROKE: _standard(20, 43, 92, 190, 395, 830, 1550),
        SwimmingStroke.BREASTSTROKE: _standard(22, 48, 105, 220, 460, 960, 1800),
        SwimmingStroke.BUTTERFLY: _standard(19, 42, 92, 200, 430, 900, 1700),
        SwimmingStroke.INDIVIDUAL_MEDLEY: _standard(21, 46, 100, 210, 440, 920, 1750),
    },
    SwimmingSkillLevel.COMPETITIVE: {
        SwimmingStroke.FREESTYLE: _standard(15, 32, 68, 142, 295, 620, 1170),
        SwimmingStroke.BACKSTROKE: _standard(17, 36, 77, 160, 335, 705, 1320),
        SwimmingStroke.BREASTSTROKE: _standard(18, 40, 87, 183, 385, 810, 1520),
        SwimmingStroke.BUTTERFLY: _standard(16, 35, 77, 168, 365, 770, 1450),
        SwimmingStroke.INDIVIDUAL_MEDLEY: _standard(17, 38, 83, 175, 370, 780, 1480),
    },
    SwimmingSkillLevel.ELITE: {
        SwimmingStroke.FREESTYLE: _standard(12, 26, 55, 115, 240, 500, 940),
        SwimmingStroke.BACKSTROKE: _standard(13, 29, 62, 130, 270, 570, 1070),
        SwimmingStroke.BREASTSTROKE: _standard(14, 32, 70, 148, 310, 650, 1220),
        SwimmingStroke.BUTTERFLY: _standard(12, 28, 62, 135, 295, 620, 1170),
        SwimmingStroke.INDIVIDUAL_MEDLEY: _standard(13, 30, 67, 142, 300, 630, 1190),
    },
}


def classify_swim_time(
    stroke: SwimmingStroke,
    distance: int,
    seconds: float,
) -> Optional[SwimmingSkillLevel]:
    """
    Highest skill level whose standard the time meets.

    Returns None for the 0-second sentinel, unknown distances, or
    times slower than the beginner standard.
    """
    if seconds <= 0 or distance not in SWIMMING_DISTANCES:
        return None

    achieved = None
    for level in SwimmingSkillLevel:
        if seconds <= SWIMMING_STANDARDS[level][stroke][distance]:
            achieved = level
    return achieved


# ========================================
# Session-level records
# ========================================

class SwimmingPerformanceMetric(BasePerformanceMetric):
    stroke: Optional[SwimmingStroke] = None
    distance: Optional[int] = None
    pool_type: Optional[PoolType] = None
    time_in_seconds: Optional[float] = None
    stroke_rate: Optional[float] = None  # strokes per minute
    stroke_count: Optional[int] = None
    splits: List[float] = Field(default_factory=list)


class SwimmingTechniqueMetrics(PerformanceModel):
    """Coach technique scores, each on a 0-100 scale."""
    stroke: SwimmingStroke
    efficiency: float = Field(ge=0, le=100)
    streamline: float = Field(ge=0, le=100)
    timing: float = Field(ge=0, le=100)
    breathing: float = Field(ge=0, le=100)
    turns: Optional[float] = Field(default=None, ge=0, le=100)
    starts: Optional[float] = Field(default=None, ge=0, le=100)
    overall_technique: float = Field(ge=0, le=100)


class SwimmingSet(PerformanceModel):
    id: str
    type: str  # warmup, main, cooldown, drill, kick, pull
    description: str = ""
    repetitions: int = Field(ge=0)
    distance: int
    rest_interval: float = 0  # seconds
    stroke: SwimmingStroke
    times: List[float] = Field(default_factory=list)
    effort: Optional[int] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None

    @property
    def total_distance(self) -> int:
        return self.repetitions * self.distance


class SwimmingSession(PerformanceSession):
    program: ProgramType = ProgramType.SWIMMING
    pool_type: PoolType = PoolType.SHORT_COURSE
    water_temperature: Optional[float] = None
    sets: List[SwimmingSet] = Field(default_factory=list)
    total_distance: float = Field(default=0, ge=0)  # meters
    average_pace: Optional[float] = None  # seconds per 100m
    technique: List[SwimmingTechniqueMetrics] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_program(self) -> "SwimmingSession":
        if self.program is not ProgramType.SWIMMING:
            raise ValueError(f"SwimmingSession cannot carry program '{self.program.value}'")
        return self


# ========================================
# Normalized display records
# ========================================

class SwimmingTimeDetail(PerformanceModel):
    """One recorded swim in an event's history."""
    id: str
    time: str
    time_in_seconds: float
    date: str
    venue: Optional[str] = None
    competition: Optional[str] = None
    heat: Optional[str] = None
    lane: Optional[int] = None
    splits: List[str] = Field(default_factory=list)
    points: Optional[int] = None
    is_pb: bool = False
    is_season_best: bool = False
    is_club_record: bool = False
    notes: Optional[str] = None


class SwimmingPerformanceGoal(PerformanceModel):
    id: str
    target_time: str
    target_time_in_seconds: float
    label: str
    type: str = "personal"  # personal, club, national, season
    achieved: bool = False
    achieved_date: Optional[str] = None
    deadline: Optional[str] = None


class SwimmingChartPoint(PerformanceModel):
    label: str  # MM:DD
    value: float  # seconds
    formatted_value: str


class SwimmingChartData(PerformanceModel):
    data: List[SwimmingChartPoint] = Field(default_factory=list)
    goal_line: Optional[float] = None
    personal_best_line: Optional[float] = None


class SwimmingImprovement(PerformanceModel):
    percentage: float = 0
    time_change: str = "0.00"
    period: str = "this season"


class SwimmingTimeComparison(PerformanceModel):
    """Difference between two swims; a "-" sign means the current one is faster."""
    is_improvement: bool
    difference: float
    sign: str


class SwimmingPerformanceStats(PerformanceModel):
    total_races: int = 0
    average_time: str = "00:00.00"
    average_time_in_seconds: float = 0
    improvement: SwimmingImprovement = Field(default_factory=SwimmingImprovement)
    consistency: float = 0


class SwimmingPerformanceCard(PerformanceModel):
    """Summary card for one event on the times overview."""
    id: str
    title: str
    distance: int
    stroke: SwimmingStroke
    pool_size: PoolSize
    best_time: str
    best_time_in_seconds: float
    last_swam: str
    total_races: int
    improvement: float  # percentage, positive = faster


class SwimmingBestTime(PerformanceModel):
    time: str
    time_in_seconds: float
    date: str
    venue: Optional[str] = None


class SwimmingClubRecord(PerformanceModel):
    time: str
    time_in_seconds: float
    holder: str
    date: Optional[str] = None


class SwimmingEventInfo(PerformanceModel):
    title: str
    distance: int
    stroke: SwimmingStroke
    pool_size: PoolSize


class SwimmingPerformanceDetail(PerformanceModel):
    """Everything the event progression view shows."""
    performance: SwimmingEventInfo
    best_time: SwimmingBestTime
    club_record: Optional[SwimmingClubRecord] = None
    goals: List[SwimmingPerformanceGoal] = Field(default_factory=list)
    all_times: List[SwimmingTimeDetail] = Field(default_factory=list)
    chart_data: SwimmingChartData = Field(default_factory=SwimmingChartData)
    statistics: SwimmingPerformanceStats = Field(default_factory=SwimmingPerformanceStats)
