"""
Football domain models.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field, model_validator

from performance_engine.models.performance import (
    BasePerformanceMetric,
    PerformanceModel,
    PerformanceSession,
    ProgramType,
)


class FootballPosition(str, Enum):
    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"
    LEFT_BACK = "left_back"
    RIGHT_BACK = "right_back"
    CENTER_BACK = "center_back"
    DEFENSIVE_MIDFIELDER = "defensive_midfielder"
    ATTACKING_MIDFIELDER = "attacking_midfielder"
    WINGER = "winger"
    STRIKER = "striker"


class FootballSkill(str, Enum):
    PASSING = "passing"
    SHOOTING = "shooting"
    DRIBBLING = "dribbling"
    DEFENDING = "defending"
    CROSSING = "crossing"
    HEADING = "heading"
    FIRST_TOUCH = "first_touch"
    SPEED = "speed"
    AGILITY = "agility"
    STAMINA = "stamina"
    TACTICAL_AWARENESS = "tactical_awareness"


# Skills averaged by the technical progress chart
TECHNICAL_SKILLS = (
    FootballSkill.PASSING,
    FootballSkill.SHOOTING,
    FootballSkill.DRIBBLING,
    FootballSkill.FIRST_TOUCH,
)


class FootballDrill(str, Enum):
    CONE_WEAVING = "cone_weaving"
    PASSING_ACCURACY = "passing_accuracy"
    SHOOTING_PRACTICE = "shooting_practice"
    JUGGLING = "juggling"
    ONE_V_ONE_DEFENDING = "1v1_defending"
    CROSSING_PRACTICE = "crossing_practice"
    FREE_KICKS = "free_kicks"
    PENALTIES = "penalties"
    SPRINT_INTERVALS = "sprint_intervals"
    POSSESSION_PLAY = "possession_play"


class FootballSkillLevel(str, Enum):
    BEGINNER = "beginner"
    YOUTH = "youth"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    SEMI_PRO = "semi_pro"
    PROFESSIONAL = "professional"


def _ratings(*values: int) -> Dict[FootballSkill, int]:
    return dict(zip(FootballSkill, values))


# Expected 1-10 rating per skill at each level, in FootballSkill order
FOOTBALL_STANDARDS: Dict[FootballSkillLevel, Dict[FootballSkill, int]] = {
    FootballSkillLevel.BEGINNER: _ratings(3, 2, 3, 2, 2, 2, 3, 3, 3, 3, 2),
    FootballSkillLevel.YOUTH: _ratings(5, 4, 5, 4, 4, 4, 5, 5, 5, 5, 4),
    FootballSkillLevel.INTERMEDIATE: _ratings(6, 6, 6, 6, 5, 6, 6, 6, 6, 6, 6),
    FootballSkillLevel.ADVANCED: _ratings(8, 7, 7, 7, 7, 7, 8, 7, 7, 7, 7),
    FootballSkillLevel.SEMI_PRO: _ratings(9, 8, 8, 8, 8, 8, 9, 8, 8, 8, 8),
    FootballSkillLevel.PROFESSIONAL: _ratings(10, 9, 9, 9, 9, 9, 10, 9, 9, 9, 9),
}


class FootballGameStats(PerformanceModel):
    goals: int = 0
    assists: int = 0
    shots_on_target: int = 0
    total_shots: int = 0
    passes: int = 0
    passes_completed: int = 0
    tackles: int = 0
    tackles_won: int = 0
    interceptions: int = 0
    crosses: int = 0
    crosses_completed: int = 0
    dribbles_attempted: int = 0
    dribbles_successful: int = 0
    distance_covered: float = 0  # km
    sprint_distance: float = 0  # m
    top_speed: float = 0  # km/h
    minutes_played: float = 0
    yellow_cards: int = 0
    red_cards: int = 0


class FootballPerformanceMetric(BasePerformanceMetric):
    skill: Optional[FootballSkill] = None
    position: Optional[FootballPosition] = None
    accuracy: Optional[float] = None  # percentage
    distance: Optional[float] = None
    speed: Optional[float] = None  # km/h
    game_stats: Optional[FootballGameStats] = None


class FootballSkillAssessment(PerformanceModel):
    skill: FootballSkill
    rating: float = Field(ge=1, le=10)
    accuracy: Optional[float] = Field(default=None, ge=0, le=100)
    consistency: Optional[float] = Field(default=None, ge=1, le=10)
    game_application: Optional[float] = Field(default=None, ge=1, le=10)
    weak_foot: Optional[float] = Field(default=None, ge=1, le=10)
    under_pressure: Optional[float] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None


class FootballPhysicalStats(PerformanceModel):
    distance_covered: float = 0  # km
    sprints_completed: int = 0
    max_speed: float = 0  # km/h
    average_speed: float = 0  # km/h


class FootballSession(PerformanceSession):
    program: ProgramType = ProgramType.FOOTBALL
    drills: List[FootballDrill] = Field(default_factory=list)
    skills_focus: List[FootballSkill] = Field(default_factory=list)
    position: Optional[FootballPosition] = None
    match_play: bool = False
    scrimmage: bool = False
    skill_assessments: List[FootballSkillAssessment] = Field(default_factory=list)
    physical_stats: Optional[FootballPhysicalStats] = None

    @model_validator(mode="after")
    def _check_program(self) -> "FootballSession":
        if self.program is not ProgramType.FOOTBALL:
            raise ValueError(f"FootballSession cannot carry program '{self.program.value}'")
        return self
