"""
Basketball domain models.
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


class BasketballPosition(str, Enum):
    POINT_GUARD = "point_guard"
    SHOOTING_GUARD = "shooting_guard"
    SMALL_FORWARD = "small_forward"
    POWER_FORWARD = "power_forward"
    CENTER = "center"


class BasketballSkill(str, Enum):
    SHOOTING = "shooting"
    DRIBBLING = "dribbling"
    PASSING = "passing"
    DEFENSE = "defense"
    REBOUNDING = "rebounding"
    FOOTWORK = "footwork"
    GAME_IQ = "game_iq"


class BasketballDrill(str, Enum):
    FREE_THROWS = "free_throws"
    THREE_POINTERS = "three_pointers"
    LAYUPS = "layups"
    CROSSOVER = "crossover"
    DEFENSIVE_SLIDES = "defensive_slides"
    BOX_OUT = "box_out"
    PASSING_ACCURACY = "passing_accuracy"


class BasketballSkillLevel(str, Enum):
    BEGINNER = "beginner"
    RECREATIONAL = "recreational"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    COMPETITIVE = "competitive"
    ELITE = "elite"


def _ratings(*values: int) -> Dict[BasketballSkill, int]:
    return dict(zip(BasketballSkill, values))


# Expected rating (0-100) per skill at each level.
# Order: shooting, dribbling, passing, defense, rebounding, footwork, game_iq
BASKETBALL_STANDARDS: Dict[BasketballSkillLevel, Dict[BasketballSkill, int]] = {
    BasketballSkillLevel.BEGINNER: _ratings(30, 40, 50, 30, 40, 35, 25),
    BasketballSkillLevel.RECREATIONAL: _ratings(50, 60, 65, 50, 55, 50, 45),
    BasketballSkillLevel.INTERMEDIATE: _ratings(65, 75, 75, 65, 70, 65, 60),
    BasketballSkillLevel.ADVANCED: _ratings(75, 85, 85, 78, 80, 78, 75),
    BasketballSkillLevel.COMPETITIVE: _ratings(85, 92, 92, 88, 88, 88, 85),
    BasketballSkillLevel.ELITE: _ratings(92, 98, 98, 95, 95, 95, 95),
}


class BasketballGameStats(PerformanceModel):
    points: int = 0
    assists: int = 0
    rebounds: int = 0
    steals: int = 0
    blocks: int = 0
    turnovers: int = 0
    fouls: int = 0
    field_goals_made: int = 0
    field_goals_attempted: int = 0
    three_pointers_made: int = 0
    three_pointers_attempted: int = 0
    free_throws_made: int = 0
    free_throws_attempted: int = 0
    minutes_played: float = 0


class BasketballPerformanceMetric(BasePerformanceMetric):
    skill: Optional[BasketballSkill] = None
    position: Optional[BasketballPosition] = None
    attempts: int = 0
    makes: int = 0
    accuracy: Optional[float] = None  # percentage
    game_stats: Optional[BasketballGameStats] = None


class BasketballSkillAssessment(PerformanceModel):
    skill: BasketballSkill
    level: float = Field(ge=1, le=10)
    accuracy: Optional[float] = Field(default=None, ge=0, le=100)
    consistency: Optional[float] = Field(default=None, ge=1, le=10)
    game_application: Optional[float] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None


class ShotTally(PerformanceModel):
    made: int = Field(default=0, ge=0)
    attempted: int = Field(default=0, ge=0)

    @property
    def accuracy(self) -> Optional[float]:
        """Make percentage, None when nothing was attempted."""
        if self.attempted == 0:
            return None
        return round(self.made / self.attempted * 100, 1)


class BasketballShootingStats(PerformanceModel):
    free_throws: ShotTally = Field(default_factory=ShotTally)
    three_pointers: ShotTally = Field(default_factory=ShotTally)
    mid_range: ShotTally = Field(default_factory=ShotTally)
    layups: ShotTally = Field(default_factory=ShotTally)

    def tallies(self) -> List[ShotTally]:
        return [self.free_throws, self.three_pointers, self.mid_range, self.layups]

    @property
    def total_made(self) -> int:
        return sum(t.made for t in self.tallies())

    @property
    def total_attempted(self) -> int:
        return sum(t.attempted for t in self.tallies())


class BasketballSession(PerformanceSession):
    program: ProgramType = ProgramType.BASKETBALL
    drills: List[BasketballDrill] = Field(default_factory=list)
    skills_focus: List[BasketballSkill] = Field(default_factory=list)
    position: Optional[BasketballPosition] = None
    gameplay: bool = False
    scrimmage: bool = False
    skill_assessments: List[BasketballSkillAssessment] = Field(default_factory=list)
    shooting_stats: Optional[BasketballShootingStats] = None

    @model_validator(mode="after")
    def _check_program(self) -> "BasketballSession":
        if self.program is not ProgramType.BASKETBALL:
            raise ValueError(f"BasketballSession cannot carry program '{self.program.value}'")
        return self
