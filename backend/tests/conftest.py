"""
Shared fixtures for performance engine tests.

Sessions are built from plain dicts the way the presentation layer
sends them, then validated into their program models.
"""
from datetime import datetime

import pytest

from performance_engine.models.basketball import BasketballSession
from performance_engine.models.football import FootballSession
from performance_engine.models.swimming import SwimmingSession


@pytest.fixture
def swim_times():
    """Three 100m freestyle swims, getting faster over ten days."""
    return [
        {"time": "00:27.80", "date": "2025-03-05"},
        {"time": "00:28.50", "date": "2025-03-01"},
        {"time": "00:26.30", "date": "2025-03-10"},
    ]


@pytest.fixture
def swim_event(swim_times):
    return {
        "id": "evt_1",
        "distance": 100,
        "stroke": "Free",
        "poolSize": "25m pool",
        "allTimes": swim_times,
    }


@pytest.fixture
def swimming_sessions():
    return [
        SwimmingSession(
            id="swim_1",
            date=datetime(2025, 3, 1, 7, 0),
            session_type="training",
            duration=60,
            rating=4,
            total_distance=2000,
            average_pace=95.0,
            sets=[
                {"id": "s1", "type": "main", "repetitions": 8, "distance": 100, "stroke": "freestyle"},
                {"id": "s2", "type": "drill", "repetitions": 4, "distance": 50, "stroke": "backstroke"},
            ],
            technique=[{
                "stroke": "freestyle", "efficiency": 60, "streamline": 65,
                "timing": 62, "breathing": 58, "overall_technique": 62,
            }],
        ),
        SwimmingSession(
            id="swim_2",
            date=datetime(2025, 3, 8, 7, 0),
            session_type="endurance",
            duration=75,
            rating=None,
            total_distance=2500,
            average_pace=92.0,
            sets=[
                {"id": "s1", "type": "main", "repetitions": 10, "distance": 100, "stroke": "freestyle"},
            ],
            technique=[{
                "stroke": "freestyle", "efficiency": 66, "streamline": 68,
                "timing": 64, "breathing": 60, "overall_technique": 66,
            }],
        ),
    ]


@pytest.fixture
def basketball_sessions():
    return [
        BasketballSession(
            id="bb_1",
            date=datetime(2025, 3, 2),
            session_type="practice",
            duration=60,
            rating=3,
            skill_assessments=[
                {"skill": "shooting", "level": 4, "accuracy": 40},
                {"skill": "dribbling", "level": 3},
            ],
            shooting_stats={
                "free_throws": {"made": 4, "attempted": 10},
                "layups": {"made": 2, "attempted": 5},
            },
        ),
        BasketballSession(
            id="bb_2",
            date=datetime(2025, 3, 9),
            session_type="scrimmage",
            duration=45,
            gameplay=True,
            skill_assessments=[{"skill": "shooting", "level": 5, "accuracy": 45}],
        ),
    ]


@pytest.fixture
def football_sessions():
    return [
        FootballSession(
            id="fb_1",
            date=datetime(2025, 3, 3),
            session_type="training",
            duration=60,
            skill_assessments=[
                {"skill": "passing", "rating": 5},
                {"skill": "dribbling", "rating": 4},
            ],
            physical_stats={"distance_covered": 5.2, "max_speed": 26},
        ),
        FootballSession(
            id="fb_2",
            date=datetime(2025, 3, 10),
            session_type="match",
            duration=90,
            match_play=True,
            skill_assessments=[
                {"skill": "passing", "rating": 6, "game_application": 7},
                {"skill": "shooting", "rating": 5, "game_application": 5},
            ],
            physical_stats={"distance_covered": 7.8, "max_speed": 28},
        ),
    ]
