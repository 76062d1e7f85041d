"""
Program performance adapters.

Each adapter validates, transforms, charts and summarizes performance
data for one academy program.
"""
from performance_engine.services.performance.programs.base import ProgramPerformanceAdapter
from performance_engine.services.performance.programs.basketball import BasketballPerformanceAdapter
from performance_engine.services.performance.programs.football import FootballPerformanceAdapter
from performance_engine.services.performance.programs.swimming import SwimmingPerformanceAdapter

__all__ = [
    "ProgramPerformanceAdapter",
    "BasketballPerformanceAdapter",
    "FootballPerformanceAdapter",
    "SwimmingPerformanceAdapter",
]
