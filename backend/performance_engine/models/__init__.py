"""
Performance value objects shared by every program adapter.
"""
from performance_engine.models.performance import (
    BasePerformanceMetric,
    ChartDataPoint,
    ChartType,
    MetricKind,
    MetricTrend,
    MetricType,
    PerformanceAchievement,
    PerformanceAnalytics,
    PerformanceChartData,
    PerformanceComparison,
    PerformanceGoal,
    PerformanceReport,
    PerformanceSession,
    ProgramPerformanceConfig,
    ProgramType,
    RejectedRecord,
    TimePeriod,
    TrendDirection,
    ValidationResult,
)
from performance_engine.models.swimming import (
    PoolSize,
    SwimmingSession,
    SwimmingStroke,
    SwimmingTimeDetail,
)
from performance_engine.models.basketball import BasketballSession
from performance_engine.models.football import FootballSession

__all__ = [
    # Enumerations
    "ChartType",
    "MetricKind",
    "MetricType",
    "ProgramType",
    "TimePeriod",
    "TrendDirection",
    # Metric model
    "BasePerformanceMetric",
    "ChartDataPoint",
    "MetricTrend",
    "PerformanceAchievement",
    "PerformanceAnalytics",
    "PerformanceChartData",
    "PerformanceComparison",
    "PerformanceGoal",
    "PerformanceReport",
    "PerformanceSession",
    "ProgramPerformanceConfig",
    "RejectedRecord",
    "ValidationResult",
    # Program sessions
    "SwimmingSession",
    "BasketballSession",
    "FootballSession",
    # Swimming
    "PoolSize",
    "SwimmingStroke",
    "SwimmingTimeDetail",
]
