"""
Performance module - Program performance metrics, charts and analytics.

This module provides:
- Domain data adapters for normalizing raw swim records
- Program adapters for swimming, basketball and football
- Chart display transforms and analytics aggregation
- The PerformanceEngine facade
"""
from performance_engine.services.performance.adapter import (
    PerformanceDataAdapter,
    SwimmingDataAdapter,
    seconds_to_time_string,
    swimming_data_adapter,
    time_string_to_seconds,
)
from performance_engine.services.performance.aggregator import (
    AnalyticsAggregator,
    RecommendationRule,
    consistency_score,
    filter_sessions_by_period,
)
from performance_engine.services.performance.charts import (
    AxisTransform,
    DisplaySeries,
    build_display_series,
    invert_display,
    is_time_chart,
)
from performance_engine.services.performance.engine import PerformanceEngine
from performance_engine.services.performance.programs import (
    BasketballPerformanceAdapter,
    FootballPerformanceAdapter,
    ProgramPerformanceAdapter,
    SwimmingPerformanceAdapter,
)
from performance_engine.services.performance.registry import (
    build_adapter_registry,
    get_program_adapter,
    parse_session,
)

__all__ = [
    # Domain adapters
    "PerformanceDataAdapter",
    "SwimmingDataAdapter",
    "swimming_data_adapter",
    "seconds_to_time_string",
    "time_string_to_seconds",
    # Aggregation
    "AnalyticsAggregator",
    "RecommendationRule",
    "consistency_score",
    "filter_sessions_by_period",
    # Charts
    "AxisTransform",
    "DisplaySeries",
    "build_display_series",
    "invert_display",
    "is_time_chart",
    # Program adapters
    "ProgramPerformanceAdapter",
    "BasketballPerformanceAdapter",
    "FootballPerformanceAdapter",
    "SwimmingPerformanceAdapter",
    # Registry and engine
    "build_adapter_registry",
    "get_program_adapter",
    "parse_session",
    "PerformanceEngine",
]
