"""
Performance engine for academy programs.

Turns raw swimming, basketball and football records into metrics,
charts and period analytics.
"""
from performance_engine.services.performance import PerformanceEngine, get_program_adapter

__version__ = "1.0.0"

__all__ = ["PerformanceEngine", "get_program_adapter", "__version__"]
