"""
Services module - Performance business logic layer.

Modules:
- performance: Program adapters, charts, analytics and the engine facade
"""
# Main exports for convenience
from performance_engine.services.performance import PerformanceEngine, get_program_adapter

__all__ = [
    "PerformanceEngine",
    "get_program_adapter",
]
