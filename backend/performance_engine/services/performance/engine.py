"""
Performance Engine - Entry point for the presentation layer.

Orchestrates:
- Adapter selection by program
- Raw record validation and metric transformation
- Period filtering, chart generation and analytics
"""
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from performance_engine.core.logging import get_logger
from performance_engine.models.performance import (
    BasePerformanceMetric,
    PerformanceChartData,
    PerformanceReport,
    PerformanceSession,
    ProgramType,
    RejectedRecord,
    TimePeriod,
    ValidationResult,
)
from performance_engine.models.swimming import SwimmingPerformanceCard, SwimmingPerformanceDetail
from performance_engine.services.performance.adapter import (
    SwimmingDataAdapter,
    swimming_data_adapter,
)
from performance_engine.services.performance.aggregator import filter_sessions_by_period
from performance_engine.services.performance.charts import DisplaySeries, build_display_series
from performance_engine.services.performance.programs import ProgramPerformanceAdapter
from performance_engine.services.performance.registry import (
    build_adapter_registry,
    lookup_adapter,
    parse_session,
)

logger = get_logger(__name__)

SessionInput = Union[PerformanceSession, Dict[str, Any]]


class PerformanceEngine:
    """
    Main performance reporting engine.

    Usage:
        engine = PerformanceEngine()
        report = engine.build_report(
            program="swimming",
            raw_records=[{"stroke": "fly", "distance": 100, "timeInSeconds": 65.5}],
            sessions=sessions,
            period=TimePeriod.MONTH,
        )
    """

    def __init__(
        self,
        registry: Optional[Mapping[ProgramType, ProgramPerformanceAdapter]] = None,
        swimming_adapter: Optional[SwimmingDataAdapter] = None,
    ):
        self._registry = registry if registry is not None else build_adapter_registry()
        self._swimming = swimming_adapter or swimming_data_adapter

    def get_adapter(self, program: Union[str, ProgramType]) -> ProgramPerformanceAdapter:
        return lookup_adapter(self._registry, program)

    def validate(self, program: Union[str, ProgramType], record: Dict[str, Any]) -> ValidationResult:
        """Validate one raw record for a program."""
        return self.get_adapter(program).check_performance_data(record)

    def transform(
        self,
        program: Union[str, ProgramType],
        raw_records: Sequence[Dict[str, Any]],
    ) -> Tuple[List[BasePerformanceMetric], List[RejectedRecord]]:
        """
        Validate and transform raw records.

        Args:
            program: Program the records belong to
            raw_records: Raw metric records

        Returns:
            Metrics for valid records and a RejectedRecord per invalid one
        """
        adapter = self.get_adapter(program)
        accepted = []
        rejected = []

        for index, record in enumerate(raw_records):
            result = adapter.check_performance_data(record)
            if result:
                accepted.append(record)
                continue

            rejected.append(RejectedRecord(index=index, errors=result.errors))
            logger.warning(
                "Rejected performance record",
                program=adapter.program.value,
                index=index,
                errors=result.errors,
            )

        return adapter.transform_metrics(accepted), rejected

    def build_report(
        self,
        program: Union[str, ProgramType],
        raw_records: Sequence[Dict[str, Any]],
        sessions: Sequence[SessionInput],
        period: Union[str, TimePeriod],
        reference_date: Optional[Union[date, datetime]] = None,
    ) -> PerformanceReport:
        """
        Build the full performance report for a program and period.

        Args:
            program: Program selector
            raw_records: Raw metric records, validated before use
            sessions: Session models or raw session dicts
            period: Reporting period
            reference_date: End of the period window (default: latest session)

        Returns:
            PerformanceReport with metrics, charts, analytics and rejections
        """
        adapter = self.get_adapter(program)
        period = TimePeriod(period)

        logger.info(
            "Building performance report",
            program=adapter.program.value,
            period=period.value,
            records=len(raw_records),
            sessions=len(sessions),
        )

        parsed = [s if isinstance(s, PerformanceSession) else parse_session(s) for s in sessions]
        own = [s for s in parsed if s.program is adapter.program]
        in_period = filter_sessions_by_period(own, period, reference_date)

        metrics, rejected = self.transform(adapter.program, raw_records)
        charts = adapter.generate_charts(in_period, period)
        analytics = adapter.calculate_analytics(in_period, period)

        logger.info(
            "Performance report built",
            program=adapter.program.value,
            metrics=len(metrics),
            rejected=len(rejected),
            charts=len(charts),
            sessions_in_period=len(in_period),
        )

        return PerformanceReport(
            program=adapter.program,
            period=period,
            metrics=metrics,
            charts=charts,
            analytics=analytics,
            rejected_records=rejected,
        )

    def display_series(self, chart: PerformanceChartData) -> DisplaySeries:
        return build_display_series(chart)

    # ========================================
    # Swimming times views
    # ========================================

    def swimming_cards(self, raw_events: Sequence[Dict[str, Any]]) -> List[SwimmingPerformanceCard]:
        """Overview cards, one per raw swim event."""
        return [self._swimming.transform_performance_card(raw) for raw in raw_events]

    def swimming_event_detail(self, raw_event: Dict[str, Any]) -> SwimmingPerformanceDetail:
        return self._swimming.transform_performance_detail(raw_event)
