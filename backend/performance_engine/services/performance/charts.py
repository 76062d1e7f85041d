"""
Chart Data Builder - Shared chart construction and display transforms.

Lower swim times are better, but chart libraries draw larger values higher.
Time series are therefore drawn on an inverted axis:

    display = (max_value + min_value) - value

max_value/min_value always come from the data series. Goal and
personal-best lines reuse that same pair; recomputing it after adding the
goal would shift the goal relative to the data.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from performance_engine.models.performance import (
    ChartDataPoint,
    ChartType,
    MetricKind,
    PerformanceChartData,
    TimePeriod,
)

# Padding added around the y-axis range of time charts
AXIS_PADDING = 0.1


def format_chart_label(moment: Union[date, datetime]) -> str:
    """MM/DD label for a session-dated chart point."""
    return f"{moment.month:02d}/{moment.day:02d}"


def build_chart(
    chart_id: str,
    title: str,
    chart_type: ChartType,
    points: Iterable[ChartDataPoint],
    period: TimePeriod,
    metric_kind: MetricKind,
    x_axis_label: Optional[str] = None,
    y_axis_label: Optional[str] = None,
    color: Optional[str] = None,
    goal_line: Optional[float] = None,
    personal_best_line: Optional[float] = None,
) -> PerformanceChartData:
    """
    Build a chart with points in ascending date order.

    Undated points (pie slices, radar axes) keep their given order.
    """
    data = list(points)
    if any(p.date is not None for p in data):
        data.sort(key=lambda p: (p.date is not None, p.date or datetime.min))

    return PerformanceChartData(
        id=chart_id,
        title=title,
        type=chart_type,
        data=data,
        x_axis_label=x_axis_label,
        y_axis_label=y_axis_label,
        color=color,
        period=period,
        goal_line=goal_line,
        personal_best_line=personal_best_line,
        metric_kind=metric_kind,
    )


def invert_display(value: float, max_value: float, min_value: float) -> float:
    """Reflect value within [min_value, max_value]. Applying it twice is a no-op."""
    return (max_value + min_value) - value


def is_time_chart(chart: PerformanceChartData) -> bool:
    """
    Whether a chart plots times and needs the inverted axis.

    An explicit metric_kind decides. Without one, fall back to a
    heuristic: the y-axis label or title mentions "time". The heuristic
    can misfire (e.g. "Time in Zone" minutes), so builders should always
    set metric_kind.
    """
    if chart.metric_kind is not None:
        return chart.metric_kind is MetricKind.TIME

    y_label = (chart.y_axis_label or "").lower()
    title = (chart.title or "").lower()
    return "time" in y_label or "time" in title


@dataclass(frozen=True)
class AxisTransform:
    """Value <-> display mapping fixed by one data series."""
    max_value: float
    min_value: float
    inverted: bool

    @classmethod
    def from_series(cls, values: Sequence[float], inverted: bool) -> "AxisTransform":
        if not values:
            return cls(max_value=0.0, min_value=0.0, inverted=inverted)
        return cls(max_value=max(values), min_value=min(values), inverted=inverted)

    def to_display(self, value: float) -> float:
        if not self.inverted:
            return value
        return invert_display(value, self.max_value, self.min_value)

    def to_true(self, displayed: float) -> float:
        # The reflection is its own inverse
        return self.to_display(displayed)

    def format_tick(self, tick: Union[float, str]) -> str:
        """Y-axis tick label showing the true value."""
        try:
            value = float(tick)
        except (TypeError, ValueError):
            return str(tick)

        if self.inverted:
            return f"{self.to_true(value):.2f}"
        return f"{value:05.2f}"


@dataclass(frozen=True)
class DisplayPoint:
    label: str
    value: float  # geometry value handed to the chart library
    true_value: float
    text: str  # label shown on the data point


@dataclass(frozen=True)
class DisplaySeries:
    """Render-ready form of a PerformanceChartData."""
    chart_id: str
    points: Tuple[DisplayPoint, ...]
    transform: AxisTransform
    goal_line: Optional[float] = None
    personal_best_line: Optional[float] = None
    y_axis_min: Optional[float] = None
    y_axis_max: Optional[float] = None

    @property
    def inverted(self) -> bool:
        return self.transform.inverted

    def format_tick(self, tick: Union[float, str]) -> str:
        return self.transform.format_tick(tick)


def build_display_series(
    chart: PerformanceChartData,
    is_time_series: Optional[bool] = None,
) -> DisplaySeries:
    """
    Apply the display transform to a chart.

    Args:
        chart: Chart produced by a program adapter
        is_time_series: Overrides metric_kind and the title heuristic

    Returns:
        DisplaySeries with transformed points, reference lines and axis range
    """
    inverted = is_time_chart(chart) if is_time_series is None else is_time_series
    values = [p.value for p in chart.data]
    transform = AxisTransform.from_series(values, inverted)

    points = tuple(
        DisplayPoint(
            label=p.label,
            value=transform.to_display(p.value),
            true_value=p.value,
            text=p.formatted_value or f"{p.value:.2f}",
        )
        for p in chart.data
    )

    if not inverted or not values:
        return DisplaySeries(
            chart_id=chart.id,
            points=points,
            transform=transform,
            goal_line=chart.goal_line,
            personal_best_line=chart.personal_best_line,
        )

    goal_line = transform.to_display(chart.goal_line) if chart.goal_line is not None else None
    pb_line = (
        transform.to_display(chart.personal_best_line)
        if chart.personal_best_line is not None
        else None
    )

    # Range spans the data plus any reference line, in display space
    bounds: List[float] = [transform.min_value, transform.max_value]
    bounds.extend(line for line in (goal_line, pb_line) if line is not None)

    return DisplaySeries(
        chart_id=chart.id,
        points=points,
        transform=transform,
        goal_line=goal_line,
        personal_best_line=pb_line,
        y_axis_min=min(bounds) - AXIS_PADDING,
        y_axis_max=max(bounds) + AXIS_PADDING,
    )
