"""
Domain Data Adapters - Normalize raw swim records for the times views.

Raw records arrive as loosely shaped dicts (camelCase keys, free-form
strokes, "MM:SS.ss" strings). Each adapter turns them into the display
models once, after which nothing re-interprets the raw input.

Supported domains:
- Swimming (event cards, event detail, progression charts)
"""
import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar, Union

from pydantic.alias_generators import to_snake

from performance_engine.core.config import settings
from performance_engine.core.logging import get_logger
from performance_engine.models.performance import TimePeriod
from performance_engine.models.swimming import (
    STROKE_DISPLAY_NAMES,
    PoolSize,
    SwimmingBestTime,
    SwimmingChartData,
    SwimmingChartPoint,
    SwimmingClubRecord,
    SwimmingEventInfo,
    SwimmingImprovement,
    SwimmingPerformanceCard,
    SwimmingPerformanceDetail,
    SwimmingPerformanceGoal,
    SwimmingPerformanceStats,
    SwimmingStroke,
    SwimmingTimeComparison,
    SwimmingTimeDetail,
)
from performance_engine.services.performance.aggregator import (
    SENTINEL_TIME,
    consistency_score,
    improvement_percentage,
    is_recorded,
    within_period,
)

logger = get_logger(__name__)

SENTINEL_TIME_STRING = "00:00.00"

# Goal line sits 3% under the personal best when no goal is given
GOAL_FACTOR = 0.97

DEFAULT_DISTANCE = 50

STROKE_SYNONYMS: Dict[str, SwimmingStroke] = {
    "freestyle": SwimmingStroke.FREESTYLE,
    "free": SwimmingStroke.FREESTYLE,
    "backstroke": SwimmingStroke.BACKSTROKE,
    "back": SwimmingStroke.BACKSTROKE,
    "breaststroke": SwimmingStroke.BREASTSTROKE,
    "breast": SwimmingStroke.BREASTSTROKE,
    "butterfly": SwimmingStroke.BUTTERFLY,
    "fly": SwimmingStroke.BUTTERFLY,
    "im": SwimmingStroke.INDIVIDUAL_MEDLEY,
    "medley": SwimmingStroke.INDIVIDUAL_MEDLEY,
    "individual medley": SwimmingStroke.INDIVIDUAL_MEDLEY,
    "individual_medley": SwimmingStroke.INDIVIDUAL_MEDLEY,
}

# Date layouts seen in raw swim records, tried after ISO 8601
_DATE_FORMATS = ("%d %b %Y", "%d %B %Y", "%d/%m/%Y", "%b %d, %Y")

CardT = TypeVar("CardT")
DetailT = TypeVar("DetailT")
StatsT = TypeVar("StatsT")


# ========================================
# Raw field helpers
# ========================================

def _field(raw: Dict[str, Any], name: str, default: Any = None) -> Any:
    """Read a raw field by its camelCase name, falling back to snake_case."""
    value = raw.get(name)
    if value is None:
        value = raw.get(to_snake(name))
    return default if value is None else value


def _is_number(value: Any) -> bool:
    """A finite int or float; bools excluded."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def parse_record_date(value: Any) -> Optional[datetime]:
    """
    Parse a raw record date.

    Accepts datetime/date objects, ISO 8601 strings and a few display
    layouts ("05 Mar 2025"). Returns None when nothing matches.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    logger.debug("Unparsable record date", value=text)
    return None


def _date_sort_key(entry: Dict[str, Any]) -> datetime:
    return parse_record_date(_field(entry, "date")) or datetime.min


# ========================================
# Time codec
# ========================================

def time_string_to_seconds(value: Union[str, int, float, None]) -> float:
    """
    Parse a swim time into seconds.

    "MM:SS.ss" gives minutes * 60 + seconds and a bare number is taken
    as seconds. Empty, unparsable and negative input all give the
    0 sentinel ("no time recorded").
    """
    if value is None or isinstance(value, bool):
        return SENTINEL_TIME

    if _is_number(value):
        seconds = float(value)
    else:
        text = str(value).strip()
        if not text or text == SENTINEL_TIME_STRING:
            return SENTINEL_TIME

        parts = text.split(":")
        try:
            if len(parts) == 2:
                seconds = int(parts[0]) * 60 + float(parts[1])
            elif len(parts) == 1:
                seconds = float(text)
            else:
                raise ValueError(text)
        except ValueError:
            logger.debug("Unparsable swim time", value=text)
            return SENTINEL_TIME

    if not math.isfinite(seconds) or seconds <= 0:
        return SENTINEL_TIME
    return round(seconds, 2)


def seconds_to_time_string(seconds: Optional[float]) -> str:
    """Format seconds as zero-padded "MM:SS.ss"; the 0 sentinel stays "00:00.00"."""
    if not is_recorded(seconds):
        return SENTINEL_TIME_STRING

    minutes, hundredths = divmod(round(seconds * 100), 6000)
    return f"{minutes:02d}:{hundredths / 100:05.2f}"


def format_time_change(delta: float) -> str:
    """Signed seconds difference, "-" meaning faster."""
    if delta == 0:
        return "0.00"
    return f"{delta:+.2f}"


# ========================================
# Adapter contract
# ========================================

class PerformanceDataAdapter(ABC, Generic[CardT, DetailT, StatsT]):
    """Abstract base class for domain data adapters."""

    domain: str = "unknown"

    @abstractmethod
    def transform_performance_card(self, raw: Dict[str, Any]) -> CardT:
        """
        Build an overview card from a raw event record.

        Args:
            raw: Raw event record

        Returns:
            Domain card model
        """
        pass

    @abstractmethod
    def transform_performance_detail(self, raw: Dict[str, Any]) -> DetailT:
        """Build the event detail view from a raw event record."""
        pass

    @abstractmethod
    def transform_stats(self, raw: Dict[str, Any]) -> StatsT:
        """Build summary statistics from a raw event record."""
        pass

    @abstractmethod
    def filter_by_period(
        self,
        entries: Sequence[Dict[str, Any]],
        period: TimePeriod,
        reference_date: Union[date, datetime],
    ) -> List[Dict[str, Any]]:
        """Keep entries dated within the period window ending at reference_date."""
        pass

    @abstractmethod
    def generate_chart_data(
        self,
        entries: Sequence[Dict[str, Any]],
        goal: Optional[float] = None,
    ) -> Any:
        """Build a progression series from raw entries."""
        pass


class SwimmingDataAdapter(PerformanceDataAdapter[
    SwimmingPerformanceCard, SwimmingPerformanceDetail, SwimmingPerformanceStats
]):
    """
    Adapter for raw swim event records.

    Expected raw shape (camelCase or snake_case keys):
        {
            "id": "...", "distance": 100, "stroke": "fly", "poolSize": "25m",
            "bestTime": "01:05.50", "allTimes": [{"time": "...", "date": "..."}],
            "goals": [...], "clubRecord": {...}, "improvement": {...}
        }
    """

    domain = "swimming"

    # ========================================
    # Normalization
    # ========================================

    def normalize_stroke(self, stroke: Any) -> SwimmingStroke:
        """Map a free-form stroke name onto the canonical enumeration."""
        if isinstance(stroke, SwimmingStroke):
            return stroke

        key = str(stroke or "").strip().lower()
        normalized = STROKE_SYNONYMS.get(key)
        if normalized is None:
            logger.debug("Unknown stroke, defaulting to freestyle", stroke=stroke)
            return SwimmingStroke.FREESTYLE
        return normalized

    def is_known_stroke(self, stroke: Any) -> bool:
        if isinstance(stroke, SwimmingStroke):
            return True
        return str(stroke or "").strip().lower() in STROKE_SYNONYMS

    def normalize_pool_size(self, pool_size: Any) -> PoolSize:
        """Substring match on "25" then "50"; anything else is a 25m pool."""
        text = str(pool_size.value if isinstance(pool_size, PoolSize) else pool_size or "")
        if "25" in text:
            return PoolSize.POOL_25M
        if "50" in text:
            return PoolSize.POOL_50M
        logger.debug("Unknown pool size, defaulting to 25m", pool_size=pool_size)
        return PoolSize.POOL_25M

    def event_title(self, distance: int, stroke: SwimmingStroke) -> str:
        return f"{distance}m {STROKE_DISPLAY_NAMES[stroke]}"

    def entry_seconds(self, entry: Dict[str, Any]) -> float:
        """Seconds for a raw time entry, preferring the numeric field."""
        seconds = _field(entry, "timeInSeconds")
        if _is_number(seconds) and seconds > 0:
            return round(float(seconds), 2)
        return time_string_to_seconds(_field(entry, "time"))

    # ========================================
    # Time history
    # ========================================

    def transform_all_times(self, raw_times: Sequence[Dict[str, Any]]) -> List[SwimmingTimeDetail]:
        """Normalize raw time entries, keeping input order."""
        details = []
        for index, entry in enumerate(raw_times):
            seconds = self.entry_seconds(entry)
            details.append(SwimmingTimeDetail(
                id=str(_field(entry, "id", f"time_{index}")),
                time=seconds_to_time_string(seconds),
                time_in_seconds=seconds,
                date=str(_field(entry, "date", "")),
                venue=_field(entry, "venue", settings.DEFAULT_VENUE),
                competition=_field(entry, "competition"),
                heat=_field(entry, "heat"),
                lane=_field(entry, "lane"),
                splits=[str(s) for s in _field(entry, "splits", [])],
                points=_field(entry, "points"),
                is_pb=bool(_field(entry, "isPb", False) or _field(entry, "isPB", False)),
                is_season_best=bool(_field(entry, "isSeasonBest", False)),
                is_club_record=bool(_field(entry, "isClubRecord", False)),
                notes=_field(entry, "notes"),
            ))
        return details

    def mark_personal_bests(self, times: Sequence[SwimmingTimeDetail]) -> List[SwimmingTimeDetail]:
        """
        Sort newest first and flag the fastest recorded swim(s) as PB.

        Sentinel times never become personal bests.
        """
        ordered = sorted(
            times,
            key=lambda t: parse_record_date(t.date) or datetime.min,
            reverse=True,
        )
        recorded = [t.time_in_seconds for t in ordered if is_recorded(t.time_in_seconds)]
        best = min(recorded) if recorded else None

        return [
            t.model_copy(update={"is_pb": best is not None and t.time_in_seconds == best})
            for t in ordered
        ]

    def compare_times(self, current: float, previous: float) -> SwimmingTimeComparison:
        """Compare two swims. A negative difference is an improvement."""
        if not is_recorded(current) or not is_recorded(previous):
            return SwimmingTimeComparison(is_improvement=False, difference=0, sign="")

        difference = round(current - previous, 2)
        return SwimmingTimeComparison(
            is_improvement=difference < 0,
            difference=abs(difference),
            sign="-" if difference < 0 else "+",
        )

    def filter_by_period(
        self,
        entries: Sequence[Dict[str, Any]],
        period: TimePeriod,
        reference_date: Union[date, datetime],
    ) -> List[Dict[str, Any]]:
        period = TimePeriod(period)
        if period.days is None:
            return list(entries)

        kept = []
        for entry in entries:
            moment = parse_record_date(_field(entry, "date"))
            # Undated entries cannot be placed in a window
            if moment is not None and within_period(moment, period, reference_date):
                kept.append(entry)
        return kept

    # ========================================
    # Improvement and statistics
    # ========================================

    def calculate_improvement(self, raw: Dict[str, Any]) -> float:
        """
        Improvement percentage for an event, positive = faster.

        An explicit improvement.percentage on the record wins. Otherwise
        the first and latest swims by date are compared.
        """
        improvement = _field(raw, "improvement")
        if isinstance(improvement, dict) and _is_number(improvement.get("percentage")):
            return float(improvement["percentage"])
        if _is_number(improvement):
            return float(improvement)

        raw_times = sorted(_field(raw, "allTimes", []), key=_date_sort_key)
        if len(raw_times) < 2:
            return 0
        return improvement_percentage(
            self.entry_seconds(raw_times[0]),
            self.entry_seconds(raw_times[-1]),
        )

    def transform_stats(self, raw: Dict[str, Any]) -> SwimmingPerformanceStats:
        """
        Summary statistics for an event.

        Explicit raw statistics are kept; missing ones are derived from
        the recorded swims in allTimes.
        """
        stats = _field(raw, "statistics", {})
        if not isinstance(stats, dict):
            stats = {}
        raw_times = sorted(_field(raw, "allTimes", []), key=_date_sort_key)
        recorded = [s for s in (self.entry_seconds(t) for t in raw_times) if is_recorded(s)]

        average = _field(stats, "averageTimeInSeconds")
        if not _is_number(average):
            average = time_string_to_seconds(_field(stats, "averageTime"))
        if not is_recorded(average) and recorded:
            average = round(sum(recorded) / len(recorded), 2)

        raw_improvement = _field(stats, "improvement", {})
        if _is_number(raw_improvement):
            raw_improvement = {"percentage": float(raw_improvement)}
        elif not isinstance(raw_improvement, dict):
            raw_improvement = {}
        if recorded and len(recorded) >= 2:
            time_change = format_time_change(round(recorded[-1] - recorded[0], 2))
        else:
            time_change = "0.00"

        consistency = _field(stats, "consistency")
        if not _is_number(consistency):
            consistency = consistency_score(recorded)

        return SwimmingPerformanceStats(
            total_races=int(_field(stats, "totalRaces", len(raw_times))),
            average_time=seconds_to_time_string(average),
            average_time_in_seconds=average or SENTINEL_TIME,
            improvement=SwimmingImprovement(
                percentage=_field(raw_improvement, "percentage", self.calculate_improvement(raw)),
                time_change=str(_field(raw_improvement, "timeChange", time_change)),
                period=_field(raw_improvement, "period", settings.DEFAULT_IMPROVEMENT_PERIOD),
            ),
            consistency=consistency,
        )

    # ========================================
    # Goals and charts
    # ========================================

    def transform_goals(self, raw_goals: Sequence[Dict[str, Any]]) -> List[SwimmingPerformanceGoal]:
        goals = []
        for index, goal in enumerate(raw_goals):
            seconds = _field(goal, "targetTimeInSeconds")
            if not (_is_number(seconds) and seconds > 0):
                seconds = time_string_to_seconds(_field(goal, "targetTime"))
            goals.append(SwimmingPerformanceGoal(
                id=str(_field(goal, "id", f"goal_{index}")),
                target_time=seconds_to_time_string(seconds),
                target_time_in_seconds=seconds,
                label=_field(goal, "label", "Goal"),
                type=_field(goal, "type", "personal"),
                achieved=bool(_field(goal, "achieved", False)),
                achieved_date=_field(goal, "achievedDate"),
                deadline=_field(goal, "deadline"),
            ))
        return goals

    def generate_chart_data(
        self,
        entries: Sequence[Dict[str, Any]],
        goal: Optional[float] = None,
    ) -> SwimmingChartData:
        """
        Progression series with personal-best and goal lines.

        Args:
            entries: Raw time entries in any order
            goal: Explicit goal time in seconds (optional)

        Returns:
            SwimmingChartData sorted by date. Without an explicit goal the
            goal line sits 3% under the personal best.
        """
        points = []
        for entry in sorted(entries, key=_date_sort_key):
            seconds = self.entry_seconds(entry)
            moment = parse_record_date(_field(entry, "date"))
            points.append(SwimmingChartPoint(
                label=self.format_date_for_chart(moment),
                value=seconds,
                formatted_value=seconds_to_time_string(seconds),
            ))

        recorded = [p.value for p in points if is_recorded(p.value)]
        personal_best = min(recorded) if recorded else None

        if is_recorded(goal):
            goal_line = goal
        elif personal_best is not None:
            goal_line = round(personal_best * GOAL_FACTOR, 2)
        else:
            goal_line = None

        return SwimmingChartData(
            data=points,
            goal_line=goal_line,
            personal_best_line=personal_best,
        )

    def format_date_for_chart(self, moment: Optional[datetime]) -> str:
        """MM:DD label for the progression chart, empty when undated."""
        if moment is None:
            return ""
        return f"{moment.month:02d}:{moment.day:02d}"

    # ========================================
    # Cards and detail
    # ========================================

    def normalize_distance(self, distance: Any) -> int:
        """Distance in meters from 100, "100" or "100m"; defaults to 50."""
        try:
            return int(float(str(distance).strip().lower().rstrip("m")))
        except ValueError:
            logger.debug("Unparsable distance, defaulting", distance=distance)
            return DEFAULT_DISTANCE

    def _event_key(self, raw: Dict[str, Any]):
        distance = self.normalize_distance(_field(raw, "distance", DEFAULT_DISTANCE))
        stroke = self.normalize_stroke(_field(raw, "stroke"))
        pool_size = self.normalize_pool_size(_field(raw, "poolSize"))
        return distance, stroke, pool_size

    def _best_seconds(self, raw: Dict[str, Any]) -> float:
        best = _field(raw, "bestTimeInSeconds")
        if _is_number(best) and best > 0:
            return round(float(best), 2)
        best = time_string_to_seconds(_field(raw, "bestTime"))
        if is_recorded(best):
            return best
        recorded = [
            s for s in (self.entry_seconds(t) for t in _field(raw, "allTimes", []))
            if is_recorded(s)
        ]
        return min(recorded) if recorded else SENTINEL_TIME

    def _latest_date(self, raw: Dict[str, Any]) -> str:
        raw_times = _field(raw, "allTimes", [])
        if not raw_times:
            return ""
        return str(_field(max(raw_times, key=_date_sort_key), "date", ""))

    def transform_performance_card(self, raw: Dict[str, Any]) -> SwimmingPerformanceCard:
        distance, stroke, pool_size = self._event_key(raw)
        best = self._best_seconds(raw)

        card = SwimmingPerformanceCard(
            id=str(_field(raw, "id", f"event_{distance}_{stroke.value}_{pool_size.value}")),
            title=self.event_title(distance, stroke),
            distance=distance,
            stroke=stroke,
            pool_size=pool_size,
            best_time=seconds_to_time_string(best),
            best_time_in_seconds=best,
            last_swam=str(_field(raw, "lastSwam", self._latest_date(raw))),
            total_races=int(_field(raw, "totalRaces", len(_field(raw, "allTimes", [])))),
            improvement=self.calculate_improvement(raw),
        )

        logger.debug(
            "Transformed performance card",
            title=card.title,
            best_time=card.best_time,
            total_races=card.total_races,
        )

        return card

    def transform_performance_detail(self, raw: Dict[str, Any]) -> SwimmingPerformanceDetail:
        distance, stroke, pool_size = self._event_key(raw)
        raw_times = _field(raw, "allTimes", [])
        all_times = self.mark_personal_bests(self.transform_all_times(raw_times))

        best = self._best_seconds(raw)
        best_entry = next((t for t in all_times if t.is_pb), None)
        best_time = SwimmingBestTime(
            time=seconds_to_time_string(best),
            time_in_seconds=best,
            date=best_entry.date if best_entry else "",
            venue=best_entry.venue if best_entry else settings.DEFAULT_VENUE,
        )

        club_record = None
        raw_record = _field(raw, "clubRecord")
        if isinstance(raw_record, dict):
            record_seconds = _field(raw_record, "timeInSeconds")
            if not _is_number(record_seconds):
                record_seconds = time_string_to_seconds(_field(raw_record, "time"))
            club_record = SwimmingClubRecord(
                time=seconds_to_time_string(record_seconds),
                time_in_seconds=record_seconds,
                holder=_field(raw_record, "holder", ""),
                date=_field(raw_record, "date"),
            )

        goals = self.transform_goals(_field(raw, "goals", []))
        open_goal = next((g for g in goals if not g.achieved), None)
        explicit_goal = _field(raw, "goalLine")
        if not _is_number(explicit_goal) and open_goal is not None:
            explicit_goal = open_goal.target_time_in_seconds

        return SwimmingPerformanceDetail(
            performance=SwimmingEventInfo(
                title=self.event_title(distance, stroke),
                distance=distance,
                stroke=stroke,
                pool_size=pool_size,
            ),
            best_time=best_time,
            club_record=club_record,
            goals=goals,
            all_times=all_times,
            chart_data=self.generate_chart_data(
                raw_times,
                goal=explicit_goal if _is_number(explicit_goal) else None,
            ),
            statistics=self.transform_stats(raw),
        )


# Global adapter instance
swimming_data_adapter = SwimmingDataAdapter()
