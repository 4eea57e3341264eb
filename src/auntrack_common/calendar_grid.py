"""
Date-grid mapping for the month view.

The month view is a grid of category rows by day columns. An event occupies
every column between its start day and end day, but its bar is drawn only on
the anchor column (the start day) and stretched over ``span_width`` columns.
Bars are clamped to the visible grid; the stored interval is never touched.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

DateLike = Union[date, datetime, str]


def parse_instant(value: DateLike) -> Union[date, datetime]:
    """Accept ``date``, ``datetime`` or an ISO-8601 string."""
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    raise TypeError(f"Unsupported date value: {value!r}")


def to_local(value: DateLike, tz: Optional[tzinfo] = None) -> Union[date, datetime]:
    """
    Express an instant as local wall-clock time.

    Offset-aware datetimes are converted to ``tz`` when one is given and
    otherwise kept in their own offset. Naive datetimes and plain dates are
    already local.
    """
    value = parse_instant(value)
    if isinstance(value, datetime) and value.tzinfo is not None and tz is not None:
        return value.astimezone(tz)
    return value


def day_of(value: DateLike, tz: Optional[tzinfo] = None) -> date:
    """Truncate an instant to its local calendar day."""
    value = to_local(value, tz)
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(later: date, earlier: date) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (later - earlier).days


def month_days(year: int, month: int) -> List[date]:
    """
    All days of a month, day 1 through the last day, ascending.

    Args:
        year: Four digit year
        month: 1-based month number

    Raises:
        ValueError: If month is outside 1..12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    _, last_day = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last_day + 1)]


@dataclass(frozen=True)
class Placement:
    """Where an event's bar is drawn in the grid."""

    event: Any
    column: int
    span: int


class DateGridMapper:
    """
    Maps event intervals onto an ordered, contiguous list of day columns.

    Example:
        grid = DateGridMapper(month_days(2025, 8))
        if grid.is_anchor(0, event.start_date):
            width = grid.span_width(0, event.start_date, event.end_date)
    """

    def __init__(self, days: Sequence[date], tz: Optional[tzinfo] = None):
        self.days = list(days)
        self.tz = tz

    def __len__(self) -> int:
        return len(self.days)

    def _interval(self, start: DateLike, end: DateLike) -> Tuple[date, date]:
        return day_of(start, self.tz), day_of(end, self.tz)

    def on_date(self, index: int, start: DateLike, end: DateLike) -> bool:
        """True if the event covers column ``index``."""
        first, last = self._interval(start, end)
        return first <= self.days[index] <= last

    def is_anchor(self, index: int, start: DateLike) -> bool:
        """True if column ``index`` is the event's start day."""
        return self.days[index] == day_of(start, self.tz)

    def span_width(self, index: int, start: DateLike, end: DateLike) -> int:
        """
        Number of columns the bar anchored at ``index`` covers.

        Clamped to the columns left in the grid and never less than one, so
        ``index + span_width <= len(days)`` always holds.
        """
        first, last = self._interval(start, end)
        remaining = len(self.days) - index
        return max(1, min(remaining, days_between(last, first) + 1))

    def anchor_index(self, start: DateLike) -> Optional[int]:
        """Column of the event's start day, or None if it is outside the grid."""
        first = day_of(start, self.tz)
        if not self.days or not self.days[0] <= first <= self.days[-1]:
            return None
        return days_between(first, self.days[0])

    def placements(
        self,
        events: Iterable[Any],
        start_attr: str = "start_date",
        end_attr: str = "end_date",
    ) -> List[Placement]:
        """
        Bars to draw for ``events``, ordered by column.

        Events anchored before the first visible day are not drawn; their
        later days are covered by a bar that belongs to another month view.
        """
        result = []
        for event in events:
            start, end = _read(event, start_attr), _read(event, end_attr)
            index = self.anchor_index(start)
            if index is None:
                continue
            result.append(Placement(event, index, self.span_width(index, start, end)))
        result.sort(key=lambda placement: (placement.column, -placement.span))
        return result


def _read(event: Any, attr: str) -> Any:
    if isinstance(event, dict):
        return event[attr]
    return getattr(event, attr)


def covers_date(start: DateLike, end: DateLike, day: date, tz: Optional[tzinfo] = None) -> bool:
    """True if ``day`` lies within the event's day interval."""
    return day_of(start, tz) <= day <= day_of(end, tz)


def intersects_range(
    start: DateLike,
    end: DateLike,
    range_start: date,
    range_end: date,
    tz: Optional[tzinfo] = None,
) -> bool:
    """True if the event's day interval overlaps ``[range_start, range_end]``."""
    return day_of(start, tz) <= range_end and day_of(end, tz) >= range_start
