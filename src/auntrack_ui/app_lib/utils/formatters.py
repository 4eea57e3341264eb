import calendar
from datetime import datetime, tzinfo
from typing import Optional

from auntrack_common.calendar_grid import to_local


def month_label(year: int, month: int) -> str:
    """'August 2025' for (2025, 8)."""
    return f"{calendar.month_name[month]} {year}"


def format_range(start: datetime, end: datetime, tz: Optional[tzinfo] = None) -> str:
    """'2025-08-05 09:00 - 2025-08-07 17:00'; the end date is dropped when both fall on one day."""
    start_local, end_local = to_local(start, tz), to_local(end, tz)
    if start_local.date() == end_local.date():
        return f"{start_local:%Y-%m-%d %H:%M} - {end_local:%H:%M}"
    return f"{start_local:%Y-%m-%d %H:%M} - {end_local:%Y-%m-%d %H:%M}"


def text_color_for(background: str) -> str:
    """Black or white, whichever reads better on ``background`` (#rrggbb)."""
    value = (background or "").lstrip("#")
    if len(value) != 6:
        return "#ffffff"
    try:
        red, green, blue = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return "#ffffff"
    luminance = 0.299 * red + 0.587 * green + 0.114 * blue
    return "#111827" if luminance > 160 else "#ffffff"
