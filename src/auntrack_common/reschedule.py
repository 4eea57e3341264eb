"""
Drag-and-drop rescheduling.

A dropped event moves to the target day while keeping its start and end
time-of-day and its length in calendar days.
"""

import json
import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Optional, Tuple

from auntrack_common.calendar_grid import DateLike, day_of, days_between, to_local

logger = logging.getLogger("RESCHEDULE")


def _as_datetime(value: DateLike, tz: Optional[tzinfo]) -> datetime:
    value = to_local(value, tz)
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def reschedule(
    start: DateLike,
    end: DateLike,
    target_day: date,
    tz: Optional[tzinfo] = None,
) -> Tuple[datetime, datetime]:
    """
    Compute the interval of an event dropped on ``target_day``.

    Args:
        start: Current start instant
        end: Current end instant
        target_day: Day column the event was dropped on
        tz: Display timezone; when given, aware inputs are converted to it
            before the wall-clock parts are read

    Returns:
        (new_start, new_end). Each keeps the tzinfo of its (converted) input.
    """
    if isinstance(target_day, datetime):
        target_day = target_day.date()

    start_dt = _as_datetime(start, tz)
    end_dt = _as_datetime(end, tz)
    duration_days = max(0, days_between(day_of(end_dt), day_of(start_dt)))

    new_start = datetime.combine(target_day, start_dt.time(), tzinfo=start_dt.tzinfo)
    new_end = datetime.combine(
        target_day + timedelta(days=duration_days), end_dt.time(), tzinfo=end_dt.tzinfo
    )
    return new_start, new_end


def parse_drop_payload(payload: Any) -> Optional[int]:
    """
    Extract the event id carried by a drop.

    Accepts an int, integer text (``"42"``) or a JSON object with ``id`` or
    ``event_id``. Anything else is logged and yields None so the drop is a
    no-op.
    """
    try:
        if isinstance(payload, bool):
            raise ValueError("boolean payload")
        if isinstance(payload, int):
            return payload
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8")
        text = str(payload).strip()
        if text.lstrip("-").isdigit():
            return int(text)

        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("payload is not an object")
        event_id = data.get("event_id", data.get("id"))
        if isinstance(event_id, int) and not isinstance(event_id, bool):
            return event_id
        if isinstance(event_id, str) and event_id.strip().lstrip("-").isdigit():
            return int(event_id)
        raise ValueError(f"event id {event_id!r} is not an integer")
    except (TypeError, ValueError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring malformed drop payload {payload!r}: {e}")
        return None
