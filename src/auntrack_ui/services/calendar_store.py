"""
Client Data Store

In-memory cache of the calendar's categories and events plus the month
being viewed. Every mutation is checked against the permission rules and
validated locally before the backend is called; only entities the backend
confirms are written into the cache. A failed call leaves the cache as it
was and reports through ``notify``.
"""
import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError as ModelValidationError

from auntrack_common.calendar_grid import (
    DateGridMapper,
    DateLike,
    Placement,
    covers_date,
    intersects_range,
    month_days,
    parse_instant,
)
from auntrack_common.permissions import Action
from auntrack_common.reschedule import parse_drop_payload, reschedule
from auntrack_ui.app_lib.api.client import APIClient
from auntrack_ui.app_lib.api.errors import APIError, AuthenticationError
from auntrack_ui.models.models import Category, Event

logger = logging.getLogger("CALENDAR_STORE")

Notify = Callable[[str], Any]

PERMISSION_MESSAGES = {
    Action.ADD_EVENT: "You do not have permission to add events",
    Action.EDIT_EVENT: "You do not have permission to edit events",
    Action.DELETE_EVENT: "You do not have permission to delete events",
    Action.MANAGE_CATEGORIES: "Only administrators can manage categories",
}

INVALID_INTERVAL_MESSAGE = "Start date/time cannot be after end date/time"
INVALID_DATE_MESSAGE = "Invalid date/time"

EVENT_FIELDS = ("title", "category_id", "start_date", "end_date", "color", "description")


class CalendarStore:
    """
    Categories, events and the viewed month.

    Args:
        client: Backend client (already carrying the auth interceptor)
        auth: Auth service; consulted for permissions and logged out when
            the backend rejects the session
        notify: Receives a user-facing message for every failure
        today: Initial month to show (defaults to the current date)
        tz: Display timezone for calendar-day arithmetic
    """

    def __init__(
        self,
        client: APIClient,
        auth: Any,
        notify: Optional[Notify] = None,
        today: Optional[date] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.client = client
        self.auth = auth
        self.notify = notify or (lambda message: logger.info(message))
        self.tz = tz
        self.events: List[Event] = []
        self.categories: List[Category] = []

        today = today or datetime.now(tz).date()
        self.month = today.month
        self.year = today.year
        self.current_days: List[date] = month_days(self.year, self.month)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def set_month(self, month: int) -> None:
        """Show ``month`` (1-based) of the current year."""
        self.current_days = month_days(self.year, month)
        self.month = month

    def set_year(self, year: int) -> None:
        self.current_days = month_days(year, self.month)
        self.year = year

    def shift_month(self, delta: int) -> None:
        """Move ``delta`` months forward (negative goes back), rolling the year."""
        index = self.year * 12 + (self.month - 1) + delta
        year, month = divmod(index, 12)
        self.current_days = month_days(year, month + 1)
        self.year, self.month = year, month + 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_event(self, event_id: int) -> Optional[Event]:
        return next((event for event in self.events if event.id == event_id), None)

    def get_category(self, category_id: int) -> Optional[Category]:
        return next((category for category in self.categories if category.id == category_id), None)

    def events_for_category(self, category_id: int) -> List[Event]:
        return [event for event in self.events if event.category_id == category_id]

    def events_for_date(self, day: date) -> List[Event]:
        return [event for event in self.events if covers_date(event.start_date, event.end_date, day, self.tz)]

    def events_for_range(self, start: date, end: date) -> List[Event]:
        return [
            event for event in self.events
            if intersects_range(event.start_date, event.end_date, start, end, self.tz)
        ]

    def grid_mapper(self) -> DateGridMapper:
        return DateGridMapper(self.current_days, self.tz)

    def grid(self) -> List[Tuple[Category, List[Placement]]]:
        """One row per category with the bars anchored in the viewed month."""
        mapper = self.grid_mapper()
        return [
            (category, mapper.placements(self.events_for_category(category.id)))
            for category in self.categories
        ]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """Replace both collections with the backend's current state."""
        try:
            categories = [Category.model_validate(item) for item in self.client.get("/api/categories")]
            events = [Event.model_validate(item) for item in self.client.get("/api/events")]
        except APIError as e:
            self._report(e)
            return False
        except (TypeError, ModelValidationError) as e:
            logger.error(f"Unexpected payload while refreshing: {e}")
            self.notify("Could not load calendar data")
            return False

        self.categories, self.events = categories, events
        logger.info(f"Loaded {len(categories)} categories and {len(events)} events")
        return True

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_event(
        self,
        title: str,
        category_id: int,
        start_date: DateLike,
        end_date: DateLike,
        color: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[Event]:
        if not self._permitted(Action.ADD_EVENT):
            return None
        if not (title or "").strip():
            self.notify("Event title is required")
            return None
        if self.categories and self.get_category(category_id) is None:
            self.notify("Please choose an existing category")
            return None
        try:
            start_date, end_date = self._to_datetime(start_date), self._to_datetime(end_date)
        except (TypeError, ValueError) as e:
            logger.warning(f"Rejected new event: {e}")
            self.notify(INVALID_DATE_MESSAGE)
            return None
        if self._aware(start_date) > self._aware(end_date):
            self.notify(INVALID_INTERVAL_MESSAGE)
            return None

        payload: Dict[str, Any] = {
            "title": title.strip(),
            "category_id": category_id,
            "start_date": self._to_wire(start_date),
            "end_date": self._to_wire(end_date),
            "description": description or None,
        }
        if color:
            payload["color"] = color

        created = self._send(lambda: self.client.post("/api/events", data=payload), Event)
        if created is not None:
            self._merge_event(created)
        return created

    def update_event(self, event_id: int, changes: Dict[str, Any]) -> Optional[Event]:
        """Send only the given fields; unknown keys are ignored."""
        if not self._permitted(Action.EDIT_EVENT):
            return None

        changes = {key: value for key, value in changes.items() if key in EVENT_FIELDS}
        try:
            for key in ("start_date", "end_date"):
                if key in changes:
                    changes[key] = self._to_datetime(changes[key])
        except (TypeError, ValueError) as e:
            logger.warning(f"Rejected event {event_id} update: {e}")
            self.notify(INVALID_DATE_MESSAGE)
            return None

        if "title" in changes and not (changes["title"] or "").strip():
            self.notify("Event title is required")
            return None

        current = self.get_event(event_id)
        start = changes.get("start_date", current.start_date if current else None)
        end = changes.get("end_date", current.end_date if current else None)
        if start is not None and end is not None and self._aware(start) > self._aware(end):
            self.notify(INVALID_INTERVAL_MESSAGE)
            return None

        payload = {
            key: self._to_wire(value) if isinstance(value, datetime) else value
            for key, value in changes.items()
        }
        updated = self._send(lambda: self.client.put(f"/api/events/{event_id}", data=payload), Event)
        if updated is not None:
            self._merge_event(updated)
        return updated

    def delete_event(self, event_id: int) -> bool:
        if not self._permitted(Action.DELETE_EVENT):
            return False
        try:
            self.client.delete(f"/api/events/{event_id}")
        except APIError as e:
            self._report(e)
            return False

        self.events = [event for event in self.events if event.id != event_id]
        return True

    def move_event(self, payload: Any, target_day: date) -> Optional[Event]:
        """
        Reschedule the dropped event onto ``target_day``.

        The event is fetched from the backend first so the new interval is
        computed from its stored dates rather than the cached copy.
        """
        event_id = parse_drop_payload(payload)
        if event_id is None:
            return None
        if not self._permitted(Action.EDIT_EVENT):
            return None

        current = self._send(lambda: self.client.get(f"/api/events/{event_id}"), Event)
        if current is None:
            return None

        new_start, new_end = reschedule(current.start_date, current.end_date, target_day, self.tz)
        logger.info(f"Moving event {event_id} to {target_day.isoformat()}")
        return self.update_event(event_id, {"start_date": new_start, "end_date": new_end})

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, name: str, color: str) -> Optional[Category]:
        if not self._permitted(Action.MANAGE_CATEGORIES):
            return None
        if not (name or "").strip() or not (color or "").strip():
            self.notify("Name and color are required")
            return None

        payload = {"name": name.strip(), "color": color.strip()}
        created = self._send(lambda: self.client.post("/api/categories", data=payload), Category)
        if created is not None:
            self._merge_category(created)
        return created

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Optional[Category]:
        if not self._permitted(Action.MANAGE_CATEGORIES):
            return None

        payload = {}
        if (name or "").strip():
            payload["name"] = name.strip()
        if (color or "").strip():
            payload["color"] = color.strip()
        if not payload:
            self.notify("At least name or color must be provided")
            return None

        updated = self._send(lambda: self.client.put(f"/api/categories/{category_id}", data=payload), Category)
        if updated is None:
            return None

        self._merge_category(updated)
        self.events = [
            event.model_copy(update={"category_name": updated.name, "category_color": updated.color})
            if event.category_id == updated.id else event
            for event in self.events
        ]
        return updated

    def delete_category(self, category_id: int) -> bool:
        """Delete a category; its events are deleted with it."""
        if not self._permitted(Action.MANAGE_CATEGORIES):
            return False
        try:
            self.client.delete(f"/api/categories/{category_id}")
        except APIError as e:
            self._report(e)
            return False

        self.categories = [category for category in self.categories if category.id != category_id]
        self.events = [event for event in self.events if event.category_id != category_id]
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _permitted(self, action: Action) -> bool:
        if self.auth.can(action):
            return True
        self.notify(PERMISSION_MESSAGES.get(action, "Access denied"))
        return False

    def _report(self, error: APIError) -> None:
        self.notify(error.message)
        if isinstance(error, AuthenticationError):
            logger.info("Session rejected by the backend, logging out")
            self.auth.logout()

    def _send(self, call: Callable[[], Any], model: Any) -> Optional[Any]:
        try:
            return model.model_validate(call())
        except APIError as e:
            self._report(e)
        except (TypeError, ModelValidationError) as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            self.notify("Unexpected response from the server")
        return None

    @staticmethod
    def _to_datetime(value: Any) -> datetime:
        """Accept datetimes, dates (midnight) and ISO-8601 text."""
        value = parse_instant(value)
        if not isinstance(value, datetime):
            value = datetime.combine(value, datetime.min.time())
        return value

    def _aware(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self.tz or timezone.utc)
        return value

    def _to_wire(self, value: datetime) -> str:
        """Naive datetimes from the forms are wall-clock time in the display timezone (UTC if unset)."""
        return self._aware(value).isoformat()

    def _merge_event(self, event: Event) -> None:
        self.events = [item for item in self.events if item.id != event.id] + [event]
        self.events.sort(key=lambda item: (item.start_date, item.id))

    def _merge_category(self, category: Category) -> None:
        self.categories = [item for item in self.categories if item.id != category.id] + [category]
        self.categories.sort(key=lambda item: item.name)
