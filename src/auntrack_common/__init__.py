"""
auntrack_common package

Calendar and permission logic shared between the FastAPI and Streamlit
services.
"""

from .permissions import (  # noqa: F401
    Role,
    Action,
    Principal,
    ADMIN_ROLES,
    can_perform,
    coerce_role,
    is_protected_account,
)
from .calendar_grid import (  # noqa: F401
    DateGridMapper,
    Placement,
    covers_date,
    day_of,
    days_between,
    intersects_range,
    month_days,
    parse_instant,
    to_local,
)
from .reschedule import parse_drop_payload, reschedule  # noqa: F401

__all__ = [
    "Role",
    "Action",
    "Principal",
    "ADMIN_ROLES",
    "can_perform",
    "coerce_role",
    "is_protected_account",
    "DateGridMapper",
    "Placement",
    "covers_date",
    "day_of",
    "days_between",
    "intersects_range",
    "month_days",
    "parse_instant",
    "to_local",
    "parse_drop_payload",
    "reschedule",
]
