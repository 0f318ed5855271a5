"""Domain models and business rules for rosters."""

from rosterhelper.domain.calendar import (
    last_tuesday,
    next_tuesday,
    week_offset_from_date,
    week_start_from_offset,
)
from rosterhelper.domain.models import (
    DayAvailability,
    Highlight,
    LeaveRequest,
    LeaveStatus,
    RosterDay,
    RosterWeek,
    Row,
    Slot,
    SlotKind,
    StaffMember,
    get_staff_from_list,
)
from rosterhelper.domain.policies import (
    DefaultHighlightPolicy,
    DefaultRosterLayoutPolicy,
    HighlightPolicy,
    RosterLayoutPolicy,
)

__all__ = [
    # Models
    "DayAvailability",
    "Highlight",
    "LeaveRequest",
    "LeaveStatus",
    "RosterDay",
    "RosterWeek",
    "Row",
    "Slot",
    "SlotKind",
    "StaffMember",
    "get_staff_from_list",
    # Calendar
    "last_tuesday",
    "next_tuesday",
    "week_offset_from_date",
    "week_start_from_offset",
    # Policies
    "DefaultHighlightPolicy",
    "DefaultRosterLayoutPolicy",
    "HighlightPolicy",
    "RosterLayoutPolicy",
]
