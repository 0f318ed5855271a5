"""Persistence for roster weeks and staff."""

from rosterhelper.domain.errors import (
    DayNotFoundError,
    InvalidLeaveRequestError,
    LeaveRequestNotFoundError,
    RosterError,
    StaffNotFoundError,
    StorageError,
    WeekNotFoundError,
)
from rosterhelper.storage.repository import (
    InMemoryRosterStore,
    JsonRosterStore,
    RosterWeekRepository,
    StaffRepository,
)

__all__ = [
    # Repositories
    "InMemoryRosterStore",
    "JsonRosterStore",
    "RosterWeekRepository",
    "StaffRepository",
    # Errors
    "DayNotFoundError",
    "InvalidLeaveRequestError",
    "LeaveRequestNotFoundError",
    "RosterError",
    "StaffNotFoundError",
    "StorageError",
    "WeekNotFoundError",
]
