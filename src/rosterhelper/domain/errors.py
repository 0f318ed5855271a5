"""Exceptions raised by roster stores and editing helpers."""


class RosterError(Exception):
    """Base class for roster errors."""


class WeekNotFoundError(RosterError):
    """No roster week matches the requested key."""


class DayNotFoundError(RosterError):
    """No day with the given ID exists in the week."""

    def __init__(self, day_id: str):
        super().__init__(f"No roster day found with id: {day_id}")
        self.day_id = day_id


class StaffNotFoundError(RosterError):
    """No staff member with the given ID exists."""

    def __init__(self, staff_id: str):
        super().__init__(f"No staff member found with id: {staff_id}")
        self.staff_id = staff_id


class StorageError(RosterError):
    """Reading or writing the backing store failed."""


class LeaveRequestNotFoundError(RosterError):
    """No leave request with the given ID exists for the staff member."""

    def __init__(self, leave_request_id: str):
        super().__init__(f"No leave request found with id: {leave_request_id}")
        self.leave_request_id = leave_request_id


class InvalidLeaveRequestError(RosterError):
    """A leave request ends before it starts."""
