"""Provisioning and editing helpers for roster weeks.

New weeks are laid out by a RosterLayoutPolicy. The editing helpers are
the only code that writes assignments; the conflict analyzer only ever
writes flags.
"""

from datetime import date
from typing import Optional

from rosterhelper.domain.calendar import week_offset_from_date
from rosterhelper.domain.errors import (
    DayNotFoundError,
    InvalidLeaveRequestError,
    LeaveRequestNotFoundError,
)
from rosterhelper.domain.models import (
    LeaveRequest,
    LeaveStatus,
    RosterDay,
    RosterWeek,
    Row,
    Slot,
    SlotKind,
    StaffMember,
    new_id,
)
from rosterhelper.domain.policies import DefaultRosterLayoutPolicy, RosterLayoutPolicy


def new_row() -> Row:
    """Create a row with one empty slot per slot kind."""
    return Row(slots={kind: Slot() for kind in SlotKind})


def new_roster_week(
    start_date: date,
    layout: Optional[RosterLayoutPolicy] = None,
) -> RosterWeek:
    """Create an empty roster week starting on a date.

    Args:
        start_date: Date of the first day of the week.
        layout: Layout policy for day names, colours and row counts.

    Returns:
        A new, unpublished week with seven days of empty rows.
    """
    layout = layout or DefaultRosterLayoutPolicy()
    days = []
    for offset, name in enumerate(layout.day_names()):
        days.append(
            RosterDay(
                day_name=name,
                colour=layout.day_colour(offset),
                offset=offset,
                rows=[new_row() for _ in range(layout.default_row_count())],
            )
        )
    return RosterWeek(
        start_date=start_date,
        week_offset=week_offset_from_date(start_date, layout.epoch()),
        is_live=False,
        days=days,
    )


def change_day_row_count(
    week: RosterWeek,
    day_id: str,
    action: str,
    layout: Optional[RosterLayoutPolicy] = None,
) -> RosterDay:
    """Add or remove a row on one day of a week.

    Args:
        week: The week containing the day.
        day_id: ID of the day to change.
        action: "+" adds a row; anything else removes the last row.
        layout: Layout policy giving the minimum row count.

    Returns:
        The changed day.

    Raises:
        DayNotFoundError: If the week has no day with that ID.
    """
    layout = layout or DefaultRosterLayoutPolicy()
    day = week.get_day_by_id(day_id)
    if day is None:
        raise DayNotFoundError(day_id)

    if action == "+":
        day.rows.append(new_row())
    elif len(day.rows) > layout.min_row_count():
        day.rows.pop()
    return day


def _duplicate_slot(src: Slot) -> Slot:
    return Slot(
        id=new_id(),
        start_time=src.start_time,
        assigned_staff=src.assigned_staff,
        staff_string=src.staff_string,
        flag=src.flag,
        description=src.description,
    )


def duplicate_roster_week(source: RosterWeek, target: RosterWeek) -> RosterWeek:
    """Copy the days and assignments of one week into another.

    The target keeps its own ID, start date and live state. Every copied
    day, row and slot gets a fresh ID.
    """
    new_days = []
    for day in source.days:
        new_days.append(
            RosterDay(
                day_name=day.day_name,
                colour=day.colour,
                offset=day.offset,
                is_closed=day.is_closed,
                amelia_open=day.amelia_open,
                rows=[
                    Row(slots={kind: _duplicate_slot(slot) for kind, slot in row.slots.items()})
                    for row in day.rows
                ],
            )
        )
    target.days = new_days
    return target


def assign_staff(slot: Slot, staff: StaffMember) -> Slot:
    """Assign a staff member to a slot and refresh the cached name."""
    slot.assigned_staff = staff.id
    slot.staff_string = staff.display_name
    return slot


def clear_slot(slot: Slot) -> Slot:
    """Remove any assignment from a slot."""
    slot.assigned_staff = None
    slot.staff_string = None
    return slot


def toggle_closed(day: RosterDay) -> bool:
    day.is_closed = not day.is_closed
    return day.is_closed


def toggle_amelia(day: RosterDay) -> bool:
    day.amelia_open = not day.amelia_open
    return day.amelia_open


def toggle_live(week: RosterWeek) -> bool:
    week.is_live = not week.is_live
    return week.is_live


def submit_leave_request(
    staff: StaffMember,
    start_date: date,
    end_date: date,
    reason: str = "",
    today: Optional[date] = None,
) -> LeaveRequest:
    """Add a pending leave request to a staff member.

    Args:
        staff: The staff member requesting leave.
        start_date: First day of leave.
        end_date: Day the staff member is back (exclusive).
        reason: Free-text reason.
        today: Creation date, defaults to today.

    Returns:
        The new request.

    Raises:
        InvalidLeaveRequestError: If the request ends before it starts.
    """
    if start_date > end_date:
        raise InvalidLeaveRequestError(
            f"Leave cannot end ({end_date}) before it starts ({start_date})"
        )
    request = LeaveRequest(
        start_date=start_date,
        end_date=end_date,
        creation_date=today or date.today(),
        reason=reason,
    )
    staff.leave_requests.append(request)
    return request


def _find_leave_request(staff: StaffMember, leave_request_id: str) -> LeaveRequest:
    for request in staff.leave_requests:
        if request.id == leave_request_id:
            return request
    raise LeaveRequestNotFoundError(leave_request_id)


def set_leave_status(
    staff: StaffMember,
    leave_request_id: str,
    status: LeaveStatus,
) -> LeaveRequest:
    """Approve, deny or reopen one of a staff member's leave requests."""
    request = _find_leave_request(staff, leave_request_id)
    request.status = status
    return request


def delete_leave_request(staff: StaffMember, leave_request_id: str) -> LeaveRequest:
    """Remove a leave request and return it.

    Raises:
        LeaveRequestNotFoundError: If the staff member has no such request.
    """
    request = _find_leave_request(staff, leave_request_id)
    staff.leave_requests.remove(request)
    return request
