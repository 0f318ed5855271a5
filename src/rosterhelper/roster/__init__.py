"""Provisioning and editing of roster weeks."""

from rosterhelper.roster.builder import (
    assign_staff,
    change_day_row_count,
    clear_slot,
    delete_leave_request,
    duplicate_roster_week,
    new_roster_week,
    new_row,
    set_leave_status,
    submit_leave_request,
    toggle_amelia,
    toggle_closed,
    toggle_live,
)

__all__ = [
    # Weeks
    "change_day_row_count",
    "duplicate_roster_week",
    "new_roster_week",
    "new_row",
    "toggle_amelia",
    "toggle_closed",
    "toggle_live",
    # Assignment
    "assign_staff",
    "clear_slot",
    # Leave
    "delete_leave_request",
    "set_leave_status",
    "submit_leave_request",
]
