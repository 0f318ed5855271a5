"""Domain models for the roster system.

This module contains the core data structures shared by the analyzer,
the provisioning helpers and the stores: roster weeks, days, rows and
slots on one side, staff members with their availability and leave on
the other.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Optional


def new_id() -> str:
    """Generate a fresh identifier for a roster entity."""
    return str(uuid.uuid4())


class Highlight(Enum):
    """Diagnostic flag attached to a slot by the conflict analyzer.

    Declaration order carries no meaning. Override decisions use the
    ranking held by the highlight policy.
    """

    NONE = "none"
    IDEAL_MET = "ideal_met"
    IDEAL_EXCEEDED = "ideal_exceeded"
    PREF_CONFLICT = "pref_conflict"
    LATE_TO_EARLY = "late_to_early"
    PREF_REFUSE = "pref_refuse"
    DUPLICATE = "duplicate"
    LEAVE_CONFLICT = "leave_conflict"


class SlotKind(Enum):
    """Time-of-day slot kinds a row can hold."""

    AMELIA = "amelia"  # Optional, only active when the day has it open
    EARLY = "early"
    MID = "mid"
    LATE = "late"


# Kinds that staff availability is recorded against.
STANDARD_SLOT_KINDS = (SlotKind.EARLY, SlotKind.MID, SlotKind.LATE)


class LeaveStatus(Enum):
    """Approval state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


@dataclass
class Slot:
    """The unit of assignment.

    Attributes:
        id: Unique identifier for the slot.
        start_time: Free-text start time shown on the roster.
        assigned_staff: ID of the assigned staff member, if any.
        staff_string: Cached display name of the assigned staff member.
        flag: Highlight computed by the last analysis run.
        description: Free-text note.
    """

    id: str = field(default_factory=new_id)
    start_time: str = ""
    assigned_staff: Optional[str] = None
    staff_string: Optional[str] = None
    flag: Highlight = Highlight.NONE
    description: str = ""

    @property
    def is_assigned(self) -> bool:
        return self.assigned_staff is not None

    def has_staff(self, staff_id: str) -> bool:
        """Check if the slot is assigned to the given staff member."""
        return self.assigned_staff is not None and self.assigned_staff == staff_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "start_time": self.start_time,
            "assigned_staff": self.assigned_staff,
            "staff_string": self.staff_string,
            "flag": self.flag.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Slot":
        return cls(
            id=data["id"],
            start_time=data.get("start_time", ""),
            assigned_staff=data.get("assigned_staff"),
            staff_string=data.get("staff_string"),
            flag=Highlight(data.get("flag", Highlight.NONE.value)),
            description=data.get("description", ""),
        )


@dataclass
class Row:
    """One schedule line within a day.

    A row holds one slot per slot kind. Missing kinds are filled with
    empty slots so every row can be addressed by any kind.
    """

    id: str = field(default_factory=new_id)
    slots: dict[SlotKind, Slot] = field(default_factory=dict)

    def __post_init__(self):
        for kind in SlotKind:
            if kind not in self.slots:
                self.slots[kind] = Slot()

    def get_slot(self, kind: SlotKind) -> Slot:
        return self.slots[kind]

    @property
    def early(self) -> Slot:
        return self.slots[SlotKind.EARLY]

    @property
    def mid(self) -> Slot:
        return self.slots[SlotKind.MID]

    @property
    def late(self) -> Slot:
        return self.slots[SlotKind.LATE]

    @property
    def amelia(self) -> Slot:
        return self.slots[SlotKind.AMELIA]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "slots": {kind.value: slot.to_dict() for kind, slot in self.slots.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Row":
        slots = {
            SlotKind(kind): Slot.from_dict(slot_data)
            for kind, slot_data in data.get("slots", {}).items()
        }
        return cls(id=data["id"], slots=slots)


@dataclass
class RosterDay:
    """One calendar day within a roster week.

    Attributes:
        id: Unique identifier for the day.
        day_name: Display name (e.g. "Tues").
        colour: Display colour used when a slot has no highlight.
        offset: Position within the week (0-6).
        is_closed: If True, no shifts should be scheduled.
        amelia_open: If True, the optional Amelia slot kind is active.
        rows: Schedule lines for the day.
    """

    id: str = field(default_factory=new_id)
    day_name: str = ""
    colour: str = "#ffffff"
    offset: int = 0
    is_closed: bool = False
    amelia_open: bool = False
    rows: list[Row] = field(default_factory=list)

    def active_slot_kinds(self) -> list[SlotKind]:
        """Slot kinds that take part in counting and flagging on this day."""
        kinds = list(STANDARD_SLOT_KINDS)
        if self.amelia_open:
            kinds.insert(0, SlotKind.AMELIA)
        return kinds

    def iter_slots(self):
        """Yield (row, kind, slot) for every slot of every row."""
        for row in self.rows:
            for kind in SlotKind:
                yield row, kind, row.slots[kind]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "day_name": self.day_name,
            "colour": self.colour,
            "offset": self.offset,
            "is_closed": self.is_closed,
            "amelia_open": self.amelia_open,
            "rows": [row.to_dict() for row in self.rows],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RosterDay":
        return cls(
            id=data["id"],
            day_name=data.get("day_name", ""),
            colour=data.get("colour", "#ffffff"),
            offset=data.get("offset", 0),
            is_closed=data.get("is_closed", False),
            amelia_open=data.get("amelia_open", False),
            rows=[Row.from_dict(r) for r in data.get("rows", [])],
        )


@dataclass
class RosterWeek:
    """One scheduling period of seven consecutive days.

    Attributes:
        start_date: Date of the first day (offset 0).
        id: Unique identifier for the week.
        week_offset: Week number counted from the roster epoch.
        is_live: Whether the week is published.
        days: Days of the week, indexed by offset.
    """

    start_date: date
    id: str = field(default_factory=new_id)
    week_offset: int = 0
    is_live: bool = False
    days: list[RosterDay] = field(default_factory=list)

    @property
    def end_date(self) -> date:
        """Last date of the week (inclusive)."""
        return self.start_date + timedelta(days=len(self.days) - 1)

    def date_for_offset(self, offset: int) -> date:
        """Calendar date of the day at the given offset."""
        return self.start_date + timedelta(days=offset)

    def get_slot_by_id(self, slot_id: str) -> Optional[Slot]:
        """Find a slot anywhere in the week."""
        for day in self.days:
            for _, _, slot in day.iter_slots():
                if slot.id == slot_id:
                    return slot
        return None

    def get_day_by_id(self, day_id: str) -> Optional[RosterDay]:
        """Find a day of the week by its ID."""
        for day in self.days:
            if day.id == day_id:
                return day
        return None

    def count_shifts(self, staff_id: str) -> int:
        """Count the shifts assigned to a staff member across the week."""
        total = 0
        for day in self.days:
            for row in day.rows:
                for kind in day.active_slot_kinds():
                    if row.slots[kind].has_staff(staff_id):
                        total += 1
        return total

    def iter_slots(self):
        """Yield (day, row, kind, slot) for every slot in the week."""
        for day in self.days:
            for row, kind, slot in day.iter_slots():
                yield day, row, kind, slot

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "start_date": self.start_date.isoformat(),
            "week_offset": self.week_offset,
            "is_live": self.is_live,
            "days": [day.to_dict() for day in self.days],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RosterWeek":
        return cls(
            id=data["id"],
            start_date=date.fromisoformat(data["start_date"]),
            week_offset=data.get("week_offset", 0),
            is_live=data.get("is_live", False),
            days=[RosterDay.from_dict(d) for d in data.get("days", [])],
        )


@dataclass
class DayAvailability:
    """Which slot kinds a staff member is willing to work on a weekday."""

    name: str = ""
    early: bool = True
    mid: bool = True
    late: bool = True

    def is_available(self, kind: SlotKind) -> Optional[bool]:
        """Availability for a slot kind, or None if it is not recorded."""
        if kind == SlotKind.EARLY:
            return self.early
        if kind == SlotKind.MID:
            return self.mid
        if kind == SlotKind.LATE:
            return self.late
        return None

    @property
    def refuses_all(self) -> bool:
        return not (self.early or self.mid or self.late)

    def to_dict(self) -> dict:
        return {"name": self.name, "early": self.early, "mid": self.mid, "late": self.late}

    @classmethod
    def from_dict(cls, data: dict) -> "DayAvailability":
        return cls(
            name=data.get("name", ""),
            early=data.get("early", True),
            mid=data.get("mid", True),
            late=data.get("late", True),
        )


@dataclass
class LeaveRequest:
    """A request for time off over the half-open range [start_date, end_date)."""

    start_date: date
    end_date: date
    id: str = field(default_factory=new_id)
    creation_date: Optional[date] = None
    reason: str = ""
    status: LeaveStatus = LeaveStatus.PENDING

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED

    def covers(self, d: date) -> bool:
        """Check if a date falls within the leave period."""
        return self.start_date <= d < self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "creation_date": self.creation_date.isoformat() if self.creation_date else None,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LeaveRequest":
        creation = data.get("creation_date")
        return cls(
            id=data["id"],
            creation_date=date.fromisoformat(creation) if creation else None,
            start_date=date.fromisoformat(data["start_date"]),
            end_date=date.fromisoformat(data["end_date"]),
            reason=data.get("reason", ""),
            status=LeaveStatus(data.get("status", LeaveStatus.PENDING.value)),
        )


def default_availability() -> list[DayAvailability]:
    """Seven days of full availability, Tuesday first."""
    names = ["Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday", "Monday"]
    return [DayAvailability(name=name) for name in names]


@dataclass
class StaffMember:
    """A staff member who can be rostered.

    Attributes:
        id: Unique identifier for the staff member.
        first_name: Given name.
        last_name: Family name.
        nick_name: Preferred display name, if set.
        ideal_shifts: Target number of shifts per week.
        availability: One entry per day offset of the roster week.
        leave_requests: Requested periods of leave.
        is_hidden: Hidden from roster pickers.
        is_deleted: Soft-deleted; excluded from staff listings.
    """

    id: str = field(default_factory=new_id)
    first_name: str = ""
    last_name: str = ""
    nick_name: str = ""
    ideal_shifts: int = 0
    availability: list[DayAvailability] = field(default_factory=default_availability)
    leave_requests: list[LeaveRequest] = field(default_factory=list)
    is_hidden: bool = False
    is_deleted: bool = False

    @property
    def display_name(self) -> str:
        """Name shown on the roster: nick name if set, else first name."""
        return self.nick_name or self.first_name

    def get_availability(self, offset: int) -> Optional[DayAvailability]:
        """Availability for a day offset, or None if not recorded."""
        if 0 <= offset < len(self.availability):
            return self.availability[offset]
        return None

    def get_conflict(self, kind: SlotKind, offset: int) -> Highlight:
        """Preference conflict for working a slot kind on a day offset."""
        availability = self.get_availability(offset)
        if availability is None:
            return Highlight.NONE
        if availability.refuses_all:
            return Highlight.PREF_REFUSE
        if availability.is_available(kind) is False:
            return Highlight.PREF_CONFLICT
        return Highlight.NONE

    def is_away(self, d: date) -> bool:
        """Check if an approved leave request covers the date."""
        return any(req.is_approved and req.covers(d) for req in self.leave_requests)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "nick_name": self.nick_name,
            "ideal_shifts": self.ideal_shifts,
            "availability": [a.to_dict() for a in self.availability],
            "leave_requests": [r.to_dict() for r in self.leave_requests],
            "is_hidden": self.is_hidden,
            "is_deleted": self.is_deleted,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StaffMember":
        return cls(
            id=data["id"],
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            nick_name=data.get("nick_name", ""),
            ideal_shifts=data.get("ideal_shifts", 0),
            availability=(
                [DayAvailability.from_dict(a) for a in data["availability"]]
                if "availability" in data
                else default_availability()
            ),
            leave_requests=[LeaveRequest.from_dict(r) for r in data.get("leave_requests", [])],
            is_hidden=data.get("is_hidden", False),
            is_deleted=data.get("is_deleted", False),
        )


def get_staff_from_list(
    staff_id: str,
    all_staff: list[StaffMember],
) -> Optional[StaffMember]:
    """Find a staff member by ID in a list."""
    for staff in all_staff:
        if staff.id == staff_id:
            return staff
    return None
