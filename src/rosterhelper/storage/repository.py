"""Repositories for roster weeks and staff.

Stores keep weeks keyed by start date and provision a fresh week the
first time one is requested. When a store is given a ConflictAnalyzer,
every saved week is re-flagged against the current staff list before it
is written.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Optional, Union

from rosterhelper.analysis.conflict_analyzer import ConflictAnalyzer
from rosterhelper.domain.calendar import week_start_from_offset
from rosterhelper.domain.errors import StaffNotFoundError, StorageError, WeekNotFoundError
from rosterhelper.domain.models import RosterDay, RosterWeek, StaffMember
from rosterhelper.domain.policies import DefaultRosterLayoutPolicy, RosterLayoutPolicy
from rosterhelper.roster.builder import change_day_row_count, new_roster_week

logger = logging.getLogger(__name__)


class RosterWeekRepository(ABC):
    """Abstract base class for roster week persistence."""

    layout: RosterLayoutPolicy

    @abstractmethod
    def save_roster_week(self, week: RosterWeek) -> None:
        pass

    @abstractmethod
    def load_roster_week(self, start_date: date) -> RosterWeek:
        """Load the week starting on a date, creating it if missing."""
        pass

    @abstractmethod
    def find_roster_week(self, start_date: date) -> RosterWeek:
        """Load an existing week without provisioning one.

        Raises:
            WeekNotFoundError: If no week starts on that date.
        """
        pass

    @abstractmethod
    def save_all_roster_weeks(self, weeks: list[RosterWeek]) -> None:
        """Save several weeks in one go."""
        pass

    @abstractmethod
    def load_all_roster_weeks(self) -> list[RosterWeek]:
        pass

    def load_roster_week_by_offset(self, offset: int) -> RosterWeek:
        """Load the week `offset` weeks after the epoch week."""
        return self.load_roster_week(week_start_from_offset(offset, self.layout.epoch()))

    def change_day_row_count(
        self,
        start_date: date,
        day_id: str,
        action: str,
    ) -> tuple[RosterDay, bool]:
        """Add or remove a row on a day and save the week.

        Returns:
            Tuple of (changed day, whether the week is live).
        """
        week = self.load_roster_week(start_date)
        day = change_day_row_count(week, day_id, action, self.layout)
        self.save_roster_week(week)
        return day, week.is_live


class StaffRepository(ABC):
    """Abstract base class for staff persistence."""

    @abstractmethod
    def save_staff_member(self, staff: StaffMember) -> None:
        pass

    @abstractmethod
    def load_all_staff(self) -> list[StaffMember]:
        """All staff members that are not deleted."""
        pass

    @abstractmethod
    def delete_staff_by_id(self, staff_id: str) -> None:
        """Soft-delete a staff member.

        Raises:
            StaffNotFoundError: If no staff member has that ID.
        """
        pass

    def get_staff_by_id(self, staff_id: str) -> StaffMember:
        """Look up a staff member.

        Raises:
            StaffNotFoundError: If no live staff member has that ID.
        """
        for staff in self.load_all_staff():
            if staff.id == staff_id:
                return staff
        raise StaffNotFoundError(staff_id)

    def get_staff_by_leave_request_id(self, leave_request_id: str) -> Optional[StaffMember]:
        """Find the staff member who owns a leave request, if any."""
        for staff in self.load_all_staff():
            if any(req.id == leave_request_id for req in staff.leave_requests):
                return staff
        return None


class InMemoryRosterStore(RosterWeekRepository, StaffRepository):
    """Roster and staff store held in dictionaries.

    Example:
        >>> store = InMemoryRosterStore(analyzer=ConflictAnalyzer())
        >>> week = store.load_roster_week(date(2024, 1, 16))
        >>> store.save_roster_week(week)  # flags recomputed on save
    """

    def __init__(
        self,
        analyzer: Optional[ConflictAnalyzer] = None,
        layout: Optional[RosterLayoutPolicy] = None,
    ):
        self.analyzer = analyzer
        self.layout = layout or DefaultRosterLayoutPolicy()
        self._weeks: dict[date, RosterWeek] = {}
        self._staff: dict[str, StaffMember] = {}

    def save_roster_week(self, week: RosterWeek) -> None:
        if self.analyzer is not None:
            self.analyzer.evaluate(week, self.load_all_staff())
        self._weeks[week.start_date] = week
        logger.debug("Saved roster week %s (id: %s)", week.start_date, week.id)

    def load_roster_week(self, start_date: date) -> RosterWeek:
        week = self._weeks.get(start_date)
        if week is None:
            logger.info("Making new roster week starting %s", start_date)
            week = new_roster_week(start_date, self.layout)
            self.save_roster_week(week)
        return week

    def find_roster_week(self, start_date: date) -> RosterWeek:
        week = self._weeks.get(start_date)
        if week is None:
            raise WeekNotFoundError(f"No roster week starts on {start_date}")
        return week

    def load_all_roster_weeks(self) -> list[RosterWeek]:
        return [self._weeks[d] for d in sorted(self._weeks)]

    def save_all_roster_weeks(self, weeks: list[RosterWeek]) -> None:
        for week in weeks:
            self.save_roster_week(week)

    def save_staff_member(self, staff: StaffMember) -> None:
        self._staff[staff.id] = staff

    def load_all_staff(self) -> list[StaffMember]:
        return [s for s in self._staff.values() if not s.is_deleted]

    def delete_staff_by_id(self, staff_id: str) -> None:
        staff = self._staff.get(staff_id)
        if staff is None:
            raise StaffNotFoundError(staff_id)
        staff.is_deleted = True
        logger.info("Deleted staff member %s", staff_id)


class JsonRosterStore(RosterWeekRepository, StaffRepository):
    """Roster and staff store backed by a single JSON document.

    The document is an object holding two lists of objects, "weeks" and
    "staff". Every save rewrites the whole file.
    """

    def __init__(
        self,
        path: Union[str, Path],
        analyzer: Optional[ConflictAnalyzer] = None,
        layout: Optional[RosterLayoutPolicy] = None,
    ):
        self.path = Path(path)
        self.analyzer = analyzer
        self.layout = layout or DefaultRosterLayoutPolicy()

    def _read(self) -> dict:
        if not self.path.exists():
            return {"weeks": [], "staff": []}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read roster store {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Malformed roster store {self.path}: expected a JSON object")
        for key in ("weeks", "staff"):
            entries = data.setdefault(key, [])
            if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
                raise StorageError(
                    f"Malformed roster store {self.path}: '{key}' must be a list of objects"
                )
        return data

    def _write(self, data: dict) -> None:
        try:
            self.path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            raise StorageError(f"Failed to write roster store {self.path}: {e}") from e

    def _decode_weeks(self, data: dict) -> list[RosterWeek]:
        try:
            return [RosterWeek.from_dict(w) for w in data["weeks"]]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise StorageError(f"Malformed roster week in {self.path}: {e}") from e

    def _decode_staff(self, data: dict) -> list[StaffMember]:
        try:
            return [StaffMember.from_dict(s) for s in data["staff"]]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise StorageError(f"Malformed staff member in {self.path}: {e}") from e

    def _put_weeks(self, data: dict, weeks: list[RosterWeek]) -> None:
        if self.analyzer is not None:
            all_staff = [s for s in self._decode_staff(data) if not s.is_deleted]
            for week in weeks:
                self.analyzer.evaluate(week, all_staff)
        ids = {week.id for week in weeks}
        kept = [w for w in data["weeks"] if w.get("id") not in ids]
        kept.extend(week.to_dict() for week in weeks)
        data["weeks"] = sorted(kept, key=lambda w: str(w.get("start_date", "")))

    def save_roster_week(self, week: RosterWeek) -> None:
        data = self._read()
        self._put_weeks(data, [week])
        self._write(data)
        logger.info("Saved roster week %s (id: %s)", week.start_date, week.id)

    def save_all_roster_weeks(self, weeks: list[RosterWeek]) -> None:
        data = self._read()
        self._put_weeks(data, weeks)
        self._write(data)
        logger.info("Saved %d roster weeks", len(weeks))

    def load_roster_week(self, start_date: date) -> RosterWeek:
        for week in self._decode_weeks(self._read()):
            if week.start_date == start_date:
                return week
        logger.info("Making new roster week starting %s", start_date)
        week = new_roster_week(start_date, self.layout)
        self.save_roster_week(week)
        return week

    def find_roster_week(self, start_date: date) -> RosterWeek:
        for week in self._decode_weeks(self._read()):
            if week.start_date == start_date:
                return week
        raise WeekNotFoundError(f"No roster week starts on {start_date}")

    def load_all_roster_weeks(self) -> list[RosterWeek]:
        return self._decode_weeks(self._read())

    def save_staff_member(self, staff: StaffMember) -> None:
        data = self._read()
        staff_list = [s for s in data["staff"] if s.get("id") != staff.id]
        staff_list.append(staff.to_dict())
        data["staff"] = staff_list
        self._write(data)
        logger.debug("Saved staff member %s", staff.id)

    def load_all_staff(self) -> list[StaffMember]:
        return [s for s in self._decode_staff(self._read()) if not s.is_deleted]

    def delete_staff_by_id(self, staff_id: str) -> None:
        data = self._read()
        for entry in data["staff"]:
            if entry.get("id") == staff_id:
                entry["is_deleted"] = True
                break
        else:
            raise StaffNotFoundError(staff_id)
        self._write(data)
        logger.info("Deleted staff member %s", staff_id)
