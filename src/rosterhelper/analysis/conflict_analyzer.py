"""Conflict flagging for roster weeks.

This module is the single source of truth for roster highlights. Every
flag shown on a roster is computed here from the current assignments,
staff availability, approved leave and workload targets.

The analysis runs in three passes:
1. Count shifts per staff member per day.
2. Flag each slot on its own (duplicate, leave, preference, workload).
3. Link late shifts to early shifts on the following day.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from rosterhelper.domain.models import (
    Highlight,
    RosterDay,
    RosterWeek,
    SlotKind,
    StaffMember,
)
from rosterhelper.domain.policies import DefaultHighlightPolicy, HighlightPolicy

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


@dataclass
class FlagReport:
    """Result of analysing a roster week.

    Attributes:
        flags: Dict mapping slot IDs to their computed highlight.
        daily_counts: Dict mapping staff IDs to shifts per day offset.
        weekly_totals: Dict mapping staff IDs to shifts across the week.
    """

    flags: dict[str, Highlight] = field(default_factory=dict)
    daily_counts: dict[str, list[int]] = field(default_factory=dict)
    weekly_totals: dict[str, int] = field(default_factory=dict)

    def get_flag(self, slot_id: str) -> Highlight:
        return self.flags.get(slot_id, Highlight.NONE)

    def flagged_slot_ids(self) -> list[str]:
        """IDs of slots carrying any highlight."""
        return [sid for sid, flag in self.flags.items() if flag != Highlight.NONE]

    def count_by_flag(self) -> dict[Highlight, int]:
        counts: dict[Highlight, int] = {}
        for flag in self.flags.values():
            counts[flag] = counts.get(flag, 0) + 1
        return counts

    def apply(self, week: RosterWeek) -> RosterWeek:
        """Write the computed flags onto the slots of a week.

        Slots the report does not know about are reset to NONE.
        """
        for _, _, _, slot in week.iter_slots():
            slot.flag = self.flags.get(slot.id, Highlight.NONE)
        return week


class ConflictAnalyzer:
    """Computes the highlight of every slot in a roster week.

    Never raises on bad data: unknown staff, missing availability and
    out-of-range offsets degrade to NONE or a skipped check.

    Example:
        >>> analyzer = ConflictAnalyzer()
        >>> report = analyzer.analyze(week, all_staff)
        >>> report.get_flag(slot.id)
        <Highlight.DUPLICATE: 'duplicate'>
        >>> analyzer.evaluate(week, all_staff)  # writes flags onto the week
    """

    def __init__(self, highlight_policy: Optional[HighlightPolicy] = None):
        self.highlight_policy = highlight_policy or DefaultHighlightPolicy()

    def evaluate(self, week: RosterWeek, all_staff: list[StaffMember]) -> RosterWeek:
        """Recompute and store the flag of every slot in the week.

        Args:
            week: The week to annotate. Its slot flags are overwritten.
            all_staff: Every staff member who may appear in the week.

        Returns:
            The same week instance with flags updated.
        """
        return self.analyze(week, all_staff).apply(week)

    def analyze(self, week: RosterWeek, all_staff: list[StaffMember]) -> FlagReport:
        """Compute flags for a week without modifying it.

        Args:
            week: The week to analyse.
            all_staff: Every staff member who may appear in the week.

        Returns:
            FlagReport with a flag for every slot in the week.
        """
        staff_map = {staff.id: staff for staff in all_staff}
        report = FlagReport()

        # Pass 1
        report.daily_counts = self.count_shifts(week)
        report.weekly_totals = {
            staff_id: sum(counts) for staff_id, counts in report.daily_counts.items()
        }

        # Pass 2
        for offset, day in enumerate(week.days):
            self._assign_day_flags(week, day, offset, staff_map, report)

        # Pass 3
        for i in range(len(week.days) - 1):
            current_day = week.days[i]
            next_day = week.days[i + 1]
            if current_day.is_closed or next_day.is_closed:
                continue
            self._link_late_to_early(current_day, next_day, report)

        logger.info(
            "Flagged week %s: %d of %d slots highlighted",
            week.start_date,
            len(report.flagged_slot_ids()),
            len(report.flags),
        )
        return report

    def count_shifts(self, week: RosterWeek) -> dict[str, list[int]]:
        """Count shifts per staff member for each day offset.

        Args:
            week: The week to count.

        Returns:
            Dict mapping staff IDs to a per-day count list.
        """
        counts: dict[str, list[int]] = {}
        length = max(DAYS_PER_WEEK, len(week.days))
        for offset, day in enumerate(week.days):
            for row in day.rows:
                for kind in day.active_slot_kinds():
                    staff_id = row.slots[kind].assigned_staff
                    if staff_id is None:
                        continue
                    if staff_id not in counts:
                        counts[staff_id] = [0] * length
                    counts[staff_id][offset] += 1
        return counts

    def _assign_day_flags(
        self,
        week: RosterWeek,
        day: RosterDay,
        offset: int,
        staff_map: dict[str, StaffMember],
        report: FlagReport,
    ) -> None:
        """Flag every slot of a single day."""
        day_date = week.date_for_offset(offset)
        logger.debug("Flagging %s on %s", day.day_name, day_date)

        active = day.active_slot_kinds()
        for row in day.rows:
            for kind, slot in row.slots.items():
                if kind not in active:
                    report.flags[slot.id] = Highlight.NONE
                    continue
                report.flags[slot.id] = self._slot_flag(
                    slot.assigned_staff, kind, offset, day_date, staff_map, report
                )

    def _slot_flag(
        self,
        staff_id: Optional[str],
        kind: SlotKind,
        offset: int,
        day_date: date,
        staff_map: dict[str, StaffMember],
        report: FlagReport,
    ) -> Highlight:
        """Flag for one assigned slot. Each check short-circuits the rest."""
        if staff_id is None:
            return Highlight.NONE

        if report.daily_counts.get(staff_id, [0] * DAYS_PER_WEEK)[offset] > 1:
            return Highlight.DUPLICATE

        staff = staff_map.get(staff_id)
        if staff is None:
            return Highlight.NONE

        if staff.is_away(day_date):
            return Highlight.LEAVE_CONFLICT

        conflict = staff.get_conflict(kind, offset)
        if conflict != Highlight.NONE:
            return conflict

        total = report.weekly_totals.get(staff_id, 0)
        if total > staff.ideal_shifts:
            return Highlight.IDEAL_EXCEEDED
        if total == staff.ideal_shifts and self.highlight_policy.emit_ideal_met():
            return Highlight.IDEAL_MET
        return Highlight.NONE

    def _link_late_to_early(
        self,
        day: RosterDay,
        next_day: RosterDay,
        report: FlagReport,
    ) -> None:
        """Flag staff closing one day and opening the next."""
        ceiling = self.highlight_policy.priority(Highlight.LATE_TO_EARLY)

        for row in day.rows:
            late = row.late
            if self.highlight_policy.priority(report.get_flag(late.id)) > ceiling:
                continue
            if late.assigned_staff is None:
                continue
            for next_row in next_day.rows:
                early = next_row.early
                if self.highlight_policy.priority(report.get_flag(early.id)) > ceiling:
                    continue
                if early.has_staff(late.assigned_staff):
                    report.flags[early.id] = Highlight.LATE_TO_EARLY
                    report.flags[late.id] = Highlight.LATE_TO_EARLY
