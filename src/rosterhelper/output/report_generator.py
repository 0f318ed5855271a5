"""Plain-text reports for flagged roster weeks.

The report lists:
- Every highlighted slot, grouped by day
- Counts per highlight
- Each staff member's weekly shift total against their ideal
"""

from collections import defaultdict
from pathlib import Path
from typing import Optional, Union

from rosterhelper.domain.models import Highlight, RosterWeek, StaffMember
from rosterhelper.domain.policies import DefaultHighlightPolicy, HighlightPolicy


class RosterReportGenerator:
    """Generates text reports of the flags on a roster week.

    Reads the flags already stored on the week, so run the analyzer first.

    Example:
        >>> ConflictAnalyzer().evaluate(week, staff)
        >>> print(RosterReportGenerator().generate_to_string(week, staff))
    """

    def __init__(self, highlight_policy: Optional[HighlightPolicy] = None):
        self.highlight_policy = highlight_policy or DefaultHighlightPolicy()

    def generate(
        self,
        week: RosterWeek,
        all_staff: list[StaffMember],
        output_path: Union[str, Path],
    ) -> str:
        """Generate the report and save it to a file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(week, all_staff)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(self, week: RosterWeek, all_staff: list[StaffMember]) -> str:
        return self._generate_content(week, all_staff)

    def _generate_content(self, week: RosterWeek, all_staff: list[StaffMember]) -> str:
        staff_map = {s.id: s for s in all_staff}
        lines = []

        lines.append("=" * 72)
        lines.append(f"ROSTER WEEK {week.start_date} - {week.end_date}"
                     f"{' (live)' if week.is_live else ''}")
        lines.append("=" * 72)
        lines.append("")

        # Flagged slots by day
        flag_counts = defaultdict(int)
        lines.append("-" * 72)
        lines.append("FLAGGED SLOTS")
        lines.append("-" * 72)
        any_flagged = False
        for offset, day in enumerate(week.days):
            day_lines = []
            for row_index, row in enumerate(day.rows, 1):
                for kind in day.active_slot_kinds():
                    slot = row.slots[kind]
                    if slot.flag == Highlight.NONE:
                        continue
                    flag_counts[slot.flag] += 1
                    name = self._slot_name(slot.assigned_staff, slot.staff_string, staff_map)
                    day_lines.append(
                        f"  row {row_index:>2} {kind.value:<7} {name:<16} "
                        f"{self.highlight_policy.description(slot.flag)}"
                    )
            if day_lines:
                any_flagged = True
                closed = " [closed]" if day.is_closed else ""
                lines.append(f"{day.day_name} {week.date_for_offset(offset)}{closed}")
                lines.extend(day_lines)
        if not any_flagged:
            lines.append("No flagged slots.")
        lines.append("")

        # Totals per flag
        lines.append("-" * 72)
        lines.append("FLAG SUMMARY")
        lines.append("-" * 72)
        for flag in Highlight:
            if flag_counts.get(flag):
                lines.append(f"{self.highlight_policy.description(flag):<40} {flag_counts[flag]:>4}")
        lines.append("")

        # Workload per staff member
        lines.append("-" * 72)
        lines.append("SHIFTS PER STAFF MEMBER")
        lines.append("-" * 72)
        lines.append(f"{'Name':<20} {'Shifts':>6} {'Ideal':>6}")
        for staff in sorted(all_staff, key=lambda s: s.display_name.lower()):
            shifts = week.count_shifts(staff.id)
            if shifts == 0 and staff.is_hidden:
                continue
            marker = " +" if shifts > staff.ideal_shifts else ""
            lines.append(f"{staff.display_name[:20]:<20} {shifts:>6} {staff.ideal_shifts:>6}{marker}")
        lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _slot_name(
        staff_id: Optional[str],
        cached: Optional[str],
        staff_map: dict[str, StaffMember],
    ) -> str:
        # The cached name can go stale; prefer the live record.
        staff = staff_map.get(staff_id) if staff_id else None
        if staff is not None:
            return staff.display_name
        return cached or staff_id or "-"
