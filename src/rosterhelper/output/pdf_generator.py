"""PDF generation for roster weeks.

This module creates a printable landscape grid of a roster week:
- One column per day, split into the day's active slot kinds
- Each cell filled with its highlight colour (or the day colour)
- A legend of highlight colours
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from rosterhelper.domain.models import Highlight, RosterDay, RosterWeek, StaffMember
from rosterhelper.domain.policies import DefaultHighlightPolicy, HighlightPolicy

# Highlights shown in the legend, in display order
LEGEND_FLAGS = [
    Highlight.DUPLICATE,
    Highlight.LEAVE_CONFLICT,
    Highlight.PREF_REFUSE,
    Highlight.PREF_CONFLICT,
    Highlight.LATE_TO_EARLY,
    Highlight.IDEAL_EXCEEDED,
]


class RosterPDFGenerator:
    """Generates printable PDF rosters.

    Example:
        >>> generator = RosterPDFGenerator()
        >>> generator.generate(week, all_staff, "roster.pdf")
    """

    def __init__(
        self,
        highlight_policy: Optional[HighlightPolicy] = None,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
        row_height: float = 22,
    ):
        self.highlight_policy = highlight_policy or DefaultHighlightPolicy()
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.row_height = row_height

    def generate(
        self,
        week: RosterWeek,
        all_staff: list[StaffMember],
        output_path: Union[str, Path],
    ) -> None:
        """Generate the roster PDF and save it to a file.

        Args:
            week: The flagged week to render.
            all_staff: Staff used to resolve display names.
            output_path: Path to save the PDF.
        """
        try:
            from reportlab.lib.pagesizes import landscape, letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        c = canvas.Canvas(str(output_path), pagesize=landscape(letter))
        self._draw_pages(c, week, all_staff)
        c.save()

    def generate_to_buffer(
        self,
        week: RosterWeek,
        all_staff: list[StaffMember],
    ) -> BytesIO:
        """Generate the roster PDF and return it as a bytes buffer."""
        try:
            from reportlab.lib.pagesizes import landscape, letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=landscape(letter))
        self._draw_pages(c, week, all_staff)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_pages(self, c, week: RosterWeek, all_staff: list[StaffMember]) -> None:
        """Draw the week grid, paginating rows."""
        staff_map = {s.id: s for s in all_staff}

        header_height = 60
        footer_height = 40
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        rows_per_page = max(1, int(usable_height / self.row_height))

        max_rows = max((len(day.rows) for day in week.days), default=0)
        total_pages = max(1, (max_rows + rows_per_page - 1) // rows_per_page)
        column_width = (self.page_width - 2 * self.margin) / max(1, len(week.days))

        for page in range(total_pages):
            first_row = page * rows_per_page
            self._draw_header(c, week)

            top = self.page_height - self.margin - header_height
            for offset, day in enumerate(week.days):
                x = self.margin + offset * column_width
                self._draw_day_column(
                    c,
                    day,
                    staff_map,
                    x,
                    top,
                    column_width,
                    first_row,
                    first_row + rows_per_page,
                )

            self._draw_legend(c, self.margin, self.margin + 10)

            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page + 1} of {total_pages}",
            )
            c.showPage()

    def _draw_header(self, c, week: RosterWeek) -> None:
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Roster - week of {week.start_date.strftime('%A, %B %d, %Y')}",
        )

        c.setFont("Helvetica", 10)
        status = "Live" if week.is_live else "Draft"
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"{status} - {week.start_date} to {week.end_date}",
        )

    def _draw_day_column(
        self,
        c,
        day: RosterDay,
        staff_map: dict[str, StaffMember],
        x: float,
        top: float,
        width: float,
        first_row: int,
        last_row: int,
    ) -> None:
        """Draw one day: title, slot-kind headings and a cell per slot."""
        from reportlab.lib.colors import HexColor

        kinds = day.active_slot_kinds()
        cell_width = width / len(kinds)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 9)
        title = f"{day.day_name} (closed)" if day.is_closed else day.day_name
        c.drawCentredString(x + width / 2, top + 4, title)

        c.setFont("Helvetica", 6)
        for i, kind in enumerate(kinds):
            c.drawCentredString(x + (i + 0.5) * cell_width, top - 8, kind.value.title())

        y = top - 12
        for row in day.rows[first_row:last_row]:
            y -= self.row_height
            for i, kind in enumerate(kinds):
                slot = row.slots[kind]
                cell_x = x + i * cell_width
                fill = self.highlight_policy.colour(slot.flag, day.colour)
                c.setFillColor(HexColor(fill))
                c.setStrokeColorRGB(0.5, 0.5, 0.5)
                c.setLineWidth(0.5)
                c.rect(cell_x, y, cell_width, self.row_height, fill=1, stroke=1)

                c.setFillColorRGB(0, 0, 0)
                staff = staff_map.get(slot.assigned_staff) if slot.assigned_staff else None
                name = staff.display_name if staff else (slot.staff_string or "")
                c.setFont("Helvetica", 6)
                c.drawCentredString(cell_x + cell_width / 2, y + 12, name[:9])
                if slot.start_time:
                    c.setFont("Helvetica", 5)
                    c.drawCentredString(cell_x + cell_width / 2, y + 4, slot.start_time[:9])

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for highlight colours."""
        from reportlab.lib.colors import HexColor

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        c.setFont("Helvetica", 7)
        current_x = x + 45
        for flag in LEGEND_FLAGS:
            c.setFillColor(HexColor(self.highlight_policy.colour(flag, "#ffffff")))
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            label = self.highlight_policy.description(flag)
            c.drawString(current_x + 15, y, label[:22])
            current_x += 110
