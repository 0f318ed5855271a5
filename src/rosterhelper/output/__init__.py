"""Output generation for roster weeks (text reports, PDF)."""

from rosterhelper.output.pdf_generator import RosterPDFGenerator
from rosterhelper.output.report_generator import RosterReportGenerator

__all__ = [
    "RosterPDFGenerator",
    "RosterReportGenerator",
]
