"""Policy definitions for roster rules.

This module contains configurable policies for how highlights rank,
display and describe themselves, and for how new roster weeks are laid
out. Policies are kept separate from the analyzer so the ranking and
layout can be tested and changed independently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date

from rosterhelper.domain.models import Highlight


class HighlightPolicy(ABC):
    """Abstract base class for highlight ranking and display."""

    @abstractmethod
    def priority(self, flag: Highlight) -> int:
        """Rank of a flag. Higher ranks are never overwritten by lower ones."""
        pass

    @abstractmethod
    def colour(self, flag: Highlight, default: str) -> str:
        """Display colour for a flag, falling back to the default."""
        pass

    @abstractmethod
    def description(self, flag: Highlight) -> str:
        """Human-readable description of a flag."""
        pass

    @abstractmethod
    def emit_ideal_met(self) -> bool:
        """Whether a staff member exactly at their ideal shift count is flagged."""
        pass


class RosterLayoutPolicy(ABC):
    """Abstract base class for the layout of newly provisioned weeks."""

    @abstractmethod
    def day_names(self) -> list[str]:
        """Display names for the days of the week, in offset order."""
        pass

    @abstractmethod
    def day_colour(self, offset: int) -> str:
        """Display colour for the day at an offset."""
        pass

    @abstractmethod
    def default_row_count(self) -> int:
        """Number of rows a new day starts with."""
        pass

    @abstractmethod
    def min_row_count(self) -> int:
        """Rows are never removed below this count."""
        pass

    @abstractmethod
    def epoch(self) -> date:
        """Start date of week zero."""
        pass


def _default_priorities() -> dict[Highlight, int]:
    return {
        Highlight.NONE: 0,
        Highlight.IDEAL_MET: 1,
        Highlight.IDEAL_EXCEEDED: 2,
        Highlight.PREF_CONFLICT: 3,
        Highlight.LATE_TO_EARLY: 4,
        Highlight.PREF_REFUSE: 5,
        Highlight.DUPLICATE: 6,
        Highlight.LEAVE_CONFLICT: 7,
    }


def _default_colours() -> dict[Highlight, str]:
    return {
        Highlight.DUPLICATE: "#FFA07A",
        Highlight.PREF_CONFLICT: "#FF9999",
        Highlight.LATE_TO_EARLY: "#117593",
        Highlight.LEAVE_CONFLICT: "#CC3333",
        Highlight.PREF_REFUSE: "#CC3333",
        Highlight.IDEAL_MET: "#B2E1B0",
        Highlight.IDEAL_EXCEEDED: "#D7A9A9",
    }


def _default_descriptions() -> dict[Highlight, str]:
    return {
        Highlight.NONE: "No issues",
        Highlight.IDEAL_MET: "Ideal shift count reached",
        Highlight.IDEAL_EXCEEDED: "Ideal shift count exceeded",
        Highlight.PREF_CONFLICT: "Not available for this shift",
        Highlight.LATE_TO_EARLY: "Late shift followed by an early shift",
        Highlight.PREF_REFUSE: "Not available on this day",
        Highlight.DUPLICATE: "Assigned more than once on this day",
        Highlight.LEAVE_CONFLICT: "On approved leave",
    }


@dataclass
class DefaultHighlightPolicy(HighlightPolicy):
    """Default highlight policy.

    Ranking (lowest to highest):
    none, ideal met, ideal exceeded, preference conflict, late-to-early,
    preference refuse, duplicate, leave conflict.

    Note: ideal-met is suppressed by default. A staff member exactly at
    their ideal count gets no flag; confirm with the roster owners before
    turning it on.
    """

    priorities: dict[Highlight, int] = field(default_factory=_default_priorities)
    colours: dict[Highlight, str] = field(default_factory=_default_colours)
    descriptions: dict[Highlight, str] = field(default_factory=_default_descriptions)
    show_ideal_met: bool = False

    def priority(self, flag: Highlight) -> int:
        return self.priorities.get(flag, 0)

    def colour(self, flag: Highlight, default: str) -> str:
        return self.colours.get(flag, default)

    def description(self, flag: Highlight) -> str:
        return self.descriptions.get(flag, flag.value)

    def emit_ideal_met(self) -> bool:
        return self.show_ideal_met


@dataclass
class DefaultRosterLayoutPolicy(RosterLayoutPolicy):
    """Default layout for new roster weeks.

    Weeks run Tuesday to Monday. Days alternate between grey and white,
    starting grey. Each day starts with four rows and never drops below
    four.
    """

    names: list[str] = field(
        default_factory=lambda: ["Tues", "Wed", "Thurs", "Fri", "Sat", "Sun", "Mon"]
    )
    even_colour: str = "#b7b7b7"
    odd_colour: str = "#ffffff"
    rows_per_day: int = 4
    min_rows: int = 4
    epoch_date: date = date(2023, 1, 3)  # A Tuesday

    def day_names(self) -> list[str]:
        return list(self.names)

    def day_colour(self, offset: int) -> str:
        return self.even_colour if offset % 2 == 0 else self.odd_colour

    def default_row_count(self) -> int:
        return self.rows_per_day

    def min_row_count(self) -> int:
        return self.min_rows

    def epoch(self) -> date:
        return self.epoch_date
