"""Tests for highlight and layout policies."""

from datetime import date

import pytest

from rosterhelper.domain.models import Highlight
from rosterhelper.domain.policies import (
    DefaultHighlightPolicy,
    DefaultRosterLayoutPolicy,
)


class TestDefaultHighlightPolicy:
    """Tests for DefaultHighlightPolicy."""

    def test_ranking_order(self):
        """Flags should rank in the documented order."""
        policy = DefaultHighlightPolicy()
        ordered = [
            Highlight.NONE,
            Highlight.IDEAL_MET,
            Highlight.IDEAL_EXCEEDED,
            Highlight.PREF_CONFLICT,
            Highlight.LATE_TO_EARLY,
            Highlight.PREF_REFUSE,
            Highlight.DUPLICATE,
            Highlight.LEAVE_CONFLICT,
        ]
        ranks = [policy.priority(flag) for flag in ordered]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == len(ranks)

    def test_every_flag_ranked(self):
        policy = DefaultHighlightPolicy()
        assert set(policy.priorities) == set(Highlight)

    @pytest.mark.parametrize(
        "flag,expected",
        [
            (Highlight.DUPLICATE, "#FFA07A"),
            (Highlight.PREF_CONFLICT, "#FF9999"),
            (Highlight.LATE_TO_EARLY, "#117593"),
            (Highlight.LEAVE_CONFLICT, "#CC3333"),
            (Highlight.PREF_REFUSE, "#CC3333"),
            (Highlight.IDEAL_MET, "#B2E1B0"),
            (Highlight.IDEAL_EXCEEDED, "#D7A9A9"),
        ],
    )
    def test_colours(self, flag, expected):
        policy = DefaultHighlightPolicy()
        assert policy.colour(flag, "#ffffff") == expected

    def test_none_uses_default_colour(self):
        """Unflagged slots should show the day colour."""
        policy = DefaultHighlightPolicy()
        assert policy.colour(Highlight.NONE, "#b7b7b7") == "#b7b7b7"

    def test_descriptions(self):
        policy = DefaultHighlightPolicy()
        assert policy.description(Highlight.LEAVE_CONFLICT) == "On approved leave"
        assert policy.description(Highlight.NONE) == "No issues"

    def test_ideal_met_off_by_default(self):
        assert DefaultHighlightPolicy().emit_ideal_met() is False

    def test_ideal_met_can_be_enabled(self):
        assert DefaultHighlightPolicy(show_ideal_met=True).emit_ideal_met() is True

    def test_instances_do_not_share_tables(self):
        first = DefaultHighlightPolicy()
        second = DefaultHighlightPolicy()
        first.priorities[Highlight.NONE] = 99
        assert second.priority(Highlight.NONE) == 0


class TestDefaultRosterLayoutPolicy:
    """Tests for DefaultRosterLayoutPolicy."""

    def test_day_names_start_on_tuesday(self):
        policy = DefaultRosterLayoutPolicy()
        assert policy.day_names() == ["Tues", "Wed", "Thurs", "Fri", "Sat", "Sun", "Mon"]

    def test_alternating_colours(self):
        """Even offsets should be grey, odd offsets white."""
        policy = DefaultRosterLayoutPolicy()
        assert policy.day_colour(0) == "#b7b7b7"
        assert policy.day_colour(1) == "#ffffff"
        assert policy.day_colour(6) == "#b7b7b7"

    def test_row_counts(self):
        policy = DefaultRosterLayoutPolicy()
        assert policy.default_row_count() == 4
        assert policy.min_row_count() == 4

    def test_epoch_is_tuesday(self):
        policy = DefaultRosterLayoutPolicy()
        assert policy.epoch() == date(2023, 1, 3)
        assert policy.epoch().weekday() == 1

    def test_custom_layout(self):
        policy = DefaultRosterLayoutPolicy(rows_per_day=6, min_rows=2)
        assert policy.default_row_count() == 6
        assert policy.min_row_count() == 2
