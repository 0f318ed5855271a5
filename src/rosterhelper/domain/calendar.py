"""Week arithmetic for rosters that start on a Tuesday."""

from datetime import date, timedelta
from typing import Optional

TUESDAY = 1  # date.weekday() value


def week_start_from_offset(offset: int, epoch: date) -> date:
    """Start date of the week `offset` weeks after the epoch week."""
    return epoch + timedelta(days=7 * offset)


def week_offset_from_date(d: date, epoch: date) -> int:
    """Week number containing a date, counted from the epoch week.

    Dates before the epoch give negative offsets.
    """
    return (d - epoch).days // 7


def next_tuesday(today: Optional[date] = None) -> date:
    """First Tuesday strictly after today."""
    today = today or date.today()
    days_until = (TUESDAY - today.weekday()) % 7
    if days_until == 0:
        days_until = 7
    return today + timedelta(days=days_until)


def last_tuesday(today: Optional[date] = None) -> date:
    """Start of the roster week containing today.

    On a Tuesday this is today itself.
    """
    return next_tuesday(today) - timedelta(days=7)
