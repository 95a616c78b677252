"""
Current week resolution.

The season is a simple linear schedule: before it starts the first week is
shown, after it ends the last week is shown, and otherwise the week whose date
range contains today.
"""

from datetime import datetime, tzinfo
from typing import Iterable, List, Optional

from golf_pool.models.week import Week


def to_wall_clock(now: datetime, zone: Optional[tzinfo] = None) -> datetime:
    """
    Convert an instant to the naive wall-clock time schedule dates are compared against.

    Naive datetimes are taken to already be wall-clock times. Aware ones are
    converted to ``zone`` (kept in their own zone when none is given).
    """
    if now.tzinfo is None:
        return now
    if zone is not None:
        now = now.astimezone(zone)
    return now.replace(tzinfo=None)


def scheduled_weeks(weeks: Iterable[Week]) -> List[Week]:
    """Weeks with a week number, ascending by it; input order breaks ties."""
    return sorted((week for week in weeks if week.is_scheduled), key=lambda week: week.week_number)


def resolve_current_week(weeks: Iterable[Week], now: datetime) -> Optional[Week]:
    """
    Pick the current week relative to ``now``.

    Args:
        weeks: Weeks in any order; those without a week number are ignored
        now: Instant to resolve against, see ``to_wall_clock``

    Returns:
        The week whose dates contain ``now``, else the first week when the
        season has not started, else the last week. None only when no week
        has a week number.
    """
    ordered = scheduled_weeks(weeks)
    if not ordered:
        return None

    now = to_wall_clock(now)

    for week in ordered:
        if week.contains(now):
            return week

    first = ordered[0]
    if first.starts_at is not None and now < first.starts_at:
        return first

    return ordered[-1]
