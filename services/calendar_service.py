"""
Calendar Service - month grids, job-day highlighting and blocked dates.

Blocked dates are view state only: they live in the user's session and are
never written to the job collection.
"""

import calendar
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

BLOCKED_DATES_SESSION_KEY = 'blocked_dates'

HIGHLIGHT_CLASS = 'highlight'
BLOCKED_CLASS = 'blocked'


class BlockedDates:
    """A set of days the user has marked unavailable."""

    def __init__(self, days: Optional[Iterable[date]] = None):
        self._days: Set[date] = set(days or [])

    @classmethod
    def from_session(cls, session) -> 'BlockedDates':
        """Load from a Flask session; malformed entries are dropped."""
        days = []
        for value in session.get(BLOCKED_DATES_SESSION_KEY, []):
            try:
                days.append(date.fromisoformat(value))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring malformed blocked date in session: {value!r}")
        return cls(days)

    def to_session(self, session) -> None:
        session[BLOCKED_DATES_SESSION_KEY] = self.as_list()

    def toggle(self, day: date) -> bool:
        """
        Block the day, or unblock it if it was already blocked.

        Returns:
            True when the day is blocked after the call
        """
        if day in self._days:
            self._days.discard(day)
            logger.info(f"Unblocked {day.isoformat()}")
            return False
        self._days.add(day)
        logger.info(f"Blocked {day.isoformat()}")
        return True

    def is_blocked(self, day: date) -> bool:
        return day in self._days

    def as_list(self) -> List[str]:
        return sorted(day.isoformat() for day in self._days)

    def __contains__(self, day) -> bool:
        return day in self._days

    def __len__(self) -> int:
        return len(self._days)


def tile_class(day: date, job_days: Set[date], blocked) -> Optional[str]:
    """CSS class for a calendar tile; a blocked day is never shown as highlighted."""
    if day in blocked:
        return BLOCKED_CLASS
    if day in job_days:
        return HIGHLIGHT_CLASS
    return None


def adjacent_months(year: int, month: int) -> Dict[str, Dict[str, int]]:
    """Previous and next (year, month) for calendar navigation."""
    prev_year, prev_month = (year, month - 1) if month > 1 else (year - 1, 12)
    next_year, next_month = (year, month + 1) if month < 12 else (year + 1, 1)
    return {
        'prev': {'year': prev_year, 'month': prev_month},
        'next': {'year': next_year, 'month': next_month},
    }


def month_grid(
    year: int,
    month: int,
    job_days: Set[date],
    blocked,
    selected: Optional[date] = None,
    today: Optional[date] = None,
) -> List[List[Optional[Dict]]]:
    """
    Weeks of the month, Sunday first. Padding cells outside the month are None.

    Each tile: {'day', 'iso', 'css_class', 'selected', 'today', 'has_jobs', 'blocked'}
    """
    today = today or date.today()
    weeks = []
    for week in calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month):
        row = []
        for day in week:
            if day.month != month:
                row.append(None)
                continue
            row.append({
                'day': day.day,
                'iso': day.isoformat(),
                'css_class': tile_class(day, job_days, blocked),
                'selected': day == selected,
                'today': day == today,
                'has_jobs': day in job_days,
                'blocked': day in blocked,
            })
        weeks.append(row)
    return weeks


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"
