"""
Job date normalization.

Job documents carry their `date` in whatever shape the writer used: an ISO or
human-readable string, a timestamp mapping ({"seconds": ..., "nanoseconds": ...}),
a native date/datetime, or nothing usable at all. Everything here reduces those
to a plain calendar day so jobs can be compared, bucketed and highlighted.
"""

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Set

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

ISO_DAY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
ISO_DATETIME_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}')

# Differ in year, month and day, so text missing any of them parses two ways
PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _from_epoch_seconds(seconds: Any) -> Optional[date]:
    try:
        return datetime.fromtimestamp(float(seconds), tz=timezone.utc).date()
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def _parse_date_string(value: str) -> Optional[date]:
    text = value.strip()
    if not text:
        return None

    try:
        # A bare YYYY-MM-DD is a calendar day, never a UTC instant
        if ISO_DAY_PATTERN.match(text):
            return date.fromisoformat(text)
        if ISO_DATETIME_PATTERN.match(text):
            return date_parser.isoparse(text).date()
        first, second = (date_parser.parse(text, default=default).date() for default in PARSE_DEFAULTS)
        # "10:30", "March" or "5" name no full day
        return first if first == second else None
    except (ValueError, OverflowError):
        return None


def normalize_job_date(value: Any) -> Optional[date]:
    """
    Reduce a stored job date to a calendar day.

    Returns:
        The day, or None when the value is missing or cannot be understood
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        return _parse_date_string(value)

    if isinstance(value, Mapping):
        seconds = value.get('seconds', value.get('_seconds'))
        return _from_epoch_seconds(seconds) if seconds is not None else None

    # Client-library timestamp objects expose .seconds
    seconds = getattr(value, 'seconds', None)
    if seconds is not None:
        return _from_epoch_seconds(seconds)

    return None


def to_iso_date(value: Any) -> Optional[str]:
    """Format as YYYY-MM-DD, or None when the value is not a date."""
    day = normalize_job_date(value)
    return day.isoformat() if day else None


def to_date_string(value: Any) -> Optional[str]:
    """Format like "Mon Oct 05 2026"; used as the calendar tile key."""
    day = normalize_job_date(value)
    return day.strftime('%a %b %d %Y') if day else None


def format_display_date(value: Any, missing: str = 'N/A') -> str:
    """
    Short month/day/year for lists and modals.

    Unparseable strings are shown as stored so nothing the user typed is hidden.
    """
    day = normalize_job_date(value)
    if day:
        return f"{day.month}/{day.day}/{day.year}"
    if isinstance(value, str) and value.strip():
        return value
    return missing


def to_timestamp(value: Any) -> Dict[str, int]:
    """
    Encode a date or datetime as a timestamp mapping.
    Dates become midnight UTC. Datetimes keep their wall-clock time and drop any
    offset, so a 23:00-05:00 job still reads back on its own calendar day.
    """
    if isinstance(value, datetime):
        moment = value.replace(tzinfo=timezone.utc)
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to a timestamp")

    epoch = moment.timestamp()
    seconds = int(epoch // 1)
    return {'seconds': seconds, 'nanoseconds': moment.microsecond * 1000}


def job_dates(jobs: Iterable[Dict]) -> Set[date]:
    """
    Every day that has at least one job.
    Jobs whose date cannot be read are skipped with a warning.
    """
    days = set()
    for job in jobs:
        day = normalize_job_date(job.get('date'))
        if day is None:
            logger.warning(f"Invalid date found: {job.get('date')!r} (job {job.get('id')})")
            continue
        days.add(day)
    return days


def jobs_for_date(jobs: Iterable[Dict], day: date) -> List[Dict]:
    """Jobs scheduled on the given day; jobs without a usable date never match."""
    if isinstance(day, datetime):
        day = day.date()
    return [job for job in jobs if normalize_job_date(job.get('date')) == day]


def upcoming_jobs(jobs: Iterable[Dict], now: Optional[datetime] = None, days: int = 7) -> List[Dict]:
    """
    Jobs from today through `days` days ahead (both ends inclusive), earliest first.
    """
    today = (now or datetime.now())
    if isinstance(today, datetime):
        today = today.date()
    last_day = today + timedelta(days=days)

    window = []
    for job in jobs:
        day = normalize_job_date(job.get('date'))
        if day is not None and today <= day <= last_day:
            window.append((day, job))

    window.sort(key=lambda item: item[0])
    return [job for _, job in window]
