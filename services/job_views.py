"""
Screen view-models: fetch the collection, derive what a screen shows, and turn
store failures into the generic load error instead of an exception.
"""

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from services.calendar_service import BlockedDates, adjacent_months, month_grid, month_title
from services.job_dates import (
    format_display_date,
    job_dates,
    jobs_for_date,
    normalize_job_date,
    to_iso_date,
    upcoming_jobs,
)
from services.job_store import JobStoreError

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = 'Failed to load jobs. Please try again later.'
MISSING = 'N/A'

LEADING_NUMBER = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?')


# ==================== FIELD HELPERS ====================

def is_completed(job: Dict) -> bool:
    """Only a stored boolean true counts; a missing flag means pending."""
    return job.get('completed') is True


def with_completed_default(job: Dict) -> Dict:
    normalized = dict(job)
    normalized['completed'] = is_completed(job)
    return normalized


def display_value(value: Any) -> str:
    if value is None:
        return MISSING
    text = str(value).strip()
    return text if text else MISSING


def display_name(job: Dict) -> str:
    """The job's name, else first and last name, else N/A."""
    name = job.get('name')
    if name and str(name).strip():
        return str(name).strip()
    parts = [str(job.get(key)).strip() for key in ('firstName', 'lastName') if job.get(key)]
    full_name = ' '.join(part for part in parts if part)
    return full_name or MISSING


def parse_price(value: Any) -> Optional[float]:
    """
    Read a price the way the entry form's number parsing does: the leading
    number after any whitespace ("120", "80 cash", "1,250" -> 1). Text that
    does not start with a number, such as "$45", is None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        match = LEADING_NUMBER.match(text)
        if not match:
            return None
        number = float(match.group(0))

    return number if math.isfinite(number) else None


def completed_jobs_value(jobs: Iterable[Dict]) -> float:
    """Total price of completed jobs; missing or unreadable prices add nothing."""
    total = 0.0
    for job in jobs:
        if not is_completed(job):
            continue
        price = parse_price(job.get('price'))
        if price is not None:
            total += price
    return total


def format_currency(amount: float, symbol: str = '$') -> str:
    return f"{symbol}{amount:,.2f}"


def format_job_details(job: Dict) -> Dict[str, Any]:
    """
    Everything the job details modal shows.
    Missing values are rendered as N/A; optional fields only appear when present.
    """
    from app.utils.helpers import google_maps_url
    from validators import validate_email, validate_phone

    email = job.get('email')
    phone = job.get('phone')
    completed = is_completed(job)

    rows = [
        {'label': 'Name', 'value': display_name(job)},
        {'label': 'Date', 'value': format_display_date(job.get('date'))},
    ]
    if job.get('time'):
        rows.append({'label': 'Time', 'value': display_value(job.get('time'))})
    rows.extend([
        {'label': 'Email', 'value': display_value(email)},
        {'label': 'Phone', 'value': display_value(phone)},
        {'label': 'Address', 'value': display_value(job.get('address'))},
        {'label': 'Info', 'value': display_value(job.get('info'))},
    ])
    for key, label in (('description', 'Description'), ('yardage', 'Yardage')):
        if job.get(key) not in (None, ''):
            rows.append({'label': label, 'value': display_value(job.get(key))})
    rows.extend([
        {'label': 'Price', 'value': display_value(job.get('price'))},
        {'label': 'Status', 'value': 'Completed' if completed else 'Pending'},
    ])

    return {
        'id': job.get('id'),
        'title': display_name(job),
        'completed': completed,
        'status': 'Completed' if completed else 'Pending',
        'date_iso': to_iso_date(job.get('date')),
        'rows': rows,
        'maps_url': google_maps_url(job.get('address')),
        'email_link': f"mailto:{email}" if validate_email(email)[0] else None,
        'phone_link': f"tel:{phone}" if validate_phone(phone)[0] else None,
    }


def job_list_item(job: Dict) -> Dict[str, Any]:
    return {
        'id': job.get('id'),
        'name': display_name(job),
        'date': format_display_date(job.get('date')),
        'date_iso': to_iso_date(job.get('date')),
        'address': display_value(job.get('address')),
        'last_name': display_value(job.get('lastName')),
        'completed': is_completed(job),
    }


def _find_job(jobs: Iterable[Dict], job_id: Optional[str]) -> Optional[Dict]:
    if not job_id:
        return None
    return next((job for job in jobs if job.get('id') == job_id), None)


def _fetch(store, limit: Optional[int] = None) -> List[Dict]:
    try:
        return store.fetch_jobs(limit=limit)
    except JobStoreError as e:
        logger.error(f"Error fetching jobs: {e} ({e.cause})")
        raise


def _calendar(year: int, month: int, job_days, blocked, selected: Optional[date], today: date) -> Dict:
    return {
        'year': year,
        'month': month,
        'title': month_title(year, month),
        'weeks': month_grid(year, month, job_days, blocked, selected=selected, today=today),
        'nav': adjacent_months(year, month),
    }


# ==================== SCREENS ====================

def build_dashboard(
    store,
    selected: date,
    blocked: Optional[BlockedDates] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    selected_job_id: Optional[str] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Calendar with job days highlighted, jobs on the selected day, optional detail modal."""
    blocked = blocked if blocked is not None else BlockedDates()
    today = today or date.today()
    year = year or selected.year
    month = month or selected.month

    view = {
        'error': None,
        'selected_date': selected.isoformat(),
        'selected_label': f"{selected.month}/{selected.day}/{selected.year}",
        'blocked_dates': blocked.as_list(),
    }

    try:
        jobs = _fetch(store)
    except JobStoreError:
        view['error'] = LOAD_ERROR_MESSAGE
        return view

    job_days = job_dates(jobs)
    selected_job = _find_job(jobs, selected_job_id)

    view.update({
        'job_dates': sorted(day.isoformat() for day in job_days),
        'jobs_for_selected_date': [job_list_item(job) for job in jobs_for_date(jobs, selected)],
        'calendar': _calendar(year, month, job_days, blocked, selected, today),
        'selected_job': format_job_details(selected_job) if selected_job else None,
    })
    return view


def build_management(
    store,
    show_completed: bool = False,
    selected_job_id: Optional[str] = None,
    show_invoice: bool = False,
    currency_symbol: str = '$',
) -> Dict[str, Any]:
    """Active or completed jobs, the value of completed work, detail and invoice modals."""
    view = {
        'error': None,
        'show_completed': show_completed,
        'toggle_label': 'Show Active Jobs' if show_completed else 'Show Completed Jobs',
    }

    try:
        jobs = [with_completed_default(job) for job in _fetch(store)]
    except JobStoreError:
        view['error'] = LOAD_ERROR_MESSAGE
        return view

    total = completed_jobs_value(jobs)
    filtered = [job for job in jobs if job['completed'] == show_completed]
    selected_job = _find_job(jobs, selected_job_id)
    details = format_job_details(selected_job) if selected_job else None

    view.update({
        'jobs': [job_list_item(job) for job in filtered],
        'empty_message': f"No {'completed' if show_completed else 'active'} jobs found.",
        'completed_jobs_value': total,
        'completed_jobs_value_display': format_currency(total, currency_symbol),
        'selected_job': details,
        'show_invoice': bool(show_invoice and details and details['completed']),
    })
    return view


def build_overview(
    store,
    now: Optional[datetime] = None,
    recent_limit: int = 5,
    upcoming_days: int = 7,
    selected_job_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Most recent jobs plus the jobs coming up in the next week."""
    now = now or datetime.now()
    today = now.date() if isinstance(now, datetime) else now
    view = {'error': None}

    try:
        recent = _fetch(store, limit=recent_limit)
        jobs = _fetch(store)
    except JobStoreError:
        view['error'] = LOAD_ERROR_MESSAGE
        return view

    upcoming = upcoming_jobs(jobs, now=now, days=upcoming_days)
    upcoming_days_set = {normalize_job_date(job.get('date')) for job in upcoming}
    selected_job = _find_job(jobs, selected_job_id)

    view.update({
        'recent_jobs': [job_list_item(job) for job in recent],
        'upcoming_jobs': [job_list_item(job) for job in upcoming],
        'upcoming_dates': sorted(day.isoformat() for day in upcoming_days_set),
        'calendar': _calendar(today.year, today.month, upcoming_days_set, BlockedDates(), None, today),
        'selected_job': format_job_details(selected_job) if selected_job else None,
    })
    return view


def job_stats(jobs: Iterable[Dict], currency_symbol: str = '$') -> Dict[str, Any]:
    """Counts and completed value for the stats endpoint."""
    jobs = list(jobs)
    completed = [job for job in jobs if is_completed(job)]
    total = completed_jobs_value(jobs)
    return {
        'total_jobs': len(jobs),
        'completed_jobs': len(completed),
        'active_jobs': len(jobs) - len(completed),
        'completed_jobs_value': round(total, 2),
        'completed_jobs_value_display': format_currency(total, currency_symbol),
    }
