"""
Calendar Routes Blueprint

Handles the job calendar:
- /api/calendar: month grid with job days, blocked days and the selected day's jobs
- /api/calendar/blocked: blocked days for this session
- /api/calendar/blocked/<day>: toggle a blocked day
"""

import logging
from datetime import date
from flask import Blueprint, request, jsonify, session

from services.calendar_service import BlockedDates
from services.job_views import build_dashboard
from validators import ValidationError, format_validation_error, parse_iso_date, validate_month

logger = logging.getLogger(__name__)

# Create blueprint
calendar_bp = Blueprint('calendar_bp', __name__)


@calendar_bp.errorhandler(ValidationError)
def handle_validation_error(error):
    return jsonify(format_validation_error(error.field, error.message)), 400


def parse_month_args(selected):
    """Year/month from the query string, defaulting to the selected day's month."""
    try:
        year = int(request.args.get('year', selected.year))
        month = int(request.args.get('month', selected.month))
    except (TypeError, ValueError):
        raise ValidationError("year and month must be integers", 'month')

    is_valid, error = validate_month(year, month)
    if not is_valid:
        raise ValidationError(error, 'month')
    return year, month


@calendar_bp.route('/api/calendar', methods=['GET'])
def get_calendar():
    """Month grid plus the jobs on the selected day."""
    from app.api.jobs import get_store

    selected_arg = request.args.get('selected')
    selected = parse_iso_date(selected_arg, 'selected') if selected_arg else date.today()
    year, month = parse_month_args(selected)

    view = build_dashboard(
        get_store(),
        selected,
        BlockedDates.from_session(session),
        year=year,
        month=month,
    )
    if view['error']:
        return jsonify({'success': False, 'error': view['error']}), 500

    return jsonify({
        'success': True,
        'selected_date': view['selected_date'],
        'calendar': view['calendar'],
        'job_dates': view['job_dates'],
        'blocked_dates': view['blocked_dates'],
        'jobs': view['jobs_for_selected_date'],
    })


@calendar_bp.route('/api/calendar/blocked', methods=['GET'])
def get_blocked_dates():
    """Blocked days for this session."""
    return jsonify({
        'success': True,
        'blocked_dates': BlockedDates.from_session(session).as_list()
    })


@calendar_bp.route('/api/calendar/blocked/<day>', methods=['POST'])
def toggle_blocked_date(day):
    """Block the day, or unblock it if it is already blocked."""
    blocked_day = parse_iso_date(day)

    blocked = BlockedDates.from_session(session)
    is_blocked = blocked.toggle(blocked_day)
    blocked.to_session(session)

    return jsonify({
        'success': True,
        'date': blocked_day.isoformat(),
        'blocked': is_blocked,
        'blocked_dates': blocked.as_list()
    })
