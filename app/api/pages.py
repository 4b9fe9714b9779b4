"""
Page Routes Blueprint

Server-rendered screens:
- /dashboard: calendar, jobs on the selected day, job details, blocked days
- /management: active/completed jobs, value of completed work, invoices
- /overview: recent jobs and the coming week
"""

import logging
from datetime import date, datetime
from flask import Blueprint, render_template, redirect, url_for, request, session, flash, current_app

from services.calendar_service import BlockedDates
from services.job_actions import JobNotFoundError, mark_job_completed
from services.job_dates import to_date_string
from services.job_store import JobStoreError
from services.job_views import build_dashboard, build_management, build_overview
from validators import ValidationError, parse_iso_date, validate_document_id, validate_month

logger = logging.getLogger(__name__)

# Create blueprint
pages_bp = Blueprint('pages', __name__)


def get_store():
    return current_app.extensions['job_store']


def selected_date_arg():
    """?date=YYYY-MM-DD, falling back to today when missing or malformed."""
    value = request.args.get('date')
    if not value:
        return date.today()
    try:
        return parse_iso_date(value)
    except ValidationError as e:
        logger.warning(f"Ignoring bad date parameter {value!r}: {e.message}")
        return date.today()


def month_args(selected):
    try:
        year = int(request.args.get('year', selected.year))
        month = int(request.args.get('month', selected.month))
    except (TypeError, ValueError):
        return selected.year, selected.month
    if not validate_month(year, month)[0]:
        return selected.year, selected.month
    return year, month


def job_id_arg():
    job_id = request.args.get('job')
    if job_id and validate_document_id(job_id)[0]:
        return job_id
    return None


# ============================================================================
# MAIN PAGE ROUTES
# ============================================================================

@pages_bp.route('/')
def index():
    """The dashboard is the landing page"""
    return redirect(url_for('pages.dashboard_page'))


@pages_bp.route('/dashboard')
def dashboard_page():
    """Render the calendar dashboard"""
    selected = selected_date_arg()
    year, month = month_args(selected)

    view = build_dashboard(
        get_store(),
        selected,
        BlockedDates.from_session(session),
        year=year,
        month=month,
        selected_job_id=job_id_arg(),
    )
    return render_template('dashboard.html', view=view)


@pages_bp.route('/management')
def management_page():
    """Render the job management list"""
    show_completed = request.args.get('show') == 'completed'

    view = build_management(
        get_store(),
        show_completed=show_completed,
        selected_job_id=job_id_arg(),
        show_invoice=request.args.get('invoice') == '1',
        currency_symbol=current_app.config.get('INVOICE_CURRENCY_SYMBOL', '$'),
    )
    return render_template('management.html', view=view)


@pages_bp.route('/overview')
def overview_page():
    """Render recent and upcoming jobs"""
    view = build_overview(
        get_store(),
        now=datetime.now(),
        recent_limit=current_app.config.get('RECENT_JOBS_LIMIT', 5),
        upcoming_days=current_app.config.get('UPCOMING_JOBS_DAYS', 7),
        selected_job_id=job_id_arg(),
    )
    return render_template('overview.html', view=view)


# ============================================================================
# FORM ACTIONS
# ============================================================================

def complete_from_form(job_id, reformat_date):
    """Shared body of the completion form posts; returns True on success."""
    if not validate_document_id(job_id)[0]:
        flash('Unknown job.', 'error')
        return False
    try:
        mark_job_completed(get_store(), job_id, reformat_date=reformat_date)
    except JobNotFoundError:
        flash('Job not found.', 'error')
        return False
    except JobStoreError:
        flash('Could not update the job. Please try again.', 'error')
        return False
    flash('Job marked as completed.', 'success')
    return True


@pages_bp.route('/dashboard/jobs/<job_id>/complete', methods=['POST'])
def dashboard_complete_job(job_id):
    """Mark completed from the dashboard modal; the modal stays open"""
    complete_from_form(job_id, reformat_date=True)
    return redirect(url_for(
        'pages.dashboard_page',
        date=request.form.get('date') or None,
        job=job_id,
    ))


@pages_bp.route('/management/jobs/<job_id>/complete', methods=['POST'])
def management_complete_job(job_id):
    """Mark done from the management modal; the modal closes"""
    complete_from_form(job_id, reformat_date=False)
    return redirect(url_for('pages.management_page'))


@pages_bp.route('/dashboard/blocked/<day>', methods=['POST'])
def dashboard_toggle_blocked(day):
    """Block or unblock a day from the dashboard"""
    try:
        blocked_day = parse_iso_date(day)
    except ValidationError as e:
        flash(e.message, 'error')
        return redirect(url_for('pages.dashboard_page'))

    blocked = BlockedDates.from_session(session)
    is_blocked = blocked.toggle(blocked_day)
    blocked.to_session(session)

    flash(f"{to_date_string(blocked_day)} {'blocked' if is_blocked else 'unblocked'}.", 'success')
    return redirect(url_for('pages.dashboard_page', date=blocked_day.isoformat()))
