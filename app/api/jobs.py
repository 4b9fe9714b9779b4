"""
Jobs Routes Blueprint

JSON API over the jobs collection:
- /api/jobs: list (filter by completed flag or day, limit)
- /api/jobs/stats: counts and value of completed jobs
- /api/jobs/upcoming: jobs in the next N days
- /api/jobs/<job_id>: single job, formatted details
- /api/jobs/<job_id>/complete, /completed: completion write-back
- /api/jobs/<job_id>/maps: redirect to Google Maps
- /api/jobs/<job_id>/invoice.pdf: invoice download
"""

import io
import logging
from datetime import datetime
from flask import Blueprint, request, jsonify, send_file, redirect, current_app, abort

from services.job_actions import JobNotFoundError, mark_job_completed, set_job_completed
from services.job_dates import jobs_for_date, upcoming_jobs
from services.job_store import JobStoreError
from services.job_views import (
    LOAD_ERROR_MESSAGE,
    format_job_details,
    is_completed,
    job_stats,
    with_completed_default,
)
from validators import (
    ValidationError,
    format_validation_error,
    parse_bool,
    parse_iso_date,
    parse_positive_int,
    validate_completion_request,
    validate_document_id,
)

logger = logging.getLogger(__name__)

# Create blueprint
jobs_bp = Blueprint('jobs_bp', __name__)

MAX_LIST_LIMIT = 500
MAX_UPCOMING_DAYS = 366


def get_store():
    """Job store created by the app factory"""
    return current_app.extensions['job_store']


def load_error_response():
    return jsonify({'success': False, 'error': LOAD_ERROR_MESSAGE}), 500


def checked_job_id(job_id):
    is_valid, error = validate_document_id(job_id)
    if not is_valid:
        abort(400, description=error)
    return job_id


def fetch_job_or_404(job_id):
    job = get_store().get_job(checked_job_id(job_id))
    if job is None:
        abort(404)
    return with_completed_default(job)


@jobs_bp.errorhandler(ValidationError)
def handle_validation_error(error):
    return jsonify(format_validation_error(error.field, error.message)), 400


# ============================================================================
# COLLECTION
# ============================================================================

@jobs_bp.route('/api/jobs', methods=['GET'])
def list_jobs():
    """List jobs, optionally only active/completed ones or those on one day."""
    completed = parse_bool(request.args.get('completed'), field='completed')
    day = request.args.get('date')
    day = parse_iso_date(day) if day else None
    limit = parse_positive_int(request.args.get('limit'), 'limit', MAX_LIST_LIMIT)

    try:
        jobs = get_store().fetch_jobs(limit=limit)
    except JobStoreError as e:
        logger.error(f"Error fetching jobs: {e}")
        return load_error_response()

    jobs = [with_completed_default(job) for job in jobs]
    if completed is not None:
        jobs = [job for job in jobs if job['completed'] == completed]
    if day is not None:
        jobs = jobs_for_date(jobs, day)

    return jsonify({'success': True, 'jobs': jobs, 'count': len(jobs)})


@jobs_bp.route('/api/jobs/stats', methods=['GET'])
def get_job_stats():
    """Job counts and the total value of completed jobs."""
    try:
        jobs = get_store().fetch_jobs()
    except JobStoreError as e:
        logger.error(f"Error fetching jobs: {e}")
        return load_error_response()

    stats = job_stats(jobs, current_app.config.get('INVOICE_CURRENCY_SYMBOL', '$'))
    return jsonify({'success': True, 'stats': stats})


@jobs_bp.route('/api/jobs/upcoming', methods=['GET'])
def get_upcoming_jobs():
    """Jobs from today through the next N days (default from config)."""
    days = parse_positive_int(request.args.get('days'), 'days', MAX_UPCOMING_DAYS)
    days = days or current_app.config.get('UPCOMING_JOBS_DAYS', 7)

    try:
        jobs = get_store().fetch_jobs()
    except JobStoreError as e:
        logger.error(f"Error fetching jobs: {e}")
        return load_error_response()

    upcoming = [with_completed_default(job) for job in upcoming_jobs(jobs, now=datetime.now(), days=days)]
    return jsonify({'success': True, 'days': days, 'jobs': upcoming, 'count': len(upcoming)})


# ============================================================================
# SINGLE JOB
# ============================================================================

@jobs_bp.route('/api/jobs/<job_id>', methods=['GET'])
def get_job(job_id):
    """Get a single job document."""
    try:
        job = fetch_job_or_404(job_id)
    except JobStoreError as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        return load_error_response()

    return jsonify({'success': True, 'job': job})


@jobs_bp.route('/api/jobs/<job_id>/details', methods=['GET'])
def get_job_details(job_id):
    """Display rows for the job details modal."""
    try:
        job = fetch_job_or_404(job_id)
    except JobStoreError as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        return load_error_response()

    return jsonify({'success': True, 'details': format_job_details(job)})


@jobs_bp.route('/api/jobs/<job_id>/complete', methods=['POST'])
def complete_job(job_id):
    """Mark a job as completed, optionally rewriting its date as YYYY-MM-DD."""
    checked_job_id(job_id)
    data = request.get_json(silent=True) or {}

    is_valid, error = validate_completion_request(data)
    if not is_valid:
        return jsonify(format_validation_error('body', error)), 400

    try:
        job = mark_job_completed(get_store(), job_id, reformat_date=data.get('reformat_date', False))
    except JobNotFoundError:
        abort(404)
    except JobStoreError:
        return jsonify({'success': False, 'error': 'Failed to update job'}), 500

    return jsonify({'success': True, 'job': with_completed_default(job)})


@jobs_bp.route('/api/jobs/<job_id>/completed', methods=['PATCH'])
def update_job_completed(job_id):
    """Set the completed flag to an explicit value."""
    checked_job_id(job_id)
    data = request.get_json(silent=True)

    is_valid, error = validate_completion_request(data)
    if not is_valid:
        return jsonify(format_validation_error('body', error)), 400
    if 'completed' not in data:
        return jsonify(format_validation_error('completed', 'completed is required')), 400

    try:
        job = set_job_completed(get_store(), job_id, data['completed'])
    except JobNotFoundError:
        abort(404)
    except JobStoreError:
        return jsonify({'success': False, 'error': 'Failed to update job'}), 500

    return jsonify({'success': True, 'job': with_completed_default(job)})


@jobs_bp.route('/api/jobs/<job_id>/maps', methods=['GET'])
def open_job_in_maps(job_id):
    """Redirect to a Google Maps search for the job address."""
    from app.utils.helpers import google_maps_url

    try:
        job = fetch_job_or_404(job_id)
    except JobStoreError as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        return load_error_response()

    url = google_maps_url(job.get('address'), current_app.config.get('MAPS_SEARCH_URL'))
    if not url:
        abort(400, description='Job has no address')
    return redirect(url)


@jobs_bp.route('/api/jobs/<job_id>/invoice.pdf', methods=['GET'])
def download_invoice(job_id):
    """Invoice PDF for a completed job."""
    from services.invoice_pdf import build_invoice_pdf, invoice_filename

    try:
        job = fetch_job_or_404(job_id)
    except JobStoreError as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        return load_error_response()

    if not is_completed(job):
        abort(409, description='Invoices are only available for completed jobs')

    pdf_bytes = build_invoice_pdf(job, current_app.config.get('INVOICE_CURRENCY_SYMBOL', '$'))
    return send_file(
        io.BytesIO(pdf_bytes),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=invoice_filename(job),
    )
