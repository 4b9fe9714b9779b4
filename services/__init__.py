"""
Services package for Yardbook.
Job storage, date handling, calendar state, screen view-models and invoices.
"""

from services.job_store import JobStoreError, JobFileStore, JobDatabaseStore, get_job_store
from services.job_repository import JobRepository
from services.job_actions import JobNotFoundError, mark_job_completed, set_job_completed

__all__ = [
    'JobStoreError',
    'JobFileStore',
    'JobDatabaseStore',
    'get_job_store',
    'JobRepository',
    'JobNotFoundError',
    'mark_job_completed',
    'set_job_completed',
]
