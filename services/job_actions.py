"""
Job write-backs. The only field the screens change is `completed`; the
dashboard also rewrites a readable `date` to YYYY-MM-DD on the same write.
"""

import logging
from typing import Dict

from services.job_dates import to_iso_date
from services.job_store import JobStoreError

logger = logging.getLogger(__name__)


class JobNotFoundError(Exception):
    """Raised when a write targets a job id that is not in the collection"""
    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")


def set_job_completed(store, job_id: str, completed: bool, reformat_date: bool = False) -> Dict:
    """
    Write the completed flag for one job.

    Args:
        store: Job store
        job_id: Document id
        completed: New flag value
        reformat_date: Also store the job's date as YYYY-MM-DD when it can be read

    Returns:
        The updated job

    Raises:
        JobNotFoundError: If the id does not exist
        JobStoreError: If the store cannot be read or written
    """
    fields = {'completed': bool(completed)}

    try:
        if reformat_date:
            job = store.get_job(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            iso_date = to_iso_date(job.get('date'))
            if iso_date:
                fields['date'] = iso_date
            elif job.get('date') is not None:
                logger.warning(f"Leaving unreadable date {job.get('date')!r} on job {job_id}")

        updated = store.update_job(job_id, fields)
    except JobStoreError as e:
        logger.error(f"Error updating job {job_id}: {e}")
        raise

    if updated is None:
        raise JobNotFoundError(job_id)

    logger.info(f"Job updated successfully: {job_id} {fields}")
    return updated


def mark_job_completed(store, job_id: str, reformat_date: bool = False) -> Dict:
    """Mark a job as done. See set_job_completed."""
    return set_job_completed(store, job_id, True, reformat_date=reformat_date)
