"""
Job Document Repository - Database operations for a document collection.
"""

import copy
import logging
from typing import List, Dict, Optional
from datetime import datetime
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class JobRepository:
    """Repository for job document database operations."""

    def __init__(self, session: Session, collection: str = 'jobs'):
        self.session = session
        self.collection = collection

    def _query(self):
        from database.models import JobDocument

        return self.session.query(JobDocument).filter(
            JobDocument.collection == self.collection
        )

    def list_jobs(self, limit: Optional[int] = None) -> List[Dict]:
        """List job documents ordered by document id."""
        from database.models import JobDocument

        query = self._query().order_by(JobDocument.id.asc())
        if limit:
            query = query.limit(limit)

        return [document.to_dict() for document in query.all()]

    def get_job(self, job_id: str) -> Optional[Dict]:
        """Get a single job by ID."""
        from database.models import JobDocument

        document = self._query().filter(JobDocument.id == job_id).first()
        return document.to_dict() if document else None

    def create_job(self, data: Dict, job_id: Optional[str] = None) -> Dict:
        """Create a new job document."""
        from database.models import JobDocument, generate_uuid

        body = {key: value for key, value in data.items() if key != 'id'}
        document = JobDocument(
            id=job_id or data.get('id') or generate_uuid(),
            collection=self.collection,
            data=body,
        )

        self.session.add(document)
        self.session.flush()
        return document.to_dict()

    def update_job(self, job_id: str, fields: Dict) -> Optional[Dict]:
        """Merge fields into a job document; last write wins."""
        from database.models import JobDocument

        document = self._query().filter(JobDocument.id == job_id).first()
        if not document:
            return None

        # Reassign a fresh dict so the JSON column is flagged dirty
        body = copy.deepcopy(document.data or {})
        body.update({key: value for key, value in fields.items() if key != 'id'})
        document.data = body
        document.updated_at = datetime.utcnow()

        self.session.flush()
        return document.to_dict()
