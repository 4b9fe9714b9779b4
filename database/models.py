"""
SQLAlchemy models for Yardbook.
Jobs are schemaless documents: every row holds one document body of a named collection.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
from database.connection import Base


def generate_uuid():
    """Generate a new UUID."""
    return str(uuid.uuid4())


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in development and tests)
DocumentBody = JSON().with_variant(JSONB(), 'postgresql')


# =============================================================================
# DOCUMENT COLLECTIONS
# =============================================================================

class JobDocument(Base):
    """
    A document in a collection ("jobs").
    The body is stored as-is so heterogeneous fields (date as string,
    timestamp mapping or date) survive untouched.
    """
    __tablename__ = 'documents'

    id = Column(String(128), primary_key=True, default=generate_uuid)
    collection = Column(String(100), nullable=False, default='jobs')
    data = Column(DocumentBody, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index('ix_documents_collection', 'collection'),
        Index('ix_documents_collection_created', 'collection', 'created_at'),
    )

    def to_dict(self):
        """Flatten to a snapshot: the id first, then the document fields."""
        document = {'id': self.id}
        document.update(self.data or {})
        document['id'] = self.id
        return document
