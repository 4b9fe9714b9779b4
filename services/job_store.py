"""
Job Store - passthrough access to the "jobs" document collection.

Two interchangeable backends share one interface:
- JobDatabaseStore: SQLAlchemy (PostgreSQL in production, SQLite for local runs)
- JobFileStore: a JSON file per collection, development fallback only

Every operation either succeeds or raises JobStoreError; callers decide how the
failure is shown to the user.
"""
import os
import json
import logging
import threading
import uuid
from datetime import date, datetime
from functools import wraps
from typing import Any, Dict, List, Optional

from services.job_dates import to_timestamp

logger = logging.getLogger(__name__)

# File lock for thread-safe operations
_file_locks = {}
_file_locks_guard = threading.Lock()


def get_file_lock(filepath: str) -> threading.Lock:
    """Get or create a lock for a specific file"""
    with _file_locks_guard:
        if filepath not in _file_locks:
            _file_locks[filepath] = threading.Lock()
        return _file_locks[filepath]


class JobStoreError(Exception):
    """Raised when the job collection cannot be read or written"""
    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


def encode_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Make a document body storable as JSON.
    Native dates and datetimes are written as timestamp mappings, the same
    shape they come back in when read.
    """
    encoded = {}
    for key, value in data.items():
        if key == 'id':
            continue
        if isinstance(value, (datetime, date)):
            encoded[key] = to_timestamp(value)
        else:
            encoded[key] = value
    return encoded


# ==================== JSON FILE BACKEND ====================

class JobFileStore:
    """
    Collection stored as a JSON object of {document_id: body} in
    <data_folder>/<collection>.json
    """

    storage_mode = 'json_fallback'

    def __init__(self, data_folder: str, collection: str = 'jobs'):
        self.data_folder = data_folder
        self.collection = collection
        self.filepath = os.path.join(data_folder, f"{collection}.json")

        os.makedirs(data_folder, exist_ok=True)

    def _load(self) -> Dict[str, Dict]:
        """Read the whole collection; a missing or empty file is an empty collection"""
        try:
            if not os.path.exists(self.filepath):
                return {}
            with open(self.filepath, 'r', encoding='utf-8') as f:
                content = f.read().strip()
            if not content:
                return {}
            documents = json.loads(content)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading {self.filepath}: {e}")
            raise JobStoreError(f"Could not read collection '{self.collection}'", e)

        if not isinstance(documents, dict):
            raise JobStoreError(f"Collection file {self.filepath} must hold a JSON object")

        malformed = [job_id for job_id, body in documents.items() if not isinstance(body, dict)]
        if malformed:
            logger.error(f"Documents in {self.filepath} are not JSON objects: {malformed}")
            raise JobStoreError(f"Collection '{self.collection}' has malformed documents: {malformed}")
        return documents

    def _save(self, documents: Dict[str, Dict]) -> None:
        """Atomic write: temp file first, then rename"""
        temp_path = f"{self.filepath}.tmp"
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(documents, f, indent=2, default=str)
            os.replace(temp_path, self.filepath)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving {self.filepath}: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise JobStoreError(f"Could not write collection '{self.collection}'", e)

    @staticmethod
    def _snapshot(job_id: str, body: Dict) -> Dict:
        document = {'id': job_id}
        document.update(body)
        document['id'] = job_id
        return document

    def fetch_jobs(self, limit: Optional[int] = None) -> List[Dict]:
        with get_file_lock(self.filepath):
            documents = self._load()

        jobs = [self._snapshot(job_id, documents[job_id]) for job_id in sorted(documents)]
        return jobs[:limit] if limit else jobs

    def get_job(self, job_id: str) -> Optional[Dict]:
        with get_file_lock(self.filepath):
            documents = self._load()

        body = documents.get(job_id)
        return self._snapshot(job_id, body) if body is not None else None

    def add_job(self, data: Dict, job_id: Optional[str] = None) -> Dict:
        job_id = job_id or data.get('id') or str(uuid.uuid4())
        body = encode_document(data)

        with get_file_lock(self.filepath):
            documents = self._load()
            documents[job_id] = body
            self._save(documents)

        return self._snapshot(job_id, body)

    def update_job(self, job_id: str, fields: Dict) -> Optional[Dict]:
        with get_file_lock(self.filepath):
            documents = self._load()
            if job_id not in documents:
                return None
            body = dict(documents[job_id])
            body.update(encode_document(fields))
            documents[job_id] = body
            self._save(documents)

        return self._snapshot(job_id, body)

    def ping(self) -> bool:
        """Readiness check: the collection file can be read"""
        with get_file_lock(self.filepath):
            self._load()
        return True


# ==================== DATABASE BACKEND ====================

def db_operation(func):
    """Decorator to own the database session and turn failures into JobStoreError."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        from database.connection import get_db_session
        from services.job_repository import JobRepository

        try:
            with get_db_session() as session:
                repo = JobRepository(session, self.collection)
                return func(self, repo, *args, **kwargs)
        except JobStoreError:
            raise
        except Exception as e:
            logger.error(f"Database operation error in {func.__name__}: {e}")
            raise JobStoreError(f"Database operation '{func.__name__}' failed", e)
    return wrapper


class JobDatabaseStore:
    """Database-backed collection with the same interface as JobFileStore."""

    storage_mode = 'database'

    def __init__(self, collection: str = 'jobs'):
        self.collection = collection

    @db_operation
    def fetch_jobs(self, repo, limit: Optional[int] = None) -> List[Dict]:
        return repo.list_jobs(limit=limit)

    @db_operation
    def get_job(self, repo, job_id: str) -> Optional[Dict]:
        return repo.get_job(job_id)

    @db_operation
    def add_job(self, repo, data: Dict, job_id: Optional[str] = None) -> Dict:
        return repo.create_job(encode_document(data), job_id=job_id or data.get('id'))

    @db_operation
    def update_job(self, repo, job_id: str, fields: Dict) -> Optional[Dict]:
        return repo.update_job(job_id, encode_document(fields))

    def ping(self) -> bool:
        from database.connection import check_db_connection

        try:
            return check_db_connection()
        except RuntimeError as e:
            raise JobStoreError("Database is not reachable", e)


# ==================== FACTORY ====================

def get_job_store(config: Dict[str, Any]):
    """
    Build the job store for the configured storage mode.

    Args:
        config: Flask app config (or any mapping with the same keys)

    Raises:
        StoragePolicyError: If production runs without DATABASE_URL
    """
    from config import validate_storage_config

    database_url = config.get('DATABASE_URL') or ''
    storage_mode = validate_storage_config(database_url, config.get('ENV_NAME'))
    collection = config.get('JOBS_COLLECTION', 'jobs')

    if storage_mode == 'database':
        from database.connection import configure_database, init_db

        configure_database(database_url)
        init_db()
        logger.info(f"✅ Using database for the '{collection}' collection")
        return JobDatabaseStore(collection)

    data_folder = config.get('DATA_FOLDER', 'data')
    logger.warning(f"⚠️  Using JSON file fallback for the '{collection}' collection (development mode only)")
    return JobFileStore(data_folder, collection)
