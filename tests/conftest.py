"""
Pytest configuration and shared fixtures
"""
import os
import sys
import pytest
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def app_config():
    """Fixture providing test configuration"""
    from config import TestingConfig
    return TestingConfig


@pytest.fixture
def test_env_vars():
    """Fixture providing test environment variables"""
    original_env = os.environ.copy()

    # Set test environment variables
    os.environ['FLASK_ENV'] = 'testing'
    os.environ['SECRET_KEY'] = 'test-secret-key-minimum-32-chars-long-for-security'
    os.environ.pop('DATABASE_URL', None)

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def today():
    """A fixed 'today' so calendar and upcoming-job tests are deterministic"""
    return date(2024, 5, 15)


@pytest.fixture
def sample_jobs(today):
    """Fixture providing sample jobs in every date shape the app accepts"""
    from database.seed import sample_jobs
    return sample_jobs(today)


@pytest.fixture
def data_folder(tmp_path):
    """Temporary data folder for the JSON fallback store"""
    folder = tmp_path / 'data'
    folder.mkdir()
    return folder


@pytest.fixture
def file_store(data_folder):
    """Empty JSON-file job store"""
    from services.job_store import JobFileStore
    return JobFileStore(str(data_folder), 'jobs')


@pytest.fixture
def seeded_store(file_store, sample_jobs):
    """JSON-file job store holding the sample jobs"""
    for job in sample_jobs:
        file_store.add_job(job)
    return file_store


@pytest.fixture
def db_store(tmp_path):
    """Database job store on a throwaway SQLite file"""
    from database.connection import configure_database, init_db
    from services.job_store import JobDatabaseStore

    configure_database(f"sqlite:///{tmp_path / 'jobs.db'}")
    init_db()

    yield JobDatabaseStore('jobs')

    configure_database(None)


@pytest.fixture
def app(tmp_path, test_env_vars):
    """Flask app in testing mode with temporary data and log folders"""
    from app_init import create_app

    flask_app = create_app('testing', overrides={
        'DATA_FOLDER': str(tmp_path / 'data'),
        'LOG_FOLDER': str(tmp_path / 'logs'),
        'SECRET_KEY': 'test-secret-key-minimum-32-chars-long-for-security',
    })
    return flask_app


@pytest.fixture
def client(app):
    """Test client for the Flask app"""
    return app.test_client()


@pytest.fixture
def store(app):
    """The app's job store"""
    return app.extensions['job_store']


@pytest.fixture
def seeded_app_store(store, sample_jobs):
    """The app's job store holding the sample jobs"""
    for job in sample_jobs:
        store.add_job(job)
    return store
