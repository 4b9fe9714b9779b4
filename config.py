"""
Centralized Configuration for Yardbook
Manages environment-specific settings, storage policy, and view defaults.
"""
import os
from datetime import timedelta


class StoragePolicyError(RuntimeError):
    """Raised when the configured storage backend is not allowed in this environment"""


class Config:
    """Base configuration with defaults"""

    # Environment name; the storage policy reads this rather than FLASK_ENV
    ENV_NAME = None

    # Flask Settings
    # Unset means security.py generates one per process and logs it
    SECRET_KEY = os.environ.get('SECRET_KEY')
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB, requests are small JSON bodies

    # CORS Settings
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
    CORS_METHODS = ['GET', 'POST', 'PATCH', 'OPTIONS']
    CORS_ALLOW_HEADERS = ['Content-Type', 'Authorization', 'X-Requested-With']

    # Database Settings
    DATABASE_URL = os.environ.get('DATABASE_URL')

    # Document store
    JOBS_COLLECTION = 'jobs'
    DATA_FOLDER = os.environ.get('DATA_FOLDER', 'data')
    SEED_SAMPLE_JOBS = os.environ.get('SEED_SAMPLE_JOBS', 'false').lower() == 'true'

    # Screens
    RECENT_JOBS_LIMIT = 5
    UPCOMING_JOBS_DAYS = 7
    MAPS_SEARCH_URL = 'https://www.google.com/maps/search/?api=1&query='
    INVOICE_CURRENCY_SYMBOL = '$'

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    LOG_FILE = os.environ.get('LOG_FILE', 'app.log')
    LOG_FOLDER = os.environ.get('LOG_FOLDER', 'logs')

    # Session Configuration (blocked dates live in the session cookie)
    SESSION_PERMANENT = False
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)


class DevelopmentConfig(Config):
    """Development-specific configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    TESTING = False
    LOG_LEVEL = 'DEBUG'
    # Allow all CORS in development
    CORS_ORIGINS = ['*']


class ProductionConfig(Config):
    """Production-specific configuration"""
    ENV_NAME = 'production'
    DEBUG = False
    TESTING = False
    # Strict CORS in production
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'https://yardbook.onrender.com').split(',')
    # Force HTTPS
    PREFERRED_URL_SCHEME = 'https'
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class TestingConfig(Config):
    """Testing-specific configuration"""
    ENV_NAME = 'testing'
    DEBUG = True
    TESTING = True
    DATABASE_URL = None  # Use JSON files for tests
    SEED_SAMPLE_JOBS = False


# Configuration selector
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def get_config(name=None):
    """Get configuration based on FLASK_ENV environment variable"""
    env = name or os.environ.get('FLASK_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)


# ==============================================================================
# STORAGE POLICY
# ==============================================================================

def get_app_env(env=None):
    """Return the environment name (development, production, testing); FLASK_ENV when not given"""
    return (env or os.environ.get('FLASK_ENV', 'development')).lower()


def is_production(env=None):
    return get_app_env(env) == 'production'


def has_database(database_url=None):
    """True when a database URL is configured, either explicitly or via DATABASE_URL"""
    if database_url is None:
        database_url = os.environ.get('DATABASE_URL')
    return bool(database_url)


def allow_json_persistence(database_url=None, env=None):
    """JSON file storage is only allowed outside production when no database is configured"""
    return not is_production(env) and not has_database(database_url)


def get_storage_mode(database_url=None, env=None):
    """
    Work out which job store backend to use

    Args:
        database_url: Configured URL; None reads DATABASE_URL
        env: Environment name from the app config; None reads FLASK_ENV

    Returns:
        'database' or 'json_fallback'
    """
    if has_database(database_url):
        return 'database'
    if allow_json_persistence(database_url, env):
        return 'json_fallback'
    return 'unconfigured'


def validate_storage_config(database_url=None, env=None):
    """
    Fail fast when production has no database configured

    Raises:
        StoragePolicyError: If production mode without DATABASE_URL
    """
    if is_production(env) and not has_database(database_url):
        raise StoragePolicyError(
            "DATABASE_URL must be configured in production. "
            "JSON file storage is only available in development."
        )
    return get_storage_mode(database_url, env)
