"""
Yardbook - Application Package

This package contains the modular web layer:
- api/: HTTP route handlers (Flask Blueprints)
- utils/: Shared utility functions

Business logic lives in services/, storage in database/. The app factory is
in app_init.py at the project root.

STORAGE POLICY:
- Production: DATABASE_URL is REQUIRED. JSON persistence for jobs is disabled.
- Development: Database preferred, JSON fallback allowed if no DATABASE_URL.
"""

import logging

logger = logging.getLogger(__name__)

# Import blueprints
from app.api.pages import pages_bp
from app.api.jobs import jobs_bp
from app.api.calendar import calendar_bp


def validate_storage_policy(database_url=None, env=None):
    """
    Validate storage configuration at startup.

    Raises:
        StoragePolicyError: If production mode without DATABASE_URL
    """
    from config import validate_storage_config, get_app_env

    env = get_app_env(env)
    storage_mode = validate_storage_config(database_url, env)

    logger.info(f"🔧 Environment: {env.upper()}")
    logger.info(f"💾 Storage mode: {storage_mode}")

    return storage_mode


def register_blueprints(app):
    """
    Register all API blueprints with the Flask app.

    Args:
        app: Flask application instance

    Raises:
        StoragePolicyError: If production mode without DATABASE_URL configured
    """
    # Fail fast in production without DB
    storage_mode = validate_storage_policy(
        app.config.get('DATABASE_URL') or '', app.config.get('ENV_NAME')
    )
    app.config['STORAGE_MODE'] = storage_mode

    app.register_blueprint(pages_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(calendar_bp)


__all__ = ['register_blueprints', 'validate_storage_policy', 'app', 'pages_bp', 'jobs_bp', 'calendar_bp']


# ==============================================================================
# WSGI APP EXPORT FOR GUNICORN
# ==============================================================================
# This allows gunicorn to run with: gunicorn app:app
# The Flask app is created in application.py; loaded lazily to avoid circular imports.
# ==============================================================================

_flask_app = None

def __getattr__(name):
    """Lazy load the Flask app to avoid circular imports."""
    global _flask_app
    if name == 'app':
        if _flask_app is None:
            from application import app as flask_app
            _flask_app = flask_app
        return _flask_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
