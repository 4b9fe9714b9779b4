"""
Application Initialization Module
Properly initializes Flask app with all infrastructure components
"""
import os
from flask import Flask
from config import get_config
from logging_config import setup_logging
from security import setup_security
from health_checks import register_health_checks
from services.job_store import get_job_store
import logging

logger = logging.getLogger(__name__)


def create_app(config_name=None, overrides=None):
    """
    Application factory that creates and configures Flask app with all infrastructure

    Args:
        config_name: 'development', 'production' or 'testing' (defaults to FLASK_ENV)
        overrides: Optional mapping applied on top of the config class

    Returns:
        Configured Flask application instance
    """
    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    setup_logging(app)

    logger.info("=" * 60)
    logger.info("🌿 Initializing Yardbook Job Tracker")
    logger.info("=" * 60)
    logger.info(f"Environment: {app.config.get('ENV_NAME')}")
    logger.info(f"Debug mode: {app.debug}")

    # Setup security (CORS, headers, error handlers)
    setup_security(app, app.config)

    # Create required directories
    create_required_directories(app)

    # Job store (database or JSON fallback)
    initialize_job_store(app)

    # Register health check endpoints
    register_health_checks(app)

    # Page and API blueprints
    from app import register_blueprints
    register_blueprints(app)

    logger.info("✅ Application initialization complete")
    logger.info("=" * 60)

    return app


def create_required_directories(app):
    """
    Create all required application directories

    Args:
        app: Flask application instance
    """
    directories = [
        app.config['DATA_FOLDER'],
        app.config['LOG_FOLDER'],
    ]

    for directory in directories:
        try:
            os.makedirs(directory, exist_ok=True)
            logger.debug(f"Directory ensured: {directory}")
        except OSError as e:
            logger.error(f"Failed to create directory {directory}: {e}")

    logger.info(f"✅ Created {len(directories)} required directories")


def initialize_job_store(app):
    """
    Create the job store and optionally seed sample jobs

    Args:
        app: Flask application instance

    Returns:
        The job store

    Raises:
        StoragePolicyError: If production runs without DATABASE_URL
    """
    store = get_job_store(app.config)
    app.extensions['job_store'] = store

    if app.config.get('SEED_SAMPLE_JOBS'):
        from database.seed import seed_sample_jobs
        seed_sample_jobs(store)

    return store

