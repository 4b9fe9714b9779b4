"""
Health Check & Monitoring Endpoints
Provides endpoints for deployment health checks and monitoring
"""
import os
import sys
import time
import psutil
from datetime import datetime
from typing import Dict, Any
from flask import Blueprint, jsonify, current_app
import logging

logger = logging.getLogger(__name__)

# Create Blueprint for health check routes
health_bp = Blueprint('health', __name__)

# Track application start time
START_TIME = time.time()

SERVICE_NAME = 'yardbook'
SERVICE_VERSION = '1.0.0'


def get_system_metrics() -> Dict[str, Any]:
    """
    Get basic process metrics

    Returns:
        Dictionary of system metrics (empty if psutil cannot read them)
    """
    try:
        process = psutil.Process()

        return {
            'cpu_percent': process.cpu_percent(interval=0.1),
            'memory_mb': process.memory_info().rss / 1024 / 1024,
            'memory_percent': process.memory_percent(),
            'threads': process.num_threads(),
        }
    except Exception as e:
        logger.warning(f"Failed to get system metrics: {e}")
        return {}


def get_uptime() -> Dict[str, Any]:
    """
    Get application uptime

    Returns:
        Dictionary with uptime information
    """
    uptime_seconds = time.time() - START_TIME

    return {
        'uptime_seconds': round(uptime_seconds, 2),
        'uptime_minutes': round(uptime_seconds / 60, 2),
        'uptime_hours': round(uptime_seconds / 3600, 2),
        'started_at': datetime.fromtimestamp(START_TIME).isoformat()
    }


def check_job_store(app) -> Dict[str, Any]:
    """
    Check that the jobs collection can be reached

    Args:
        app: Flask application instance

    Returns:
        Dictionary with the storage mode and reachability
    """
    store = app.extensions.get('job_store')
    status = {
        'storage_mode': app.config.get('STORAGE_MODE'),
        'reachable': False,
    }

    if store is None:
        status['error'] = 'Job store not initialized'
        return status

    try:
        status['reachable'] = bool(store.ping())
    except Exception as e:
        logger.error(f"Job store check failed: {e}")
        status['error'] = str(e)

    return status


def check_filesystem(app) -> Dict[str, Dict[str, bool]]:
    """
    Check if required directories exist and are writable

    Returns:
        Dictionary of filesystem checks
    """
    required_dirs = [app.config.get('LOG_FOLDER', 'logs')]
    if app.config.get('STORAGE_MODE') == 'json_fallback':
        required_dirs.append(app.config.get('DATA_FOLDER', 'data'))

    filesystem_status = {}

    for dir_path in required_dirs:
        exists = os.path.isdir(dir_path)
        writable = os.access(dir_path, os.W_OK) if exists else False

        filesystem_status[dir_path] = {
            'exists': exists,
            'writable': writable,
            'healthy': exists and writable
        }

    return filesystem_status


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Basic health check endpoint
    Returns 200 if application is running
    """
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.utcnow().isoformat(),
        'service': SERVICE_NAME
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """
    Readiness probe endpoint
    Returns 200 if the job store is reachable and directories are writable
    """
    try:
        job_store = check_job_store(current_app)
        filesystem = check_filesystem(current_app)
        filesystem_healthy = all(
            status['healthy'] for status in filesystem.values()
        )

        is_ready = job_store['reachable'] and filesystem_healthy

        response = {
            'status': 'ready' if is_ready else 'not_ready',
            'timestamp': datetime.utcnow().isoformat(),
            'checks': {
                'job_store': job_store,
                'filesystem': filesystem,
                'filesystem_healthy': filesystem_healthy
            }
        }

        return jsonify(response), 200 if is_ready else 503

    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return jsonify({
            'status': 'error',
            'error': str(e),
            'timestamp': datetime.utcnow().isoformat()
        }), 503


@health_bp.route('/metrics', methods=['GET'])
def metrics():
    """
    Basic metrics endpoint
    Returns process metrics and application information
    """
    try:
        response = {
            'timestamp': datetime.utcnow().isoformat(),
            'service': SERVICE_NAME,
            'version': SERVICE_VERSION,
            'environment': current_app.config.get('ENV_NAME'),
            'storage_mode': current_app.config.get('STORAGE_MODE'),
            'uptime': get_uptime(),
            'system': get_system_metrics(),
            'python_version': sys.version.split()[0]
        }

        return jsonify(response), 200

    except Exception as e:
        logger.error(f"Metrics collection failed: {e}")
        return jsonify({
            'status': 'error',
            'error': str(e),
            'timestamp': datetime.utcnow().isoformat()
        }), 500


@health_bp.route('/ping', methods=['GET'])
def ping():
    """
    Simple ping endpoint
    Returns immediate response for basic connectivity tests
    """
    return 'pong', 200


def register_health_checks(app):
    """
    Register health check blueprint with Flask app

    Args:
        app: Flask application instance
    """
    app.register_blueprint(health_bp, url_prefix='/api')
    logger.info("Health check endpoints registered")
    logger.info("Available endpoints: /api/health, /api/ready, /api/metrics, /api/ping")
