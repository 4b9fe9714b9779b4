"""
Security Utilities & Middleware
Secret key handling, CORS, response headers, JSON error handlers and request logging
"""
import os
import secrets
from typing import Dict, Any
from flask import Flask, request, jsonify, Response
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
import logging

logger = logging.getLogger(__name__)

# Probe endpoints are polled constantly; keep them out of the request log
QUIET_PATHS = ('/api/health', '/api/ping')

MIN_SECRET_KEY_LENGTH = 32
WEAK_SECRET_KEY_PARTS = ('dev', 'secret', 'password', '12345')

# status -> (error title, default message, use the abort() description when given)
ERROR_RESPONSES = {
    400: ('Bad Request', 'The request was missing or had invalid parameters', True),
    404: ('Not Found', 'The requested resource was not found', False),
    405: ('Method Not Allowed', 'The method is not allowed for the requested URL', False),
    409: ('Conflict', 'The request conflicts with the job state', True),
    413: ('Payload Too Large', 'The request is too large', False),
    503: ('Service Unavailable', 'The service is temporarily unavailable. Please try again later', False),
}

SECURITY_HEADERS = {
    'X-Frame-Options': 'SAMEORIGIN',
    'X-Content-Type-Options': 'nosniff',
    'X-XSS-Protection': '1; mode=block',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
    'Permissions-Policy': 'geolocation=(), microphone=(), camera=()',
    # Pages pull Tailwind from its CDN
    'Content-Security-Policy': (
        "default-src 'self' 'unsafe-inline'; "
        "script-src 'self' 'unsafe-inline' cdn.tailwindcss.com; "
        "style-src 'self' 'unsafe-inline' cdn.tailwindcss.com; "
        "img-src 'self' data:; "
        "connect-src 'self';"
    ),
}


class SecurityConfig:
    """Secret key checks for the session cookie that holds blocked dates"""

    @staticmethod
    def generate_secret_key() -> str:
        return secrets.token_hex(32)

    @staticmethod
    def validate_secret_key(secret_key: str) -> bool:
        """
        True when the key is long enough and not an obvious placeholder
        """
        if not secret_key:
            return False

        if len(secret_key) < MIN_SECRET_KEY_LENGTH:
            logger.warning(f"Secret key is too short (minimum {MIN_SECRET_KEY_LENGTH} characters)")
            return False

        if any(part in secret_key.lower() for part in WEAK_SECRET_KEY_PARTS):
            logger.warning("Secret key appears to be weak or default")
            return False

        return True

    @staticmethod
    def ensure_secret_key(config: Dict[str, Any]) -> str:
        """
        Return the configured key, or a freshly generated one when it is unusable

        Args:
            config: Application configuration dictionary
        """
        secret_key = config.get('SECRET_KEY')
        if secret_key and SecurityConfig.validate_secret_key(secret_key):
            return secret_key

        env = config.get('ENV_NAME') or os.environ.get('FLASK_ENV')
        if env == 'production':
            logger.error("No secure SECRET_KEY in production! Generating one...")
            logger.warning(
                "Each worker process generates its own key: with more than one worker, "
                "sessions signed by one are rejected by the others and blocked dates vanish "
                "between requests. Set SECRET_KEY."
            )

        secret_key = SecurityConfig.generate_secret_key()
        logger.warning(f"Generated new secret key (length: {len(secret_key)})")
        return secret_key


def setup_security_headers(app: Flask):
    """
    Add security headers to all responses

    Args:
        app: Flask application instance
    """
    @app.after_request
    def add_security_headers(response: Response) -> Response:
        response.headers.update(SECURITY_HEADERS)

        # HTTPS only in production
        if not app.debug:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    logger.info("Security headers configured")


def setup_cors(app: Flask, config: Dict[str, Any]):
    """
    Configure CORS for the JSON API

    Args:
        app: Flask application instance
        config: Application configuration dictionary
    """
    cors_origins = config.get('CORS_ORIGINS', ['*'])

    if not app.debug and '*' in cors_origins:
        logger.warning("⚠️  Using wildcard CORS in production! Set CORS_ORIGINS environment variable.")

    CORS(
        app,
        resources={r"/api/*": {"origins": cors_origins}},
        methods=config.get('CORS_METHODS', ['GET', 'POST', 'PATCH', 'OPTIONS']),
        allow_headers=config.get('CORS_ALLOW_HEADERS', ['Content-Type']),
        supports_credentials=True,
        max_age=3600
    )

    logger.info(f"CORS configured: origins={cors_origins}")


def sanitize_error_response(error: Exception, include_details: bool = False) -> Dict[str, Any]:
    """
    Generic 500 body; the exception text is only included in debug mode

    Args:
        error: Exception object
        include_details: Whether to include detailed error info (dev only)
    """
    error_response = {
        'success': False,
        'error': 'Internal Server Error',
        'message': 'An error occurred while processing your request'
    }

    if include_details:
        error_response['details'] = str(error)
        error_response['type'] = type(error).__name__

    return error_response


def error_body(status: int, error: Exception) -> Dict[str, Any]:
    """JSON body for one of the ERROR_RESPONSES statuses"""
    title, default_message, use_description = ERROR_RESPONSES[status]
    message = default_message
    if use_description and isinstance(error, HTTPException) and error.description:
        # werkzeug fills in its own text when abort() gets none
        if error.description != type(error).description:
            message = error.description
    return {'success': False, 'error': title, 'message': message}


def setup_error_handlers(app: Flask):
    """
    Register error handlers that answer with JSON and never expose stack traces

    Args:
        app: Flask application instance
    """
    include_details = app.debug

    def make_handler(status):
        def handle(error):
            return jsonify(error_body(status, error)), status
        return handle

    for status in ERROR_RESPONSES:
        app.register_error_handler(status, make_handler(status))

    @app.errorhandler(500)
    def internal_server_error(error):
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify(sanitize_error_response(error, include_details)), 500

    logger.info("Error handlers registered")


def setup_request_logging(app: Flask):
    """
    Log each request and its response status, skipping health probes

    Args:
        app: Flask application instance
    """
    @app.before_request
    def log_request():
        if request.path in QUIET_PATHS:
            return

        logger.info(
            f"Request: {request.method} {request.path} "
            f"from {request.remote_addr}"
        )

    @app.after_request
    def log_response(response: Response) -> Response:
        if request.path not in QUIET_PATHS:
            logger.info(
                f"Response: {request.method} {request.path} "
                f"status={response.status_code}"
            )
        return response

    logger.info("Request logging configured")


def validate_environment_variables(required_vars: list, app: Flask) -> bool:
    """
    Warn about missing environment variables

    Returns:
        True when every variable is present
    """
    missing_vars = [var for var in required_vars if not os.environ.get(var)]

    for var in missing_vars:
        logger.warning(f"Missing environment variable: {var}")

    if missing_vars and not app.debug:
        logger.error(f"Missing required environment variables in production: {missing_vars}")

    return not missing_vars


def setup_security(app: Flask, config: Dict[str, Any]):
    """
    Setup all security features for the application

    Args:
        app: Flask application instance
        config: Application configuration dictionary
    """
    logger.info("Configuring application security...")

    app.secret_key = SecurityConfig.ensure_secret_key(config)
    app.config['SECRET_KEY'] = app.secret_key

    setup_cors(app, config)
    setup_security_headers(app)
    setup_error_handlers(app)
    setup_request_logging(app)

    if not app.debug and not app.testing:
        validate_environment_variables(['SECRET_KEY', 'DATABASE_URL'], app)

    logger.info("✅ Security configuration complete")
