"""
WSGI Entry Point for Gunicorn

Production start command:
  gunicorn wsgi:app

app:app (via app/__init__.py) and application:app point at the same
Flask application, which is built by create_app() in application.py.
"""

from application import app
