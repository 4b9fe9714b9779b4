"""
API Blueprints Package

All HTTP route handlers for the application, organized by screen.
Each module defines a Flask Blueprint registered in app/__init__.py.

BLUEPRINT REFERENCE:
====================
- pages.py    : Server-rendered screens (/dashboard, /management, /overview) and their form posts
- jobs.py     : Jobs JSON API (/api/jobs/*), maps redirect, invoice PDF
- calendar.py : Calendar JSON API (/api/calendar/*), blocked dates

Health and readiness probes live in health_checks.py at the project root.
"""

# All blueprints are imported and registered in app/__init__.py
# This file serves as documentation only

__all__ = []
