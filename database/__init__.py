"""
Database package for Yardbook.
Provides SQLAlchemy models, connection management, and session handling.
"""

from database.connection import (
    Base,
    configure_database,
    get_engine,
    get_db_session,
    init_db,
    check_db_connection
)

from database.models import JobDocument

__all__ = [
    # Connection
    'Base',
    'configure_database',
    'get_engine',
    'get_db_session',
    'init_db',
    'check_db_connection',
    # Models
    'JobDocument'
]
