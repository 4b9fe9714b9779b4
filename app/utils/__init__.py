"""
Utilities Package

Shared helper functions used across the application.
"""

from app.utils.helpers import (
    encode_uri_component,
    google_maps_url,
    GOOGLE_MAPS_SEARCH_URL,
)

__all__ = [
    'encode_uri_component',
    'google_maps_url',
    'GOOGLE_MAPS_SEARCH_URL',
]
