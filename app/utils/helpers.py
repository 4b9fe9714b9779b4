"""
Helper utility functions shared by the views and the API.
"""

from urllib.parse import quote

GOOGLE_MAPS_SEARCH_URL = 'https://www.google.com/maps/search/?api=1&query='

# Characters encodeURIComponent leaves alone besides letters, digits and "-_."
URI_COMPONENT_SAFE = "!~*'()"


def encode_uri_component(value):
    """
    Percent-encode a string the way browsers' encodeURIComponent does.

    Args:
        value: Text to encode

    Returns:
        Encoded string (UTF-8 percent escapes, spaces as %20)
    """
    return quote(str(value), safe=URI_COMPONENT_SAFE)


def google_maps_url(address, base_url=GOOGLE_MAPS_SEARCH_URL):
    """
    Build a Google Maps search link for an address.

    Returns:
        The URL, or None when there is no address
    """
    if address is None or not str(address).strip():
        return None
    return f"{base_url or GOOGLE_MAPS_SEARCH_URL}{encode_uri_component(address)}"
