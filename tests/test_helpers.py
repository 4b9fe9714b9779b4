"""
Tests for shared helper utilities
"""
import pytest
from app.utils.helpers import GOOGLE_MAPS_SEARCH_URL, encode_uri_component, google_maps_url


@pytest.mark.unit
class TestEncodeUriComponent:
    """Tests for encodeURIComponent-style escaping"""

    def test_spaces_and_commas(self):
        """Test that spaces and commas are percent-encoded"""
        assert encode_uri_component('12 Elm Street, Springfield') == '12%20Elm%20Street%2C%20Springfield'

    def test_reserved_characters(self):
        """Test that URL delimiters are encoded and marks are kept"""
        assert encode_uri_component('a&b=c/d#e?') == 'a%26b%3Dc%2Fd%23e%3F'
        assert encode_uri_component("it's (ok)!~*") == "it's%20(ok)!~*"

    def test_unicode(self):
        """Test that non-ASCII text is UTF-8 encoded"""
        assert encode_uri_component('Café') == 'Caf%C3%A9'


@pytest.mark.unit
class TestGoogleMapsUrl:
    """Tests for Google Maps search links"""

    def test_builds_search_link(self):
        """Test the full link for an address"""
        assert google_maps_url('4 Maple Court') == f"{GOOGLE_MAPS_SEARCH_URL}4%20Maple%20Court"

    def test_blank_address_has_no_link(self):
        """Test that missing addresses give no link"""
        assert google_maps_url(None) is None
        assert google_maps_url('   ') is None

    def test_missing_base_url_uses_default(self):
        """Test that a None base URL falls back to Google Maps"""
        assert google_maps_url('Oak', None) == f"{GOOGLE_MAPS_SEARCH_URL}Oak"
