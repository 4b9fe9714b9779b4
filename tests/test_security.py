"""
Tests for security utilities
"""
import logging
import pytest
from werkzeug.exceptions import BadRequest, Conflict, NotFound
from security import SecurityConfig, error_body, sanitize_error_response


@pytest.mark.unit
class TestSecretKey:
    """Tests for secret key validation"""

    def test_generated_key_is_valid(self):
        """Test that generated keys pass validation"""
        key = SecurityConfig.generate_secret_key()
        assert len(key) == 64
        assert SecurityConfig.validate_secret_key(key) is True

    def test_short_key_rejected(self):
        """Test that short keys are rejected"""
        assert SecurityConfig.validate_secret_key('abc') is False

    def test_placeholder_key_rejected(self):
        """Test that placeholder keys are rejected"""
        assert SecurityConfig.validate_secret_key('my-dev-key-' + 'x' * 32) is False

    def test_ensure_keeps_good_key(self):
        """Test that a good key is kept"""
        key = 'f' * 64
        assert SecurityConfig.ensure_secret_key({'SECRET_KEY': key}) == key

    def test_ensure_replaces_missing_key(self):
        """Test that a missing key is generated"""
        assert len(SecurityConfig.ensure_secret_key({})) == 64


@pytest.mark.unit
class TestErrorBodies:
    """Tests for JSON error bodies"""

    def test_abort_description_is_used(self):
        """Test that an explicit abort() description becomes the message"""
        body = error_body(409, Conflict(description='Invoices are only available for completed jobs'))
        assert body == {
            'success': False,
            'error': 'Conflict',
            'message': 'Invoices are only available for completed jobs',
        }

    def test_default_description_is_replaced(self):
        """Test that werkzeug's stock text is replaced by ours"""
        body = error_body(400, BadRequest())
        assert body['message'] == 'The request was missing or had invalid parameters'

    def test_not_found_ignores_description(self):
        """Test that 404 always uses the generic message"""
        body = error_body(404, NotFound(description='/secret/path'))
        assert body['message'] == 'The requested resource was not found'

    def test_sanitized_500_hides_details(self):
        """Test that exception text only appears in debug mode"""
        error = RuntimeError('password=hunter2')
        assert 'details' not in sanitize_error_response(error)
        assert sanitize_error_response(error, include_details=True)['type'] == 'RuntimeError'


@pytest.mark.unit
class TestProductionSecretKey:
    """Tests for the missing-key warning in production"""

    def test_missing_production_key_warns_about_workers(self, caplog):
        """Test that a generated production key is logged as per-worker"""
        with caplog.at_level(logging.WARNING, logger='security'):
            key = SecurityConfig.ensure_secret_key({'ENV_NAME': 'production'})
        assert len(key) == 64
        assert 'Each worker process generates its own key' in caplog.text

    def test_missing_testing_key_has_no_worker_warning(self, caplog):
        """Test that outside production only the generation is logged"""
        with caplog.at_level(logging.WARNING, logger='security'):
            SecurityConfig.ensure_secret_key({'ENV_NAME': 'testing'})
        assert 'Each worker process' not in caplog.text
