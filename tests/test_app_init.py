"""
Tests for the application factory
"""
import pytest
from app_init import create_app
from config import StoragePolicyError


@pytest.mark.integration
class TestCreateApp:
    """Tests for create_app"""

    def test_testing_app_uses_json_store(self, app):
        """Test that the testing app runs on the JSON fallback"""
        assert app.testing is True
        assert app.config['STORAGE_MODE'] == 'json_fallback'
        assert app.extensions['job_store'].storage_mode == 'json_fallback'

    def test_blueprints_registered(self, app):
        """Test that pages, API and health blueprints are registered"""
        assert {'pages', 'jobs_bp', 'calendar_bp', 'health'} <= set(app.blueprints)

    def test_security_headers(self, client):
        """Test that responses carry the security headers"""
        response = client.get('/api/health')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'

    def test_unknown_route_is_json_404(self, client):
        """Test that 404s are answered with JSON"""
        response = client.get('/api/nothing-here')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Not Found'

    def test_seeds_sample_jobs(self, tmp_path, test_env_vars):
        """Test that SEED_SAMPLE_JOBS fills an empty collection once"""
        overrides = {
            'DATA_FOLDER': str(tmp_path / 'data'),
            'LOG_FOLDER': str(tmp_path / 'logs'),
            'SEED_SAMPLE_JOBS': True,
        }
        first = create_app('testing', overrides=overrides)
        assert len(first.extensions['job_store'].fetch_jobs()) == 4

        second = create_app('testing', overrides=overrides)
        assert len(second.extensions['job_store'].fetch_jobs()) == 4

    def test_production_without_database_fails(self, tmp_path, monkeypatch):
        """Test that production refuses to start on JSON files"""
        monkeypatch.setenv('FLASK_ENV', 'production')
        monkeypatch.delenv('DATABASE_URL', raising=False)
        with pytest.raises(StoragePolicyError):
            create_app('production', overrides={
                'DATABASE_URL': None,
                'DATA_FOLDER': str(tmp_path / 'data'),
                'LOG_FOLDER': str(tmp_path / 'logs'),
            })

    def test_production_config_without_database_fails_without_flask_env(self, tmp_path, monkeypatch):
        """Test that create_app('production') refuses JSON files even when FLASK_ENV is unset"""
        monkeypatch.delenv('FLASK_ENV', raising=False)
        monkeypatch.delenv('DATABASE_URL', raising=False)
        with pytest.raises(StoragePolicyError):
            create_app('production', overrides={
                'DATABASE_URL': None,
                'DATA_FOLDER': str(tmp_path / 'data'),
                'LOG_FOLDER': str(tmp_path / 'logs'),
            })

    def test_testing_config_uses_json_under_production_flask_env(self, tmp_path, monkeypatch):
        """Test that the storage policy follows the config the app was built with"""
        monkeypatch.setenv('FLASK_ENV', 'production')
        monkeypatch.delenv('DATABASE_URL', raising=False)
        app = create_app('testing', overrides={
            'DATA_FOLDER': str(tmp_path / 'data'),
            'LOG_FOLDER': str(tmp_path / 'logs'),
        })
        assert app.extensions['job_store'].storage_mode == 'json_fallback'
        assert app.config['STORAGE_MODE'] == 'json_fallback'
