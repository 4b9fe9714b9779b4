"""
Tests for logging setup
"""
import logging
import pytest
from flask import Flask
from logging_config import setup_logging


@pytest.fixture
def bare_app(tmp_path):
    app = Flask(__name__)
    app.config.update(
        LOG_LEVEL='debug',
        LOG_FORMAT='%(levelname)s %(message)s',
        LOG_FILE='app.log',
        LOG_FOLDER=str(tmp_path / 'logs'),
    )
    return app


def own_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, '_yardbook_handler', False)]


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging"""

    def test_creates_log_file_in_log_folder(self, bare_app, tmp_path):
        """Test that the rotating file lives in LOG_FOLDER"""
        setup_logging(bare_app)
        logging.getLogger('services.job_actions').info("Job updated successfully")
        for handler in own_handlers():
            handler.flush()

        log_file = tmp_path / 'logs' / 'app.log'
        assert log_file.exists()
        assert 'Job updated successfully' in log_file.read_text(encoding='utf-8')

    def test_repeated_setup_does_not_stack_handlers(self, bare_app):
        """Test that building the app twice keeps one console and one file handler"""
        setup_logging(bare_app)
        setup_logging(bare_app)
        assert len(own_handlers()) == 2

    def test_level_from_config(self, bare_app):
        """Test that LOG_LEVEL is applied case-insensitively"""
        setup_logging(bare_app)
        assert logging.getLogger().level == logging.DEBUG

    def test_noisy_libraries_quieted(self, bare_app):
        """Test that werkzeug and SQLAlchemy engine logs are raised to WARNING"""
        setup_logging(bare_app)
        assert logging.getLogger('werkzeug').level == logging.WARNING
        assert logging.getLogger('sqlalchemy.engine').level == logging.WARNING
