import os
import logging
from unittest.mock import patch

from shared.config import AppConfig, WebhookConfig, SenderConfig, setup_logging


class TestConfig:
    """Test cases for env-driven configuration."""

    def test_webhook_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = WebhookConfig.from_env()
        assert config == WebhookConfig(host='127.0.0.1', port=4567, debug=False)

    def test_webhook_from_env(self):
        env = {'WEBHOOK_HOST': '0.0.0.0', 'WEBHOOK_PORT': '8080', 'FLASK_DEBUG': 'True'}
        with patch.dict(os.environ, env):
            config = WebhookConfig.from_env()
        assert config.host == '0.0.0.0'
        assert config.port == 8080
        assert config.debug is True

    def test_app_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = AppConfig.from_env()
        assert config.environment == 'development'
        assert config.log_level == 'INFO'
        assert config.enable_metrics is True

    def test_sender_from_env(self):
        env = {
            'WEBHOOK_URL': 'https://hooks.example.com',
            'SENDER_MAX_RETRIES': '5',
            'SENDER_BACKOFF_FACTOR': '2',
            'SENDER_CONNECT_TIMEOUT': '1.5',
            'SENDER_READ_TIMEOUT': '10'
        }
        with patch.dict(os.environ, env):
            config = SenderConfig.from_env()
        assert config.endpoint == 'https://hooks.example.com'
        assert config.max_retries == 5
        assert config.backoff_factor == 2.0
        assert config.connect_timeout == 1.5
        assert config.read_timeout == 10.0

    def test_setup_logging_adds_handler_once(self):
        logger = setup_logging('tests.config.once', 'debug')
        again = setup_logging('tests.config.once', 'warning')

        assert logger is again
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
