import os
import logging
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


@dataclass
class AppConfig:
    environment: str
    log_level: str
    enable_metrics: bool

    @classmethod
    def from_env(cls) -> 'AppConfig':
        return cls(
            environment=os.getenv('ENVIRONMENT', 'development'),
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            enable_metrics=_env_flag('ENABLE_METRICS', 'true')
        )

@dataclass
class WebhookConfig:
    """Bind settings for the webhook receiver."""
    host: str = '127.0.0.1'
    port: int = 4567
    debug: bool = False

    @classmethod
    def from_env(cls) -> 'WebhookConfig':
        return cls(
            host=os.getenv('WEBHOOK_HOST', '127.0.0.1'),
            port=int(os.getenv('WEBHOOK_PORT', '4567')),
            debug=_env_flag('FLASK_DEBUG', 'false')
        )

@dataclass
class SenderConfig:
    """Where and how the event sender delivers."""
    endpoint: str = 'http://127.0.0.1:4567'
    max_retries: int = 3
    backoff_factor: float = 0.5
    connect_timeout: float = 5.0
    read_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> 'SenderConfig':
        return cls(
            endpoint=os.getenv('WEBHOOK_URL', 'http://127.0.0.1:4567'),
            max_retries=int(os.getenv('SENDER_MAX_RETRIES', '3')),
            backoff_factor=float(os.getenv('SENDER_BACKOFF_FACTOR', '0.5')),
            connect_timeout=float(os.getenv('SENDER_CONNECT_TIMEOUT', '5')),
            read_timeout=float(os.getenv('SENDER_READ_TIMEOUT', '30'))
        )

def setup_logging(name: str, level: str = 'INFO') -> logging.Logger:
    """Configure structured logging for the application."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
