import pytest
import os
import sys

# Add parent directory to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Test configuration
os.environ.update({
    'ENVIRONMENT': 'test',
    'LOG_LEVEL': 'DEBUG',
    'ENABLE_METRICS': 'true',
    'WEBHOOK_URL': 'http://receiver.test:4567'
})

from webhook.app import WebhookServer


@pytest.fixture
def server():
    """Fresh receiver so counters start from zero."""
    return WebhookServer()


@pytest.fixture
def client(server):
    """Flask test client."""
    server.app.config['TESTING'] = True
    return server.app.test_client()


@pytest.fixture
def sample_payloads():
    """Parseable JSON documents of every top-level type."""
    return [
        '{}',
        '[]',
        '"just a string"',
        '42',
        'null',
        '{"action": "opened", "issue": {"number": 7, "labels": ["bug"]}}'
    ]


@pytest.fixture
def malformed_payloads():
    return [
        '{not valid json',
        '',
        "{'single': 'quotes'}",
        '{"trailing": 1,}',
        'NaN',
        'Infinity',
        '-Infinity',
        '[NaN]',
        '{"ratio": Infinity}'
    ]
