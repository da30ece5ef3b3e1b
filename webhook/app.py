import os
import sys
import json
import time
from decimal import Decimal
from typing import Any, Optional

# Add parent directory to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify
from prometheus_client import CollectorRegistry, Counter, generate_latest, CONTENT_TYPE_LATEST
from shared.config import AppConfig, WebhookConfig, setup_logging

ROOT_REPLY = 'hello world'
EVENT_REPLY = 'Well, it worked!'
ERROR_REPLY = 'Internal Server Error'


def _reject_constant(name: str):
    raise json.JSONDecodeError(f"Invalid constant {name}", name, 0)


def decode_payload(raw: str) -> Any:
    """Strict JSON decode of an event payload.

    ``NaN`` and ``Infinity`` are rejected. Integers decode to ``Decimal`` so
    long digit strings are not subject to the int conversion limit.
    """
    return json.loads(raw, parse_constant=_reject_constant, parse_int=Decimal)


class WebhookServer:
    """Webhook receiver answering the root ping and event deliveries."""

    def __init__(self):
        self.app_config = AppConfig.from_env()
        self.config = WebhookConfig.from_env()
        self.logger = setup_logging(__name__, self.app_config.log_level)

        self.app = Flask(__name__)

        # Per-instance registry, counters are not shared between servers
        self.registry = CollectorRegistry()
        self.requests_total = Counter(
            'webhook_requests_total',
            'Total number of webhook requests',
            ['route'],
            registry=self.registry
        )
        self.payload_errors = Counter(
            'webhook_payload_errors_total',
            'Event payloads that failed to parse as JSON',
            registry=self.registry
        )

        self._setup_routes()
        self.logger.info(f"WebhookServer initialized for {self.app_config.environment} environment")

    def _setup_routes(self) -> None:
        """Set up Flask routes."""

        @self.app.route('/', methods=['POST'])
        def root():
            self.requests_total.labels(route='root').inc()
            return ROOT_REPLY

        @self.app.route('/event_handler', methods=['POST'])
        def event_handler():
            """Parse the JSON ``payload`` parameter and acknowledge it.

            The form body wins over the query string. A missing parameter
            reads as the empty string, which fails to parse just like
            malformed JSON. The parse error is left to the app-level handler
            below.
            """
            self.requests_total.labels(route='event_handler').inc()
            raw = request.form.get('payload', request.args.get('payload', ''))
            payload = decode_payload(raw)
            self.logger.debug(f"Parsed event payload of type {type(payload).__name__}")
            return EVENT_REPLY

        @self.app.route('/health', methods=['GET'])
        def health_check():
            return jsonify({
                'status': 'healthy',
                'timestamp': time.time()
            }), 200

        if self.app_config.enable_metrics:
            @self.app.route('/metrics', methods=['GET'])
            def metrics_endpoint():
                """Prometheus text exposition of this server's counters."""
                return generate_latest(self.registry), 200, {'Content-Type': CONTENT_TYPE_LATEST}

        @self.app.errorhandler(json.JSONDecodeError)
        def payload_error(error):
            self.payload_errors.inc()
            self.logger.warning(f"Event payload is not valid JSON: {error.msg}")
            return ERROR_REPLY, 500, {'Content-Type': 'text/plain'}

        @self.app.errorhandler(500)
        def internal_error(error):
            self.logger.error(f"Internal server error: {error}")
            return ERROR_REPLY, 500, {'Content-Type': 'text/plain'}

    def run(self, host: Optional[str] = None, port: Optional[int] = None, debug: Optional[bool] = None):
        """Run the Flask application."""
        host = host or self.config.host
        port = port or self.config.port
        debug = self.config.debug if debug is None else debug
        self.logger.info(f"Starting webhook receiver on {host}:{port}")

        self.app.run(
            host=host,
            port=port,
            debug=debug,
            threaded=True
        )


# Create global app instance for WSGI servers
server_instance = WebhookServer()
app = server_instance.app

if __name__ == "__main__":
    server_instance.run()
