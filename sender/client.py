import os
import sys
import json
from typing import Any, Optional

# Add parent directory to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from shared.config import AppConfig, SenderConfig, setup_logging


class EventSender:
    """Posts root pings and event payloads to a webhook receiver."""

    def __init__(self, config: Optional[SenderConfig] = None):
        self.app_config = AppConfig.from_env()
        self.config = config or SenderConfig.from_env()
        self.logger = setup_logging(__name__, self.app_config.log_level)
        self.endpoint = self.config.endpoint.rstrip('/')
        self.http_session = self._setup_http_session()

    def _setup_http_session(self) -> requests.Session:
        """Configure HTTP session with retry strategy."""
        session = requests.Session()

        # 500 means the receiver rejected the payload
        retry_strategy = Retry(
            total=self.config.max_retries,
            backoff_factor=self.config.backoff_factor,
            status_forcelist=[502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    @property
    def timeout(self):
        return (self.config.connect_timeout, self.config.read_timeout)

    def _post(self, path: str, data: Optional[dict] = None) -> requests.Response:
        url = f"{self.endpoint}{path}"
        try:
            return self.http_session.post(url, data=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"HTTP request to {url} failed: {e}")
            raise

    def _checked(self, response: requests.Response) -> str:
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            self.logger.error(f"Receiver rejected request: {e}")
            raise
        return response.text

    def ping(self) -> str:
        """POST to the receiver root and return its reply."""
        return self._checked(self._post('/'))

    def send_event(self, payload: Any) -> str:
        """Deliver ``payload`` as the JSON-encoded ``payload`` form field."""
        reply = self._checked(self.send_raw(json.dumps(payload)))
        self.logger.info(f"Event delivered to {self.endpoint}")
        return reply

    def send_raw(self, raw: str) -> requests.Response:
        """Post an already-encoded payload string without checking the status."""
        return self._post('/event_handler', data={'payload': raw})

    def close(self) -> None:
        self.http_session.close()

    def __enter__(self) -> 'EventSender':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        payload = json.loads(argv[0]) if argv else {}
    except json.JSONDecodeError as e:
        setup_logging(__name__).error(f"Event argument is not valid JSON: {e.msg}")
        return 1

    with EventSender() as sender:
        try:
            print(sender.send_event(payload))
        except requests.exceptions.RequestException:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
