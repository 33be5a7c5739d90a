import logging
import time
import uuid
from datetime import datetime, timezone

import requests

from src.config.settings import StripeSettings
from src.models.mode import Mode
from src.models.request import ApiRequest
from src.stripe_api.exceptions import StripeApiError
from src.stripe_api.request_log import RequestLog
from src.stripe_api.retry import RetryManager

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.stripe.com/v1"
API_VERSION = "2024-06-20"


class StripeApiClient:
    """Blocking Stripe REST client with retry support.

    Every attempt is recorded in the request log. Failures surface as
    ``StripeApiError``; callers decide whether to absorb them.
    """

    def __init__(
        self,
        settings: StripeSettings,
        retry_manager: RetryManager | None = None,
        request_log: RequestLog | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30,
        delay_factor: float = 1.0,
        session: requests.Session | None = None,
    ):
        self.settings = settings
        self.retry_manager = retry_manager or RetryManager()
        self.request_log = request_log or RequestLog()
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.delay_factor = delay_factor
        self.session = session or requests.Session()

    def retrieve(self, path: str, params: dict | None = None, mode: Mode | str | None = None) -> dict:
        return self.request(path, "GET", params=params, mode=mode)

    def list_all(self, path: str, params: dict | None = None, mode: Mode | str | None = None) -> list[dict]:
        """GET every page of a list resource, following ``has_more``/``starting_after``."""
        params = dict(params or {})
        entries = []

        while True:
            response = self.request(path, "GET", params=params, mode=mode)
            page = response.get("data")
            page = page if isinstance(page, list) else []
            entries.extend(page)

            if not response.get("has_more") or not page:
                return entries
            last_id = page[-1].get("id") if isinstance(page[-1], dict) else None
            if not last_id:
                return entries
            params["starting_after"] = last_id

    def list(self, path: str, params: dict | None = None, mode: Mode | str | None = None) -> list[dict]:
        """GET a list resource and return its ``data`` entries."""
        response = self.request(path, "GET", params=params, mode=mode)
        data = response.get("data")
        return data if isinstance(data, list) else []

    def delete(self, path: str, mode: Mode | str | None = None) -> dict:
        return self.request(path, "DELETE", mode=mode)

    def request(
        self,
        path: str,
        method: str = "GET",
        params: dict | None = None,
        mode: Mode | str | None = None,
    ) -> dict:
        """Send a request with automatic retries and return the decoded body."""
        method = method.upper()
        retry_count = 0

        while True:
            response, error = self._send(method, path, params, mode)
            status_code = response.status_code if response is not None else None

            if status_code is not None and 200 <= status_code < 300:
                break
            if not self.retry_manager.should_retry(status_code):
                break
            if not self.retry_manager.has_attempts_remaining(retry_count):
                break

            delay = self.retry_manager.next_delay(retry_count) * self.delay_factor
            logger.info(
                "Retrying %s %s after %s (attempt %d, delay %.2fs)",
                method, path, status_code or error, retry_count + 1, delay,
            )
            if delay > 0:
                time.sleep(delay)
            retry_count += 1

        if response is None:
            raise StripeApiError(f"{method} {path} failed: {error}")
        return self._decode(method, path, response)

    def _send(self, method: str, path: str, params: dict | None, mode) -> tuple[requests.Response | None, str | None]:
        secret_key = self.settings.secret_key_for(mode)
        headers = {
            "Authorization": f"Bearer {secret_key}",
            "Stripe-Version": API_VERSION,
        }
        url = f"{self.base_url}/{path.lstrip('/')}"

        start = time.monotonic()
        response = None
        error = None

        try:
            if method == "GET":
                response = self.session.request(
                    method, url, params=params, headers=headers, timeout=self.timeout_seconds,
                )
            else:
                response = self.session.request(
                    method, url, data=params, headers=headers, timeout=self.timeout_seconds,
                )
        except requests.exceptions.Timeout:
            error = "timeout"
        except requests.exceptions.ConnectionError:
            error = "connection_error"
        except requests.exceptions.RequestException as e:
            error = str(e)

        elapsed_ms = (time.monotonic() - start) * 1000

        self.request_log.log(ApiRequest(
            request_id=f"req_{uuid.uuid4().hex[:16]}",
            method=method,
            path=path,
            status_code=response.status_code if response is not None else None,
            timestamp=datetime.now(timezone.utc),
            response_time_ms=elapsed_ms,
            error=error,
        ))
        return response, error

    @staticmethod
    def _decode(method: str, path: str, response: requests.Response) -> dict:
        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            err = body.get("error") if isinstance(body, dict) else None
            err = err if isinstance(err, dict) else {}
            raise StripeApiError(
                err.get("message") or f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                code=err.get("code"),
            )

        if not isinstance(body, dict):
            raise StripeApiError(f"{method} {path} returned an invalid body", status_code=response.status_code)
        return body
