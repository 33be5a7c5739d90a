import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Self
from urllib.parse import parse_qs, urlsplit


class _StripeHandler(BaseHTTPRequestHandler):
    """HTTP request handler emulating the Stripe endpoints the gateway uses."""

    def do_GET(self):
        self._handle("GET")

    def do_DELETE(self):
        self._handle("DELETE")

    def do_POST(self):
        self._handle("POST")

    def _handle(self, method: str):
        config = self.server.config  # type: ignore[attr-defined]
        parts = urlsplit(self.path)
        path = parts.path.removeprefix("/v1/").strip("/")

        with config["lock"]:
            config["received_requests"].append({
                "method": method,
                "path": path,
                "query": parse_qs(parts.query),
                "headers": dict(self.headers),
            })
            forced_failures = config["fail_next"]
            if forced_failures:
                config["fail_next"] = forced_failures - 1

        if config["response_delay"] > 0:
            time.sleep(config["response_delay"])

        if forced_failures:
            self._send(config["failure_code"], _error("api_error", "Simulated failure"))
            return

        if self.headers.get("Authorization", "").removeprefix("Bearer ") not in config["secret_keys"]:
            self._send(401, _error("invalid_api_key", "Invalid API Key provided"))
            return

        segments = path.split("/") if path else []
        with config["lock"]:
            code, body = self._route(config, method, segments, parse_qs(parts.query))
        self._send(code, body)

    def _route(self, config: dict, method: str, segments: list[str], query: dict) -> tuple[int, dict]:
        if segments == ["account"] and method == "GET":
            if config["account"] is None:
                return 404, _error("resource_missing", "No such account")
            return 200, config["account"]

        if segments == ["webhook_endpoints"] and method == "GET":
            return 200, _page(config["webhook_endpoints"], query)

        if len(segments) == 2 and segments[0] == "webhook_endpoints":
            endpoint = next((e for e in config["webhook_endpoints"] if e.get("id") == segments[1]), None)
            if endpoint is None:
                return 404, _error("resource_missing", f"No such webhook endpoint: '{segments[1]}'")
            if method == "GET":
                return 200, endpoint
            if method == "DELETE":
                config["webhook_endpoints"].remove(endpoint)
                return 200, {"id": endpoint["id"], "object": "webhook_endpoint", "deleted": True}

        if len(segments) == 2 and segments[0] == "payment_intents" and method == "GET":
            intent = config["payment_intents"].get(segments[1])
            if intent is None:
                return 404, _error("resource_missing", f"No such payment_intent: '{segments[1]}'")
            return 200, intent

        return 404, _error("resource_missing", "Unrecognized request URL")

    def _send(self, code: int, body: dict) -> None:
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(body).encode())

    def log_message(self, format, *args):
        """Suppress default request logging."""
        pass


def _page(entries: list[dict], query: dict) -> dict:
    """One page of a list resource, honoring ``limit`` and ``starting_after``."""
    limit = int(query.get("limit", ["10"])[0])
    start = 0
    starting_after = query.get("starting_after", [None])[0]
    if starting_after:
        ids = [e.get("id") for e in entries]
        start = ids.index(starting_after) + 1 if starting_after in ids else len(entries)
    data = entries[start:start + limit]
    return {"object": "list", "data": data, "has_more": start + limit < len(entries)}


def _error(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message, "type": "invalid_request_error"}}


class FakeStripeServer:
    """Configurable local HTTP server that stands in for the Stripe API."""

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 0,
        secret_keys: tuple[str, ...] = ("sk_test_key", "sk_live_key"),
    ):
        self._host = host
        self._port = port
        self._config = {
            "secret_keys": set(secret_keys),
            "account": None,
            "webhook_endpoints": [],
            "payment_intents": {},
            "response_delay": 0,
            "fail_next": 0,
            "failure_code": 500,
            "received_requests": [],
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def set_account(self, account: dict | None) -> Self:
        with self._config["lock"]:
            self._config["account"] = account
        return self

    def add_webhook_endpoint(self, endpoint: dict) -> Self:
        with self._config["lock"]:
            self._config["webhook_endpoints"].append(dict(endpoint))
        return self

    def add_payment_intent(self, intent: dict) -> Self:
        with self._config["lock"]:
            self._config["payment_intents"][intent["id"]] = intent
        return self

    def set_response_delay(self, seconds: float) -> Self:
        self._config["response_delay"] = seconds
        return self

    def fail_next(self, count: int, status_code: int = 500) -> Self:
        with self._config["lock"]:
            self._config["fail_next"] = count
            self._config["failure_code"] = status_code
        return self

    def start(self) -> None:
        self._server = ThreadingHTTPServer((self._host, self._port), _StripeHandler)
        self._server.config = self._config  # type: ignore[attr-defined]
        self._port = self._server.server_address[1]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def url(self) -> str:
        return f"http://{self._host}:{self._port}/v1"

    @property
    def port(self) -> int:
        return self._port

    def get_received_requests(self) -> list[dict]:
        with self._config["lock"]:
            return list(self._config["received_requests"])

    def get_webhook_endpoints(self) -> list[dict]:
        with self._config["lock"]:
            return list(self._config["webhook_endpoints"])

    def clear_requests(self) -> None:
        with self._config["lock"]:
            self._config["received_requests"].clear()
