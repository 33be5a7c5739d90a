import threading

from src.models.request import ApiRequest


class RequestLog:
    """Thread-safe record of every Stripe API attempt."""

    def __init__(self):
        self._requests: list[ApiRequest] = []
        self._lock = threading.Lock()

    def log(self, request: ApiRequest) -> None:
        with self._lock:
            self._requests.append(request)

    def get_requests(self, method: str | None = None) -> list[ApiRequest]:
        with self._lock:
            if method is None:
                return list(self._requests)
            return [r for r in self._requests if r.method == method.upper()]

    def get_calls(self) -> list[tuple[str, str]]:
        """(method, path) pairs in call order."""
        with self._lock:
            return [(r.method, r.path) for r in self._requests]

    def get_failed_requests(self) -> list[ApiRequest]:
        with self._lock:
            return [r for r in self._requests if not r.succeeded]

    def clear(self) -> None:
        with self._lock:
            self._requests.clear()
