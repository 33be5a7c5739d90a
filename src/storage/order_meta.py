import itertools
import threading
from typing import Any

from src.models.order import Order


class OrderMetaStore:
    """Order meta rows keyed by order id.

    Handles returned by ``create_order`` and ``get_order`` share the same row.
    """

    def __init__(self, start_id: int = 1):
        self._rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(start_id)
        self._lock = threading.Lock()

    def create_order(self, **meta) -> Order:
        with self._lock:
            order_id = next(self._ids)
            self._rows[order_id] = dict(meta)
        return Order(order_id, self)

    def get_order(self, order_id: int) -> Order | None:
        with self._lock:
            if order_id not in self._rows:
                return None
        return Order(order_id, self)

    def get(self, order_id: int, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._rows.get(order_id, {}).get(key, default)

    def set(self, order_id: int, key: str, value: Any) -> None:
        with self._lock:
            self._rows.setdefault(order_id, {})[key] = value

    def delete(self, order_id: int, key: str) -> None:
        with self._lock:
            self._rows.get(order_id, {}).pop(key, None)
