from typing import Any

LOCK_PAYMENT_META_KEY = "_stripe_lock_payment"
INTENT_ID_META_KEY = "_stripe_intent_id"


class Order:
    """Handle to one order row.

    Meta reads and writes go straight to the backing store, so every handle
    for the same order id sees the same values.
    """

    def __init__(self, order_id: int, store):
        self.order_id = order_id
        self._store = store

    def get_meta(self, key: str, default: Any = None) -> Any:
        return self._store.get(self.order_id, key, default)

    def update_meta(self, key: str, value: Any) -> None:
        self._store.set(self.order_id, key, value)

    def delete_meta(self, key: str) -> None:
        self._store.delete(self.order_id, key)

    def __repr__(self) -> str:
        return f"Order(order_id={self.order_id})"
