import logging
import time
from typing import Callable

from src.models.order import LOCK_PAYMENT_META_KEY, Order

logger = logging.getLogger(__name__)

LOCK_DURATION_SECONDS = 5 * 60


class OrderPaymentLock:
    """Advisory per-order lock against duplicate concurrent payment attempts.

    The lock is the ``_stripe_lock_payment`` meta field holding an expiry
    timestamp. Acquisition is a plain read followed by a write; two handlers
    that read "unlocked" at the same moment can both acquire it.
    """

    def __init__(self, clock: Callable[[], float] = time.time, duration: int = LOCK_DURATION_SECONDS):
        self._clock = clock
        self.duration = duration

    def is_locked(self, order: Order) -> bool:
        locked_until = _as_timestamp(order.get_meta(LOCK_PAYMENT_META_KEY))
        return locked_until > int(self._clock())

    def acquire(self, order: Order, intent_id: str | None = None) -> bool:
        """Lock the order for payment.

        Returns True if the order was already locked, in which case the caller
        must not process the payment. Returns False when this call took the
        lock. ``intent_id`` does not change which lock is taken.
        """
        if self.is_locked(order):
            logger.info("Payment for order %s is already locked", order.order_id)
            return True

        order.update_meta(LOCK_PAYMENT_META_KEY, int(self._clock()) + self.duration)
        return False

    def release(self, order: Order, intent_id: str | None = None) -> None:
        order.delete_meta(LOCK_PAYMENT_META_KEY)


def _as_timestamp(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
