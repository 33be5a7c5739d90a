import pytest

from src.gateway.payment_lock import LOCK_DURATION_SECONDS
from src.models.order import LOCK_PAYMENT_META_KEY


class TestAcquire:
    """Tests for OrderPaymentLock.acquire()."""

    @pytest.mark.unit
    def test_fresh_order_is_not_locked_then_locked(self, payment_lock, order_store, clock):
        order = order_store.create_order()

        assert payment_lock.acquire(order) is False
        assert order.get_meta(LOCK_PAYMENT_META_KEY) == int(clock()) + LOCK_DURATION_SECONDS

        assert payment_lock.acquire(order) is True

    @pytest.mark.unit
    def test_intent_id_does_not_change_lock_identity(self, payment_lock, order_store):
        order = order_store.create_order()

        assert payment_lock.acquire(order, "pi_123intent") is False
        assert payment_lock.acquire(order, "pi_123intent") is True
        assert payment_lock.acquire(order) is True
        assert payment_lock.acquire(order, "pi_other") is True

    @pytest.mark.unit
    def test_expired_lock_is_reacquired(self, payment_lock, order_store, clock):
        order = order_store.create_order()
        order.update_meta(LOCK_PAYMENT_META_KEY, int(clock()) - 1)

        assert payment_lock.acquire(order, "pi_123intent") is False
        assert order.get_meta(LOCK_PAYMENT_META_KEY) == int(clock()) + LOCK_DURATION_SECONDS

    @pytest.mark.unit
    def test_lock_expiring_now_counts_as_unlocked(self, payment_lock, order_store, clock):
        order = order_store.create_order()
        order.update_meta(LOCK_PAYMENT_META_KEY, int(clock()))

        assert payment_lock.acquire(order) is False

    @pytest.mark.unit
    @pytest.mark.parametrize("stored", [0, "0", "", None, "garbage"])
    def test_zero_or_unreadable_lock_counts_as_unlocked(self, payment_lock, order_store, stored):
        order = order_store.create_order()
        order.update_meta(LOCK_PAYMENT_META_KEY, stored)

        assert payment_lock.acquire(order) is False

    @pytest.mark.unit
    def test_lock_expires_after_five_minutes(self, payment_lock, order_store, clock):
        order = order_store.create_order()
        payment_lock.acquire(order)

        clock.advance(LOCK_DURATION_SECONDS - 1)
        assert payment_lock.acquire(order) is True

        clock.advance(1)
        assert payment_lock.acquire(order) is False

    @pytest.mark.unit
    def test_two_handles_to_same_order_share_lock(self, payment_lock, order_store):
        order = order_store.create_order()
        duplicate = order_store.get_order(order.order_id)

        payment_lock.acquire(order)

        assert payment_lock.acquire(duplicate) is True

    @pytest.mark.unit
    def test_locks_are_per_order(self, payment_lock, order_store):
        first = order_store.create_order()
        second = order_store.create_order()

        payment_lock.acquire(first)

        assert payment_lock.acquire(second) is False


class TestRelease:

    @pytest.mark.unit
    def test_release_allows_new_acquire(self, payment_lock, order_store):
        order = order_store.create_order()
        payment_lock.acquire(order)

        payment_lock.release(order)

        assert order.get_meta(LOCK_PAYMENT_META_KEY) is None
        assert payment_lock.acquire(order) is False
