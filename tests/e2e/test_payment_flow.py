"""E2E tests for order locking and intent lookup through the gateway."""

import pytest

from src.gateway.gateway import StripeGateway
from src.gateway.payment_lock import OrderPaymentLock
from src.models.order import INTENT_ID_META_KEY


pytestmark = pytest.mark.e2e


@pytest.fixture
def live_gateway(settings, client, clock):
    return StripeGateway(settings=settings, api=client, payment_lock=OrderPaymentLock(clock=clock))


class TestPaymentFlow:

    def test_duplicate_payment_attempt_is_blocked(self, live_gateway, order_store, stripe_server, payment_intent_factory):
        stripe_server.add_payment_intent(payment_intent_factory.create(id="pi_123", status="succeeded"))
        order = order_store.create_order(**{INTENT_ID_META_KEY: "pi_123"})
        duplicate_request_order = order_store.get_order(order.order_id)

        assert live_gateway.lock_order_payment(order, "pi_123") is False
        assert live_gateway.lock_order_payment(duplicate_request_order, "pi_123") is True

        intent = live_gateway.get_intent_from_order(order)
        assert intent["status"] == "succeeded"

        live_gateway.unlock_order_payment(order)
        assert live_gateway.lock_order_payment(duplicate_request_order) is False

    def test_stale_lock_does_not_block_retry(self, live_gateway, order_store, clock):
        order = order_store.create_order()
        live_gateway.lock_order_payment(order)

        clock.advance(301)

        assert live_gateway.lock_order_payment(order) is False

    def test_missing_intent_returns_none(self, live_gateway, order_store, stripe_server):
        order = order_store.create_order(**{INTENT_ID_META_KEY: "pi_missing"})

        assert live_gateway.get_intent_from_order(order) is None
        assert stripe_server.get_received_requests()[0]["query"] == {"expand[]": ["payment_method"]}
