import logging
import re
from typing import Callable

from src.account.connect import StripeConnect
from src.config.settings import StripeSettings
from src.gateway.payment_lock import OrderPaymentLock
from src.models.order import INTENT_ID_META_KEY, Order
from src.stripe_api.exceptions import StripeApiError

logger = logging.getLogger(__name__)

_TEST_KEYS = (re.compile(r"^pk_test_"), re.compile(r"^[rs]k_test_"))
_LIVE_KEYS = (re.compile(r"^pk_live_"), re.compile(r"^[rs]k_live_"))


class StripeGateway:
    """Order-level payment operations of the Stripe gateway."""

    def __init__(
        self,
        settings: StripeSettings,
        api,
        payment_lock: OrderPaymentLock | None = None,
        connect: StripeConnect | None = None,
        save_payment_method: Callable[[str, dict], None] | None = None,
    ):
        self.settings = settings
        self.api = api
        self.payment_lock = payment_lock or OrderPaymentLock()
        self.connect = connect or StripeConnect(settings)
        self._save_payment_method = save_payment_method

    def lock_order_payment(self, order: Order, intent_id: str | None = None) -> bool:
        return self.payment_lock.acquire(order, intent_id)

    def unlock_order_payment(self, order: Order, intent_id: str | None = None) -> None:
        self.payment_lock.release(order, intent_id)

    def get_intent_from_order(self, order: Order) -> dict | None:
        intent_id = order.get_meta(INTENT_ID_META_KEY)
        if not intent_id:
            return None

        try:
            return self.api.retrieve(
                f"payment_intents/{intent_id}",
                params={"expand[]": "payment_method"},
            )
        except StripeApiError as e:
            logger.warning("Could not retrieve intent %s for order %s: %s", intent_id, order.order_id, e)
            return None

    def get_source_object(self, source_id: str) -> dict:
        return self.api.retrieve(f"sources/{source_id}")

    def add_payment_method(
        self,
        customer_id: str | None,
        source_id: str | None = None,
        token: str | None = None,
    ) -> dict:
        """Attach a reusable source or token to the customer's saved methods.

        Returns ``{"result": "success"}`` or ``{"result": "failure"}``.
        """
        if not customer_id or not self._save_payment_method:
            return {"result": "failure"}

        source_ref = source_id or token
        if not source_ref:
            return {"result": "failure"}

        try:
            source = self.get_source_object(source_ref)
        except StripeApiError as e:
            logger.warning("Could not retrieve source %s for customer %s: %s", source_ref, customer_id, e)
            return {"result": "failure"}

        if not source or source.get("usage") != "reusable":
            return {"result": "failure"}

        self._save_payment_method(customer_id, source)
        return {"result": "success"}

    def are_keys_set(self) -> bool:
        publishable_key, secret_key = self.settings.keys_for()
        patterns = _TEST_KEYS if self.settings.testmode else _LIVE_KEYS
        return bool(patterns[0].match(publishable_key or "") and patterns[1].match(secret_key or ""))

    def needs_setup(self) -> bool:
        return not self.connect.is_connected()

    def is_available(self, is_ssl: bool) -> bool:
        if not self.settings.enabled or not self.are_keys_set():
            return False
        # live payments are never offered over plain http
        return self.settings.testmode or is_ssl

    @staticmethod
    def get_balance_transaction_id_from_charge(charge: dict | None) -> str | None:
        if not charge:
            return None
        balance_transaction = charge.get("balance_transaction")
        if isinstance(balance_transaction, str):
            return balance_transaction or None
        if isinstance(balance_transaction, dict):
            return balance_transaction.get("id") or None
        return None
