from .gateway import StripeGateway
from .payment_lock import OrderPaymentLock, LOCK_DURATION_SECONDS

__all__ = ["StripeGateway", "OrderPaymentLock", "LOCK_DURATION_SECONDS"]
