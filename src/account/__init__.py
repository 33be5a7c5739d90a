from .cache import AccountCache
from .connect import StripeConnect
from .webhooks import WebhookReconciler, WebhookStatusCache, list_deletable

__all__ = [
    "AccountCache",
    "StripeConnect",
    "WebhookReconciler",
    "WebhookStatusCache",
    "list_deletable",
]
