from .mode import Mode
from .account import AccountRequirements, AccountSnapshot, AccountStatus
from .webhook import WebhookData, WebhookEndpoint
from .order import Order
from .request import ApiRequest

__all__ = [
    "Mode",
    "AccountRequirements", "AccountSnapshot", "AccountStatus",
    "WebhookData", "WebhookEndpoint",
    "Order",
    "ApiRequest",
]
