from .factories import AccountFactory, PaymentIntentFactory, SettingsFactory, WebhookEndpointFactory
from .urls import normalize_webhook_url

__all__ = [
    "normalize_webhook_url",
    "AccountFactory", "PaymentIntentFactory", "SettingsFactory", "WebhookEndpointFactory",
]
