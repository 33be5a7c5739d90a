import uuid

from src.config.settings import StripeSettings
from src.models.webhook import WebhookData


class AccountFactory:
    """Factory for Stripe account payloads with sensible defaults."""

    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": f"acct_{uuid.uuid4().hex[:16]}",
            "object": "account",
            "email": "merchant@example.com",
            "country": "US",
            "default_currency": "usd",
        }
        requirements = overrides.pop("requirements", None)
        defaults.update(overrides)
        if requirements is not None:
            defaults["requirements"] = requirements
        return defaults

    @staticmethod
    def create_with_requirements(**requirements) -> dict:
        """Account whose ``requirements`` block holds the given fields."""
        return AccountFactory.create(requirements=requirements)


class WebhookEndpointFactory:
    """Factory for Stripe webhook endpoint payloads."""

    @staticmethod
    def create(url: str, **overrides) -> dict:
        defaults = {
            "id": f"we_{uuid.uuid4().hex[:16]}",
            "object": "webhook_endpoint",
            "url": url,
            "status": "enabled",
            "enabled_events": ["*"],
        }
        defaults.update(overrides)
        return defaults


class PaymentIntentFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": f"pi_{uuid.uuid4().hex[:16]}",
            "object": "payment_intent",
            "amount": 1000,
            "currency": "usd",
            "status": "requires_payment_method",
            "payment_method": None,
        }
        defaults.update(overrides)
        return defaults


class SettingsFactory:
    """Factory for StripeSettings with valid test and live keys."""

    @staticmethod
    def create(**overrides) -> StripeSettings:
        defaults = {
            "enabled": True,
            "testmode": True,
            "test_publishable_key": "pk_test_key",
            "test_secret_key": "sk_test_key",
            "publishable_key": "pk_live_key",
            "secret_key": "sk_live_key",
            "test_webhook_data": WebhookData(),
            "webhook_data": WebhookData(),
            "site_url": "https://example.com",
        }
        defaults.update(overrides)
        return StripeSettings(**defaults)
