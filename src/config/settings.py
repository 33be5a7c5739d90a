"""Gateway settings.

Settings are built once and passed to each component explicitly; nothing in
the library reads them from global state.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

from src.models.mode import Mode
from src.models.webhook import WebhookData

DEFAULT_SITE_URL = "https://example.com"


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in ("yes", "true", "1", "on")


@dataclass
class StripeSettings:
    enabled: bool = False
    testmode: bool = True
    test_publishable_key: str = ""
    test_secret_key: str = ""
    publishable_key: str = ""
    secret_key: str = ""
    test_webhook_data: WebhookData = field(default_factory=WebhookData)
    webhook_data: WebhookData = field(default_factory=WebhookData)
    site_url: str = DEFAULT_SITE_URL

    @classmethod
    def from_options(cls, options: Mapping) -> "StripeSettings":
        """Build settings from a WooCommerce-style options dict ("yes"/"no" flags)."""
        return cls(
            enabled=_flag(options.get("enabled")),
            testmode=_flag(options.get("testmode")),
            test_publishable_key=options.get("test_publishable_key") or "",
            test_secret_key=options.get("test_secret_key") or "",
            publishable_key=options.get("publishable_key") or "",
            secret_key=options.get("secret_key") or "",
            test_webhook_data=WebhookData.from_dict(options.get("test_webhook_data")),
            webhook_data=WebhookData.from_dict(options.get("webhook_data")),
            site_url=options.get("site_url") or DEFAULT_SITE_URL,
        )

    @classmethod
    def from_env(cls, environ: Mapping | None = None) -> "StripeSettings":
        env = os.environ if environ is None else environ
        return cls(
            enabled=_flag(env.get("STRIPE_ENABLED", "yes")),
            testmode=_flag(env.get("STRIPE_TESTMODE", "yes")),
            test_publishable_key=env.get("STRIPE_TEST_PUBLISHABLE_KEY", ""),
            test_secret_key=env.get("STRIPE_TEST_SECRET_KEY", ""),
            publishable_key=env.get("STRIPE_PUBLISHABLE_KEY", ""),
            secret_key=env.get("STRIPE_SECRET_KEY", ""),
            test_webhook_data=WebhookData(
                id=env.get("STRIPE_TEST_WEBHOOK_ID", ""),
                secret=env.get("STRIPE_TEST_WEBHOOK_SECRET", ""),
            ),
            webhook_data=WebhookData(
                id=env.get("STRIPE_WEBHOOK_ID", ""),
                secret=env.get("STRIPE_WEBHOOK_SECRET", ""),
            ),
            site_url=env.get("STRIPE_SITE_URL", DEFAULT_SITE_URL),
        )

    @property
    def mode(self) -> Mode:
        return Mode.from_testmode(self.testmode)

    def resolve_mode(self, mode: Mode | str | None = None) -> Mode:
        if mode is None:
            return self.mode
        return Mode(mode)

    def keys_for(self, mode: Mode | str | None = None) -> tuple[str, str]:
        """(publishable, secret) key pair for the mode."""
        if self.resolve_mode(mode) is Mode.TEST:
            return self.test_publishable_key, self.test_secret_key
        return self.publishable_key, self.secret_key

    def secret_key_for(self, mode: Mode | str | None = None) -> str:
        return self.keys_for(mode)[1]

    def webhook_data_for(self, mode: Mode | str | None = None) -> WebhookData:
        if self.resolve_mode(mode) is Mode.TEST:
            return self.test_webhook_data
        return self.webhook_data

    @property
    def webhook_url(self) -> str:
        return f"{self.site_url.rstrip('/')}/?wc-api=wc_stripe"
