from src.config.settings import StripeSettings
from src.models.mode import Mode


class StripeConnect:
    """Reports whether Stripe keys are configured for a mode."""

    def __init__(self, settings: StripeSettings):
        self.settings = settings

    def is_connected(self, mode: Mode | str | None = None) -> bool:
        publishable_key, secret_key = self.settings.keys_for(mode)
        return bool(publishable_key and secret_key)
