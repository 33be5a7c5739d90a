from .settings import StripeSettings

__all__ = ["StripeSettings"]
