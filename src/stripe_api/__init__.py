from .client import StripeApiClient
from .exceptions import StripeApiError
from .request_log import RequestLog
from .retry import RetryManager

__all__ = [
    "StripeApiClient",
    "StripeApiError",
    "RequestLog",
    "RetryManager",
]
