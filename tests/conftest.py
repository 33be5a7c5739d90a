import pytest

from src.account.cache import AccountCache
from src.account.connect import StripeConnect
from src.account.webhooks import WebhookReconciler, WebhookStatusCache
from src.gateway.gateway import StripeGateway
from src.gateway.payment_lock import OrderPaymentLock
from src.storage.order_meta import OrderMetaStore
from src.storage.transient import InMemoryTransientStore
from src.stripe_api.client import StripeApiClient
from src.stripe_api.exceptions import StripeApiError
from src.stripe_api.request_log import RequestLog
from src.stripe_api.retry import RetryManager
from src.stripe_mock.server import FakeStripeServer
from src.utils.factories import (
    AccountFactory,
    PaymentIntentFactory,
    SettingsFactory,
    WebhookEndpointFactory,
)


class FakeClock:
    """Manually advanced clock returning unix timestamps."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubStripeApi:
    """In-process stand-in for StripeApiClient that records every call."""

    def __init__(self):
        self.responses: dict[tuple[str, str], object] = {}
        self.calls: list[tuple[str, str]] = []
        self.modes: list = []

    def set_response(self, method: str, path: str, response) -> None:
        self.responses[(method, path)] = response

    def retrieve(self, path, params=None, mode=None):
        return self._respond("GET", path, mode)

    def list(self, path, params=None, mode=None):
        return self._respond("GET", path, mode).get("data", [])

    def list_all(self, path, params=None, mode=None):
        return self.list(path, params, mode)

    def delete(self, path, mode=None):
        self.responses.setdefault(("DELETE", path), {"deleted": True})
        return self._respond("DELETE", path, mode)

    def _respond(self, method, path, mode):
        self.calls.append((method, path))
        self.modes.append(mode)
        response = self.responses.get((method, path))
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise StripeApiError("No such resource", status_code=404, code="resource_missing")
        return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryTransientStore(clock=clock)


@pytest.fixture
def settings():
    return SettingsFactory.create()


@pytest.fixture
def stub_api():
    return StubStripeApi()


@pytest.fixture
def connect(settings):
    return StripeConnect(settings)


@pytest.fixture
def account_cache(settings, connect, stub_api, store):
    return AccountCache(settings=settings, connect=connect, api=stub_api, store=store)


@pytest.fixture
def reconciler(settings, stub_api):
    return WebhookReconciler(settings=settings, api=stub_api)


@pytest.fixture
def webhook_status(settings, stub_api, store):
    return WebhookStatusCache(settings=settings, api=stub_api, store=store)


@pytest.fixture
def order_store():
    return OrderMetaStore()


@pytest.fixture
def payment_lock(clock):
    return OrderPaymentLock(clock=clock)


@pytest.fixture
def gateway(settings, stub_api, payment_lock):
    return StripeGateway(settings=settings, api=stub_api, payment_lock=payment_lock)


@pytest.fixture
def stripe_server():
    server = FakeStripeServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def request_log():
    return RequestLog()


@pytest.fixture
def client(settings, stripe_server, request_log):
    return StripeApiClient(
        settings=settings,
        retry_manager=RetryManager(max_retries=2),
        request_log=request_log,
        base_url=stripe_server.url,
        timeout_seconds=5,
        delay_factor=0,
    )


@pytest.fixture
def account_factory():
    return AccountFactory


@pytest.fixture
def webhook_endpoint_factory():
    return WebhookEndpointFactory


@pytest.fixture
def payment_intent_factory():
    return PaymentIntentFactory
