"""Read-through cache of the connected Stripe account, one entry per mode."""

import logging

from src.account.connect import StripeConnect
from src.config.settings import StripeSettings
from src.models.account import AccountSnapshot, AccountStatus
from src.models.mode import Mode
from src.storage.transient import KeyValueStore
from src.stripe_api.exceptions import StripeApiError

logger = logging.getLogger(__name__)

ACCOUNT_CACHE_KEYS = {
    Mode.TEST: "wcstripe_account_data_test",
    Mode.LIVE: "wcstripe_account_data_live",
}
ACCOUNT_CACHE_TTL = 2 * 60 * 60


class AccountCache:
    def __init__(
        self,
        settings: StripeSettings,
        connect: StripeConnect,
        api,
        store: KeyValueStore,
        ttl: float = ACCOUNT_CACHE_TTL,
    ):
        self.settings = settings
        self.connect = connect
        self.api = api
        self.store = store
        self.ttl = ttl

    def get(self, mode: Mode | str | None = None) -> AccountSnapshot | None:
        """Return the account snapshot for ``mode``, fetching it on a cache miss.

        Returns None when the mode has no Stripe connection or the account
        could not be fetched. Fetch failures are cached like any other result.
        """
        if not self.connect.is_connected(mode):
            return None

        mode = self.settings.resolve_mode(mode)
        key = ACCOUNT_CACHE_KEYS[mode]

        cached = self.store.get(key)
        if cached is not None:
            return AccountSnapshot.from_dict(cached)

        data = self._fetch(mode)
        self.store.set(key, data, ttl=self.ttl)
        logger.info("Cached %s account data (%s)", mode.value, "empty" if not data else data.get("id"))
        return AccountSnapshot.from_dict(data)

    def clear(self) -> None:
        for key in ACCOUNT_CACHE_KEYS.values():
            self.store.delete(key)

    def has_pending_requirements(self, mode: Mode | str | None = None) -> bool:
        requirements = self._requirements(mode)
        return bool(requirements and requirements.currently_due)

    def has_overdue_requirements(self, mode: Mode | str | None = None) -> bool:
        requirements = self._requirements(mode)
        return bool(requirements and requirements.past_due)

    def get_status(self, mode: Mode | str | None = None) -> AccountStatus:
        # past_due and currently_due do not affect the status on their own
        requirements = self._requirements(mode)
        if requirements is None:
            return AccountStatus.COMPLETE
        if requirements.disabled_reason:
            return AccountStatus.RESTRICTED
        if requirements.eventually_due:
            return AccountStatus.RESTRICTED_SOON
        return AccountStatus.COMPLETE

    def get_country(self, mode: Mode | str | None = None) -> str:
        snapshot = self.get(mode)
        return snapshot.country if snapshot else ""

    def get_email(self, mode: Mode | str | None = None) -> str:
        snapshot = self.get(mode)
        return snapshot.email if snapshot else ""

    def _requirements(self, mode):
        snapshot = self.get(mode)
        return snapshot.requirements if snapshot else None

    def _fetch(self, mode: Mode) -> dict:
        try:
            return self.api.retrieve("account", mode=mode) or {}
        except StripeApiError as e:
            logger.warning("Could not fetch %s account data: %s", mode.value, e)
            return {}
