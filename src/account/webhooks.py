"""Webhook endpoint reconciliation and the cached webhook status check."""

import logging
from typing import Iterable

from src.config.settings import StripeSettings
from src.models.mode import Mode
from src.models.webhook import WebhookEndpoint
from src.storage.transient import KeyValueStore
from src.stripe_api.exceptions import StripeApiError
from src.utils.urls import normalize_webhook_url

logger = logging.getLogger(__name__)

WEBHOOK_STATUS_KEYS = {
    Mode.TEST: "wcstripe_webhook_status_test",
    Mode.LIVE: "wcstripe_webhook_status_live",
}
WEBHOOK_STATUS_TTL = 2 * 60 * 60


def list_deletable(
    remote_endpoints: Iterable[dict | WebhookEndpoint],
    site_webhook_url: str,
    exclude_id: str | None = None,
) -> list[str]:
    """Ids of remote endpoints pointing at this site, in input order.

    Entries without an id or url are skipped. ``exclude_id`` is never returned.
    """
    target = normalize_webhook_url(site_webhook_url)
    deletable = []
    for entry in remote_endpoints:
        endpoint = entry if isinstance(entry, WebhookEndpoint) else WebhookEndpoint.from_api(entry)
        if endpoint is None:
            continue
        if exclude_id and endpoint.id == exclude_id:
            continue
        if normalize_webhook_url(endpoint.url) == target:
            deletable.append(endpoint.id)
    return deletable


class WebhookReconciler:
    def __init__(self, settings: StripeSettings, api, page_size: int = 100):
        self.settings = settings
        self.api = api
        self.page_size = page_size

    def delete_previously_configured_webhooks(
        self,
        exclude_id: str | None = None,
        mode: Mode | str | None = None,
    ) -> list[str]:
        """Delete every remote webhook registered for this site except ``exclude_id``.

        Returns the ids that were deleted. A failed listing deletes nothing and
        a failed single delete does not stop the others.
        """
        mode = self.settings.resolve_mode(mode)
        try:
            remote = self.api.list_all("webhook_endpoints", params={"limit": self.page_size}, mode=mode)
        except StripeApiError as e:
            logger.warning("Could not list %s webhook endpoints: %s", mode.value, e)
            return []

        deleted = []
        for webhook_id in list_deletable(remote, self.settings.webhook_url, exclude_id):
            try:
                self.api.delete(f"webhook_endpoints/{webhook_id}", mode=mode)
            except StripeApiError as e:
                logger.warning("Could not delete webhook %s: %s", webhook_id, e)
                continue
            logger.info("Deleted previously configured webhook %s", webhook_id)
            deleted.append(webhook_id)
        return deleted


class WebhookStatusCache:
    """Memoizes whether the configured webhook is enabled on Stripe, per mode."""

    def __init__(
        self,
        settings: StripeSettings,
        api,
        store: KeyValueStore,
        ttl: float = WEBHOOK_STATUS_TTL,
    ):
        self.settings = settings
        self.api = api
        self.store = store
        self.ttl = ttl

    def is_enabled(self, mode: Mode | str | None = None) -> bool:
        mode = self.settings.resolve_mode(mode)
        webhook = self.settings.webhook_data_for(mode)
        if not webhook.secret or not webhook.id:
            return False

        key = WEBHOOK_STATUS_KEYS[mode]
        cached = self.store.get(key)
        if cached is not None:
            return cached

        try:
            endpoint = self.api.retrieve(f"webhook_endpoints/{webhook.id}", mode=mode)
        except StripeApiError as e:
            logger.warning("Could not look up %s webhook %s: %s", mode.value, webhook.id, e)
            return False

        enabled = endpoint.get("status") == "enabled"
        self.store.set(key, enabled, ttl=self.ttl)
        return enabled

    def clear(self) -> None:
        for key in WEBHOOK_STATUS_KEYS.values():
            self.store.delete(key)
