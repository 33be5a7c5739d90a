from dataclasses import dataclass


@dataclass
class WebhookEndpoint:
    id: str
    url: str

    @classmethod
    def from_api(cls, data: dict) -> "WebhookEndpoint | None":
        """Entries missing ``id`` or ``url`` are invalid and yield None."""
        if not isinstance(data, dict):
            return None
        endpoint_id = data.get("id")
        url = data.get("url")
        if not isinstance(endpoint_id, str) or not isinstance(url, str):
            return None
        if not endpoint_id or not url:
            return None
        return cls(id=endpoint_id, url=url)


@dataclass
class WebhookData:
    """Locally stored webhook registration for one mode."""

    id: str = ""
    secret: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "WebhookData":
        data = data or {}
        return cls(id=data.get("id") or "", secret=data.get("secret") or "")
