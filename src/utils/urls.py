import re

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


def normalize_webhook_url(url: str) -> str:
    """Strip the scheme and trailing slashes so http/https and "/" variants compare equal."""
    return _SCHEME.sub("", url.strip()).rstrip("/")
