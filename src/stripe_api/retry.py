class RetryManager:
    """Manages retry decisions and backoff scheduling for Stripe API requests."""

    DEFAULT_SCHEDULE = [0.5, 1, 2]

    # Status codes worth another attempt besides 5xx
    RETRY_CODES = {429}

    def __init__(self, schedule: list[float] | None = None, max_retries: int | None = None):
        self.schedule = schedule or self.DEFAULT_SCHEDULE
        self.max_retries = max_retries if max_retries is not None else len(self.schedule)

    def should_retry(self, status_code: int | None) -> bool:
        """Determine if a request should be retried based on status code.

        Returns True for:
        - None (connection error / timeout)
        - 429 rate limiting
        - 5xx server errors
        Returns False for every other status, 2xx included.
        """
        if status_code is None:
            return True
        if status_code in self.RETRY_CODES:
            return True
        return status_code >= 500

    def next_delay(self, attempt: int) -> float:
        """Get the delay in seconds before the next retry attempt (0-indexed)."""
        if attempt >= len(self.schedule):
            return float(self.schedule[-1])
        return float(self.schedule[attempt])

    def has_attempts_remaining(self, attempt: int) -> bool:
        return attempt < self.max_retries
