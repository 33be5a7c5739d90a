from dataclasses import dataclass
from datetime import datetime


@dataclass
class ApiRequest:
    request_id: str
    method: str
    path: str
    status_code: int | None
    timestamp: datetime
    response_time_ms: float
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300
