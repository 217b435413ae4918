"""Response history - bounded in-memory log of the most recent webhook responses."""
import threading
from collections import deque

from hookwatch.webhooks.models import WebhookResponse

MAX_HISTORY = 100


class ResponseHistory:
    """Thread-safe, insertion-ordered buffer. Oldest entries are evicted past capacity."""

    def __init__(self, capacity: int = MAX_HISTORY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque[WebhookResponse] = deque()
        self._lock = threading.Lock()

    def append(self, entry: WebhookResponse) -> None:
        with self._lock:
            self._entries.append(entry)
            while len(self._entries) > self.capacity:
                self._entries.popleft()

    def snapshot(self) -> list[WebhookResponse]:
        """Copy of all entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def latest(self) -> WebhookResponse | None:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
