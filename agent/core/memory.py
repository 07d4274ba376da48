from __future__ import annotations

"""Per-sender conversation memory.

Only the last few raw messages a sender asked titles for are kept, so a
"give me another batch" request can be answered without the sender pasting
the transcript again. The store lives for the process lifetime; the number
of tracked senders is capped (least recently used first out) and idle
entries can optionally expire.
"""

import threading
import time
from collections import deque
from typing import Callable, Deque, List, Optional

from cachetools import LRUCache, TTLCache


class ConversationMemory:
    def __init__(
        self,
        capacity: int = 3,
        max_senders: int = 10000,
        ttl_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if max_senders < 1:
            raise ValueError("max_senders must be at least 1")
        self.capacity = capacity
        self.max_senders = max_senders
        self.ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        # sender -> bounded history, oldest first
        if ttl_seconds > 0:
            self._senders = TTLCache(maxsize=max_senders, ttl=ttl_seconds, timer=clock)
        else:
            self._senders = LRUCache(maxsize=max_senders)

    def remember(self, sender: str, text: str) -> None:
        """Append ``text`` to the sender's history, evicting the oldest entry when full."""
        with self._lock:
            history: Optional[Deque[str]] = self._senders.get(sender)
            if history is None:
                history = deque(maxlen=self.capacity)
            history.append(text)
            # re-set to refresh recency and expiry
            self._senders[sender] = history

    def last_input(self, sender: str) -> Optional[str]:
        """Most recently remembered text, or None when the sender has no history."""
        with self._lock:
            history = self._senders.get(sender)
            if not history:
                return None
            return history[-1]

    def history(self, sender: str) -> List[str]:
        with self._lock:
            history = self._senders.get(sender)
            return list(history) if history else []

    def __len__(self) -> int:
        with self._lock:
            if isinstance(self._senders, TTLCache):
                self._senders.expire()
            return len(self._senders)
