"""Per-provider fixed-window rate limiting."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass(slots=True)
class RateWindowState:
    """Request count inside the current window of one provider."""

    count: int
    window_reset_at: float


class RateLimiter:
    """Non-blocking fixed-window gate keyed by provider name.

    ``try_acquire`` never waits: it only reports whether the provider may be
    called now. Each provider's counter has its own lock, so checks against
    one provider never contend with checks against another.
    """

    def __init__(self, max_requests: int = 10, window_ms: float = 60_000, clock: Clock | None = None):
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_ms <= 0:
            raise ValueError("window_ms must be > 0")
        self.max_requests = max_requests
        self.window_ms = window_ms
        self._clock = clock or monotonic_ms
        self._states: dict[str, RateWindowState] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def try_acquire(self, provider: str) -> bool:
        """Take one request from the provider's budget if any is left."""
        with self._lock_for(provider):
            now = self._clock()
            state = self._states.get(provider)
            if state is None or now >= state.window_reset_at:
                self._states[provider] = RateWindowState(count=1, window_reset_at=now + self.window_ms)
                return True
            if state.count < self.max_requests:
                state.count += 1
                return True
            return False

    def state(self, provider: str) -> RateWindowState | None:
        """Snapshot of the provider's window, or None if never called."""
        with self._lock_for(provider):
            state = self._states.get(provider)
            if state is None:
                return None
            return RateWindowState(count=state.count, window_reset_at=state.window_reset_at)

    def reset(self, provider: str | None = None) -> None:
        """Forget window state for one provider, or for all of them."""
        with self._registry_lock:
            names = list(self._states) if provider is None else [provider]
        for name in names:
            with self._lock_for(name):
                self._states.pop(name, None)

    def _lock_for(self, provider: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(provider)
            if lock is None:
                lock = self._locks[provider] = threading.Lock()
            return lock
