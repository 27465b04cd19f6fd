from __future__ import annotations


class PresenceWatchdog:
    """Tells when no hand has been seen for longer than ``timeout`` seconds."""

    def __init__(self, timeout: float = 10.0, now: float = 0.0) -> None:
        self.timeout = timeout
        self.last_seen = now

    def seen(self, now: float) -> None:
        self.last_seen = now

    def expired(self, now: float) -> bool:
        return now - self.last_seen > self.timeout

    def rearm(self, now: float) -> None:
        self.last_seen = now
