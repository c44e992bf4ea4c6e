"""Port for the process-wide throttle flag store."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ThrottleStore(Protocol):
    """Key/value flags with TTL expiry."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    def acquire(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Set ``key`` only if absent or expired; return whether it was set."""
        ...

    def clear(self, key: str) -> None: ...


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)
