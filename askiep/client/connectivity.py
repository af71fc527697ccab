"""Connectivity state shared by the client's accessors."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class ConnectivityStatus:
    online: bool
    checked_at: datetime | None = None
    latency_ms: float | None = None
    error: str | None = None

    @property
    def offline(self) -> bool:
        return not self.online


class ConnectivityMonitor:
    """Holds the result of the latest health check.

    Only the client updates it; everyone else reads ``status``.
    """

    def __init__(self) -> None:
        self._status = ConnectivityStatus(online=True)

    @property
    def status(self) -> ConnectivityStatus:
        return self._status

    @property
    def is_online(self) -> bool:
        return self._status.online

    def record(
        self, online: bool, *, latency_ms: float | None = None, error: str | None = None
    ) -> ConnectivityStatus:
        self._status = ConnectivityStatus(
            online=online,
            checked_at=datetime.now(timezone.utc),
            latency_ms=latency_ms,
            error=error,
        )
        return self._status
