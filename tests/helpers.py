"""Shared test doubles and payload builders."""

from __future__ import annotations

import json
from typing import Any

from pyteleduino.transport import TransportResponse


API_KEY = "0123456789ABCDEF"


def ok_body(*values: Any) -> TransportResponse:
    """Build a successful proxy response carrying ``values``."""
    return TransportResponse(status=200, body=json.dumps({"response": {"values": list(values)}}))


def error_body(message: str, status: int = 200) -> TransportResponse:
    """Build a proxy error response."""
    return TransportResponse(status=status, body=json.dumps({"message": message}))


class FakeScheduler:
    """Scheduler that records delays instead of sleeping."""

    def __init__(self, events: list[str] | None = None) -> None:
        """Initialize the scheduler.

        Args:
            events: Optional shared log that sleeps are appended to, so tests can
                check their order against other calls.
        """
        self.delays: list[float] = []
        self.events = events if events is not None else []

    async def sleep(self, delay: float) -> None:
        """Record the delay and return immediately."""
        self.delays.append(delay)
        self.events.append(f"sleep:{delay}")
