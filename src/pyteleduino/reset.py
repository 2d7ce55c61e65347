"""Reset-recovery state machine.

After a reset command the board is unreachable for a while. The session waits
a settle delay, then pings the proxy at a fixed interval until the board
answers or the poll budget runs out:

    RESETTING -> WAITING -> POLLING -> SUCCEEDED | FAILED

Delays go through a Scheduler so the machine can be driven without real
wall-clock waits.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pyteleduino.config import DEFAULT_CONFIG, TeleduinoConfig
from pyteleduino.exceptions import ResetTimeoutError
from pyteleduino.models import ApiResponse


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_LOGGER = logging.getLogger(__name__)


class ResetState(Enum):
    """Reset-recovery states."""

    IDLE = "idle"  # Not started
    RESETTING = "resetting"  # Reset command in flight
    WAITING = "waiting"  # Board rebooting, settle delay running
    POLLING = "polling"  # Pinging until the board answers
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Scheduler(Protocol):
    """Source of non-blocking delays."""

    async def sleep(self, delay: float) -> None:
        """Suspend the calling task for ``delay`` seconds."""
        ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    async def sleep(self, delay: float) -> None:
        """Suspend the calling task for ``delay`` seconds."""
        await asyncio.sleep(delay)


class ResetSession:
    """One run of the reset-recovery protocol.

    Only one ping is ever in flight: the next poll is scheduled after the
    previous one resolves.

    Example:
        ```python
        session = ResetSession(
            send_reset=lambda: client.request(Command("reset")),
            send_ping=client.ping,
        )
        response = await session.run()
        print(session.state, session.polls)
        ```
    """

    def __init__(
        self,
        send_reset: Callable[[], Awaitable[ApiResponse]],
        send_ping: Callable[[], Awaitable[ApiResponse]],
        *,
        config: TeleduinoConfig = DEFAULT_CONFIG,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            send_reset: Coroutine factory issuing the reset command.
            send_ping: Coroutine factory issuing one ping.
            config: Source of the settle delay, poll interval and poll budget.
            scheduler: Optional Scheduler; defaults to asyncio.sleep.
        """
        self._send_reset = send_reset
        self._send_ping = send_ping
        self._settle_delay = config.reset_settle_delay
        self._poll_interval = config.reset_poll_interval
        self._max_polls = config.reset_max_polls
        self._scheduler = scheduler or AsyncioScheduler()

        self._state = ResetState.IDLE
        self._attempts_remaining = self._max_polls
        self._polls = 0

    @property
    def state(self) -> ResetState:
        """Get current state."""
        return self._state

    @property
    def attempts_remaining(self) -> int:
        """Get number of pings left in the budget."""
        return self._attempts_remaining

    @property
    def polls(self) -> int:
        """Get number of pings issued so far."""
        return self._polls

    def _transition(self, state: ResetState) -> None:
        _LOGGER.info("Reset %s -> %s", self._state.value, state.value)
        self._state = state

    async def run(self) -> ApiResponse:
        """Drive the session to SUCCEEDED or FAILED.

        Returns:
            EMPTY response on recovery; ERROR carrying the reset command's
            error, or a ResetTimeoutError once the poll budget is spent.

        Raises:
            RuntimeError: If the session has already been started.
        """
        if self._state is not ResetState.IDLE:
            msg = f"Reset session already {self._state.value}"
            raise RuntimeError(msg)

        self._transition(ResetState.RESETTING)
        response = await self._send_reset()
        if not response.ok:
            _LOGGER.warning("Reset command failed: %s", response.error)
            self._transition(ResetState.FAILED)
            return response

        self._transition(ResetState.WAITING)
        await self._scheduler.sleep(self._settle_delay)

        self._transition(ResetState.POLLING)
        while True:
            self._polls += 1
            ping = await self._send_ping()
            if ping.ok:
                self._transition(ResetState.SUCCEEDED)
                return ApiResponse.empty(ping.status)

            self._attempts_remaining -= 1
            _LOGGER.warning(
                "Ping %d/%d after reset failed: %s",
                self._polls,
                self._max_polls,
                ping.error,
            )

            if self._attempts_remaining <= 0:
                self._transition(ResetState.FAILED)
                error = ResetTimeoutError("Reset timeout", attempts=self._polls, last_error=ping.error)
                return ApiResponse.failure(error)

            await self._scheduler.sleep(self._poll_interval)
