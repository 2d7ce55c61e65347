"""Immutable configuration for the Teleduino client."""

from __future__ import annotations

from dataclasses import dataclass

from pyteleduino.const import (
    ANALOG_PIN_MAX,
    ANALOG_PIN_MIN,
    DEFAULT_BASE_URL,
    DEFAULT_RESET_MAX_POLLS,
    DEFAULT_RESET_POLL_INTERVAL,
    DEFAULT_RESET_SETTLE_DELAY,
    DEFAULT_TIMEOUT,
    DIGITAL_PIN_MAX,
    DIGITAL_PIN_MIN,
    DIGITAL_VALUE_MAX,
    DIGITAL_VALUE_MIN,
    EXPIRE_TIME_MAX,
    EXPIRE_TIME_MIN,
)


__all__ = ["DEFAULT_CONFIG", "TeleduinoConfig"]


@dataclass(frozen=True)
class TeleduinoConfig:
    """Process-wide configuration injected at client construction.

    Attributes:
        base_url: Proxy endpoint that every command is sent to.
        digital_pin_min: Lowest valid digital pin.
        digital_pin_max: Highest valid digital pin.
        analog_pin_min: Lowest valid analog pin.
        analog_pin_max: Highest valid analog pin.
        digital_value_min: Lowest valid digital output value.
        digital_value_max: Highest valid digital output value.
        expire_time_min: Shortest output expiry in milliseconds.
        expire_time_max: Longest output expiry in milliseconds.
        reset_settle_delay: Seconds to wait after a reset before polling.
        reset_poll_interval: Seconds between reset polls.
        reset_max_polls: Number of pings before a reset is declared failed.
        request_timeout: Total seconds per HTTP request, or None for no limit.
    """

    base_url: str = DEFAULT_BASE_URL
    digital_pin_min: int = DIGITAL_PIN_MIN
    digital_pin_max: int = DIGITAL_PIN_MAX
    analog_pin_min: int = ANALOG_PIN_MIN
    analog_pin_max: int = ANALOG_PIN_MAX
    digital_value_min: int = DIGITAL_VALUE_MIN
    digital_value_max: int = DIGITAL_VALUE_MAX
    expire_time_min: int = EXPIRE_TIME_MIN
    expire_time_max: int = EXPIRE_TIME_MAX
    reset_settle_delay: float = DEFAULT_RESET_SETTLE_DELAY
    reset_poll_interval: float = DEFAULT_RESET_POLL_INTERVAL
    reset_max_polls: int = DEFAULT_RESET_MAX_POLLS
    request_timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        """Reject configurations the reset machine cannot run with."""
        if self.reset_max_polls < 1:
            msg = f"reset_max_polls must be at least 1, got {self.reset_max_polls}"
            raise ValueError(msg)
        if self.reset_settle_delay < 0 or self.reset_poll_interval < 0:
            msg = "Reset delays cannot be negative"
            raise ValueError(msg)


DEFAULT_CONFIG = TeleduinoConfig()
