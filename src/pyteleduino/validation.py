"""Range checks run before any request reaches the network.

Every check is inclusive on both ends. With ``raise_error`` (the default for
the derived checks) a violation raises ValidationError naming the offending
value and the accepted range; otherwise the check just returns False.
"""

from __future__ import annotations

from typing import Any

from pyteleduino.config import DEFAULT_CONFIG, TeleduinoConfig
from pyteleduino.exceptions import ValidationError


__all__ = [
    "check_range",
    "is_valid_analog_pin",
    "is_valid_digital_output",
    "is_valid_digital_pin",
    "is_valid_digital_value",
    "is_valid_expire_time",
]


def check_range(value: Any, minimum: int, maximum: int, parameter_name: str | None = None) -> bool:
    """Check that an integer lies within ``[minimum, maximum]``.

    Args:
        value: Value to test.
        minimum: Lowest accepted value.
        maximum: Highest accepted value.
        parameter_name: When given, a violation raises instead of returning False.

    Returns:
        True if the value is an integer within range, False otherwise.

    Raises:
        ValidationError: If out of range and parameter_name is given.
    """
    # bool is an int subclass but never a pin or value
    if isinstance(value, int) and not isinstance(value, bool) and minimum <= value <= maximum:
        return True

    if parameter_name is None:
        return False

    msg = f"Invalid {parameter_name} {value!r} (expected value between {minimum} and {maximum})"
    raise ValidationError(msg, parameter_name=parameter_name, value=value, minimum=minimum, maximum=maximum)


def is_valid_digital_pin(
    pin: Any,
    *,
    config: TeleduinoConfig = DEFAULT_CONFIG,
    raise_error: bool = True,
) -> bool:
    """Check a digital pin number."""
    name = "digital pin" if raise_error else None
    return check_range(pin, config.digital_pin_min, config.digital_pin_max, name)


def is_valid_analog_pin(
    pin: Any,
    *,
    config: TeleduinoConfig = DEFAULT_CONFIG,
    raise_error: bool = True,
) -> bool:
    """Check an analog pin number."""
    name = "analog pin" if raise_error else None
    return check_range(pin, config.analog_pin_min, config.analog_pin_max, name)


def is_valid_digital_value(
    value: Any,
    *,
    config: TeleduinoConfig = DEFAULT_CONFIG,
    raise_error: bool = True,
) -> bool:
    """Check a digital output value."""
    name = "digital value" if raise_error else None
    return check_range(value, config.digital_value_min, config.digital_value_max, name)


def is_valid_expire_time(
    expire_time: Any,
    *,
    config: TeleduinoConfig = DEFAULT_CONFIG,
    raise_error: bool = True,
) -> bool:
    """Check an output expiry time in milliseconds.

    Values beyond the device's 24-bit counter are rejected, never clamped.
    """
    name = "expiry time" if raise_error else None
    return check_range(expire_time, config.expire_time_min, config.expire_time_max, name)


def is_valid_digital_output(
    pin: Any,
    value: Any,
    expire_time: Any,
    *,
    config: TeleduinoConfig = DEFAULT_CONFIG,
    raise_error: bool = True,
) -> bool:
    """Check pin, value and expiry of one output, stopping at the first failure."""
    return (
        is_valid_digital_pin(pin, config=config, raise_error=raise_error)
        and is_valid_digital_value(value, config=config, raise_error=raise_error)
        and is_valid_expire_time(expire_time, config=config, raise_error=raise_error)
    )
