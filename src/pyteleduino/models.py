"""Data models for Teleduino API requests and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Mapping

    from pyteleduino.exceptions import TeleduinoError


__all__ = [
    "ApiResponse",
    "Command",
    "OutputState",
    "ResponseKind",
    "TeleduinoCommand",
]


class TeleduinoCommand(StrEnum):
    """Command names understood by the Teleduino proxy."""

    GET_UPTIME = "getUptime"
    GET_VERSION = "getVersion"
    GET_FREE_MEMORY = "getFreeMemory"
    PING = "ping"
    RESET = "reset"
    SET_DIGITAL_OUTPUT = "setDigitalOutput"
    SET_DIGITAL_OUTPUTS = "setDigitalOutputs"
    GET_DIGITAL_INPUT = "getDigitalInput"
    GET_ANALOG_INPUT = "getAnalogInput"
    GET_ALL_INPUTS = "getAllInputs"


@dataclass(frozen=True)
class Command:
    """A single API command and its operation-specific parameters.

    Attributes:
        name: Command name sent as the ``r`` query parameter.
        params: Parameters in insertion order; frozen after construction.
    """

    name: str
    params: Mapping[str, int | str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the parameter mapping."""
        name = self.name.value if isinstance(self.name, TeleduinoCommand) else self.name
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


@dataclass(frozen=True)
class OutputState:
    """Requested state of one digital output.

    Attributes:
        pin: Digital pin (0-19).
        value: Output value (0-2).
        expire_time: Milliseconds before the device reverts the output (0-16777215).
    """

    pin: int
    value: int
    expire_time: int

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> OutputState:
        """Build an output state from a ``{pin, value, expire}`` mapping.

        ``expire_time`` is accepted as an alias of ``expire``.
        """
        expire = data.get("expire", data.get("expire_time"))
        return cls(pin=data.get("pin"), value=data.get("value"), expire_time=expire)  # type: ignore[arg-type]


class ResponseKind(Enum):
    """Shape of a classified API response."""

    VALUES = "values"  # More than one value
    VALUE = "value"  # Exactly one value, unwrapped
    EMPTY = "empty"  # No values
    ERROR = "error"  # Transport, API or payload failure


@dataclass(frozen=True)
class ApiResponse:
    """Discriminated result of a Teleduino API call.

    Exactly one of the four kinds. Callers may match on ``kind`` or call
    ``result()`` to get the value and have failures raised.

    Attributes:
        kind: Which shape the response has.
        value: List for VALUES, scalar for VALUE, None otherwise.
        error: The failure for ERROR, None otherwise.
        status: HTTP status code, when a response was received.
    """

    kind: ResponseKind
    value: Any = None
    error: TeleduinoError | None = None
    status: int | None = None

    @classmethod
    def from_values(cls, values: list[Any], status: int | None = None) -> ApiResponse:
        """Build a success response, unwrapping single-element lists."""
        if len(values) > 1:
            return cls(kind=ResponseKind.VALUES, value=list(values), status=status)
        if len(values) == 1:
            return cls(kind=ResponseKind.VALUE, value=values[0], status=status)
        return cls.empty(status)

    @classmethod
    def empty(cls, status: int | None = None) -> ApiResponse:
        """Build a success response without a value."""
        return cls(kind=ResponseKind.EMPTY, status=status)

    @classmethod
    def failure(cls, error: TeleduinoError, status: int | None = None) -> ApiResponse:
        """Build an error response."""
        return cls(kind=ResponseKind.ERROR, error=error, status=status)

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return self.kind is not ResponseKind.ERROR

    def result(self) -> Any:
        """Return the value, raising the carried error on failure.

        Raises:
            TeleduinoError: The error carried by an ERROR response.
        """
        if self.error is not None:
            raise self.error
        return self.value
