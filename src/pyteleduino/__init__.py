"""Python client library for Teleduino-connected boards.

This package provides an async client for reading and driving the pins of a
microcontroller through the Teleduino proxy API.

The library is organized in a small pipeline:
1. **Validation** (pyteleduino.validation): Range checks run before any request
2. **Requests** (pyteleduino.request): Authenticated query-string construction
3. **Transport** (pyteleduino.transport): One aiohttp GET per call
4. **Responses** (pyteleduino.responses): Classification into ApiResponse results
5. **Client** (pyteleduino.client): Board operations and reset recovery

Example:
    Basic usage:

    ```python
    from pyteleduino import ResponseKind, TeleduinoClient

    async with TeleduinoClient("0123456789ABCDEF") as board:
        version = await board.get_version()
        print(f"Firmware: {version.result()}")

        await board.set_digital_outputs([
            {"pin": 3, "value": 1, "expire": 1000},
            {"pin": 6, "value": 0, "expire": 2000},
        ])

        response = await board.get_analog_input(14)
        match response.kind:
            case ResponseKind.VALUE:
                print(f"A0: {response.value}")
            case ResponseKind.ERROR:
                print(f"Read failed: {response.error}")
    ```
"""

from __future__ import annotations

from pyteleduino.client import TeleduinoClient
from pyteleduino.config import DEFAULT_CONFIG, TeleduinoConfig
from pyteleduino.exceptions import (
    ApiError,
    MalformedResponseError,
    ResetTimeoutError,
    TeleduinoError,
    TeleduinoTimeoutError,
    TransportError,
    UnexpectedStructureError,
    ValidationError,
)
from pyteleduino.models import ApiResponse, Command, OutputState, ResponseKind, TeleduinoCommand
from pyteleduino.request import build_outputs_params, build_query, build_url
from pyteleduino.reset import AsyncioScheduler, ResetSession, ResetState, Scheduler
from pyteleduino.responses import classify
from pyteleduino.transport import AiohttpTransport, Transport, TransportResponse
from pyteleduino.validation import (
    check_range,
    is_valid_analog_pin,
    is_valid_digital_output,
    is_valid_digital_pin,
    is_valid_digital_value,
    is_valid_expire_time,
)


__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "AiohttpTransport",
    "ApiError",
    "ApiResponse",
    "AsyncioScheduler",
    "Command",
    "MalformedResponseError",
    "OutputState",
    "ResetSession",
    "ResetState",
    "ResetTimeoutError",
    "ResponseKind",
    "Scheduler",
    "TeleduinoClient",
    "TeleduinoCommand",
    "TeleduinoConfig",
    "TeleduinoError",
    "TeleduinoTimeoutError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UnexpectedStructureError",
    "ValidationError",
    "__version__",
    "build_outputs_params",
    "build_query",
    "build_url",
    "check_range",
    "classify",
    "is_valid_analog_pin",
    "is_valid_digital_output",
    "is_valid_digital_pin",
    "is_valid_digital_value",
    "is_valid_expire_time",
]
