"""Custom exceptions for pyteleduino library."""

from __future__ import annotations

from typing import Any


class TeleduinoError(Exception):
    """Base exception for all Teleduino errors."""


class ValidationError(TeleduinoError):
    """Exception raised when a pin, value or expiry time is out of range.

    Raised before any request is sent.

    Attributes:
        parameter_name: Optional name of the invalid parameter.
        value: Optional value that was invalid.
        minimum: Optional lowest accepted value.
        maximum: Optional highest accepted value.
    """

    def __init__(
        self,
        message: str = "",
        parameter_name: str | None = None,
        value: Any = None,
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Error message.
            parameter_name: Optional name of the invalid parameter.
            value: Optional value that was invalid.
            minimum: Optional lowest accepted value.
            maximum: Optional highest accepted value.
        """
        super().__init__(message)
        self.parameter_name = parameter_name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class TransportError(TeleduinoError):
    """Exception raised for connection failures."""


class TeleduinoTimeoutError(TransportError):
    """Exception raised when a request times out in the transport adapter."""


class MalformedResponseError(TeleduinoError):
    """Exception raised when the response body is not valid JSON."""


class UnexpectedStructureError(TeleduinoError):
    """Exception raised when a JSON body has neither values nor a message."""


class ApiError(TeleduinoError):
    """Exception raised when the proxy answers with an error message.

    Attributes:
        status: Optional HTTP status code of the response.
    """

    def __init__(self, message: str = "", status: int | None = None) -> None:
        """Initialize ApiError.

        Args:
            message: Message returned by the proxy, verbatim.
            status: Optional HTTP status code of the response.
        """
        super().__init__(message)
        self.status = status


class ResetTimeoutError(TeleduinoError):
    """Exception raised when the device does not answer pings after a reset.

    Attributes:
        attempts: Number of pings issued before giving up.
        last_error: Error reported by the final ping, if any.
    """

    def __init__(
        self,
        message: str = "",
        attempts: int = 0,
        last_error: TeleduinoError | None = None,
    ) -> None:
        """Initialize ResetTimeoutError.

        Args:
            message: Error message.
            attempts: Number of pings issued before giving up.
            last_error: Error reported by the final ping, if any.
        """
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
