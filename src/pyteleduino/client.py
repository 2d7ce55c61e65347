"""High-level client for a Teleduino-connected board.

This module ties the pipeline together: operations validate their inputs,
build a command, send it through the transport and classify the response.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pyteleduino.config import DEFAULT_CONFIG, TeleduinoConfig
from pyteleduino.exceptions import TransportError, ValidationError
from pyteleduino.models import ApiResponse, Command, OutputState, TeleduinoCommand
from pyteleduino.request import build_outputs_params, build_url
from pyteleduino.reset import ResetSession
from pyteleduino.responses import classify
from pyteleduino.transport import AiohttpTransport
from pyteleduino.validation import is_valid_analog_pin, is_valid_digital_output, is_valid_digital_pin


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from aiohttp import ClientSession

    from pyteleduino.reset import Scheduler
    from pyteleduino.transport import Transport

    ResponseCallback = Callable[[ApiResponse], None]

_LOGGER = logging.getLogger(__name__)


class TeleduinoClient:
    """Client for the pins of one board behind the Teleduino proxy.

    Every operation returns an ApiResponse and, if a callback is given, also
    passes it to the callback. Network and payload failures come back as
    ERROR responses. Out-of-range arguments raise ValidationError before
    anything is sent.

    Example:
        Basic usage with automatic session management:

        ```python
        from pyteleduino import TeleduinoClient

        async with TeleduinoClient("0123456789ABCDEF") as board:
            uptime = await board.get_uptime()
            print(f"Uptime: {uptime.result()} ms")

            # Drive pin 5 high for one second
            await board.set_digital_output(5, 1, 1000)

            # Read all inputs at once
            inputs = await board.get_all_inputs()
            print(inputs.value)
        ```

        Session injection and a custom endpoint:

        ```python
        from aiohttp import ClientSession
        from pyteleduino import TeleduinoClient, TeleduinoConfig

        config = TeleduinoConfig(base_url="https://us02.proxy.teleduino.org/api/1.0/328.php")

        async with ClientSession() as session:
            board = TeleduinoClient("0123456789ABCDEF", config=config, session=session)
            response = await board.reset()
            if not response.ok:
                print(f"Board did not come back: {response.error}")
        ```
    """

    def __init__(
        self,
        api_key: str,
        *,
        config: TeleduinoConfig = DEFAULT_CONFIG,
        transport: Transport | None = None,
        session: ClientSession | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the Teleduino client.

        Args:
            api_key: Teleduino API key of the board.
            config: Endpoint, validation ranges and reset timings.
            transport: Optional Transport. If not provided, an AiohttpTransport
                is created around ``session``.
            session: Optional aiohttp ClientSession for the default transport.
                If not provided, one will be created when entering the context manager.
                Cannot be combined with ``transport``.
            scheduler: Optional Scheduler for the reset delays.

        Raises:
            ValueError: If both transport and session are given.
        """
        if transport is not None and session is not None:
            msg = "Pass either a transport or a session, not both"
            raise ValueError(msg)

        self._api_key = api_key
        self._config = config
        self._scheduler = scheduler

        self._aiohttp_transport: AiohttpTransport | None = None
        if transport is None:
            self._aiohttp_transport = AiohttpTransport(session=session, timeout=config.request_timeout)
            transport = self._aiohttp_transport
        self._transport: Transport = transport

    @property
    def config(self) -> TeleduinoConfig:
        """Get the client configuration."""
        return self._config

    @property
    def transport(self) -> Transport:
        """Get the transport used for requests."""
        return self._transport

    async def __aenter__(self) -> TeleduinoClient:
        """Enter the context manager.

        Creates the HTTP session if the client owns its transport.

        Returns:
            Self for use in async with statements.
        """
        if self._aiohttp_transport is not None:
            await self._aiohttp_transport.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._aiohttp_transport is not None:
            await self._aiohttp_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def request(self, command: Command, callback: ResponseCallback | None = None) -> ApiResponse:
        """Send a command and classify the answer.

        This is the core method for all operations. Transport failures are
        returned as ERROR responses rather than raised.

        Args:
            command: Command to send.
            callback: Optional callable receiving the response.

        Returns:
            Classified ApiResponse.

        Raises:
            RuntimeError: If the default transport has no open session.
        """
        url = build_url(self._config.base_url, command, self._api_key)
        _LOGGER.debug("Sending %s with %d parameter(s)", command.name, len(command.params))

        try:
            raw = await self._transport.send(url)
        except TransportError as err:
            response = ApiResponse.failure(err)
        else:
            response = classify(raw.status, raw.body)

        _LOGGER.debug("%s finished as %s", command.name, response.kind.value)
        return self._deliver(response, callback)

    @staticmethod
    def _deliver(response: ApiResponse, callback: ResponseCallback | None) -> ApiResponse:
        if callback is not None:
            callback(response)
        return response

    # -------------------------------------------------------------------------
    # Board Information
    # -------------------------------------------------------------------------

    async def get_uptime(self, callback: ResponseCallback | None = None) -> ApiResponse:
        """Get the uptime of the board in milliseconds."""
        return await self.request(Command(TeleduinoCommand.GET_UPTIME), callback)

    async def get_version(self, callback: ResponseCallback | None = None) -> ApiResponse:
        """Get the firmware version of the board."""
        return await self.request(Command(TeleduinoCommand.GET_VERSION), callback)

    async def get_free_memory(self, callback: ResponseCallback | None = None) -> ApiResponse:
        """Get the free memory of the board in bytes."""
        return await self.request(Command(TeleduinoCommand.GET_FREE_MEMORY), callback)

    async def ping(self, callback: ResponseCallback | None = None) -> ApiResponse:
        """Ping the board through the proxy."""
        return await self.request(Command(TeleduinoCommand.PING), callback)

    async def reset(self, callback: ResponseCallback | None = None) -> ApiResponse:
        """Reset the board and wait until it answers pings again.

        Waits the configured settle delay after the reset command, then pings
        at a fixed interval until the board answers or the poll budget is
        spent. The callback, if any, is called once with the final outcome.

        Args:
            callback: Optional callable receiving the final response.

        Returns:
            EMPTY response once the board is back; ERROR with the reset
            command's error or a ResetTimeoutError otherwise.
        """
        session = ResetSession(
            send_reset=lambda: self.request(Command(TeleduinoCommand.RESET)),
            send_ping=self.ping,
            config=self._config,
            scheduler=self._scheduler,
        )
        response = await session.run()
        return self._deliver(response, callback)

    # -------------------------------------------------------------------------
    # Pin I/O
    # -------------------------------------------------------------------------

    async def set_digital_output(
        self,
        pin: int,
        value: int,
        expire_time: int,
        callback: ResponseCallback | None = None,
    ) -> ApiResponse:
        """Set the output of a digital pin.

        Args:
            pin: Digital pin (0-19).
            value: Output value (0-2).
            expire_time: Milliseconds before the board reverts the output (0-16777215).
            callback: Optional callable receiving the response.

        Returns:
            Classified ApiResponse.

        Raises:
            ValidationError: If any argument is outside its valid range.
        """
        is_valid_digital_output(pin, value, expire_time, config=self._config)

        command = Command(
            TeleduinoCommand.SET_DIGITAL_OUTPUT,
            {"pin": pin, "output": value, "expire_time": expire_time},
        )
        return await self.request(command, callback)

    async def set_digital_outputs(
        self,
        outputs: Iterable[OutputState | Mapping[str, Any]],
        callback: ResponseCallback | None = None,
    ) -> ApiResponse:
        """Set the outputs of several digital pins in one request.

        Every entry is validated before anything is sent; a single invalid
        entry rejects the whole batch.

        Example:
            >>> await board.set_digital_outputs([
            ...     {"pin": 3, "value": 1, "expire": 1000},
            ...     {"pin": 6, "value": 0, "expire": 2000},
            ... ])

        Args:
            outputs: OutputState objects or ``{pin, value, expire}`` mappings.
            callback: Optional callable receiving the response.

        Returns:
            Classified ApiResponse.

        Raises:
            ValidationError: If the batch is empty or any entry is invalid.
        """
        states = [self._to_output_state(output) for output in outputs]
        if not states:
            msg = "At least one output is required"
            raise ValidationError(msg, parameter_name="outputs", value=states)

        for state in states:
            is_valid_digital_output(state.pin, state.value, state.expire_time, config=self._config)

        command = Command(TeleduinoCommand.SET_DIGITAL_OUTPUTS, build_outputs_params(states))
        return await self.request(command, callback)

    async def get_digital_input(self, pin: int, callback: ResponseCallback | None = None) -> ApiResponse:
        """Read a digital pin (0=low, 1=high).

        Raises:
            ValidationError: If the pin is not a valid digital pin.
        """
        is_valid_digital_pin(pin, config=self._config)
        return await self.request(Command(TeleduinoCommand.GET_DIGITAL_INPUT, {"pin": pin}), callback)

    async def get_analog_input(self, pin: int, callback: ResponseCallback | None = None) -> ApiResponse:
        """Read an analog pin (0-1023).

        Raises:
            ValidationError: If the pin is not a valid analog pin.
        """
        is_valid_analog_pin(pin, config=self._config)
        return await self.request(Command(TeleduinoCommand.GET_ANALOG_INPUT, {"pin": pin}), callback)

    async def get_all_inputs(self, callback: ResponseCallback | None = None) -> ApiResponse:
        """Read every digital and analog pin in one request."""
        return await self.request(Command(TeleduinoCommand.GET_ALL_INPUTS), callback)

    @staticmethod
    def _to_output_state(output: OutputState | Mapping[str, Any]) -> OutputState:
        if isinstance(output, OutputState):
            return output
        if isinstance(output, Mapping):
            return OutputState.from_mapping(output)
        msg = f"Invalid output entry {output!r} (expected OutputState or mapping)"
        raise ValidationError(msg, parameter_name="outputs", value=output)
