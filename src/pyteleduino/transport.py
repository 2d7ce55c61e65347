"""HTTP transport adapter for the Teleduino proxy.

The transport performs exactly one GET per call and hands back the raw status
and body. It never retries and never interprets the payload; classification
happens in pyteleduino.responses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout
from yarl import URL

from pyteleduino.const import DEFAULT_TIMEOUT
from pyteleduino.exceptions import TeleduinoTimeoutError, TransportError


if TYPE_CHECKING:
    from types import TracebackType

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of a GET request.

    Attributes:
        status: HTTP status code.
        body: Response body as text.
    """

    status: int
    body: str


class Transport(Protocol):
    """Anything able to perform a GET and return status and body."""

    async def send(self, url: str) -> TransportResponse:
        """Send a GET request.

        Raises:
            TransportError: If the request could not be completed.
        """
        ...


class AiohttpTransport:
    """Transport backed by an aiohttp ClientSession.

    Example:
        ```python
        from aiohttp import ClientSession
        from pyteleduino.transport import AiohttpTransport

        async with ClientSession() as session:
            transport = AiohttpTransport(session=session)
            response = await transport.send(url)
            print(response.status, response.body)
        ```
    """

    def __init__(
        self,
        session: ClientSession | None = None,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the transport.

        Args:
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            timeout: Total seconds per request, or None to wait indefinitely.
        """
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout

    @property
    def session(self) -> ClientSession | None:
        """Get the underlying session, if any."""
        return self._session

    async def __aenter__(self) -> AiohttpTransport:
        """Enter the context manager, creating a session if needed.

        Returns:
            Self for use in async with statements.
        """
        if self._session is None or (self._owns_session and self._session.closed):
            self._session = ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Closes session if it was created by this transport.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        await self.close()

    async def close(self) -> None:
        """Close the session if this transport owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def send(self, url: str) -> TransportResponse:
        """Perform a GET request.

        Args:
            url: Fully built request URL.

        Returns:
            TransportResponse with the status and body text.

        Raises:
            RuntimeError: If session is not initialized or is closed.
            TeleduinoTimeoutError: If the request times out.
            TransportError: If the connection fails.
        """
        if self._session is None:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise RuntimeError(msg)

        if self._session.closed:
            msg = "Session is closed. Cannot make request."
            raise RuntimeError(msg)

        timeout = ClientTimeout(total=self._timeout)

        try:
            # The query is already percent-encoded; keep aiohttp from re-quoting it
            async with self._session.get(URL(url, encoded=True), timeout=timeout) as response:
                body = await response.text(errors="replace")
                return TransportResponse(status=response.status, body=body)

        except TimeoutError as err:
            _LOGGER.exception("Request to Teleduino proxy timed out")
            msg = "Request timed out"
            raise TeleduinoTimeoutError(msg) from err

        except ClientError as err:
            _LOGGER.exception("Connection error talking to Teleduino proxy")
            msg = f"Connection error: {err}"
            raise TransportError(msg) from err
