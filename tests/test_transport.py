"""Tests for the aiohttp transport and the client against a local proxy using pytest-aiohttp."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest
from aiohttp import ClientConnectionError, ClientSession, web

from pyteleduino.client import TeleduinoClient
from pyteleduino.config import TeleduinoConfig
from pyteleduino.exceptions import (
    ApiError,
    MalformedResponseError,
    TeleduinoTimeoutError,
    TransportError,
)
from pyteleduino.models import ResponseKind
from pyteleduino.transport import AiohttpTransport

from helpers import API_KEY, FakeScheduler


if TYPE_CHECKING:
    from aiohttp.test_utils import TestClient
    from aiohttp.web import Application


API_PATH = "/api/1.0/328.php"


@pytest.fixture
def requests_seen() -> list[dict[str, str]]:
    """Collect the query of every request the fake proxy receives."""
    return []


@pytest.fixture
def app(requests_seen: list[dict[str, str]]) -> Application:
    """Create a fake Teleduino proxy."""
    app = web.Application()
    pins = {3: 0, 6: 0}

    async def handle(request: web.Request) -> web.Response:
        """Mock the single proxy endpoint."""
        query = dict(request.query)
        requests_seen.append(query)

        if query.get("k") != API_KEY:
            return web.json_response({"status": 403, "message": "Invalid key"}, status=HTTPStatus.FORBIDDEN)

        command = query.get("r")
        if command == "getUptime":
            return web.json_response({"status": 200, "response": {"result": 1, "time": 0.1, "values": [98765]}})
        if command == "getAllInputs":
            return web.json_response({"status": 200, "response": {"values": list(range(22))}})
        if command == "setDigitalOutputs":
            for pin in pins:
                if f"outputs[{pin}]" in query:
                    pins[pin] = int(query[f"outputs[{pin}]"])
            return web.json_response({"status": 200, "response": {"values": []}})
        if command == "getDigitalInput":
            return web.json_response({"status": 200, "response": {"values": [pins.get(int(query["pin"]), 0)]}})
        if command == "getVersion":
            return web.Response(text="<html>Bad Gateway</html>", status=HTTPStatus.BAD_GATEWAY)
        return web.json_response({"status": 400, "message": "Invalid request"}, status=HTTPStatus.BAD_REQUEST)

    app.router.add_get(API_PATH, handle)
    return app


@pytest.fixture
async def proxy(aiohttp_client: TestClient, app: Application) -> TestClient:
    """Start the fake proxy."""
    return await aiohttp_client(app)


@pytest.fixture
def proxy_config(proxy: TestClient) -> TeleduinoConfig:
    """Create a configuration pointing at the fake proxy."""
    return TeleduinoConfig(base_url=str(proxy.make_url(API_PATH)))


class TestAiohttpTransport:
    """Test AiohttpTransport against the fake proxy."""

    async def test_send_returns_status_and_body(self, proxy: TestClient, proxy_config: TeleduinoConfig) -> None:
        """Test a GET returns the raw status and body."""
        transport = AiohttpTransport(session=proxy.session)

        response = await transport.send(f"{proxy_config.base_url}?r=getUptime&k={API_KEY}")

        assert response.status == HTTPStatus.OK
        assert '"values": [98765]' in response.body

    async def test_encoded_query_not_requoted(
        self,
        proxy: TestClient,
        proxy_config: TeleduinoConfig,
        requests_seen: list[dict[str, str]],
    ) -> None:
        """Test percent-encoded brackets reach the server decoded once."""
        transport = AiohttpTransport(session=proxy.session)

        await transport.send(f"{proxy_config.base_url}?outputs%5B3%5D=1&r=setDigitalOutputs&k={API_KEY}")

        assert requests_seen[-1]["outputs[3]"] == "1"

    async def test_injected_session_not_closed(self, proxy: TestClient) -> None:
        """Test the transport leaves injected sessions open."""
        async with AiohttpTransport(session=proxy.session):
            pass

        assert not proxy.session.closed

    async def test_connection_error_wrapped(self) -> None:
        """Test aiohttp errors become TransportError."""
        session = MagicMock(spec=ClientSession)
        session.closed = False
        session.get.side_effect = ClientConnectionError("Connection refused")
        transport = AiohttpTransport(session=session)

        with pytest.raises(TransportError, match="Connection refused") as exc_info:
            await transport.send("https://proxy.test/api.php?r=ping&k=x")

        assert not isinstance(exc_info.value, TeleduinoTimeoutError)

    async def test_timeout_wrapped(self) -> None:
        """Test timeouts become TeleduinoTimeoutError."""
        session = MagicMock(spec=ClientSession)
        session.closed = False
        session.get.side_effect = TimeoutError()
        transport = AiohttpTransport(session=session)

        with pytest.raises(TeleduinoTimeoutError):
            await transport.send("https://proxy.test/api.php?r=ping&k=x")

    async def test_closed_session_rejected(self) -> None:
        """Test sending on a closed session."""
        session = MagicMock(spec=ClientSession)
        session.closed = True
        transport = AiohttpTransport(session=session)

        with pytest.raises(RuntimeError, match="Session is closed"):
            await transport.send("https://proxy.test/api.php")

    async def test_owned_session_reopened(self) -> None:
        """Test an owned session is recreated after being closed."""
        transport = AiohttpTransport()

        async with transport:
            first = transport.session
        async with transport:
            second = transport.session
            assert second is not first
            assert not second.closed

        assert first.closed
        assert second.closed


class TestClientAgainstProxy:
    """End-to-end tests of TeleduinoClient against the fake proxy."""

    async def test_uptime(self, proxy: TestClient, proxy_config: TeleduinoConfig) -> None:
        """Test reading the uptime."""
        board = TeleduinoClient(API_KEY, config=proxy_config, session=proxy.session)

        response = await board.get_uptime()

        assert response.kind is ResponseKind.VALUE
        assert response.value == 98765

    async def test_all_inputs(self, proxy: TestClient, proxy_config: TeleduinoConfig) -> None:
        """Test reading all inputs."""
        board = TeleduinoClient(API_KEY, config=proxy_config, session=proxy.session)

        response = await board.get_all_inputs()

        assert response.kind is ResponseKind.VALUES
        assert response.value == list(range(22))

    async def test_batch_write_then_read(
        self,
        proxy: TestClient,
        proxy_config: TeleduinoConfig,
        requests_seen: list[dict[str, str]],
    ) -> None:
        """Test a batched write is applied by the proxy."""
        board = TeleduinoClient(API_KEY, config=proxy_config, session=proxy.session)

        written = await board.set_digital_outputs(
            [
                {"pin": 3, "value": 1, "expire": 1000},
                {"pin": 6, "value": 2, "expire": 2000},
            ]
        )
        read = await board.get_digital_input(6)

        assert written.kind is ResponseKind.EMPTY
        assert read.value == 2
        assert requests_seen[0] == {
            "offset": "0",
            "outputs[3]": "1",
            "expire_times[3]": "1000",
            "outputs[6]": "2",
            "expire_times[6]": "2000",
            "r": "setDigitalOutputs",
            "k": API_KEY,
        }

    async def test_bad_key(self, proxy: TestClient, proxy_config: TeleduinoConfig) -> None:
        """Test a rejected key surfaces as an API error."""
        board = TeleduinoClient("wrong", config=proxy_config, session=proxy.session)

        response = await board.ping()

        assert isinstance(response.error, ApiError)
        assert str(response.error) == "Invalid key"
        assert response.status == HTTPStatus.FORBIDDEN

    async def test_non_json_body(self, proxy: TestClient, proxy_config: TeleduinoConfig) -> None:
        """Test an HTML error page is a malformed response."""
        board = TeleduinoClient(API_KEY, config=proxy_config, session=proxy.session)

        response = await board.get_version()

        assert isinstance(response.error, MalformedResponseError)

    async def test_reset_against_unknown_command(
        self,
        proxy: TestClient,
        proxy_config: TeleduinoConfig,
    ) -> None:
        """Test a reset rejected by the proxy does not poll."""
        scheduler = FakeScheduler()
        board = TeleduinoClient(API_KEY, config=proxy_config, session=proxy.session, scheduler=scheduler)

        response = await board.reset()

        assert isinstance(response.error, ApiError)
        assert scheduler.delays == []
