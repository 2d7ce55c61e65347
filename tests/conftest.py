"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest

from pyteleduino.client import TeleduinoClient
from pyteleduino.config import TeleduinoConfig

from helpers import API_KEY, FakeScheduler, ok_body


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@pytest.fixture
def config() -> TeleduinoConfig:
    """Create a configuration pointing at a fake endpoint."""
    return TeleduinoConfig(base_url="https://proxy.test/api.php")


@pytest.fixture
def mock_transport() -> AsyncMock:
    """Create a transport mock answering every request with an empty success."""
    transport = AsyncMock()
    transport.send = AsyncMock(return_value=ok_body())
    return transport


@pytest.fixture
def scheduler() -> FakeScheduler:
    """Create a scheduler that never sleeps."""
    return FakeScheduler()


@pytest.fixture
async def board(
    config: TeleduinoConfig,
    mock_transport: AsyncMock,
    scheduler: FakeScheduler,
) -> AsyncGenerator[TeleduinoClient]:
    """Create a client wired to the mock transport and fake scheduler.

    Yields:
        TeleduinoClient for testing.
    """
    async with TeleduinoClient(API_KEY, config=config, transport=mock_transport, scheduler=scheduler) as client:
        yield client
