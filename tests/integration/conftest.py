"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from pyteleduino.const import DEFAULT_BASE_URL


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from pyteleduino import TeleduinoClient


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_config() -> dict[str, str]:
    """Load integration test configuration from environment.

    Returns:
        Dictionary with the API key and endpoint.
    """
    api_key = os.getenv("TELEDUINO_API_KEY")
    if not api_key:
        pytest.skip("TELEDUINO_API_KEY not set; create a .env file to run integration tests")

    return {
        "api_key": api_key,
        "base_url": os.getenv("TELEDUINO_API_URL", DEFAULT_BASE_URL),
    }


@pytest.fixture(scope="session")
def test_pin() -> int:
    """Get the digital pin that tests may drive."""
    return int(os.getenv("TELEDUINO_TEST_PIN", "13"))


@pytest.fixture
async def board(integration_config: dict[str, str]) -> AsyncGenerator[TeleduinoClient]:
    """Create a client for the real board."""
    from pyteleduino import TeleduinoClient, TeleduinoConfig

    config = TeleduinoConfig(base_url=integration_config["base_url"])
    async with TeleduinoClient(integration_config["api_key"], config=config) as client:
        yield client
