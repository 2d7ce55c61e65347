"""Integration tests for pyteleduino library.

These tests use a real API key from .env file and talk to a real board.
They are marked with @pytest.mark.integration and skipped by default.

To run integration tests:
    pytest tests/integration -v -m integration

Environment variables required in .env:
    TELEDUINO_API_KEY: API key of a board connected to the proxy
    TELEDUINO_API_URL: Proxy endpoint (optional, defaults to us01)
    TELEDUINO_TEST_PIN: Digital pin safe to toggle (optional, defaults to 13)
"""
