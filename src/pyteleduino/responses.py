"""Classification of raw proxy responses into ApiResponse results."""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Any

from pyteleduino.exceptions import ApiError, MalformedResponseError, UnexpectedStructureError
from pyteleduino.models import ApiResponse


__all__ = ["classify"]

_LOGGER = logging.getLogger(__name__)


def classify(status: int, body: str | bytes) -> ApiResponse:
    """Interpret an HTTP status and body.

    Success bodies look like ``{"response": {"values": [...]}}``. A single
    value is unwrapped so callers do not need to know whether an endpoint is
    single- or multi-valued. Failures are returned, never raised.

    Args:
        status: HTTP status code.
        body: Raw response body.

    Returns:
        ApiResponse of kind VALUES, VALUE, EMPTY or ERROR.
    """
    try:
        data = json.loads(body)
    except (ValueError, RecursionError):
        _LOGGER.warning("Invalid JSON response (HTTP %d)", status)
        return ApiResponse.failure(MalformedResponseError("Invalid JSON response"), status)

    values = _extract_values(data)
    if status == HTTPStatus.OK and values is not None:
        return ApiResponse.from_values(values, status)

    message = data.get("message") if isinstance(data, dict) else None
    if message:
        _LOGGER.warning("API error (HTTP %d): %s", status, message)
        return ApiResponse.failure(ApiError(str(message), status=status), status)

    _LOGGER.warning("Unexpected JSON structure (HTTP %d)", status)
    return ApiResponse.failure(UnexpectedStructureError("Unexpected JSON structure"), status)


def _extract_values(data: Any) -> list[Any] | None:
    """Return ``response.values`` when present and a list."""
    if not isinstance(data, dict):
        return None
    response = data.get("response")
    if not isinstance(response, dict):
        return None
    values = response.get("values")
    return values if isinstance(values, list) else None
