"""Query-string construction for Teleduino API commands.

The proxy takes every command as a GET against one endpoint. The query holds
the operation parameters in insertion order followed by the reserved ``r``
(command name) and ``k`` (API key) parameters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from pyteleduino.const import PARAM_API_KEY, PARAM_COMMAND


if TYPE_CHECKING:
    from collections.abc import Iterable

    from pyteleduino.models import Command, OutputState


__all__ = [
    "build_outputs_params",
    "build_query",
    "build_url",
    "encode_component",
]

# Characters left alone by ECMAScript encodeURIComponent besides alphanumerics and "_.-~"
_COMPONENT_SAFE = "!*'()"


def encode_component(value: object) -> str:
    """Percent-encode a key or value the way the proxy's reference client does."""
    return quote(str(value), safe=_COMPONENT_SAFE)


def build_query(command: Command, api_key: str) -> list[tuple[str, str]]:
    """Build the ordered query parameters for a command.

    Caller parameters come first, then ``r`` and ``k``. Reserved keys always
    carry the command name and credential, even if a caller passed them.

    Args:
        command: Command to serialize.
        api_key: Teleduino API key.

    Returns:
        List of (key, value) string pairs.
    """
    params: dict[str, object] = dict(command.params)
    params.pop(PARAM_COMMAND, None)
    params.pop(PARAM_API_KEY, None)
    params[PARAM_COMMAND] = command.name
    params[PARAM_API_KEY] = api_key
    return [(key, str(value)) for key, value in params.items()]


def build_url(base_url: str, command: Command, api_key: str) -> str:
    """Build the full request URL for a command.

    Example:
        >>> build_url("https://proxy/api.php", Command("getDigitalInput", {"pin": 3}), "abc")
        'https://proxy/api.php?pin=3&r=getDigitalInput&k=abc'
    """
    pairs = build_query(command, api_key)
    query = "&".join(f"{encode_component(key)}={encode_component(value)}" for key, value in pairs)
    return f"{base_url}?{query}"


def build_outputs_params(outputs: Iterable[OutputState]) -> dict[str, int]:
    """Build the sparse, pin-indexed parameters of a batched output write.

    A pin listed twice keeps its first position and takes its last value.

    Example:
        >>> build_outputs_params([OutputState(pin=3, value=1, expire_time=1000)])
        {'offset': 0, 'outputs[3]': 1, 'expire_times[3]': 1000}
    """
    params: dict[str, int] = {"offset": 0}
    for output in outputs:
        params[f"outputs[{output.pin}]"] = output.value
        params[f"expire_times[{output.pin}]"] = output.expire_time
    return params
