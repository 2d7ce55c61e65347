"""Constants for pyteleduino library."""

from __future__ import annotations


# API Configuration
DEFAULT_BASE_URL = "https://us01.proxy.teleduino.org/api/1.0/328.php"
DEFAULT_TIMEOUT = 30.0  # seconds, applied by the transport adapter only

# Reserved query parameters
PARAM_COMMAND = "r"
PARAM_API_KEY = "k"

# Parameter Validation
DIGITAL_PIN_MIN = 0
DIGITAL_PIN_MAX = 19
ANALOG_PIN_MIN = 14
ANALOG_PIN_MAX = 21
DIGITAL_VALUE_MIN = 0
DIGITAL_VALUE_MAX = 2
EXPIRE_TIME_MIN = 0
EXPIRE_TIME_MAX = 16777215  # 24-bit hardware counter

# Reset Recovery
DEFAULT_RESET_SETTLE_DELAY = 15.0  # seconds before the first ping
DEFAULT_RESET_POLL_INTERVAL = 3.0  # seconds between pings
DEFAULT_RESET_MAX_POLLS = 5
