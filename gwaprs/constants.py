"""Constants and defaults for the Ecowitt to APRS gateway."""

# --- Version ---
VERSION = "1.0"
SOFTWARE_NAME = "GWtoAPRS"

# --- Configuration ---
DEFAULT_CONFIG_PATH = "default.cfg"
DEFAULT_LISTEN_HOST = "0.0.0.0"
DEFAULT_LISTEN_PORT = 1234
DEFAULT_APRS_SERVER_PORT = 8080
DEFAULT_APRS_DESTINATION = "APRS"
DELIVERY_TIMEOUT = 10  # seconds

# --- Units ---
INHG_TO_MBAR = 33.8639

# --- Field bounds ---
DATEUTC_MAX_LENGTH = 29
MODEL_MAX_LENGTH = 49

# Accepted layouts for the Ecowitt dateutc field
DATEUTC_FORMATS = ("%Y-%m-%d+%H:%M:%S", "%Y-%m-%d %H:%M:%S")

# --- Content types ---
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
APRS_IS_CONTENT_TYPE = "application/octet-stream"

# Debug level system (0-6)
# 0 = No debugging
# 2 = Outbound envelopes, decoded observations
# 4 = Raw inbound form fields
# 6 = Everything including config parsing
DEBUG_LEVEL = 0
