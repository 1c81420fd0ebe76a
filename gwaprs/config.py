"""Gateway configuration loading.

The config file holds one ``KEY=VALUE`` per line, for example::

    APRS_CALLSIGN_SSID=N0CALL-13
    APRS_PASSCODE=12345
    APRS_LATITUDE=4903.50N
    APRS_LONGITUDE=07201.75W
    APRS_SERVER_HOST=rotate.aprs2.net
    APRS_SERVER_PORT=8080
"""

import os
from dataclasses import dataclass
from typing import Dict, Iterable

from gwaprs import constants
from gwaprs.utils import print_debug, print_warning


class ConfigError(ValueError):
    """Raised when the gateway configuration is missing or invalid."""


# Config file key -> BridgeConfig field
CONFIG_KEYS = {
    "APRS_CALLSIGN_SSID": "callsign",
    "APRS_PASSCODE": "passcode",
    "APRS_LATITUDE": "latitude",
    "APRS_LONGITUDE": "longitude",
    "APRS_DESTINATION": "destination",
    "APRS_SERVER_HOST": "server_host",
    "APRS_SERVER_PORT": "server_port",
    "APRS_SOFTWARE_NAME": "software_name",
    "APRS_SOFTWARE_VERSION": "software_version",
    "LISTEN_HOST": "listen_host",
    "LISTEN_PORT": "listen_port",
}

PORT_FIELDS = ("server_port", "listen_port")


@dataclass(frozen=True)
class BridgeConfig:
    """Operator settings, passed explicitly to every component.

    Latitude and longitude are used verbatim, so they must already be in
    APRS form (``DDMM.mmN`` / ``DDDMM.mmW``).
    """

    callsign: str = "NOCALL"
    passcode: str = "-1"
    latitude: str = ""
    longitude: str = ""
    destination: str = constants.DEFAULT_APRS_DESTINATION
    server_host: str = "rotate.aprs2.net"
    server_port: int = constants.DEFAULT_APRS_SERVER_PORT
    software_name: str = constants.SOFTWARE_NAME
    software_version: str = constants.VERSION
    listen_host: str = constants.DEFAULT_LISTEN_HOST
    listen_port: int = constants.DEFAULT_LISTEN_PORT


def _parse_port(key: str, value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise ConfigError(f"Invalid port '{value}' for {key}: must be a number")
    if not (1 <= port <= 65535):
        raise ConfigError(f"Invalid port '{value}' for {key}: must be between 1 and 65535")
    return port


def parse_config_lines(lines: Iterable[str]) -> Dict[str, str]:
    """Collect recognized ``KEY=VALUE`` settings from config lines.

    Lines without ``=`` and ``#`` comments are skipped. Unknown keys are
    ignored. Later lines override earlier ones.
    """
    settings = {}
    for line in lines:
        if line.lstrip().startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.rstrip("\r\n")

        if key not in CONFIG_KEYS:
            print_debug(f"Ignoring unknown config key {key}", level=6)
            continue

        settings[key] = value
    return settings


def build_config(settings: Dict[str, str]) -> BridgeConfig:
    """Turn raw config-file settings into a BridgeConfig."""
    values = {}
    for key, value in settings.items():
        field_name = CONFIG_KEYS[key]
        if field_name in PORT_FIELDS:
            values[field_name] = _parse_port(key, value)
        else:
            values[field_name] = value

    config = BridgeConfig(**values)
    if config.callsign == "NOCALL":
        print_warning("APRS_CALLSIGN_SSID is not set, packets will be sent as NOCALL")
    if not config.latitude or not config.longitude:
        print_warning("APRS_LATITUDE/APRS_LONGITUDE not set, packets will have no position")
    return config


def load_config(config_file: str = None) -> BridgeConfig:
    """Load configuration from file.

    Args:
        config_file: Path to the config file. Falls back to the CONFIG
            environment variable, then to default.cfg.

    Raises:
        ConfigError: If the file cannot be read or a value is invalid
    """
    if config_file is None:
        config_file = os.environ.get("CONFIG", constants.DEFAULT_CONFIG_PATH)

    try:
        with open(config_file, "r") as f:
            settings = parse_config_lines(f)
    except OSError as e:
        raise ConfigError(f"Failed to open config file {config_file}: {e}")

    print_debug(f"Loaded gateway config from {config_file}", level=6)
    return build_config(settings)
