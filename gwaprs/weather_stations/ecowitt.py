"""Ecowitt weather station integration.

Decodes the "customized upload" form posts sent by Ecowitt gateways
(GW1000, GW1100, GW1200, GW2000) and compatible consoles.
"""

import math
import re
from typing import Iterable, Optional, Tuple

from gwaprs import constants
from gwaprs.utils import print_debug
from gwaprs.weather_stations.base import Observation, StationDecoder


# Ecowitt upload keys -> (Observation field, value kind)
ECOWITT_FIELDS = {
    'dateutc': ('timestamp', 'text'),
    'winddir': ('wind_direction_deg', 'int'),
    'windspeedmph': ('wind_speed_mph', 'float'),
    'windgustmph': ('wind_gust_mph', 'float'),
    'maxdailygust': ('max_daily_gust_mph', 'float'),
    'tempf': ('temperature_f', 'float'),
    'hourlyrainin': ('rain_hourly_in', 'float'),
    'dailyrainin': ('rain_daily_in', 'float'),
    'humidity': ('humidity_pct', 'int'),
    'baromrelin': ('pressure_inHg', 'float'),
    'solarradiation': ('solar_radiation_wm2', 'float'),
    'uv': ('uv_index', 'int'),
    'wh65batt': ('battery_status', 'int'),
    'model': ('station_model', 'text'),
}

# Fields where "nothing usable" means absent rather than zero
OPTIONAL_FIELDS = {
    'max_daily_gust_mph',
    'solar_radiation_wm2',
    'uv_index',
    'battery_status',
}

TEXT_LIMITS = {
    'timestamp': constants.DATEUTC_MAX_LENGTH,
    'station_model': constants.MODEL_MAX_LENGTH,
}

_INT_PREFIX = re.compile(r'\s*([-+]?\d+)')
_FLOAT_PREFIX = re.compile(r'\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)')


def parse_int(value: str) -> Optional[int]:
    """Parse the leading integer of a string.

    Examples:
        "270" -> 270
        " 55%" -> 55
        "abc" -> None
    """
    match = _INT_PREFIX.match(value or '')
    if match:
        return int(match.group(1))
    return None


def parse_float(value: str) -> Optional[float]:
    """Parse the leading decimal number of a string.

    Examples:
        "29.85" -> 29.85
        "-5.6F" -> -5.6
        "1e400" -> None
        "" -> None
    """
    match = _FLOAT_PREFIX.match(value or '')
    if match:
        number = float(match.group(1))
        # "1e400" overflows to inf, which no APRS field can hold
        if math.isfinite(number):
            return number
    return None


class EcowittDecoder(StationDecoder):
    """Decoder for Ecowitt form-urlencoded uploads.

    Example:
        decoder = EcowittDecoder()
        obs = decoder.decode(parse_qsl(body))
        if obs.is_valid:
            ...
    """

    def decode(self, pairs: Iterable[Tuple[str, str]]) -> Observation:
        """Map Ecowitt key/value pairs onto a fresh Observation.

        Args:
            pairs: Percent-decoded (key, value) pairs in arrival order

        Returns:
            Observation; keys that never arrived keep their defaults
        """
        observation = Observation()

        for key, value in pairs:
            mapping = ECOWITT_FIELDS.get(key)
            if not mapping:
                continue

            field_name, kind = mapping
            self._map_field(observation, field_name, kind, value)

        print_debug(f"Decoded observation: {observation}", level=2)
        return observation

    def get_station_info(self) -> dict:
        """Get static information about supported Ecowitt uploads."""
        return {
            'vendor': 'Ecowitt',
            'model': 'GW1000/GW1100/GW1200/GW2000',
            'protocol': 'Customized upload (Ecowitt)',
            'content_type': constants.FORM_CONTENT_TYPE,
            'fields': sorted(ECOWITT_FIELDS),
        }

    def _map_field(
        self,
        observation: Observation,
        field_name: str,
        kind: str,
        value: str
    ) -> None:
        """Coerce one raw value and store it on the observation."""
        if kind == 'text':
            parsed = value[:TEXT_LIMITS[field_name]]
            if field_name == 'station_model' and not parsed:
                parsed = None
        else:
            parsed = parse_int(value) if kind == 'int' else parse_float(value)
            if parsed is None and field_name not in OPTIONAL_FIELDS:
                parsed = 0 if kind == 'int' else 0.0

        setattr(observation, field_name, parsed)
