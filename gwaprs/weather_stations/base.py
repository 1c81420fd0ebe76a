"""Observation model and decoder interface for weather station reports.

One ``Observation`` is built per inbound report and discarded once the
send attempt is over. Optional measurements use ``None`` for "not reported"
so that 0 stays a legitimate reading.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass
class Observation:
    """One decoded station report.

    Units follow the Ecowitt upload protocol:
    - Temperature: Fahrenheit
    - Pressure: inches of mercury (relative)
    - Wind speed: miles per hour (mph)
    - Wind direction: degrees (0-360)
    - Humidity: percentage (0-100)
    - Rain: inches
    - Solar radiation: W/m²
    """

    timestamp: str = ""  # dateutc as sent by the station

    # Wind
    wind_direction_deg: int = 0
    wind_speed_mph: float = 0.0
    wind_gust_mph: float = 0.0
    max_daily_gust_mph: Optional[float] = None

    # Temperature / humidity
    temperature_f: float = 0.0
    humidity_pct: int = 0

    # Precipitation (accumulators reset by the station)
    rain_hourly_in: float = 0.0
    rain_daily_in: float = 0.0

    # Pressure
    pressure_inHg: float = 0.0

    # Solar/UV (not all stations have these)
    solar_radiation_wm2: Optional[float] = None
    uv_index: Optional[int] = None

    # Station metadata
    battery_status: Optional[int] = None  # No known mapping, carried only
    station_model: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """True when the report can be placed on an APRS map.

        A report needs a timestamp and a positive pressure reading; every
        other field degrades to its default.
        """
        return bool(self.timestamp) and self.pressure_inHg > 0


class StationDecoder(ABC):
    """Abstract base class for station upload decoders.

    Subclasses turn the key/value pairs a station uploads into an
    ``Observation``.

    Example usage:
        decoder = EcowittDecoder()
        observation = decoder.decode([('tempf', '68.2'), ('baromrelin', '29.9')])
    """

    @abstractmethod
    def decode(self, pairs: Iterable[Tuple[str, str]]) -> Observation:
        """Build an Observation from percent-decoded key/value pairs.

        Unknown keys are ignored. Must not raise on malformed values.
        """
        pass

    @abstractmethod
    def get_station_info(self) -> dict:
        """Get static information about the decoder's station family."""
        pass
