"""APRS weather packet encoder.

Builds a positioned weather report with timestamp:

    CALL>DEST:@DDHHMMzLAT/LON_cDIRsSPDgGSTtTMPrRRRPRRRLSSShHHbPPPPPcomment

Every fixed field sits at a known offset, so each one must come out at
exactly its declared width.
"""

import math
from datetime import datetime, timezone
from typing import Callable, List, Optional

from gwaprs import constants
from gwaprs.config import BridgeConfig
from gwaprs.utils import print_warning
from gwaprs.weather_stations.base import Observation


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's round() rounds halves to even, which would turn 0.5 mph into 0.
    """
    if not math.isfinite(value):
        return 0
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeatherPacketEncoder:
    """Encode Observations as APRS weather packets.

    Example:
        encoder = WeatherPacketEncoder(config)
        if observation.is_valid:
            packet = encoder.encode(observation)
    """

    def __init__(
        self,
        config: BridgeConfig,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """Initialize encoder.

        Args:
            config: Operator settings (callsign, destination, position)
            clock: Returns the current UTC time, used when the station
                timestamp cannot be parsed
        """
        self.config = config
        self.clock = clock or _utc_now

    def encode(self, observation: Observation) -> str:
        """Encode a complete observation.

        Raises:
            ValueError: If the observation fails the completeness check
        """
        if not observation.is_valid:
            raise ValueError("Observation is incomplete (needs dateutc and baromrelin)")

        return (
            self.format_preamble(observation)
            + self.format_weather_fields(observation)
            + self.format_comment(observation)
        )

    def format_preamble(self, observation: Observation) -> str:
        """Header, timestamp and position up to the weather symbol."""
        return (
            f"{self.config.callsign}>{self.config.destination}:"
            f"@{self.format_time(observation.timestamp)}"
            f"{self.config.latitude}/{self.config.longitude}_"
        )

    def format_time(self, timestamp: str) -> str:
        """Convert a dateutc string to APRS ``DDHHMMz``.

        Falls back to the clock when the string matches neither layout.
        """
        parsed = None
        for layout in constants.DATEUTC_FORMATS:
            try:
                parsed = datetime.strptime(timestamp, layout)
                break
            except ValueError:
                continue

        if parsed is None:
            print_warning(f"Failed to parse dateutc: {timestamp!r}. Using current UTC time.")
            parsed = self.clock().astimezone(timezone.utc)

        return f"{parsed.day:02d}{parsed.hour:02d}{parsed.minute:02d}z"

    def format_weather_fields(self, observation: Observation) -> str:
        """Fixed-width weather fields, in APRS order, no separators."""
        parts = [
            self.format_wind_direction(observation.wind_direction_deg),
            f"s{self._format_speed(observation.wind_speed_mph)}",
            f"g{self._format_speed(observation.wind_gust_mph)}",
            self.format_temperature(observation.temperature_f),
            f"r{self._format_rain(observation.rain_hourly_in)}",
            f"P{self._format_rain(observation.rain_daily_in)}",
            self.format_solar_radiation(observation.solar_radiation_wm2),
            self.format_humidity(observation.humidity_pct),
            self.format_pressure(observation.pressure_inHg),
        ]
        return "".join(parts)

    @staticmethod
    def format_wind_direction(degrees: int) -> str:
        if not (0 <= degrees <= 360):
            degrees = 0
        return f"c{degrees:03d}"

    @staticmethod
    def _format_speed(mph: float) -> str:
        # No upper clamp: speeds over 999 widen the field
        return f"{round_half_away(max(mph, 0.0)):03d}"

    @staticmethod
    def format_temperature(temp_f: float) -> str:
        """Temperature as ``t###`` or ``t-##``, clamped to -99..999 °F."""
        temp_int = round_half_away(temp_f)
        if -100 < temp_int < 0:
            return f"t-{abs(temp_int):02d}"
        if 0 <= temp_int <= 999:
            return f"t{temp_int:03d}"
        return "t-99" if temp_int < 0 else "t999"

    @staticmethod
    def _format_rain(inches: float) -> str:
        # Hundredths of an inch, unclamped
        return f"{round_half_away(inches * 100.0):03d}"

    @staticmethod
    def format_solar_radiation(wm2: Optional[float]) -> str:
        """Luminosity as ``L###`` below 1000 W/m², ``l###`` (tens) above.

        Absent or non-positive readings produce no field at all.
        """
        if wm2 is None or wm2 <= 0:
            return ""
        if wm2 < 1000:
            return f"L{round_half_away(wm2):03d}"
        return f"l{round_half_away(wm2 / 10.0):03d}"

    @staticmethod
    def format_humidity(humidity: int) -> str:
        # APRS uses two digits, 00 means 100%
        if humidity < 0:
            humidity = 0
        return f"h{humidity % 100:02d}"

    @staticmethod
    def format_pressure(inhg: float) -> str:
        """Barometric pressure in tenths of millibar, 5 digits."""
        return f"b{round_half_away(inhg * constants.INHG_TO_MBAR * 10.0):05d}"

    def format_comment(self, observation: Observation) -> str:
        """Free-text comment: model, max gust, UV index, software name."""
        tokens: List[str] = []

        if observation.station_model:
            tokens.append(observation.station_model)

        gust = observation.max_daily_gust_mph
        if gust is not None and gust > 0:
            tokens.append(f"MaxGust:{gust:.1f}mph")

        uv = observation.uv_index
        if uv is not None and uv >= 0:
            tokens.append(f"UVI:{uv}")

        if self.config.software_name:
            tokens.append(self.config.software_name)

        return " ".join(tokens).rstrip(" ")
