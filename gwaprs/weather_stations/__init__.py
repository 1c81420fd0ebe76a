"""Weather Station Integration Module.

Provides a pluggable architecture for decoding uploads from various weather
station brands into a common Observation for APRS encoding.
"""

from gwaprs.weather_stations.base import Observation, StationDecoder
from gwaprs.weather_stations.ecowitt import EcowittDecoder

__all__ = ['Observation', 'StationDecoder', 'EcowittDecoder']
