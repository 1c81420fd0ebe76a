"""APRS encoding package.

The structure is:
- encoder.py: Observation -> APRS weather packet
- envelope.py: APRS-IS login line around an encoded packet
"""

from .encoder import WeatherPacketEncoder, round_half_away
from .envelope import build_login_envelope

__all__ = [
    'WeatherPacketEncoder', 'round_half_away',
    'build_login_envelope',
]
