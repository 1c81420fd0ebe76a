import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Make main.py and the gwaprs package importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gwaprs.config import BridgeConfig  # noqa: E402


@pytest.fixture
def config():
    return BridgeConfig(
        callsign="N0CALL-13",
        passcode="12345",
        latitude="4903.50N",
        longitude="07201.75W",
        destination="APRS",
        server_host="127.0.0.1",
        server_port=8080,
        software_name="GWtoAPRS",
        software_version="1.0",
    )


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-12-25 07:05:30 UTC."""
    return lambda: datetime(2024, 12, 25, 7, 5, 30, tzinfo=timezone.utc)
