import pytest

from gwaprs.weather_stations import Observation


def test_complete_observation_is_valid():
    obs = Observation(timestamp="2024-05-01 14:23:10", pressure_inHg=29.92)

    assert obs.is_valid


@pytest.mark.parametrize("timestamp, pressure", [
    ("", 29.92),
    ("2024-05-01 14:23:10", 0.0),
    ("2024-05-01 14:23:10", -1.0),
    ("", 0.0),
])
def test_missing_time_or_pressure_is_invalid(timestamp, pressure):
    obs = Observation(
        timestamp=timestamp,
        pressure_inHg=pressure,
        temperature_f=70.0,
        humidity_pct=40,
        uv_index=5,
    )

    assert not obs.is_valid


def test_is_valid_cannot_be_assigned():
    obs = Observation()

    with pytest.raises(AttributeError):
        obs.is_valid = True
