from gwaprs.weather_stations import EcowittDecoder, Observation
from gwaprs.weather_stations.ecowitt import parse_float, parse_int


STATION_PAIRS = [
    ("PASSKEY", "0123456789ABCDEF"),
    ("stationtype", "GW1000B_V1.7.3"),
    ("dateutc", "2024-05-01 14:23:10"),
    ("winddir", "270"),
    ("windspeedmph", "5"),
    ("windgustmph", "9"),
    ("maxdailygust", "12.3"),
    ("tempf", "68"),
    ("hourlyrainin", "0"),
    ("dailyrainin", "0.12"),
    ("humidity", "55"),
    ("baromrelin", "29.85"),
    ("baromabsin", "29.10"),
    ("solarradiation", "300"),
    ("uv", "4"),
    ("wh65batt", "0"),
    ("model", "GW1000"),
    ("freq", "868M"),
]


def test_parse_int_uses_leading_digits():
    assert parse_int("270") == 270
    assert parse_int(" 55%") == 55
    assert parse_int("-1") == -1
    assert parse_int("12.9") == 12
    assert parse_int("abc") is None
    assert parse_int("") is None


def test_parse_float_uses_leading_number():
    assert parse_float("29.85") == 29.85
    assert parse_float("-5.6F") == -5.6
    assert parse_float(".5") == 0.5
    assert parse_float("1e2") == 100.0
    assert parse_float("1e") == 1.0
    assert parse_float("1e400") is None
    assert parse_float("-1e400") is None
    assert parse_float("n/a") is None
    assert parse_float("") is None


def test_decode_full_upload():
    obs = EcowittDecoder().decode(STATION_PAIRS)

    assert obs.timestamp == "2024-05-01 14:23:10"
    assert obs.wind_direction_deg == 270
    assert obs.wind_speed_mph == 5.0
    assert obs.wind_gust_mph == 9.0
    assert obs.max_daily_gust_mph == 12.3
    assert obs.temperature_f == 68.0
    assert obs.rain_hourly_in == 0.0
    assert obs.rain_daily_in == 0.12
    assert obs.humidity_pct == 55
    assert obs.pressure_inHg == 29.85
    assert obs.solar_radiation_wm2 == 300.0
    assert obs.uv_index == 4
    assert obs.battery_status == 0
    assert obs.station_model == "GW1000"
    assert obs.is_valid


def test_missing_keys_keep_defaults():
    obs = EcowittDecoder().decode([("tempf", "40.1")])

    assert obs == Observation(temperature_f=40.1)
    assert obs.solar_radiation_wm2 is None
    assert obs.uv_index is None
    assert obs.max_daily_gust_mph is None
    assert obs.battery_status is None
    assert obs.station_model is None


def test_unparseable_values_fall_back():
    obs = EcowittDecoder().decode([
        ("winddir", "north"),
        ("windspeedmph", ""),
        ("humidity", "--"),
        ("uv", ""),
        ("solarradiation", "n/a"),
        ("maxdailygust", "x"),
    ])

    assert obs.wind_direction_deg == 0
    assert obs.wind_speed_mph == 0.0
    assert obs.humidity_pct == 0
    assert obs.uv_index is None
    assert obs.solar_radiation_wm2 is None
    assert obs.max_daily_gust_mph is None


def test_zero_is_kept_for_optional_fields():
    obs = EcowittDecoder().decode([("uv", "0"), ("solarradiation", "0.0")])

    assert obs.uv_index == 0
    assert obs.solar_radiation_wm2 == 0.0


def test_text_fields_are_length_bounded():
    obs = EcowittDecoder().decode([
        ("model", "W" * 80),
        ("dateutc", "2024-05-01 14:23:10" + "X" * 40),
    ])

    assert len(obs.station_model) == 49
    assert len(obs.timestamp) == 29


def test_empty_model_is_absent():
    obs = EcowittDecoder().decode([("model", "")])

    assert obs.station_model is None


def test_last_repeated_key_wins():
    obs = EcowittDecoder().decode([("tempf", "10"), ("tempf", "20")])

    assert obs.temperature_f == 20.0


def test_station_info():
    info = EcowittDecoder().get_station_info()

    assert info["vendor"] == "Ecowitt"
    assert "baromrelin" in info["fields"]
    assert info["content_type"] == "application/x-www-form-urlencoded"


def test_overflowing_numbers_fall_back():
    obs = EcowittDecoder().decode([
        ("tempf", "1e400"),
        ("baromrelin", "-1e400"),
        ("solarradiation", "1e400"),
    ])

    assert obs.temperature_f == 0.0
    assert obs.pressure_inHg == 0.0
    assert obs.solar_radiation_wm2 is None
