import main
from gwaprs import constants


def test_missing_config_exits_with_error(tmp_path):
    assert main.main(["-c", str(tmp_path / "missing.cfg")]) == 1


def test_runs_gateway_with_loaded_config(tmp_path, monkeypatch):
    path = tmp_path / "gateway.cfg"
    path.write_text("APRS_CALLSIGN_SSID=K1ABC-13\nLISTEN_PORT=9000\n")
    calls = []
    monkeypatch.setattr("gwaprs.web_server.run", lambda config, host=None, port=None: calls.append((config, host, port)))
    monkeypatch.setattr(constants, "DEBUG_LEVEL", 0)

    assert main.main(["-c", str(path), "-p", "9100", "-d"]) == 0

    config, host, port = calls[0]
    assert config.callsign == "K1ABC-13"
    assert config.listen_port == 9000
    assert port == 9100
    assert host is None
    assert constants.DEBUG_LEVEL == 2


def test_log_option_writes_console_output(tmp_path, monkeypatch):
    log_path = tmp_path / "gateway.log"
    monkeypatch.setattr(constants, "DEBUG_LEVEL", 0)

    main.main(["-c", str(tmp_path / "missing.cfg"), "-l", str(log_path)])

    assert "[ERROR] Failed to open config file" in log_path.read_text()
