import logging

import pytest
import yaml

from ceres_bridge.config_loader import (
    TimezoneFormatter, load_config, setup_logging,
)


def write_config(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_empty_file_gets_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")

    config = load_config(str(path))

    assert config['discovery']['service_type'] == "_ceres-http._tcp.local."
    assert config['discovery']['resolve_timeout_ms'] == 3000
    assert config['device']['request_timeout'] == 5
    assert config['api']['port'] == 8000
    assert config['known_devices'] == []
    assert config['accessory_info']['manufacturer'] == "Custom-Made"
    assert config['logging']['timezone'] == "UTC"


def test_partial_sections_are_completed(tmp_path):
    config = load_config(write_config(tmp_path, {"api": {"port": 9000}, "device": {"request_timeout": 2}}))

    assert config['api'] == {"host": "0.0.0.0", "port": 9000}
    assert config['device']['request_timeout'] == 2


@pytest.mark.parametrize(
    "data",
    [
        {"known_devices": [{"name": "ac"}]},
        {"known_devices": [{"address": "10.0.0.5"}]},
        {"known_devices": "ac"},
        {"discovery": {"service_type": "_ceres-http._tcp"}},
        {"api": {"port": 70000}},
        {"device": {"request_timeout": 0}},
        {"logging": {"level": "LOUD"}},
        {"logging": {"timezone": "Mars/Olympus"}},
    ],
)
def test_invalid_config_raises(tmp_path, data):
    with pytest.raises(ValueError):
        load_config(write_config(tmp_path, data))


def test_timezone_formatter():
    formatter = TimezoneFormatter("%(asctime)s %(message)s", "UTC")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
    record.created = 0

    assert formatter.format(record) == "1970-01-01 00:00:00 UTC hello"


def test_setup_logging_creates_log_file(tmp_path):
    log_file = tmp_path / "logs" / "bridge.log"
    config = {"logging": {"level": "DEBUG", "file": str(log_file), "console_output": False, "timezone": "UTC"}}
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    try:
        setup_logging(config)
        assert log_file.exists()
        assert root.level == logging.DEBUG
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
